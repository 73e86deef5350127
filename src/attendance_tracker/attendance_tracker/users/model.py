from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: an application account (not an employee).

    Note: plain data object, no database access here.
    """

    user_id: int
    username: str
    password_hash: str
    display_name: str
    role: Role

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "username": self.username,
            "display_name": self.display_name,
            "role": self.role.value,
        }
