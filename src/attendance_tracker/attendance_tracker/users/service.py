from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def _password_matches(password_hash: str, password: str) -> bool:
    try:
        return check_password_hash(password_hash, password or "")
    except ValueError:
        # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
        return False


def parse_role(value: Any) -> Role:
    try:
        return Role(str(value or Role.USER.value).strip().lower())
    except ValueError:
        raise ValidationError("Role must be 'admin' or 'user'") from None


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    username: str
    display_name: str
    role: Role

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "username": self.username,
            "display_name": self.display_name,
            "role": self.role.value,
        }


class AuthService:
    """Use cases: authenticate (login) and change password."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, username: str, password: str) -> SessionUser:
        user = self._users.get_by_username((username or "").strip())
        if not user:
            raise AuthenticationError("Invalid username or password")

        if not _password_matches(user.password_hash, password):
            logger.warning("Failed login for %r", username)
            raise AuthenticationError("Invalid username or password")

        return SessionUser(user_id=user.user_id, username=user.username, display_name=user.display_name, role=user.role)

    def change_password(
        self,
        *,
        current_user_id: int,
        current_role: Role,
        user_id: int,
        current_password: str,
        new_password: str,
    ) -> None:
        if int(current_user_id) != int(user_id) and current_role != Role.ADMIN:
            raise AuthorizationError("You can only change your own password")

        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found")

        # Admins resetting someone else's password skip the current-password check.
        if int(current_user_id) == int(user_id) and not _password_matches(user.password_hash, current_password):
            raise ValidationError("Current password is incorrect")

        require_min_length(new_password, "New password", MIN_PASSWORD_LENGTH)
        self._users.set_password_hash(user.user_id, generate_password_hash(new_password))
        logger.info("Password changed for user %s", user.user_id)


class UserService:
    """Use case: manage accounts (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def create_account(self, *, username: str, password: str, display_name: str, role: Role = Role.USER) -> int:
        username = require_non_empty(username, "Username")
        display_name = require_non_empty(display_name, "Display name")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._users.get_by_username(username):
            raise ValidationError("Username already exists")

        user_id = self._users.create_user(
            username=username,
            password_hash=generate_password_hash(password),
            display_name=display_name,
            role=role,
        )
        logger.info("Created %s account %r", role.value, username)
        return user_id

    def list_users(self) -> Sequence[User]:
        return self._users.list_all()

    def get_user(self, user_id: int) -> User:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found")
        return user

    def update_account(self, user_id: int, data: Mapping[str, Any]) -> User:
        """Change display name and, when given, role. Username and password are not touched here."""
        current = self.get_user(user_id)
        display_name = require_non_empty(data.get("display_name") or data.get("displayName"), "Display name")
        role = parse_role(data["role"]) if data.get("role") else current.role

        user = self._users.update_user(current.user_id, display_name=display_name, role=role)
        if not user:
            raise NotFoundError("User not found")
        logger.info("Updated account %s", current.user_id)
        return user

    def delete_account(self, user_id: int, *, current_user_id: int) -> None:
        if int(user_id) == int(current_user_id):
            raise ValidationError("You cannot delete your own account")
        if not self._users.delete(int(user_id)):
            raise NotFoundError("User not found")
        logger.info("Deleted account %s", user_id)
