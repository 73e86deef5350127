from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee from the directory.

    Note: the directory is owned outside this service; we only read it.
    """

    employee_id: int
    unique_id: str
    firstname: str
    lastname: str
    display_name: str
    department_id: Optional[int] = None
    middlename: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)
