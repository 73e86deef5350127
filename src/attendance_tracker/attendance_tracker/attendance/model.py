from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional

from ..core.enums import AttendanceStatus


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance row for one employee on one date.

    Always carries the employee display fields it was read with.
    """

    attendance_id: int
    employee_id: int
    date: date
    check_in: Optional[datetime]
    check_out: Optional[datetime]
    status: AttendanceStatus
    remarks: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    display_name: Optional[str] = None
    unique_id: Optional[str] = None
    department_id: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "attendance_id": self.attendance_id,
            "employee_id": self.employee_id,
            "date": self.date.isoformat(),
            "check_in": _iso(self.check_in),
            "check_out": _iso(self.check_out),
            "status": self.status.value,
            "remarks": self.remarks,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
            "display_name": self.display_name,
            "unique_id": self.unique_id,
            "department_id": self.department_id,
        }


@dataclass(frozen=True)
class NewAttendance:
    """Write-model for an insert; the store assigns the id."""

    employee_id: int
    date: date
    check_in: Optional[datetime]
    check_out: Optional[datetime]
    status: AttendanceStatus
    remarks: Optional[str]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class AttendanceFilter:
    """Query parameters accepted by the list endpoint."""

    employee_id: Optional[int] = None
    department_id: Optional[int] = None
    date: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: Optional[str] = None
    exclude_status: Optional[str] = None
    search: Optional[str] = None
    page: int = 1
    limit: int = 10


@dataclass(frozen=True)
class Page:
    data: list[AttendanceRecord] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 10
    total_pages: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": True,
            "data": [r.to_dict() for r in self.data],
            "total": self.total,
            "page": self.page,
            "limit": self.limit,
            "totalPages": self.total_pages,
        }
