from __future__ import annotations

from datetime import date, datetime
from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import AttendanceRecord, NewAttendance


class AttendanceRepository(Protocol):
    """Record store; every read is joined with employee display fields.

    Multi-row reads are ordered ``date DESC, check_in DESC`` unless scoped to a
    single day, where they are ordered by ``check_in ASC``.
    """

    def list_all(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_by_employee(self, employee_id: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_by_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_by_employee_and_date(self, employee_id: int, work_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_in_range(self, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def insert(self, new: NewAttendance) -> AttendanceRecord:
        """Insert and return the written row, read back in the same transaction."""

        raise NotImplementedError

    def update_fields(
        self, attendance_id: int, fields: Mapping[str, Any], *, updated_at: datetime
    ) -> Optional[AttendanceRecord]:
        """Set only ``fields`` plus ``updated_at``; None when no row matched."""

        raise NotImplementedError

    def delete(self, attendance_id: int) -> bool:
        raise NotImplementedError
