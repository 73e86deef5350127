from __future__ import annotations

from ...attendance.model import AttendanceRecord
from .base import HoursCalculator


class StandardHoursCalculator(HoursCalculator):
    """Standard rule: whole minutes between check-in and check-out, in hours, 2 decimals.

    Zero when either timestamp is missing.
    """

    def hours_worked(self, record: AttendanceRecord) -> float:
        if not record.check_in or not record.check_out:
            return 0.0
        minutes = int((record.check_out - record.check_in).total_seconds() // 60)
        return round(minutes / 60, 2)
