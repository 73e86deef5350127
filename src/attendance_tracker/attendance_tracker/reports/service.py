from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..holidays.repository import HolidayRepository
from ..schedules.repository import WorkScheduleRepository
from .calculator.base import HoursCalculator
from .calculator.standard_calculator import StandardHoursCalculator
from .calendar import count_working_days, is_working_day


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: dict

    def to_dict(self) -> dict:
        return {"success": True, "data": self.rows, "summary": self.summary}


class AttendanceReportService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        holidays: Optional[HolidayRepository] = None,
        schedules: Optional[WorkScheduleRepository] = None,
        *,
        calculator: Optional[HoursCalculator] = None,
    ):
        self._attendance = attendance
        self._holidays = holidays
        self._schedules = schedules
        self._calculator = calculator or StandardHoursCalculator()

    def build_attendance_report(
        self,
        *,
        start: date,
        end: date,
        employee_id: Optional[int] = None,
        department_id: Optional[int] = None,
        status: Optional[str] = None,
        exclude_weekends: bool = True,
        exclude_holidays: bool = True,
    ) -> ReportData:
        if end < start:
            raise ValidationError("End date cannot be earlier than start date")

        holiday_dates: set[date] = set()
        if exclude_holidays and self._holidays is not None:
            holiday_dates = {h.date for h in self._holidays.list_in_range(start, end)}

        schedule = None
        if employee_id is not None and self._schedules is not None:
            schedule = self._schedules.get_by_employee(employee_id)

        records = [
            r
            for r in self._attendance.list_in_range(start, end)
            if (employee_id is None or r.employee_id == employee_id)
            and (department_id is None or r.department_id == department_id)
            and (not status or r.status.value == status)
            and is_working_day(r.date, exclude_weekends=exclude_weekends, holidays=holiday_dates, schedule=schedule)
        ]

        out_rows: list[dict] = []
        total_hours = 0.0
        for r in records:
            hours = self._calculator.hours_worked(r)
            total_hours += hours
            row = r.to_dict()
            row["hours_worked"] = hours
            out_rows.append(row)

        working_days = count_working_days(
            start, end, exclude_weekends=exclude_weekends, holidays=holiday_dates, schedule=schedule
        )
        present_days = sum(1 for r in records if r.check_in and r.check_out)
        late_days = sum(1 for r in records if r.status == AttendanceStatus.LATE)

        summary = {
            "totalDays": working_days,
            "presentDays": present_days,
            "absentDays": working_days - present_days,
            "lateDays": late_days,
            "totalHoursWorked": round(total_hours, 2),
            "avgHoursPerDay": round(total_hours / present_days, 2) if present_days else 0,
        }
        return ReportData(rows=out_rows, summary=summary)
