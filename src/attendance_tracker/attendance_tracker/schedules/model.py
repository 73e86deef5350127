from __future__ import annotations

from dataclasses import dataclass
from datetime import date

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

DEFAULT_WORKDAYS = {
    "monday": True,
    "tuesday": True,
    "wednesday": True,
    "thursday": True,
    "friday": True,
    "saturday": False,
    "sunday": False,
}


@dataclass(frozen=True)
class WorkSchedule:
    """Weekly working days of one employee."""

    schedule_id: int
    employee_id: int
    monday: bool = True
    tuesday: bool = True
    wednesday: bool = True
    thursday: bool = True
    friday: bool = True
    saturday: bool = False
    sunday: bool = False

    def works_on(self, day: date) -> bool:
        return bool(getattr(self, WEEKDAYS[day.weekday()]))

    def to_dict(self) -> dict:
        out = {"schedule_id": self.schedule_id, "employee_id": self.employee_id}
        out.update({name: getattr(self, name) for name in WEEKDAYS})
        return out
