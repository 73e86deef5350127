from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from ..common.validators import require_positive_int
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import DEFAULT_WORKDAYS, WEEKDAYS, WorkSchedule
from .repository import WorkScheduleRepository

logger = logging.getLogger(__name__)


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


class WorkScheduleService:
    def __init__(self, schedules: WorkScheduleRepository, employees: Optional[EmployeeRepository] = None):
        self._schedules = schedules
        self._employees = employees

    def get_by_employee(self, employee_id: int) -> Optional[WorkSchedule]:
        return self._schedules.get_by_employee(int(employee_id))

    def get_required(self, employee_id: int) -> WorkSchedule:
        schedule = self.get_by_employee(employee_id)
        if not schedule:
            raise NotFoundError("Work schedule not found")
        return schedule

    def create(self, data: Mapping[str, Any]) -> WorkSchedule:
        if not data.get("employee_id"):
            raise ValidationError("Employee ID is required")
        employee_id = require_positive_int(data["employee_id"], "Employee ID")
        if self._employees is not None and self._employees.get_by_id(employee_id) is None:
            raise NotFoundError("Employee not found")
        if self._schedules.get_by_employee(employee_id):
            raise ValidationError("Employee already has a work schedule")

        days = {name: _as_bool(data[name]) if name in data else DEFAULT_WORKDAYS[name] for name in WEEKDAYS}
        schedule = self._schedules.create(employee_id=employee_id, days=days)
        logger.info("Created work schedule for employee %s", employee_id)
        return schedule

    def update(self, employee_id: int, data: Mapping[str, Any]) -> WorkSchedule:
        current = self.get_required(employee_id)
        days = {name: _as_bool(data[name]) if name in data else getattr(current, name) for name in WEEKDAYS}
        schedule = self._schedules.update(int(employee_id), days=days)
        if not schedule:
            raise NotFoundError("Work schedule not found")
        return schedule

    def delete(self, employee_id: int) -> None:
        if not self._schedules.delete(int(employee_id)):
            raise NotFoundError("Work schedule not found")
        logger.info("Deleted work schedule for employee %s", employee_id)
