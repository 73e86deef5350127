from __future__ import annotations

from typing import Mapping, Optional, Protocol

from .model import WorkSchedule


class WorkScheduleRepository(Protocol):
    def get_by_employee(self, employee_id: int) -> Optional[WorkSchedule]:
        raise NotImplementedError

    def create(self, *, employee_id: int, days: Mapping[str, bool]) -> WorkSchedule:
        raise NotImplementedError

    def update(self, employee_id: int, *, days: Mapping[str, bool]) -> Optional[WorkSchedule]:
        raise NotImplementedError

    def delete(self, employee_id: int) -> bool:
        raise NotImplementedError
