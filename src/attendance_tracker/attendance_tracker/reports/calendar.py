from __future__ import annotations

from datetime import date
from typing import Collection, Optional

from ..common.datetime_utils import is_weekend, iter_days
from ..schedules.model import WorkSchedule


def is_working_day(
    day: date,
    *,
    exclude_weekends: bool,
    holidays: Collection[date] = (),
    schedule: Optional[WorkSchedule] = None,
) -> bool:
    """A schedule, when given, replaces the plain weekend rule."""
    if day in holidays:
        return False
    if exclude_weekends:
        if schedule is not None:
            return schedule.works_on(day)
        return not is_weekend(day)
    return True


def count_working_days(
    start: date,
    end: date,
    *,
    exclude_weekends: bool = True,
    holidays: Collection[date] = (),
    schedule: Optional[WorkSchedule] = None,
) -> int:
    return sum(
        1
        for day in iter_days(start, end)
        if is_working_day(day, exclude_weekends=exclude_weekends, holidays=holidays, schedule=schedule)
    )
