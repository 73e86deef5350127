from __future__ import annotations

import logging
from datetime import date
from typing import Any, Mapping, Sequence

from ..common.datetime_utils import parse_iso_date
from ..core.exceptions import NotFoundError, ValidationError
from .model import Holiday
from .repository import HolidayRepository

logger = logging.getLogger(__name__)


def _validated(data: Mapping[str, Any]) -> tuple[str, date]:
    name = (data.get("name") or "").strip()
    raw_date = data.get("date")
    if not name or not raw_date:
        raise ValidationError("Holiday name and date are required")
    return name, parse_iso_date(raw_date)


class HolidayService:
    def __init__(self, holidays: HolidayRepository):
        self._holidays = holidays

    def get_all(self) -> Sequence[Holiday]:
        return self._holidays.list_all()

    def get_by_id(self, holiday_id: int) -> Holiday:
        holiday = self._holidays.get_by_id(int(holiday_id))
        if not holiday:
            raise NotFoundError("Holiday not found")
        return holiday

    def dates_between(self, start: date, end: date) -> set[date]:
        return {h.date for h in self._holidays.list_in_range(start, end)}

    def create(self, data: Mapping[str, Any]) -> Holiday:
        name, holiday_date = _validated(data)
        holiday = self._holidays.create(name=name, holiday_date=holiday_date)
        logger.info("Created holiday %s (%s)", holiday.holiday_id, holiday_date)
        return holiday

    def update(self, holiday_id: int, data: Mapping[str, Any]) -> Holiday:
        self.get_by_id(holiday_id)
        name, holiday_date = _validated(data)
        holiday = self._holidays.update(int(holiday_id), name=name, holiday_date=holiday_date)
        if not holiday:
            raise NotFoundError("Holiday not found")
        return holiday

    def delete(self, holiday_id: int) -> None:
        if not self._holidays.delete(int(holiday_id)):
            raise NotFoundError("Holiday not found")
        logger.info("Deleted holiday %s", holiday_id)
