from datetime import date

import pytest

from src.attendance_tracker.attendance_tracker.core.exceptions import NotFoundError, ValidationError
from src.attendance_tracker.attendance_tracker.holidays.service import HolidayService

from conftest import InMemoryHolidays


@pytest.fixture
def holidays():
    return HolidayService(InMemoryHolidays())


def test_create_update_delete(holidays):
    created = holidays.create({"name": "New Year", "date": "2024-01-01"})
    assert created.date == date(2024, 1, 1)
    assert holidays.get_by_id(created.holiday_id).name == "New Year"

    updated = holidays.update(created.holiday_id, {"name": "New Year's Day", "date": "2024-01-01"})
    assert updated.name == "New Year's Day"
    assert holidays.dates_between(date(2024, 1, 1), date(2024, 1, 31)) == {date(2024, 1, 1)}

    holidays.delete(created.holiday_id)
    with pytest.raises(NotFoundError):
        holidays.get_by_id(created.holiday_id)


def test_validation(holidays):
    with pytest.raises(ValidationError, match="Holiday name and date are required"):
        holidays.create({"name": "", "date": "2024-01-01"})
    with pytest.raises(ValidationError):
        holidays.create({"name": "Bad", "date": "2024/01/01"})
    with pytest.raises(NotFoundError):
        holidays.update(42, {"name": "x", "date": "2024-01-01"})
    with pytest.raises(NotFoundError):
        holidays.delete(42)
