import pytest

from src.attendance_tracker.attendance_tracker.core.exceptions import NotFoundError, ValidationError
from src.attendance_tracker.attendance_tracker.schedules.service import WorkScheduleService

from conftest import InMemorySchedules


@pytest.fixture
def schedules(employees):
    return WorkScheduleService(InMemorySchedules(), employees)


def test_create_applies_weekday_defaults(schedules):
    schedule = schedules.create({"employee_id": 1, "saturday": "true"})
    assert schedule.monday is True
    assert schedule.saturday is True
    assert schedule.sunday is False


def test_one_schedule_per_employee(schedules):
    schedules.create({"employee_id": 1})
    with pytest.raises(ValidationError, match="already has a work schedule"):
        schedules.create({"employee_id": 1})


def test_create_requires_known_employee(schedules):
    with pytest.raises(ValidationError):
        schedules.create({})
    with pytest.raises(NotFoundError):
        schedules.create({"employee_id": 77})


def test_update_merges_with_current_days(schedules):
    schedules.create({"employee_id": 2})
    updated = schedules.update(2, {"friday": False})
    assert updated.friday is False
    assert updated.monday is True

    schedules.delete(2)
    with pytest.raises(NotFoundError):
        schedules.get_required(2)
