from datetime import datetime

import pytest

from src.attendance_tracker.attendance_tracker.attendance.factory import AttendanceStrategyFactory, classify
from src.attendance_tracker.attendance_tracker.attendance.strategies.late_strategy import LateStrategy
from src.attendance_tracker.attendance_tracker.attendance.strategies.normal_strategy import NormalStrategy
from src.attendance_tracker.attendance_tracker.core.enums import AttendanceStatus
from src.attendance_tracker.attendance_tracker.core.exceptions import ValidationError
from src.attendance_tracker.attendance_tracker.shifts.model import ShiftPolicy


@pytest.mark.parametrize(
    "hh, mm, expected",
    [
        (7, 59, AttendanceStatus.PRESENT),
        (8, 0, AttendanceStatus.PRESENT),
        (8, 15, AttendanceStatus.PRESENT),
        (8, 16, AttendanceStatus.LATE),
        (9, 0, AttendanceStatus.LATE),
        (23, 59, AttendanceStatus.LATE),
    ],
)
def test_classify_default_policy(hh, mm, expected):
    assert classify(datetime(2024, 1, 15, hh, mm), 8, 15) == expected


def test_seconds_do_not_make_checkin_late():
    assert classify(datetime(2024, 1, 15, 8, 15, 59), 8, 15) == AttendanceStatus.PRESENT


def test_classify_is_monotonic_across_the_day():
    seen_late = False
    for minute in range(24 * 60):
        status = classify(datetime(2024, 1, 15, minute // 60, minute % 60), 8, 15)
        if seen_late:
            assert status == AttendanceStatus.LATE
        seen_late = status == AttendanceStatus.LATE


def test_factory_picks_strategy_and_reports_minutes_late():
    policy = ShiftPolicy(shift_start_hour=9, grace_minutes=0)

    on_time = AttendanceStrategyFactory().for_checkin(now=datetime(2024, 1, 15, 9, 0), policy=policy)
    assert isinstance(on_time, NormalStrategy)

    now = datetime(2024, 1, 15, 9, 20)
    late = AttendanceStrategyFactory().for_checkin(now=now, policy=policy)
    assert isinstance(late, LateStrategy)
    decision = late.decide_checkin(now=now, policy=policy)
    assert decision.status == AttendanceStatus.LATE
    assert decision.note == "Late by 20 minutes"


@pytest.mark.parametrize("hour, grace", [(24, 0), (-1, 0), (8, -5)])
def test_shift_policy_rejects_out_of_range_values(hour, grace):
    with pytest.raises(ValidationError):
        ShiftPolicy(shift_start_hour=hour, grace_minutes=grace)


def test_grace_longer_than_an_hour_is_accepted():
    policy = ShiftPolicy(shift_start_hour=8, grace_minutes=90)
    assert policy.grace_minutes == 90

    # Only minutes within the start hour are compared against the grace period.
    assert classify(datetime(2024, 1, 15, 8, 59), 8, 90) == AttendanceStatus.PRESENT
    assert classify(datetime(2024, 1, 15, 9, 10), 8, 90) == AttendanceStatus.LATE
    assert isinstance(
        AttendanceStrategyFactory().for_checkin(now=datetime(2024, 1, 15, 8, 45), policy=policy), NormalStrategy
    )
