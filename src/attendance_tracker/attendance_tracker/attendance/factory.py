from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.enums import AttendanceStatus
from ..shifts.model import ShiftPolicy
from .strategies.base import AttendanceStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy


def is_late(now: datetime, shift_start_hour: int, grace_minutes: int) -> bool:
    # Only wall-clock hour and minute count; seconds never make a check-in late.
    return now.hour > shift_start_hour or (now.hour == shift_start_hour and now.minute > grace_minutes)


def classify(now: datetime, shift_start_hour: int, grace_minutes: int) -> AttendanceStatus:
    """Map a check-in time to ``present`` or ``late``. Pure, never raises."""
    if is_late(now, shift_start_hour, grace_minutes):
        return AttendanceStatus.LATE
    return AttendanceStatus.PRESENT


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_checkin(self, *, now: datetime, policy: ShiftPolicy) -> AttendanceStrategy:
        if is_late(now, policy.shift_start_hour, policy.grace_minutes):
            return LateStrategy()
        return NormalStrategy()
