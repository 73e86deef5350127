from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from ...shifts.model import ShiftPolicy
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Check-in after the grace period."""

    def decide_checkin(self, *, now: datetime, policy: ShiftPolicy) -> StatusDecision:
        late_minutes = (now.hour - policy.shift_start_hour) * 60 + now.minute
        return StatusDecision(status=AttendanceStatus.LATE, note=f"Late by {late_minutes} minutes")
