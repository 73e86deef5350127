from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from ...shifts.model import ShiftPolicy
from .base import AttendanceStrategy, StatusDecision


class NormalStrategy(AttendanceStrategy):
    """Check-in within the grace period."""

    def decide_checkin(self, *, now: datetime, policy: ShiftPolicy) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)
