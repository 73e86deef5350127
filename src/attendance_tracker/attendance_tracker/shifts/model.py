from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import DEFAULT_GRACE_MINUTES, DEFAULT_SHIFT_START_HOUR
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class ShiftPolicy:
    """Configured shift start and grace period used to classify check-ins."""

    shift_start_hour: int = DEFAULT_SHIFT_START_HOUR
    grace_minutes: int = DEFAULT_GRACE_MINUTES

    def __post_init__(self) -> None:
        if not 0 <= int(self.shift_start_hour) <= 23:
            raise ValidationError("Shift start hour must be between 0 and 23")
        if int(self.grace_minutes) < 0:
            raise ValidationError("Grace period cannot be negative")
