from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterator, Optional, Union

from ..core.exceptions import ValidationError


def parse_iso_date(value: Union[str, date]) -> date:
    """Parse YYYY-MM-DD string into date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(str(value).strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError("Invalid date format. Please use YYYY-MM-DD format.") from None


def as_naive(value: datetime) -> datetime:
    """Drop any UTC offset, keeping the wall-clock reading."""
    return value.replace(tzinfo=None)


def parse_timestamp(value: Union[str, datetime, None]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp; a trailing 'Z' is accepted.

    Timestamps are stored naive, so any UTC offset is dropped after parsing.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return as_naive(value)
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise ValidationError(f"Invalid timestamp: {value!r}") from None
    return as_naive(parsed)


def iter_days(start: date, end: date) -> Iterator[date]:
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def is_weekend(day: date) -> bool:
    return day.weekday() >= 5


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch it.
    """
    return datetime.now()
