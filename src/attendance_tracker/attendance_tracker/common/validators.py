from __future__ import annotations

from typing import Any, Mapping, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_positive_int(value: Any, field_name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer") from None
    if number < 1:
        raise ValidationError(f"{field_name} must be a positive integer")
    return number


def pick(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    """First value present under any of ``keys`` (snake_case or camelCase)."""
    for key in keys:
        if key in data:
            return data[key]
    return default


def has_any(data: Mapping[str, Any], *keys: str) -> bool:
    return any(key in data for key in keys)
