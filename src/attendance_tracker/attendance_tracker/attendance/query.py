from __future__ import annotations

import math
from datetime import date, datetime
from typing import Any, Iterable, Mapping, Optional

from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_positive_int
from ..core.constants import DEFAULT_PAGE
from ..core.exceptions import ValidationError
from .model import AttendanceFilter, AttendanceRecord, Page
from .repository import AttendanceRepository


def _optional_int(value: Any, field_name: str) -> Optional[int]:
    if value in (None, ""):
        return None
    return require_positive_int(value, field_name)


def _full_date(value: Optional[str]) -> Optional[date]:
    """The date when ``value`` is a complete YYYY-MM-DD, else None."""
    if not value:
        return None
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError:
        return None


def _normalized(value: Optional[str]) -> Optional[str]:
    return value.strip().lower() if value and value.strip() else None


def filter_from_args(args: Mapping[str, Any], *, default_limit: int) -> AttendanceFilter:
    """Build a filter from query-string style arguments (camelCase keys)."""
    start_s, end_s = args.get("startDate"), args.get("endDate")
    start = parse_iso_date(start_s) if start_s else None
    end = parse_iso_date(end_s) if end_s else None
    if start and end and end < start:
        raise ValidationError("End date cannot be earlier than start date")

    return AttendanceFilter(
        employee_id=_optional_int(args.get("employeeId"), "employeeId"),
        department_id=_optional_int(args.get("departmentId"), "departmentId"),
        date=args.get("date") or None,
        start_date=start,
        end_date=end,
        status=args.get("status") or None,
        exclude_status=args.get("excludeStatus") or None,
        search=args.get("search") or None,
        page=require_positive_int(args.get("page", DEFAULT_PAGE), "page"),
        limit=require_positive_int(args.get("limit", default_limit), "limit"),
    )


class AttendanceQueryService:
    """Filter and paginate attendance records.

    The repository narrows by the strongest key available; everything else is
    filtered in memory, then sliced for the requested page.
    """

    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def _base_rows(self, f: AttendanceFilter) -> list[AttendanceRecord]:
        # Date range takes precedence over single date.
        if f.start_date and f.end_date:
            rows = self._attendance.list_in_range(f.start_date, f.end_date)
            if f.employee_id is not None:
                rows = [r for r in rows if r.employee_id == f.employee_id]
            return list(rows)
        day = _full_date(f.date)
        if f.employee_id is not None and day is not None:
            return list(self._attendance.list_by_employee_and_date(f.employee_id, day))
        if f.employee_id is not None:
            rows = self._attendance.list_by_employee(f.employee_id)
            if f.date:
                # Partial match, so "2024-01" selects a whole month.
                rows = [r for r in rows if f.date in r.date.isoformat()]
            return list(rows)
        if f.date:
            return list(self._attendance.list_by_date(parse_iso_date(f.date)))
        return list(self._attendance.list_all())

    def _apply_filters(self, rows: Iterable[AttendanceRecord], f: AttendanceFilter) -> list[AttendanceRecord]:
        out = list(rows)
        if f.department_id is not None:
            out = [r for r in out if r.department_id == f.department_id]
        status, excluded = _normalized(f.status), _normalized(f.exclude_status)
        if status:
            out = [r for r in out if r.status.value == status]
        elif excluded:
            out = [r for r in out if r.status.value != excluded]
        if f.search:
            pattern = f.search.strip().lower()
            out = [
                r
                for r in out
                if pattern in (r.display_name or "").lower() or pattern in (r.unique_id or "").lower()
            ]
        return out

    def find(self, f: AttendanceFilter) -> Page:
        matching = self._apply_filters(self._base_rows(f), f)
        total = len(matching)
        offset = (f.page - 1) * f.limit
        return Page(
            data=matching[offset : offset + f.limit],
            total=total,
            page=f.page,
            limit=f.limit,
            total_pages=math.ceil(total / f.limit),
        )
