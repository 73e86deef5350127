from __future__ import annotations

import logging
from datetime import date, datetime
from functools import wraps
from typing import Any, Callable, Mapping, Optional, Sequence

from ..common.datetime_utils import as_naive, now_local, parse_iso_date, parse_timestamp
from ..common.validators import has_any, pick, require_positive_int
from ..core.constants import MANUAL_ENTRY_REMARKS
from ..core.enums import AttendanceStatus
from ..core.exceptions import DomainError, NoChangeError, NoOpError, NotFoundError, ValidationError
from ..core.result import ErrorKind, OperationResult
from ..employees.repository import EmployeeRepository
from ..shifts.model import ShiftPolicy
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, NewAttendance
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def reported(action: str):
    """Turn domain errors raised by a write operation into a failed result."""

    def decorator(func):
        @wraps(func)
        def wrapper(self, *args, **kwargs) -> OperationResult:
            try:
                return func(self, *args, **kwargs)
            except DomainError as e:
                log = logger.error if e.kind == ErrorKind.STORAGE else logger.warning
                log("%s failed (%s): %s", action, e.kind.value, e)
                return OperationResult.fail(e)

        return wrapper

    return decorator


def _parse_status(value: Any) -> AttendanceStatus:
    try:
        return AttendanceStatus(str(value).strip().lower())
    except ValueError:
        allowed = ", ".join(s.value for s in AttendanceStatus)
        raise ValidationError(f"Invalid status {value!r}; expected one of: {allowed}") from None


def _check_order(check_in: Optional[datetime], check_out: Optional[datetime]) -> None:
    if check_in and check_out and check_out < check_in:
        raise ValidationError("Check-out time cannot be earlier than check-in time")


class AttendanceService:
    """Attendance record lifecycle: check-in/out, manual entries, edits, reads.

    Write operations never raise domain errors; they return an
    ``OperationResult`` whose ``kind`` tells callers what went wrong.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: Optional[EmployeeRepository] = None,
        *,
        policy: Optional[ShiftPolicy] = None,
        strategy_factory: Optional[AttendanceStrategyFactory] = None,
        allow_duplicate_checkin: bool = True,
        clock: Clock = now_local,
    ):
        self._attendance = attendance
        self._employees = employees
        self._policy = policy or ShiftPolicy()
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._allow_duplicate_checkin = bool(allow_duplicate_checkin)
        self._clock = clock

    @property
    def policy(self) -> ShiftPolicy:
        return self._policy

    def _require_employee(self, employee_id: Any) -> int:
        if employee_id in (None, ""):
            raise ValidationError("Employee ID is required")
        employee_id = require_positive_int(employee_id, "Employee ID")
        if self._employees is not None and self._employees.get_by_id(employee_id) is None:
            raise NotFoundError("Employee not found")
        return employee_id

    def _require_fields(self, data: Mapping[str, Any]) -> tuple[int, date]:
        employee_id = pick(data, "employee_id", "employeeId")
        work_date = data.get("date")
        if not employee_id or not work_date:
            raise ValidationError("Employee ID and date are required")
        return self._require_employee(employee_id), parse_iso_date(work_date)

    # ---- writes ---------------------------------------------------------

    @reported("check-in")
    def check_in(
        self, employee_id: Any, work_date: Any = None, *, now: Optional[datetime] = None
    ) -> OperationResult[AttendanceRecord]:
        now = as_naive(now or self._clock())
        employee_id = self._require_employee(employee_id)
        day = parse_iso_date(work_date) if work_date else now.date()

        open_records = [r for r in self._attendance.list_by_employee_and_date(employee_id, day) if r.check_out is None]
        if open_records:
            if not self._allow_duplicate_checkin:
                raise ValidationError("Employee already has an open check-in for this date")
            logger.warning(
                "Duplicate check-in for employee %s on %s (open record %s)",
                employee_id,
                day,
                open_records[0].attendance_id,
            )

        strategy = self._factory.for_checkin(now=now, policy=self._policy)
        decision = strategy.decide_checkin(now=now, policy=self._policy)

        record = self._attendance.insert(
            NewAttendance(
                employee_id=employee_id,
                date=day,
                check_in=now,
                check_out=None,
                status=decision.status,
                remarks=None,
                created_at=now,
                updated_at=now,
            )
        )
        logger.info(
            "Employee %s checked in on %s as %s%s",
            employee_id,
            day,
            decision.status.value,
            f" ({decision.note})" if decision.note else "",
        )
        return OperationResult.ok(record, "Attendance record created successfully")

    @reported("check-out")
    def check_out(self, attendance_id: Any, *, now: Optional[datetime] = None) -> OperationResult[AttendanceRecord]:
        now = as_naive(now or self._clock())
        attendance_id = require_positive_int(attendance_id, "Attendance ID")

        if self._attendance.get_by_id(attendance_id) is None:
            raise NotFoundError("Attendance record not found")

        record = self._attendance.update_fields(attendance_id, {"check_out": now}, updated_at=now)
        if record is None:
            raise NoChangeError("Attendance record not found or no changes made")

        logger.info("Attendance %s checked out at %s", attendance_id, now.isoformat())
        return OperationResult.ok(record, "Attendance record checked out successfully")

    @reported("create")
    def create(self, data: Mapping[str, Any], *, now: Optional[datetime] = None) -> OperationResult[AttendanceRecord]:
        now = as_naive(now or self._clock())
        employee_id, day = self._require_fields(data)

        check_in = parse_timestamp(pick(data, "check_in", "checkIn")) or now
        check_out = parse_timestamp(pick(data, "check_out", "checkOut"))
        _check_order(check_in, check_out)
        status = _parse_status(data["status"]) if data.get("status") else AttendanceStatus.PRESENT

        record = self._attendance.insert(
            NewAttendance(
                employee_id=employee_id,
                date=day,
                check_in=check_in,
                check_out=check_out,
                status=status,
                remarks=data.get("remarks") or None,
                created_at=now,
                updated_at=now,
            )
        )
        logger.info("Created attendance %s for employee %s on %s", record.attendance_id, employee_id, day)
        return OperationResult.ok(record, "Attendance record created successfully")

    @reported("manual entry")
    def create_manual_log(
        self, data: Mapping[str, Any], *, now: Optional[datetime] = None
    ) -> OperationResult[AttendanceRecord]:
        """Admin entry; check-in/out may be null to record an absence."""
        now = as_naive(now or self._clock())
        employee_id, day = self._require_fields(data)

        check_in = parse_timestamp(pick(data, "check_in", "checkIn"))
        check_out = parse_timestamp(pick(data, "check_out", "checkOut"))
        _check_order(check_in, check_out)
        status = _parse_status(data["status"]) if data.get("status") else AttendanceStatus.PRESENT

        record = self._attendance.insert(
            NewAttendance(
                employee_id=employee_id,
                date=day,
                check_in=check_in,
                check_out=check_out,
                status=status,
                remarks=data.get("remarks") or MANUAL_ENTRY_REMARKS,
                created_at=now,
                updated_at=now,
            )
        )
        logger.info("Created manual attendance %s for employee %s on %s", record.attendance_id, employee_id, day)
        return OperationResult.ok(record, "Manual attendance record created successfully")

    @reported("update")
    def update(
        self, attendance_id: Any, data: Mapping[str, Any], *, now: Optional[datetime] = None
    ) -> OperationResult[AttendanceRecord]:
        now = as_naive(now or self._clock())
        attendance_id = require_positive_int(attendance_id, "Attendance ID")

        existing = self._attendance.get_by_id(attendance_id)
        if existing is None:
            raise NotFoundError("Attendance record not found")

        fields: dict[str, Any] = {}
        if has_any(data, "check_in", "checkIn"):
            fields["check_in"] = parse_timestamp(pick(data, "check_in", "checkIn"))
        if has_any(data, "check_out", "checkOut"):
            fields["check_out"] = parse_timestamp(pick(data, "check_out", "checkOut"))
        if "status" in data:
            fields["status"] = _parse_status(data["status"])
        if "remarks" in data:
            fields["remarks"] = data["remarks"]

        if not fields:
            raise NoOpError("No fields to update")

        _check_order(
            fields["check_in"] if "check_in" in fields else existing.check_in,
            fields["check_out"] if "check_out" in fields else existing.check_out,
        )

        record = self._attendance.update_fields(attendance_id, fields, updated_at=now)
        if record is None:
            raise NotFoundError("Attendance record not found or no changes made")

        logger.info("Updated attendance %s (%s)", attendance_id, ", ".join(sorted(fields)))
        return OperationResult.ok(record, "Attendance record updated successfully")

    @reported("delete")
    def delete(self, attendance_id: Any) -> OperationResult[None]:
        attendance_id = require_positive_int(attendance_id, "Attendance ID")
        if not self._attendance.delete(attendance_id):
            raise NotFoundError("Attendance record not found")
        logger.info("Deleted attendance %s", attendance_id)
        return OperationResult.ok(message="Attendance record deleted successfully")

    # ---- reads ----------------------------------------------------------

    def get_all(self) -> Sequence[AttendanceRecord]:
        return self._attendance.list_all()

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        return self._attendance.get_by_id(int(attendance_id))

    def get_by_employee_id(self, employee_id: int) -> Sequence[AttendanceRecord]:
        return self._attendance.list_by_employee(int(employee_id))

    def get_by_date(self, work_date: Any) -> Sequence[AttendanceRecord]:
        return self._attendance.list_by_date(parse_iso_date(work_date))

    def get_by_employee_and_date(self, employee_id: int, work_date: Any) -> Sequence[AttendanceRecord]:
        return self._attendance.list_by_employee_and_date(int(employee_id), parse_iso_date(work_date))

    def get_in_range(self, start_date: Any, end_date: Any) -> Sequence[AttendanceRecord]:
        start, end = parse_iso_date(start_date), parse_iso_date(end_date)
        if end < start:
            raise ValidationError("End date cannot be earlier than start date")
        return self._attendance.list_in_range(start, end)

    def search(self, term: str) -> list[AttendanceRecord]:
        """Match employee display name or unique id, case-insensitive."""
        pattern = (term or "").strip().lower()
        if not pattern:
            return list(self._attendance.list_all())
        return [
            r
            for r in self._attendance.list_all()
            if pattern in (r.display_name or "").lower() or pattern in (r.unique_id or "").lower()
        ]
