from datetime import date, datetime, timezone

import pytest

from src.attendance_tracker.attendance_tracker.attendance.service import AttendanceService
from src.attendance_tracker.attendance_tracker.core.enums import AttendanceStatus
from src.attendance_tracker.attendance_tracker.core.result import ErrorKind
from src.attendance_tracker.attendance_tracker.employees.model import Employee
from src.attendance_tracker.attendance_tracker.reports.calculator.standard_calculator import StandardHoursCalculator
from src.attendance_tracker.attendance_tracker.shifts.model import ShiftPolicy

from conftest import FixedClock, InMemoryAttendance, InMemoryEmployees


def test_late_checkin_then_checkout_gives_hours(service):
    result = service.check_in(1, now=datetime(2024, 1, 15, 8, 20))
    assert result.success
    rec = result.data
    assert rec.status == AttendanceStatus.LATE
    assert rec.date == date(2024, 1, 15)
    assert rec.check_out is None
    assert rec.display_name == "Ana Reyes"

    out = service.check_out(rec.attendance_id, now=datetime(2024, 1, 15, 17, 0))
    assert out.success
    assert out.message == "Attendance record checked out successfully"
    assert out.data.status == AttendanceStatus.LATE
    assert StandardHoursCalculator().hours_worked(out.data) == 8.67


def test_checkin_uses_injected_clock_and_policy(attendance_repo, employees, clock):
    svc = AttendanceService(attendance_repo, employees, policy=ShiftPolicy(9, 0), clock=clock)
    result = svc.check_in("2")
    assert result.success
    assert result.data.check_in == clock.now
    assert result.data.status == AttendanceStatus.PRESENT
    assert result.data.employee_id == 2


def test_checkin_requires_known_employee(service):
    missing = service.check_in("")
    assert not missing.success
    assert missing.kind == ErrorKind.VALIDATION
    assert missing.message == "Employee ID is required"

    unknown = service.check_in(99)
    assert not unknown.success
    assert unknown.kind == ErrorKind.NOT_FOUND


def test_duplicate_checkin_is_allowed_by_default(service, attendance_repo):
    service.check_in(1, now=datetime(2024, 1, 15, 8, 0))
    second = service.check_in(1, now=datetime(2024, 1, 15, 8, 30))
    assert second.success
    assert len(attendance_repo.list_by_employee_and_date(1, date(2024, 1, 15))) == 2


def test_duplicate_checkin_rejected_when_disabled(attendance_repo, employees, clock):
    svc = AttendanceService(attendance_repo, employees, allow_duplicate_checkin=False, clock=clock)
    assert svc.check_in(1).success
    second = svc.check_in(1)
    assert not second.success
    assert second.kind == ErrorKind.VALIDATION


def test_checkout_of_missing_record_is_not_found(service):
    result = service.check_out(12345)
    assert not result.success
    assert result.kind == ErrorKind.NOT_FOUND
    assert result.message == "Attendance record not found"


def test_create_defaults_and_validation(service, clock):
    result = service.create({"employeeId": 1, "date": "2024-01-10"})
    assert result.success
    assert result.data.check_in == clock.now
    assert result.data.status == AttendanceStatus.PRESENT

    missing = service.create({"employee_id": 1})
    assert missing.kind == ErrorKind.VALIDATION
    assert missing.message == "Employee ID and date are required"

    bad_date = service.create({"employee_id": 1, "date": "10/01/2024"})
    assert bad_date.kind == ErrorKind.VALIDATION
    assert bad_date.message == "Invalid date format. Please use YYYY-MM-DD format."


def test_create_rejects_checkout_before_checkin(service):
    result = service.create(
        {
            "employee_id": 1,
            "date": "2024-01-10",
            "check_in": "2024-01-10T17:00:00Z",
            "check_out": "2024-01-10T08:00:00Z",
        }
    )
    assert not result.success
    assert result.kind == ErrorKind.VALIDATION


def test_create_rejects_unknown_status(service):
    result = service.create({"employee_id": 1, "date": "2024-01-10", "status": "on_leave"})
    assert not result.success
    assert result.kind == ErrorKind.VALIDATION


def test_manual_absence_is_stored_with_default_remarks(service):
    result = service.create_manual_log(
        {"employee_id": 2, "date": "2024-01-12", "check_in": None, "check_out": None, "status": "absent"}
    )
    assert result.success
    assert result.message == "Manual attendance record created successfully"
    assert service.get_by_id(result.data.attendance_id).check_in is None


def test_update_changes_only_supplied_fields(service):
    rec = service.check_in(1, now=datetime(2024, 1, 15, 8, 0)).data

    result = service.update(rec.attendance_id, {"remarks": "Client visit"}, now=datetime(2024, 1, 15, 9, 0))
    assert result.success
    assert result.data.remarks == "Client visit"
    assert result.data.check_in == rec.check_in
    assert result.data.updated_at == datetime(2024, 1, 15, 9, 0)


def test_update_errors(service):
    rec = service.check_in(1, now=datetime(2024, 1, 15, 8, 0)).data

    assert service.update(999, {"status": "late"}).kind == ErrorKind.NOT_FOUND

    empty = service.update(rec.attendance_id, {})
    assert empty.kind == ErrorKind.NO_OP
    assert empty.message == "No fields to update"

    # Ordering is checked against the stored check-in.
    backwards = service.update(rec.attendance_id, {"checkOut": "2024-01-15T07:00:00"})
    assert backwards.kind == ErrorKind.VALIDATION


def test_delete(service):
    rec = service.check_in(1, now=datetime(2024, 1, 15, 8, 0)).data

    assert service.delete(rec.attendance_id).success
    assert service.get_by_id(rec.attendance_id) is None

    again = service.delete(rec.attendance_id)
    assert not again.success
    assert again.kind == ErrorKind.NOT_FOUND


def test_reads_and_search(service):
    service.check_in(1, now=datetime(2024, 1, 15, 8, 0))
    service.check_in(2, now=datetime(2024, 1, 15, 7, 50))
    service.check_in(1, now=datetime(2024, 1, 16, 8, 10))

    by_date = service.get_by_date("2024-01-15")
    assert [r.employee_id for r in by_date] == [2, 1]

    by_emp = service.get_by_employee_id(1)
    assert [r.date for r in by_emp] == [date(2024, 1, 16), date(2024, 1, 15)]

    assert len(service.get_in_range("2024-01-15", "2024-01-15")) == 2
    assert len(service.get_by_employee_and_date(1, "2024-01-16")) == 1
    assert {r.employee_id for r in service.search("emp002")} == {2}
    assert {r.employee_id for r in service.search("ana")} == {1}


@pytest.fixture
def staff():
    return InMemoryEmployees(
        {
            3: Employee(3, "EMP003", "Cara", "Lim", "Cara Lim", department_id=10),
            7: Employee(7, "EMP007", "Gio", "Santos", "Gio Santos", department_id=20),
        }
    )


def test_utc_clock_checkin_is_late_and_checkout_gives_hours(staff):
    repo = InMemoryAttendance(staff)
    clock = FixedClock(datetime(2024, 1, 10, 8, 20, tzinfo=timezone.utc))
    svc = AttendanceService(repo, staff, policy=ShiftPolicy(8, 15), clock=clock)

    rec = svc.check_in(7).data
    assert rec.status == AttendanceStatus.LATE
    assert rec.date == date(2024, 1, 10)
    assert rec.check_in == datetime(2024, 1, 10, 8, 20)

    clock.now = datetime(2024, 1, 10, 17, 0, tzinfo=timezone.utc)
    out = svc.check_out(rec.attendance_id)
    assert out.success
    assert out.data.check_out >= out.data.check_in
    assert StandardHoursCalculator().hours_worked(out.data) == 8.67


def test_utc_clock_with_naive_payload_timestamps(staff):
    svc = AttendanceService(
        InMemoryAttendance(staff), staff, clock=FixedClock(datetime(2024, 1, 10, 8, 0, tzinfo=timezone.utc))
    )
    result = svc.create({"employeeId": 7, "date": "2024-01-10", "checkOut": "2024-01-10T17:00:00Z"})
    assert result.success
    assert result.data.check_in == datetime(2024, 1, 10, 8, 0)


def test_manual_absence_is_found_by_employee_and_date(staff):
    svc = AttendanceService(InMemoryAttendance(staff), staff, clock=FixedClock(datetime(2024, 2, 1, 18, 0)))

    created = svc.create_manual_log(
        {"employeeId": 3, "date": "2024-02-01", "check_in": None, "check_out": None, "status": "absent"}
    )
    assert created.success

    found = svc.get_by_employee_and_date(3, "2024-02-01")
    assert len(found) == 1
    assert found[0].status == AttendanceStatus.ABSENT
    assert found[0].check_in is None and found[0].check_out is None
    assert found[0].remarks == "Manual entry by admin"
