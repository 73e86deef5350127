from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from types import SimpleNamespace
from typing import Any, Mapping, Optional

import pytest
from werkzeug.security import generate_password_hash

from src.attendance_tracker.attendance_tracker.attendance.model import AttendanceRecord, NewAttendance
from src.attendance_tracker.attendance_tracker.attendance.service import AttendanceService
from src.attendance_tracker.attendance_tracker.core.enums import Role
from src.attendance_tracker.attendance_tracker.employees.model import Employee
from src.attendance_tracker.attendance_tracker.holidays.model import Holiday
from src.attendance_tracker.attendance_tracker.schedules.model import WorkSchedule
from src.attendance_tracker.attendance_tracker.users.model import User


@dataclass
class InMemoryEmployees:
    by_id: dict[int, Employee] = field(default_factory=dict)

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self.by_id.get(employee_id)

    def list_all(self):
        return sorted(self.by_id.values(), key=lambda e: e.lastname)


class InMemoryAttendance:
    """Mirrors the MySQL repository: joins employee fields, same ordering."""

    def __init__(self, employees: Optional[InMemoryEmployees] = None):
        self._employees = employees or InMemoryEmployees()
        self._rows: dict[int, AttendanceRecord] = {}
        self._id = 0

    def _joined(self, rec: AttendanceRecord) -> AttendanceRecord:
        emp = self._employees.get_by_id(rec.employee_id)
        if not emp:
            return rec
        return replace(rec, display_name=emp.display_name, unique_id=emp.unique_id, department_id=emp.department_id)

    def _desc(self, rows):
        rows = [self._joined(r) for r in rows]
        rows.sort(key=lambda r: (r.date, r.check_in or datetime.min), reverse=True)
        return rows

    def _asc(self, rows):
        rows = [self._joined(r) for r in rows]
        rows.sort(key=lambda r: r.check_in or datetime.min)
        return rows

    def list_all(self):
        return self._desc(self._rows.values())

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        rec = self._rows.get(attendance_id)
        return self._joined(rec) if rec else None

    def list_by_employee(self, employee_id: int):
        return self._desc(r for r in self._rows.values() if r.employee_id == employee_id)

    def list_by_date(self, work_date: date):
        return self._asc(r for r in self._rows.values() if r.date == work_date)

    def list_by_employee_and_date(self, employee_id: int, work_date: date):
        return self._asc(r for r in self._rows.values() if r.employee_id == employee_id and r.date == work_date)

    def list_in_range(self, start_date: date, end_date: date):
        return self._desc(r for r in self._rows.values() if start_date <= r.date <= end_date)

    def insert(self, new: NewAttendance) -> AttendanceRecord:
        self._id += 1
        self._rows[self._id] = AttendanceRecord(
            attendance_id=self._id,
            employee_id=new.employee_id,
            date=new.date,
            check_in=new.check_in,
            check_out=new.check_out,
            status=new.status,
            remarks=new.remarks,
            created_at=new.created_at,
            updated_at=new.updated_at,
        )
        return self.get_by_id(self._id)

    def update_fields(self, attendance_id: int, fields: Mapping[str, Any], *, updated_at: datetime):
        rec = self._rows.get(attendance_id)
        if rec is None:
            return None
        self._rows[attendance_id] = replace(rec, updated_at=updated_at, **dict(fields))
        return self.get_by_id(attendance_id)

    def delete(self, attendance_id: int) -> bool:
        return self._rows.pop(attendance_id, None) is not None


class InMemoryHolidays:
    def __init__(self, holidays=()):
        self._rows: dict[int, Holiday] = {h.holiday_id: h for h in holidays}
        self._id = max(self._rows, default=0)

    def list_all(self):
        return sorted(self._rows.values(), key=lambda h: h.date)

    def get_by_id(self, holiday_id: int):
        return self._rows.get(holiday_id)

    def list_in_range(self, start_date: date, end_date: date):
        return [h for h in self.list_all() if start_date <= h.date <= end_date]

    def create(self, *, name: str, holiday_date: date) -> Holiday:
        self._id += 1
        self._rows[self._id] = Holiday(holiday_id=self._id, name=name, date=holiday_date)
        return self._rows[self._id]

    def update(self, holiday_id: int, *, name: str, holiday_date: date):
        if holiday_id not in self._rows:
            return None
        self._rows[holiday_id] = Holiday(holiday_id=holiday_id, name=name, date=holiday_date)
        return self._rows[holiday_id]

    def delete(self, holiday_id: int) -> bool:
        return self._rows.pop(holiday_id, None) is not None


class InMemorySchedules:
    def __init__(self):
        self._rows: dict[int, WorkSchedule] = {}
        self._id = 0

    def get_by_employee(self, employee_id: int):
        return self._rows.get(employee_id)

    def create(self, *, employee_id: int, days) -> WorkSchedule:
        self._id += 1
        self._rows[employee_id] = WorkSchedule(schedule_id=self._id, employee_id=employee_id, **dict(days))
        return self._rows[employee_id]

    def update(self, employee_id: int, *, days):
        current = self._rows.get(employee_id)
        if current is None:
            return None
        self._rows[employee_id] = replace(current, **dict(days))
        return self._rows[employee_id]

    def delete(self, employee_id: int) -> bool:
        return self._rows.pop(employee_id, None) is not None


class InMemoryUsers:
    def __init__(self, users=()):
        self._rows: dict[int, User] = {u.user_id: u for u in users}

    def get_by_id(self, user_id: int):
        return self._rows.get(user_id)

    def get_by_username(self, username: str):
        return next((u for u in self._rows.values() if u.username == username), None)

    def create_user(self, *, username: str, password_hash: str, display_name: str, role: Role) -> int:
        user_id = max(self._rows, default=0) + 1
        self._rows[user_id] = User(user_id, username, password_hash, display_name, role)
        return user_id

    def set_password_hash(self, user_id: int, password_hash: str) -> bool:
        user = self._rows.get(user_id)
        if not user:
            return False
        self._rows[user_id] = replace(user, password_hash=password_hash)
        return True

    def list_all(self):
        return sorted(self._rows.values(), key=lambda u: u.username)

    def update_user(self, user_id: int, *, display_name: str, role: Role):
        user = self._rows.get(user_id)
        if not user:
            return None
        self._rows[user_id] = replace(user, display_name=display_name, role=role)
        return self._rows[user_id]

    def delete(self, user_id: int) -> bool:
        return self._rows.pop(user_id, None) is not None


class FixedClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def employees() -> InMemoryEmployees:
    return InMemoryEmployees(
        {
            1: Employee(1, "EMP001", "Ana", "Reyes", "Ana Reyes", department_id=10),
            2: Employee(2, "EMP002", "Ben", "Cruz", "Ben Cruz", department_id=20),
        }
    )


@pytest.fixture
def attendance_repo(employees) -> InMemoryAttendance:
    return InMemoryAttendance(employees)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(datetime(2024, 1, 15, 8, 5))


@pytest.fixture
def service(attendance_repo, employees, clock) -> AttendanceService:
    return AttendanceService(attendance_repo, employees, clock=clock)


@pytest.fixture
def users() -> InMemoryUsers:
    return InMemoryUsers(
        [
            User(1, "admin", generate_password_hash("admin123"), "Administrator", Role.ADMIN),
            User(2, "clerk", generate_password_hash("clerk123"), "Clerk", Role.USER),
        ]
    )


@pytest.fixture
def settings():
    return SimpleNamespace(
        SHIFT_START_HOUR=8,
        GRACE_MINUTES=15,
        ALLOW_DUPLICATE_CHECKIN=True,
        BACKUP_DIR="backups-test",
        MYSQLDUMP_BIN="mysqldump",
        MYSQL_BIN="mysql",
    )
