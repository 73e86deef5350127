from __future__ import annotations

from datetime import date, datetime
from typing import Any, Mapping, Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_date, db_cursor, fetchall, fetchone
from .model import AttendanceRecord, NewAttendance
from .repository import AttendanceRepository

_SELECT = """
    SELECT a.attendance_id, a.employee_id, a.date, a.check_in, a.check_out, a.status, a.remarks,
           a.created_at, a.updated_at,
           e.display_name, e.unique_id, e.department_id
    FROM attendance a
    JOIN employees e ON a.employee_id = e.employee_id
"""

# Columns a partial update may touch.
_UPDATABLE = ("check_in", "check_out", "status", "remarks")


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        employee_id=int(r["employee_id"]),
        date=as_date(r["date"]),
        check_in=r.get("check_in"),
        check_out=r.get("check_out"),
        status=AttendanceStatus(r["status"]),
        remarks=r.get("remarks"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
        display_name=r.get("display_name"),
        unique_id=r.get("unique_id"),
        department_id=r.get("department_id"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select(self, where: str, params: tuple, order_by: str) -> list[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} {where} ORDER BY {order_by}", params)
            return [_to_record(r) for r in fetchall(cur)]

    def list_all(self) -> Sequence[AttendanceRecord]:
        return self._select("", (), "a.date DESC, a.check_in DESC")

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._read_back(cur, attendance_id)

    def list_by_employee(self, employee_id: int) -> Sequence[AttendanceRecord]:
        return self._select("WHERE a.employee_id=%s", (int(employee_id),), "a.date DESC, a.check_in DESC")

    def list_by_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        return self._select("WHERE a.date=%s", (work_date,), "a.check_in ASC")

    def list_by_employee_and_date(self, employee_id: int, work_date: date) -> Sequence[AttendanceRecord]:
        return self._select(
            "WHERE a.employee_id=%s AND a.date=%s",
            (int(employee_id), work_date),
            "a.check_in ASC",
        )

    def list_in_range(self, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        return self._select(
            "WHERE a.date BETWEEN %s AND %s",
            (start_date, end_date),
            "a.date DESC, a.check_in DESC",
        )

    def insert(self, new: NewAttendance) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(employee_id, date, check_in, check_out, status, remarks, created_at, updated_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    new.employee_id,
                    new.date,
                    new.check_in,
                    new.check_out,
                    new.status.value,
                    new.remarks,
                    new.created_at,
                    new.updated_at,
                ),
            )
            return self._read_back(cur, int(cur.lastrowid))

    def update_fields(
        self, attendance_id: int, fields: Mapping[str, Any], *, updated_at: datetime
    ) -> Optional[AttendanceRecord]:
        assignments: list[str] = []
        params: list[object] = []
        for column in _UPDATABLE:
            if column in fields:
                value = fields[column]
                assignments.append(f"{column}=%s")
                params.append(value.value if isinstance(value, AttendanceStatus) else value)
        assignments.append("updated_at=%s")
        params.append(updated_at)
        params.append(int(attendance_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE attendance SET {', '.join(assignments)} WHERE attendance_id=%s",
                tuple(params),
            )
            if cur.rowcount == 0:
                return None
            return self._read_back(cur, attendance_id)

    def delete(self, attendance_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance WHERE attendance_id=%s", (int(attendance_id),))
            return cur.rowcount > 0

    def _read_back(self, cur, attendance_id: int) -> Optional[AttendanceRecord]:
        cur.execute(f"{_SELECT} WHERE a.attendance_id=%s", (int(attendance_id),))
        r = fetchone(cur)
        return _to_record(r) if r else None
