from __future__ import annotations

from typing import Mapping, Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import WEEKDAYS, WorkSchedule
from .repository import WorkScheduleRepository


def _to_schedule(r: dict) -> WorkSchedule:
    return WorkSchedule(
        schedule_id=int(r["schedule_id"]),
        employee_id=int(r["employee_id"]),
        **{name: bool(r[name]) for name in WEEKDAYS},
    )


class MySQLWorkScheduleRepository(WorkScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_employee(self, employee_id: int) -> Optional[WorkSchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._read_back(cur, employee_id)

    def create(self, *, employee_id: int, days: Mapping[str, bool]) -> WorkSchedule:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO work_schedule(employee_id, {", ".join(WEEKDAYS)})
                VALUES(%s,{",".join(["%s"] * len(WEEKDAYS))})
                """,
                (int(employee_id), *[1 if days[name] else 0 for name in WEEKDAYS]),
            )
            return self._read_back(cur, employee_id)

    def update(self, employee_id: int, *, days: Mapping[str, bool]) -> Optional[WorkSchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                UPDATE work_schedule
                SET {", ".join(f"{name}=%s" for name in WEEKDAYS)}, updated_at=CURRENT_TIMESTAMP
                WHERE employee_id=%s
                """,
                (*[1 if days[name] else 0 for name in WEEKDAYS], int(employee_id)),
            )
            if cur.rowcount == 0:
                return None
            return self._read_back(cur, employee_id)

    def delete(self, employee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM work_schedule WHERE employee_id=%s", (int(employee_id),))
            return cur.rowcount > 0

    def _read_back(self, cur, employee_id: int) -> Optional[WorkSchedule]:
        cur.execute(
            f"SELECT schedule_id, employee_id, {', '.join(WEEKDAYS)} FROM work_schedule WHERE employee_id=%s",
            (int(employee_id),),
        )
        r = fetchone(cur)
        return _to_schedule(r) if r else None
