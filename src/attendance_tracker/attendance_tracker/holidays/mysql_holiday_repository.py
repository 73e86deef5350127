from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_date, db_cursor, fetchall, fetchone
from .model import Holiday
from .repository import HolidayRepository


def _to_holiday(r: dict) -> Holiday:
    return Holiday(holiday_id=int(r["holiday_id"]), name=r["name"], date=as_date(r["date"]))


class MySQLHolidayRepository(HolidayRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT holiday_id, name, date FROM holidays ORDER BY date ASC")
            return [_to_holiday(r) for r in fetchall(cur)]

    def get_by_id(self, holiday_id: int) -> Optional[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._read_back(cur, holiday_id)

    def list_in_range(self, start_date: date, end_date: date) -> Sequence[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT holiday_id, name, date FROM holidays WHERE date BETWEEN %s AND %s ORDER BY date ASC",
                (start_date, end_date),
            )
            return [_to_holiday(r) for r in fetchall(cur)]

    def create(self, *, name: str, holiday_date: date) -> Holiday:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO holidays(name, date) VALUES(%s,%s)", (name, holiday_date))
            return self._read_back(cur, int(cur.lastrowid))

    def update(self, holiday_id: int, *, name: str, holiday_date: date) -> Optional[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE holidays SET name=%s, date=%s, updated_at=CURRENT_TIMESTAMP WHERE holiday_id=%s",
                (name, holiday_date, int(holiday_id)),
            )
            if cur.rowcount == 0:
                return None
            return self._read_back(cur, holiday_id)

    def delete(self, holiday_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM holidays WHERE holiday_id=%s", (int(holiday_id),))
            return cur.rowcount > 0

    def _read_back(self, cur, holiday_id: int) -> Optional[Holiday]:
        cur.execute("SELECT holiday_id, name, date FROM holidays WHERE holiday_id=%s", (int(holiday_id),))
        r = fetchone(cur)
        return _to_holiday(r) if r else None
