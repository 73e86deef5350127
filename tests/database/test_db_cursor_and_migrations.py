import mysql.connector
import pytest

from src.attendance_tracker.attendance_tracker.core.exceptions import StorageError
from src.attendance_tracker.attendance_tracker.database.migrations import (
    MIGRATIONS,
    Guarded,
    Migration,
    add_index,
    apply_migrations,
    pending_migrations,
)
from src.attendance_tracker.attendance_tracker.database.mysql_base import as_date, db_cursor


class FakeCursor:
    def __init__(self, conn):
        self._conn = conn
        self.rowcount = 0
        self._last = None

    def execute(self, sql, params=None):
        if self._conn.fail_on and self._conn.fail_on in sql:
            raise mysql.connector.Error("boom")
        self._last = (sql, params)
        self._conn.executed.append((" ".join(sql.split()), params))

    def fetchall(self):
        return [{"version": v} for v in self._conn.applied]

    def fetchone(self):
        sql, params = self._last
        if "information_schema" in sql and params[-1] in self._conn.existing:
            return {"1": 1}
        return None

    def close(self):
        pass


class FakeConnection:
    def __init__(self, factory):
        self._factory = factory
        self.executed = factory.executed
        self.applied = factory.applied
        self.fail_on = factory.fail_on
        self.existing = factory.existing

    def cursor(self, dictionary=True):
        return FakeCursor(self)

    def commit(self):
        self._factory.commits += 1

    def rollback(self):
        self._factory.rollbacks += 1

    def close(self):
        self._factory.closed += 1


class FakeFactory:
    def __init__(self, applied=(), fail_on=None, existing=()):
        self.existing = set(existing)
        self.executed = []
        self.applied = list(applied)
        self.fail_on = fail_on
        self.commits = self.rollbacks = self.closed = 0

    def connect(self):
        return FakeConnection(self)


def test_db_cursor_commits_and_closes():
    factory = FakeFactory()
    with db_cursor(factory) as (_, cur):
        cur.execute("SELECT 1")
    assert (factory.commits, factory.rollbacks, factory.closed) == (1, 0, 1)


def test_db_cursor_turns_driver_errors_into_storage_errors():
    factory = FakeFactory(fail_on="DELETE")
    with pytest.raises(StorageError):
        with db_cursor(factory) as (_, cur):
            cur.execute("DELETE FROM attendance")
    assert (factory.commits, factory.rollbacks, factory.closed) == (0, 1, 1)


def test_db_cursor_rolls_back_other_errors_unchanged():
    factory = FakeFactory()
    with pytest.raises(KeyError):
        with db_cursor(factory):
            raise KeyError("x")
    assert factory.rollbacks == 1


def test_migration_versions_are_unique_and_ordered():
    versions = [m.version for m in MIGRATIONS]
    assert versions == sorted(set(versions))


def test_pending_skips_applied_versions():
    migrations = [Migration(3, "c", ()), Migration(1, "a", ()), Migration(2, "b", ())]
    assert [m.version for m in pending_migrations({1}, migrations)] == [2, 3]


def test_apply_runs_only_new_migrations_and_records_them():
    factory = FakeFactory(applied=[1])
    migrations = [
        Migration(1, "first", ("CREATE TABLE a (id INT)",)),
        Migration(2, "second", ("ALTER TABLE a ADD COLUMN b INT",)),
    ]

    assert apply_migrations(factory, migrations) == [2]

    sql = [s for s, _ in factory.executed]
    assert "CREATE TABLE a (id INT)" not in sql
    assert "ALTER TABLE a ADD COLUMN b INT" in sql
    assert ("INSERT INTO schema_migrations(version, description) VALUES(%s,%s)", (2, "second")) in factory.executed


def test_as_date_accepts_strings():
    assert as_date("2024-01-15 00:00:00").isoformat() == "2024-01-15"
    assert as_date(None) is None


def test_every_migration_statement_can_be_rerun():
    for migration in MIGRATIONS:
        for stmt in migration.statements:
            if isinstance(stmt, Guarded):
                continue
            assert " ".join(stmt.split()).startswith("CREATE TABLE IF NOT EXISTS"), stmt


def test_guarded_statements_skip_what_already_exists():
    migrations = [
        Migration(
            4,
            "indexes",
            (
                add_index("attendance", "idx_a", "date"),
                add_index("attendance", "idx_b", "employee_id, date"),
            ),
        )
    ]
    factory = FakeFactory(existing={"idx_a"})

    assert apply_migrations(factory, migrations) == [4]

    sql = [s for s, _ in factory.executed]
    assert "CREATE INDEX idx_a ON attendance(date)" not in sql
    assert "CREATE INDEX idx_b ON attendance(employee_id, date)" in sql


def test_failed_migration_is_retried_without_duplicate_index():
    migrations = [
        Migration(
            4,
            "indexes",
            (
                add_index("attendance", "idx_a", "date"),
                add_index("attendance", "idx_b", "employee_id, date"),
            ),
        )
    ]
    failing = FakeFactory(fail_on="CREATE INDEX idx_b")
    with pytest.raises(StorageError):
        apply_migrations(failing, migrations)
    assert not any("schema_migrations(version" in s for s, _ in failing.executed)

    # idx_a survived the failed run; the retry must not create it again.
    retry = FakeFactory(existing={"idx_a"})
    assert apply_migrations(retry, migrations) == [4]
    assert "CREATE INDEX idx_a ON attendance(date)" not in [s for s, _ in retry.executed]
