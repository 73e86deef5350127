"""Versioned schema migrations.

Each entry is applied once, in order, and recorded in ``schema_migrations``.
Never edit a released migration; append a new one. Every statement must be
safe to re-run: MySQL commits DDL implicitly, so a migration that fails part-way
keeps its earlier statements and is retried from the start.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence, Union

from .connection import DatabaseConnection
from .mysql_base import db_cursor, fetchall, fetchone

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Guarded:
    """Run ``statement`` only when ``exists_query`` finds no row."""

    exists_query: str
    params: tuple
    statement: str


def add_column(table: str, column: str, definition: str) -> Guarded:
    return Guarded(
        "SELECT 1 FROM information_schema.columns"
        " WHERE table_schema=DATABASE() AND table_name=%s AND column_name=%s LIMIT 1",
        (table, column),
        f"ALTER TABLE {table} ADD COLUMN {column} {definition}",
    )


def add_index(table: str, name: str, columns: str) -> Guarded:
    return Guarded(
        "SELECT 1 FROM information_schema.statistics"
        " WHERE table_schema=DATABASE() AND table_name=%s AND index_name=%s LIMIT 1",
        (table, name),
        f"CREATE INDEX {name} ON {table}({columns})",
    )


Statement = Union[str, Guarded]


@dataclass(frozen=True)
class Migration:
    version: int
    description: str
    statements: Sequence[Statement]


MIGRATIONS: tuple[Migration, ...] = (
    Migration(
        1,
        "core tables",
        (
            """
            CREATE TABLE IF NOT EXISTS departments (
                department_id INT AUTO_INCREMENT PRIMARY KEY,
                name VARCHAR(100) NOT NULL,
                department_head VARCHAR(100) NOT NULL,
                created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
                updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
            )
            """,
            """
            CREATE TABLE IF NOT EXISTS employees (
                employee_id INT AUTO_INCREMENT PRIMARY KEY,
                department_id INT NULL,
                unique_id VARCHAR(50) NOT NULL UNIQUE,
                lastname VARCHAR(100) NOT NULL,
                firstname VARCHAR(100) NOT NULL,
                middlename VARCHAR(100) NULL,
                display_name VARCHAR(200) NOT NULL,
                created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
                updated_at DATETIME DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (department_id) REFERENCES departments(department_id)
            )
            """,
            """
            CREATE TABLE IF NOT EXISTS users (
                user_id INT AUTO_INCREMENT PRIMARY KEY,
                username VARCHAR(50) NOT NULL UNIQUE,
                password_hash VARCHAR(255) NOT NULL,
                display_name VARCHAR(200) NOT NULL,
                role VARCHAR(20) NOT NULL DEFAULT 'user',
                created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
                updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
            )
            """,
            """
            CREATE TABLE IF NOT EXISTS holidays (
                holiday_id INT AUTO_INCREMENT PRIMARY KEY,
                name VARCHAR(200) NOT NULL,
                date DATE NOT NULL,
                created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
                updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
            )
            """,
            """
            CREATE TABLE IF NOT EXISTS attendance (
                attendance_id INT AUTO_INCREMENT PRIMARY KEY,
                employee_id INT NOT NULL,
                date DATE NOT NULL,
                check_in DATETIME NULL,
                check_out DATETIME NULL,
                status VARCHAR(20) NOT NULL,
                created_at DATETIME NOT NULL,
                updated_at DATETIME NOT NULL,
                FOREIGN KEY (employee_id) REFERENCES employees(employee_id)
            )
            """,
        ),
    ),
    Migration(
        2,
        "attendance remarks",
        (add_column("attendance", "remarks", "TEXT NULL"),),
    ),
    Migration(
        3,
        "work schedules",
        (
            """
            CREATE TABLE IF NOT EXISTS work_schedule (
                schedule_id INT AUTO_INCREMENT PRIMARY KEY,
                employee_id INT NOT NULL UNIQUE,
                monday TINYINT(1) NOT NULL DEFAULT 1,
                tuesday TINYINT(1) NOT NULL DEFAULT 1,
                wednesday TINYINT(1) NOT NULL DEFAULT 1,
                thursday TINYINT(1) NOT NULL DEFAULT 1,
                friday TINYINT(1) NOT NULL DEFAULT 1,
                saturday TINYINT(1) NOT NULL DEFAULT 0,
                sunday TINYINT(1) NOT NULL DEFAULT 0,
                created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
                updated_at DATETIME DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (employee_id) REFERENCES employees(employee_id)
            )
            """,
        ),
    ),
    Migration(
        4,
        "attendance lookup indexes",
        (
            add_index("attendance", "idx_attendance_date", "date"),
            add_index("attendance", "idx_attendance_employee_date", "employee_id, date"),
        ),
    ),
)


def _ensure_migrations_table(conn_factory: DatabaseConnection) -> None:
    with db_cursor(conn_factory) as (_, cur):
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS schema_migrations (
                version INT PRIMARY KEY,
                description VARCHAR(200) NOT NULL,
                applied_at DATETIME DEFAULT CURRENT_TIMESTAMP
            )
            """
        )


def applied_versions(conn_factory: DatabaseConnection) -> set[int]:
    _ensure_migrations_table(conn_factory)
    with db_cursor(conn_factory) as (_, cur):
        cur.execute("SELECT version FROM schema_migrations")
        return {int(r["version"]) for r in fetchall(cur)}


def pending_migrations(applied: set[int], migrations: Sequence[Migration] = MIGRATIONS) -> list[Migration]:
    return sorted((m for m in migrations if m.version not in applied), key=lambda m: m.version)


def _execute(cur, stmt: Statement) -> None:
    if isinstance(stmt, Guarded):
        cur.execute(stmt.exists_query, stmt.params)
        if fetchone(cur):
            logger.debug("Skipping, already present: %s", stmt.statement)
            return
        stmt = stmt.statement
    cur.execute(stmt)


def apply_migrations(conn_factory: DatabaseConnection, migrations: Sequence[Migration] = MIGRATIONS) -> list[int]:
    """Apply every migration newer than what the database has seen.

    Returns the versions applied by this call.
    """
    done: list[int] = []
    for migration in pending_migrations(applied_versions(conn_factory), migrations):
        # MySQL commits DDL implicitly, so the version row goes in with the last statement.
        with db_cursor(conn_factory) as (_, cur):
            for stmt in migration.statements:
                _execute(cur, stmt)
            cur.execute(
                "INSERT INTO schema_migrations(version, description) VALUES(%s,%s)",
                (migration.version, migration.description),
            )
        logger.info("Applied migration %s (%s)", migration.version, migration.description)
        done.append(migration.version)
    return done
