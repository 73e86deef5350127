from __future__ import annotations

import logging

import mysql.connector
from werkzeug.security import generate_password_hash

from ..core.enums import Role
from .connection import DBConfig, DatabaseConnection
from .mysql_base import db_cursor, fetchone

logger = logging.getLogger(__name__)


def ensure_database_exists(config: DBConfig) -> None:
    conn = mysql.connector.connect(
        host=config.host,
        port=config.port,
        user=config.user,
        password=config.password,
        use_pure=True,
    )
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{config.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def ensure_default_admin(conn_factory: DatabaseConnection, *, username: str, password: str) -> bool:
    """Create the bootstrap admin account unless one already exists.

    Returns True when an account was created.
    """
    with db_cursor(conn_factory) as (_, cur):
        cur.execute("SELECT user_id FROM users WHERE role=%s LIMIT 1", (Role.ADMIN.value,))
        if fetchone(cur):
            return False
        cur.execute(
            """
            INSERT INTO users(username, password_hash, display_name, role)
            VALUES(%s,%s,%s,%s)
            """,
            (username, generate_password_hash(password), "Administrator", Role.ADMIN.value),
        )
    logger.info("Created default admin account %r", username)
    return True
