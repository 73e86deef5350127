from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import mysql.connector
from mysql.connector import pooling
from mysql.connector.constants import ClientFlag

from ..core.exceptions import StorageError

logger = logging.getLogger(__name__)


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    pool_size: int = 5

    @classmethod
    def from_dict(cls, db_config: dict, *, pool_size: int = 5) -> "DBConfig":
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "attendance_db")),
            pool_size=int(pool_size),
        )


class DatabaseConnection:
    """Storage handle passed to repositories.

    Connections come from a pool created by ``open()``; ``connect()`` hands
    out a connection whose ``close()`` returns it to the pool.
    """

    def __init__(self, config: DBConfig):
        self._config = config
        self._pool: Optional[pooling.MySQLConnectionPool] = None

    @property
    def config(self) -> DBConfig:
        return self._config

    @property
    def is_open(self) -> bool:
        return self._pool is not None

    def open(self) -> "DatabaseConnection":
        if self._pool is None:
            self._pool = pooling.MySQLConnectionPool(
                pool_name=f"attendance_{self._config.database}",
                pool_size=self._config.pool_size,
                host=self._config.host,
                port=int(self._config.port),
                user=self._config.user,
                password=self._config.password,
                database=self._config.database,
                # rowcount reports matched rows, not only rows whose values changed.
                client_flags=[ClientFlag.FOUND_ROWS],
            )
            logger.info(
                "Opened connection pool %s@%s:%s/%s (size=%s)",
                self._config.user,
                self._config.host,
                self._config.port,
                self._config.database,
                self._config.pool_size,
            )
        return self

    def close(self) -> None:
        # Pooled connections already handed out are closed by their db_cursor block.
        if self._pool is not None:
            logger.info("Closed connection pool for %s", self._config.database)
        self._pool = None

    def connect(self):
        if self._pool is None:
            raise StorageError("Database connection is not open")
        try:
            return self._pool.get_connection()
        except mysql.connector.Error as e:
            raise StorageError(str(e)) from e
