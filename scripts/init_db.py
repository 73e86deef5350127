from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.attendance_tracker.attendance_tracker.database.bootstrap import ensure_database_exists, ensure_default_admin
from src.attendance_tracker.attendance_tracker.database.connection import DBConfig, DatabaseConnection
from src.attendance_tracker.attendance_tracker.database.migrations import MIGRATIONS, apply_migrations

logger = logging.getLogger("init_db")


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"), format="%(levelname)s %(message)s")

    config = DBConfig.from_dict(settings.DB_CONFIG)
    ensure_database_exists(config)

    conn = DatabaseConnection(config).open()
    try:
        applied = apply_migrations(conn, MIGRATIONS)
        created = ensure_default_admin(
            conn,
            username=settings.DEFAULT_ADMIN_USERNAME,
            password=settings.DEFAULT_ADMIN_PASSWORD,
        )
    finally:
        conn.close()

    logger.info(
        "%s@%s:%s/%s ready (migrations applied: %s, admin created: %s)",
        config.user,
        config.host,
        config.port,
        config.database,
        applied or "none",
        created,
    )


if __name__ == "__main__":
    main()
