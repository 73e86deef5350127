"""Create a database backup archive from the command line.

Requires the ``mysqldump`` client tool on PATH (or MYSQLDUMP_BIN).
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.attendance_tracker.attendance_tracker.backup.service import BackupService
from src.attendance_tracker.attendance_tracker.core.exceptions import StorageError
from src.attendance_tracker.attendance_tracker.database.connection import DBConfig

logger = logging.getLogger("backup")


def main() -> None:
    parser = argparse.ArgumentParser(description="Back up the attendance database")
    parser.add_argument("--name", default="", help="label stored in the backup metadata")
    args = parser.parse_args()

    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"), format="%(levelname)s %(message)s")

    service = BackupService(
        DBConfig.from_dict(settings.DB_CONFIG),
        backup_dir=REPO_ROOT / getattr(settings, "BACKUP_DIR", "backups"),
        mysqldump_bin=getattr(settings, "MYSQLDUMP_BIN", "mysqldump"),
        mysql_bin=getattr(settings, "MYSQL_BIN", "mysql"),
    )
    try:
        info = service.create_backup(args.name)
    except StorageError as e:
        raise SystemExit(str(e))
    logger.info("Backup created: %s (%s bytes)", info.file_name, info.size)


if __name__ == "__main__":
    main()
