"""Database backups.

Dumps come from the ``mysqldump`` client tool and are stored as zip archives
holding ``attendance.sql`` plus a ``metadata.json`` description. Restores feed
the dump back through the ``mysql`` client.
"""

from __future__ import annotations

import json
import logging
import os
import re
import subprocess
import zipfile
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..core.constants import BACKUP_FORMAT_VERSION
from ..core.exceptions import NotFoundError, StorageError, ValidationError
from ..database.connection import DBConfig

logger = logging.getLogger(__name__)

DUMP_MEMBER = "attendance.sql"
METADATA_MEMBER = "metadata.json"
DEFAULT_BACKUP_NAME = "Auto Backup"

_FILENAME_RE = re.compile(r"^[A-Za-z0-9_.-]+\.zip$")


@dataclass(frozen=True)
class BackupInfo:
    file_name: str
    name: str
    date: str
    size: int

    def to_dict(self) -> dict:
        return {"fileName": self.file_name, "name": self.name, "date": self.date, "size": self.size}


def _slug(name: str) -> str:
    return re.sub(r"[^A-Za-z0-9_-]+", "_", name.strip()).strip("_")


class BackupService:
    def __init__(
        self,
        db: DBConfig,
        *,
        backup_dir: str | Path,
        mysqldump_bin: str = "mysqldump",
        mysql_bin: str = "mysql",
        runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
        clock: Callable[[], datetime] = now_local,
    ):
        self._db = db
        self._backup_dir = Path(backup_dir)
        self._mysqldump_bin = mysqldump_bin
        self._mysql_bin = mysql_bin
        self._run = runner
        self._clock = clock

    @property
    def backup_dir(self) -> Path:
        return self._backup_dir

    def _client_args(self, binary: str) -> list[str]:
        return [binary, f"-h{self._db.host}", f"-P{self._db.port}", f"-u{self._db.user}", self._db.database]

    def _client_env(self) -> dict:
        # Keeps the password off the process list.
        return {**os.environ, "MYSQL_PWD": self._db.password}

    def _exec(self, cmd: list[str], *, input: Optional[bytes] = None) -> bytes:
        try:
            result = self._run(
                cmd,
                input=input,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                check=True,
                env=self._client_env(),
            )
        except FileNotFoundError:
            raise StorageError(f"`{cmd[0]}` not found; install the MySQL client tools") from None
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or b"").decode("utf-8", "replace").strip()
            raise StorageError(f"`{cmd[0]}` failed: {detail or e.returncode}") from e
        return result.stdout or b""

    def backup_path(self, filename: str) -> Path:
        if not filename or not _FILENAME_RE.match(filename) or ".." in filename:
            raise ValidationError("Invalid backup file name")
        path = self._backup_dir / filename
        if not path.is_file():
            raise NotFoundError("Backup file does not exist")
        return path

    def create_backup(self, name: str = "") -> BackupInfo:
        now = self._clock()
        stamp = now.strftime("%Y%m%d_%H%M%S_%f")
        slug = _slug(name) if name else ""
        file_name = f"{slug}_{stamp}.zip" if slug else f"backup_{stamp}.zip"

        dump = self._exec(self._client_args(self._mysqldump_bin))
        metadata = {
            "date": now.isoformat(),
            "name": name or DEFAULT_BACKUP_NAME,
            "version": BACKUP_FORMAT_VERSION,
            "dbSize": len(dump),
        }

        self._backup_dir.mkdir(parents=True, exist_ok=True)
        path = self._backup_dir / file_name
        with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            zf.writestr(DUMP_MEMBER, dump)
            zf.writestr(METADATA_MEMBER, json.dumps(metadata, indent=2))

        logger.info("Backup created: %s", path)
        return BackupInfo(file_name=file_name, name=metadata["name"], date=metadata["date"], size=path.stat().st_size)

    def _read_info(self, path: Path) -> BackupInfo:
        name, created = DEFAULT_BACKUP_NAME, datetime.fromtimestamp(path.stat().st_mtime).isoformat()
        try:
            with zipfile.ZipFile(path) as zf:
                meta = json.loads(zf.read(METADATA_MEMBER).decode("utf-8"))
            name = meta.get("name", name)
            created = meta.get("date", created)
        except (KeyError, ValueError, zipfile.BadZipFile):
            logger.warning("Backup %s has no readable metadata", path.name)
        return BackupInfo(file_name=path.name, name=name, date=created, size=path.stat().st_size)

    def list_backups(self) -> list[BackupInfo]:
        if not self._backup_dir.is_dir():
            return []
        infos = [self._read_info(p) for p in self._backup_dir.glob("*.zip") if p.is_file()]
        infos.sort(key=lambda b: b.date, reverse=True)
        return infos

    def delete_backup(self, filename: str) -> None:
        path = self.backup_path(filename)
        path.unlink()
        logger.info("Backup deleted: %s", path)

    def restore_backup(self, filename: str) -> None:
        path = self.backup_path(filename)
        try:
            with zipfile.ZipFile(path) as zf:
                dump = zf.read(DUMP_MEMBER)
        except (KeyError, zipfile.BadZipFile):
            raise ValidationError("Backup archive is missing its database dump") from None

        self._exec(self._client_args(self._mysql_bin), input=dump)
        logger.info("Database restored from %s", path)
