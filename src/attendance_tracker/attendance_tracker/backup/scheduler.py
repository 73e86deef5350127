"""Recurring database backups driven by a cron expression."""

from __future__ import annotations

import logging
from typing import Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from ..core.constants import DEFAULT_BACKUP_SCHEDULE, SCHEDULED_BACKUP_NAME, SCHEDULED_BACKUPS_KEPT
from ..core.exceptions import DomainError, ValidationError
from .service import BackupService

logger = logging.getLogger(__name__)

JOB_ID = "scheduled-backup"


def parse_schedule(expression: str) -> CronTrigger:
    try:
        return CronTrigger.from_crontab(expression)
    except ValueError as e:
        raise ValidationError(f"Invalid cron schedule {expression!r}: {e}") from None


class BackupScheduler:
    """Runs ``BackupService.create_backup`` on a cron schedule.

    Only the newest ``keep`` scheduled backups are retained; manual backups
    are never pruned.
    """

    def __init__(
        self,
        backups: BackupService,
        *,
        scheduler: Optional[BackgroundScheduler] = None,
        default_schedule: str = DEFAULT_BACKUP_SCHEDULE,
        keep: int = SCHEDULED_BACKUPS_KEPT,
    ):
        self._backups = backups
        self._scheduler = scheduler or BackgroundScheduler()
        self._default_schedule = default_schedule
        self._keep = int(keep)
        self._schedule: Optional[str] = None

    @property
    def is_running(self) -> bool:
        return self._schedule is not None

    def start(self, schedule: Optional[str] = None) -> str:
        """(Re)start the job; an existing job is replaced."""
        expression = (schedule or self._default_schedule).strip()
        trigger = parse_schedule(expression)

        self._scheduler.add_job(
            self.run_scheduled_backup,
            trigger,
            id=JOB_ID,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        if not self._scheduler.running:
            self._scheduler.start()
        self._schedule = expression
        logger.info("Scheduled backups started (%s)", expression)
        return expression

    def stop(self) -> bool:
        if self._schedule is None:
            return False
        self._scheduler.remove_job(JOB_ID)
        self._schedule = None
        logger.info("Scheduled backups stopped")
        return True

    def shutdown(self) -> None:
        self._schedule = None
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)

    def status(self) -> dict:
        next_run = None
        if self._schedule is not None:
            job = self._scheduler.get_job(JOB_ID)
            if job is not None and job.next_run_time is not None:
                next_run = job.next_run_time.isoformat()
        return {"isRunning": self.is_running, "schedule": self._schedule, "nextRun": next_run}

    def run_scheduled_backup(self) -> None:
        # Runs on the scheduler thread; failures are logged, the job keeps its schedule.
        try:
            info = self._backups.create_backup(SCHEDULED_BACKUP_NAME)
            logger.info("Scheduled backup completed: %s", info.file_name)
            self.prune()
        except DomainError as e:
            logger.error("Scheduled backup failed: %s", e)

    def prune(self) -> list[str]:
        """Delete scheduled backups beyond the newest ``keep``; returns the deleted file names."""
        scheduled = [b for b in self._backups.list_backups() if SCHEDULED_BACKUP_NAME in b.name]
        removed: list[str] = []
        for old in scheduled[self._keep :]:
            self._backups.delete_backup(old.file_name)
            removed.append(old.file_name)
        if removed:
            logger.info("Pruned %d old scheduled backup(s)", len(removed))
        return removed
