import logging
import subprocess
from datetime import datetime, timedelta

import pytest
from apscheduler.schedulers.background import BackgroundScheduler

from src.attendance_tracker.attendance_tracker.backup.scheduler import BackupScheduler, parse_schedule
from src.attendance_tracker.attendance_tracker.backup.service import BackupService
from src.attendance_tracker.attendance_tracker.core.exceptions import ValidationError
from src.attendance_tracker.attendance_tracker.database.connection import DBConfig


class Runner:
    def __init__(self, fail: bool = False):
        self.fail = fail

    def __call__(self, cmd, *, input=None, **kwargs):
        if self.fail:
            raise subprocess.CalledProcessError(2, cmd, stderr=b"Access denied")
        return subprocess.CompletedProcess(cmd, 0, stdout=b"-- dump\n", stderr=b"")


class StepClock:
    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        self.now += timedelta(minutes=1)
        return self.now


@pytest.fixture
def backups(tmp_path):
    db = DBConfig(host="db", port=3306, user="app", password="", database="attendance_db")
    return BackupService(db, backup_dir=tmp_path, runner=Runner(), clock=StepClock(datetime(2024, 3, 1, 1, 0)))


@pytest.fixture
def scheduler(backups):
    sched = BackupScheduler(backups, scheduler=BackgroundScheduler(), default_schedule="0 1 * * sun", keep=3)
    yield sched
    sched.shutdown()


def test_invalid_cron_is_rejected(scheduler):
    with pytest.raises(ValidationError, match="Invalid cron schedule"):
        parse_schedule("every sunday")
    with pytest.raises(ValidationError):
        scheduler.start("61 * * * *")
    assert scheduler.is_running is False


def test_start_status_stop(scheduler):
    assert scheduler.status() == {"isRunning": False, "schedule": None, "nextRun": None}
    assert scheduler.stop() is False

    assert scheduler.start() == "0 1 * * sun"
    status = scheduler.status()
    assert status["isRunning"] is True
    assert status["schedule"] == "0 1 * * sun"
    assert status["nextRun"] is not None

    # restarting replaces the job instead of adding a second one
    scheduler.start("15 3 * * *")
    assert scheduler.status()["schedule"] == "15 3 * * *"

    assert scheduler.stop() is True
    assert scheduler.status()["nextRun"] is None
    assert scheduler.stop() is False


def test_prune_keeps_newest_scheduled_backups_only(scheduler, backups):
    manual = backups.create_backup("Month End")
    for _ in range(5):
        scheduler.run_scheduled_backup()

    listed = backups.list_backups()
    scheduled = [b for b in listed if b.name == "Scheduled"]
    assert len(scheduled) == 3
    assert manual.file_name in [b.file_name for b in listed]
    assert scheduled[0].date > scheduled[-1].date

    assert scheduler.prune() == []


def test_failed_run_is_logged_not_raised(tmp_path, caplog):
    db = DBConfig(host="db", port=3306, user="app", password="", database="attendance_db")
    failing = BackupService(db, backup_dir=tmp_path, runner=Runner(fail=True))
    sched = BackupScheduler(failing, scheduler=BackgroundScheduler())

    with caplog.at_level(logging.ERROR):
        sched.run_scheduled_backup()

    assert "Scheduled backup failed" in caplog.text
    assert failing.list_backups() == []
