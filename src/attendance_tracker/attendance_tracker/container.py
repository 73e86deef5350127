from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.query import AttendanceQueryService
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .backup.scheduler import BackupScheduler
from .backup.service import BackupService
from .core.constants import DEFAULT_BACKUP_SCHEDULE
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .holidays.mysql_holiday_repository import MySQLHolidayRepository
from .holidays.repository import HolidayRepository
from .holidays.service import HolidayService
from .reports.service import AttendanceReportService
from .schedules.mysql_schedule_repository import MySQLWorkScheduleRepository
from .schedules.repository import WorkScheduleRepository
from .schedules.service import WorkScheduleService
from .shifts.model import ShiftPolicy
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    employees_repo: EmployeeRepository
    attendance_repo: AttendanceRepository
    holidays_repo: HolidayRepository
    schedules_repo: WorkScheduleRepository
    users_repo: UserRepository

    attendance_service: AttendanceService
    attendance_query: AttendanceQueryService
    report_service: AttendanceReportService
    holiday_service: HolidayService
    schedule_service: WorkScheduleService
    auth_service: AuthService
    user_service: UserService
    backup_service: BackupService
    backup_scheduler: BackupScheduler


def wire(
    *,
    conn: Optional[DatabaseConnection],
    db_config: DBConfig,
    employees_repo: EmployeeRepository,
    attendance_repo: AttendanceRepository,
    holidays_repo: HolidayRepository,
    schedules_repo: WorkScheduleRepository,
    users_repo: UserRepository,
    settings,
    backup_service: Optional[BackupService] = None,
    backup_scheduler: Optional[BackupScheduler] = None,
    attendance_service: Optional[AttendanceService] = None,
) -> Container:
    """Assemble services over the given repositories."""
    policy = ShiftPolicy(
        shift_start_hour=int(getattr(settings, "SHIFT_START_HOUR", 8)),
        grace_minutes=int(getattr(settings, "GRACE_MINUTES", 15)),
    )
    if attendance_service is None:
        attendance_service = AttendanceService(
            attendance_repo,
            employees_repo,
            policy=policy,
            strategy_factory=AttendanceStrategyFactory(),
            allow_duplicate_checkin=bool(getattr(settings, "ALLOW_DUPLICATE_CHECKIN", True)),
        )
    if backup_service is None:
        backup_service = BackupService(
            db_config,
            backup_dir=getattr(settings, "BACKUP_DIR", "backups"),
            mysqldump_bin=getattr(settings, "MYSQLDUMP_BIN", "mysqldump"),
            mysql_bin=getattr(settings, "MYSQL_BIN", "mysql"),
        )
    if backup_scheduler is None:
        backup_scheduler = BackupScheduler(
            backup_service,
            default_schedule=getattr(settings, "BACKUP_SCHEDULE", DEFAULT_BACKUP_SCHEDULE),
        )

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        holidays_repo=holidays_repo,
        schedules_repo=schedules_repo,
        users_repo=users_repo,
        attendance_service=attendance_service,
        attendance_query=AttendanceQueryService(attendance_repo),
        report_service=AttendanceReportService(attendance_repo, holidays_repo, schedules_repo),
        holiday_service=HolidayService(holidays_repo),
        schedule_service=WorkScheduleService(schedules_repo, employees_repo),
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        backup_service=backup_service,
        backup_scheduler=backup_scheduler,
    )


def build_container(*, settings) -> Container:
    config = DBConfig.from_dict(settings.DB_CONFIG, pool_size=getattr(settings, "DB_POOL_SIZE", 5))
    conn = DatabaseConnection(config).open()

    return wire(
        conn=conn,
        db_config=config,
        employees_repo=MySQLEmployeeRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        holidays_repo=MySQLHolidayRepository(conn),
        schedules_repo=MySQLWorkScheduleRepository(conn),
        users_repo=MySQLUserRepository(conn),
        settings=settings,
    )
