from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .common.http import error_response
from .container import Container, build_container
from .core.exceptions import DomainError
from .core.result import ErrorKind
from .database.bootstrap import ensure_database_exists, ensure_default_admin
from .database.connection import DBConfig, DatabaseConnection
from .database.migrations import MIGRATIONS, apply_migrations

from .attendance.controller import register as register_attendance
from .backup.controller import register as register_backup
from .employees.controller import register as register_employees
from .holidays.controller import register as register_holidays
from .reports.controller import register as register_reports
from .schedules.controller import register as register_schedules
from .users.controller import register as register_users

ENDPOINTS = {
    "attendance": "/api/attendance",
    "employees": "/api/employees",
    "holidays": "/api/holidays",
    "workSchedule": "/api/work-schedule",
    "reports": "/api/reports/attendance",
    "auth": "/api/auth",
    "users": "/api/users",
    "backups": "/api/backups",
}


def _prepare_database(app: Flask, settings) -> None:
    config = DBConfig.from_dict(settings.DB_CONFIG, pool_size=getattr(settings, "DB_POOL_SIZE", 5))
    ensure_database_exists(config)

    conn = DatabaseConnection(config).open()
    try:
        applied = apply_migrations(conn, MIGRATIONS)
        if applied:
            app.logger.info("Applied migrations: %s", ", ".join(str(v) for v in applied))
        ensure_default_admin(
            conn,
            username=getattr(settings, "DEFAULT_ADMIN_USERNAME", "admin"),
            password=getattr(settings, "DEFAULT_ADMIN_PASSWORD", "admin123"),
        )
    finally:
        conn.close()


def create_app(settings_module: Optional[str] = None, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["DEFAULT_PAGE_LIMIT"] = int(getattr(settings, "DEFAULT_PAGE_LIMIT", 10))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    db_config = settings.DB_CONFIG
    app.logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if container is None:
        if bool(getattr(settings, "AUTO_MIGRATE", False)):
            _prepare_database(app, settings)
        container = build_container(settings=settings)
        if bool(getattr(settings, "BACKUP_SCHEDULE_ENABLED", False)):
            container.backup_scheduler.start()

    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        if e.kind == ErrorKind.STORAGE:
            app.logger.error("Storage failure: %s", e)
        return error_response(e)

    @app.route("/", methods=["GET"], endpoint="index")
    def index():
        return jsonify({"success": True, "message": "Attendance Tracker API", "endpoints": ENDPOINTS})

    register_users(app, container)
    register_employees(app, container)
    register_attendance(app, container)
    register_holidays(app, container)
    register_schedules(app, container)
    register_reports(app, container)
    register_backup(app, container)

    return app
