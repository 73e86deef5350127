import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_db"),
}
DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "10"))

AUTO_MIGRATE = bool(int(os.getenv("AUTO_MIGRATE", "0")))

SHIFT_START_HOUR = int(os.getenv("SHIFT_START_HOUR", "8"))
GRACE_MINUTES = int(os.getenv("GRACE_MINUTES", "15"))
ALLOW_DUPLICATE_CHECKIN = bool(int(os.getenv("ALLOW_DUPLICATE_CHECKIN", "1")))
DEFAULT_PAGE_LIMIT = int(os.getenv("DEFAULT_PAGE_LIMIT", "10"))

BACKUP_DIR = os.getenv("BACKUP_DIR", "/var/backups/attendance")
MYSQLDUMP_BIN = os.getenv("MYSQLDUMP_BIN", "mysqldump")
MYSQL_BIN = os.getenv("MYSQL_BIN", "mysql")

BACKUP_SCHEDULE = os.getenv("BACKUP_SCHEDULE", "0 1 * * sun")
BACKUP_SCHEDULE_ENABLED = bool(int(os.getenv("BACKUP_SCHEDULE_ENABLED", "1")))

DEFAULT_ADMIN_USERNAME = os.getenv("DEFAULT_ADMIN_USERNAME", "admin")
DEFAULT_ADMIN_PASSWORD = os.getenv("DEFAULT_ADMIN_PASSWORD", "please-set-DEFAULT_ADMIN_PASSWORD")
