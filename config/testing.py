import os

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_test"),
}
DB_POOL_SIZE = 2

AUTO_MIGRATE = False

SHIFT_START_HOUR = 8
GRACE_MINUTES = 15
ALLOW_DUPLICATE_CHECKIN = True
DEFAULT_PAGE_LIMIT = 10

BACKUP_DIR = os.getenv("BACKUP_DIR", "backups-test")
MYSQLDUMP_BIN = "mysqldump"
MYSQL_BIN = "mysql"
BACKUP_SCHEDULE = "0 1 * * sun"
BACKUP_SCHEDULE_ENABLED = False

DEFAULT_ADMIN_USERNAME = "admin"
DEFAULT_ADMIN_PASSWORD = "admin123"
