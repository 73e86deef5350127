"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SHIFT_START_HOUR = 8
DEFAULT_GRACE_MINUTES = 15
DEFAULT_PAGE = 1
DEFAULT_PAGE_LIMIT = 10
MANUAL_ENTRY_REMARKS = "Manual entry by admin"
BACKUP_FORMAT_VERSION = "1.0"
# Weekly, Sunday 01:00. Day names keep the expression unambiguous.
DEFAULT_BACKUP_SCHEDULE = "0 1 * * sun"
SCHEDULED_BACKUP_NAME = "Scheduled"
SCHEDULED_BACKUPS_KEPT = 10
