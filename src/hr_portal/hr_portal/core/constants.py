"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_HISTORY_DAYS = 31
DEFAULT_GRACE_MINUTES = 10
DEFAULT_DAILY_TARGET_HOURS = 9.0
MIN_PASSWORD_LENGTH = 8
WORK_HOURS_PRECISION = "0.1"
