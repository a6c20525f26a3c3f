"""Settings shared by every environment; the env modules import from here."""

import os


def env_bool(name: str, default: str = "0") -> bool:
    return bool(int(os.getenv(name, default)))


def db_config(default_password: str = "") -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", "hr_portal"),
    }


LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRES_IN = os.getenv("JWT_EXPIRES_IN", "12h")

# Environment super-admin (no database row). Both must be set to enable it.
SADMIN_EMAIL = os.getenv("SADMIN_EMAIL", "")
SADMIN_PASSWORD = os.getenv("SADMIN_PASSWORD", "")

# Organization defaults, used until an admin saves the settings row
WORK_DAY_START = os.getenv("WORK_DAY_START", "10:00")
WORK_DAY_END = os.getenv("WORK_DAY_END", "19:00")
GRACE_MINUTES_IN = int(os.getenv("GRACE_MINUTES_IN", "10"))
GRACE_MINUTES_OUT = int(os.getenv("GRACE_MINUTES_OUT", "10"))
DAILY_TARGET_HOURS = float(os.getenv("DAILY_TARGET_HOURS", "9"))
WEEKEND_DAYS = os.getenv("WEEKEND_DAYS", "5,6")
WEEK_START_DAY = int(os.getenv("WEEK_START_DAY", "6"))
ALLOW_REMOTE_CLOCK_IN = env_bool("ALLOW_REMOTE_CLOCK_IN", "1")
AUTO_CLOCK_OUT = env_bool("AUTO_CLOCK_OUT", "0")
