import os

from config.config import *  # noqa: F401,F403
from config.config import db_config, env_bool

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")
JWT_SECRET = os.getenv("JWT_SECRET", "dev-jwt-secret")

DB_CONFIG = db_config(default_password="root")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = env_bool("AUTO_INIT_DB", "1")
# Optional: also seed demo data on startup
AUTO_SEED_DB = env_bool("AUTO_SEED_DB", "0")
