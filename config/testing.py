import os

from config.config import *  # noqa: F401,F403
from config.config import db_config

SECRET_KEY = "test-secret"
JWT_SECRET = "test-jwt-secret"

DB_CONFIG = db_config(default_password="test")
DB_CONFIG["database"] = os.getenv("DB_NAME", "hr_portal_test")

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
AUTO_SEED_DB = False
