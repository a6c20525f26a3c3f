import os

from config.config import *  # noqa: F401,F403
from config.config import db_config, env_bool

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")
JWT_SECRET = os.getenv("JWT_SECRET", "please-set-JWT_SECRET")

DB_CONFIG = db_config()

DEBUG = False

AUTO_INIT_DB = env_bool("AUTO_INIT_DB", "0")
AUTO_SEED_DB = env_bool("AUTO_SEED_DB", "0")
