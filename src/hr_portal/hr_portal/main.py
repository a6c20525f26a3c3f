from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .announcements.controller import register as register_announcements
from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .core.exceptions import DomainError
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_users, list_tables
from .holidays.controller import register as register_holidays
from .messages.controller import register as register_messages
from .requests.controller import register as register_requests
from .settings.controller import register as register_settings
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

_ROOT = Path(__file__).resolve().parents[3]


def _bootstrap_database(settings) -> None:
    db_config = getattr(settings, "DB_CONFIG")
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=_ROOT / "database" / "schema.sql")
        logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=_ROOT / "database" / "seed.sql")
        ensure_demo_users(db_config)
        logger.info("demo seed ready")


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return jsonify({"error": str(e)}), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return jsonify({"error": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("unhandled error")
        return jsonify({"error": "Internal server error"}), 500


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        _bootstrap_database(settings)
        container = build_container(settings=settings)

    _register_error_handlers(app)
    register_users(app, container)
    register_attendance(app, container)
    register_settings(app, container)
    register_holidays(app, container)
    register_requests(app, container)
    register_announcements(app, container)
    register_messages(app, container)

    return app
