from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .common.logging_config import configure_logging
from .container import Container, build_container
from .core.constants import DEFAULT_POOL_SIZE
from .database.bootstrap import apply_schema, list_tables
from .attendance.controller import register as register_attendance
from .auth.controller import register as register_auth
from .learners.controller import register as register_learners
from .reporting.controller import register as register_reporting

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def _check_database(container: Container) -> None:
    conn = container.conn.connect()
    try:
        logger.info("Connected to MySQL database")
    finally:
        conn.close()


def _register_error_handlers(app: Flask) -> None:
    # Unrouted paths, bad methods and oversized bodies still answer with JSON.
    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return jsonify({"message": e.description or e.name}), e.code


def create_app(container: Optional[Container] = None, *, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["MAX_CONTENT_LENGTH"] = int(getattr(settings, "MAX_CONTENT_LENGTH", 20 * 1024 * 1024))
    app.json.sort_keys = False

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"), getattr(settings, "LOG_DIR", None))
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if container is None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            logger.info("Schema ready (tables=%s)", len(list_tables(db_config)))

        container = build_container(
            db_config=db_config,
            login=getattr(settings, "LOGIN"),
            pool_size=int(getattr(settings, "DB_POOL_SIZE", DEFAULT_POOL_SIZE)),
        )

        if bool(getattr(settings, "CHECK_DB_ON_STARTUP", False)):
            try:
                _check_database(container)
            except Exception:
                logger.exception("Error connecting to MySQL")
                raise

    _register_error_handlers(app)
    register_learners(app, container)
    register_attendance(app, container)
    register_reporting(app, container)
    register_auth(app, container)

    return app
