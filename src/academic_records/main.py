from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .attendance.controller import register as register_attendance
from .common.http import success
from .common.logging_config import setup_logging
from .config import get_settings_module
from .container import Container, build_container
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_users, list_tables
from .leaves.controller import register as register_leaves
from .notifications.controller import register as register_notifications
from .reports.controller import register as register_reports

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"), to_file=not app.config["TESTING"])

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

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config)
            ensure_demo_users(db_config)
            logger.info("Demo seed ready")

        container = build_container(
            db_config=db_config,
            smtp_config=getattr(settings, "SMTP_CONFIG", None),
            notification_workers=int(getattr(settings, "NOTIFICATION_WORKERS", 1)),
        )

    app.extensions["academic_records"] = container

    register_attendance(app, container)
    register_leaves(app, container)
    register_reports(app, container)
    register_notifications(app, container)

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return success({"status": "ok"}, "Service is healthy")

    return app
