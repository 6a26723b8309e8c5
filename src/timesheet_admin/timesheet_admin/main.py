from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .admin.controller import register as register_admin
from .admin_settings.controller import register as register_settings
from .charge_codes.controller import register as register_charge_codes
from .container import Container, build_container
from .core.constants import DEFAULT_SESSION_DAYS, DEFAULT_TOAST_TTL_SECONDS
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_admin, list_tables
from .notifications.controller import register as register_notifications
from .timesheet.controller import register as register_timesheet
from .users.controller import register as register_users

ROOT_DIR = Path(__file__).resolve().parents[3]


def _configure_logging(app: Flask, level_name: str) -> None:
    level = getattr(logging, str(level_name).upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    app.logger.setLevel(level)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__, template_folder=str(ROOT_DIR / "templates"), static_folder=str(ROOT_DIR / "static"))

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)
    _configure_logging(app, getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        container = build_container(
            db_config=db_config,
            toast_ttl=float(getattr(settings, "TOAST_TTL_SECONDS", DEFAULT_TOAST_TTL_SECONDS)),
        )
        app.logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(container.conn, schema_path=ROOT_DIR / "database" / "schema.sql")
            app.logger.info("schema ready (tables=%d)", len(list_tables(container.conn)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(container.conn, seed_path=ROOT_DIR / "database" / "seed.sql")
            ensure_demo_admin(
                container.conn,
                email=getattr(settings, "DEMO_ADMIN_EMAIL", "admin@example.com"),
                fmno=getattr(settings, "DEMO_ADMIN_FMNO", "100001"),
            )
            app.logger.info("demo seed ready")

    app.extensions["container"] = container

    register_users(app, container)
    register_charge_codes(app, container)
    register_settings(app, container)
    register_timesheet(app, container)
    register_notifications(app, container)
    register_admin(app, container)

    return app
