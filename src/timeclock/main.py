from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import Container, build_container
from .core.constants import DEFAULT_SESSION_DAYS, DEFAULT_TIMEZONE
from .database.bootstrap import DEMO_END, DEMO_START, apply_schema, ensure_demo_user, list_tables, seed_demo_punches
from .events.controller import register as register_events
from .payroll.controller import register as register_reports
from .users.controller import register as register_users
from .web import register_helpers

logger = logging.getLogger(__name__)


def _configure_logging(level_name: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level_name).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(container: Optional[Container] = None) -> Flask:
    """Application factory.

    Pass a prebuilt ``container`` to run against in-memory repositories;
    otherwise one is built from the active settings module (MySQL).
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    _configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.permanent_session_lifetime = timedelta(days=int(getattr(settings, "SESSION_DAYS", DEFAULT_SESSION_DAYS)))

    if container is None:
        container = _build_from_settings(settings, settings_module)

    register_helpers(app, container)
    register_users(app, container)
    register_events(app, container)
    register_reports(app, container)

    return app


def _build_from_settings(settings, settings_module: str) -> Container:
    db_config = getattr(settings, "DB_CONFIG")
    timezone_name = getattr(settings, "TIMEZONE", DEFAULT_TIMEZONE)

    logger.info(
        "settings=%s db=%s@%s:%s/%s tz=%s",
        settings_module,
        db_config.get("user"), db_config.get("host"), db_config.get("port", 3306), db_config.get("database"),
        timezone_name,
    )

    container = build_container(
        db_config=db_config,
        timezone_name=timezone_name,
        hourly_rate=int(getattr(settings, "HOURLY_RATE")),
        minute_unit=int(getattr(settings, "MINUTE_UNIT")),
        deletion_window_minutes=int(getattr(settings, "DELETION_WINDOW_MINUTES")),
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config)
        logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        user_id = ensure_demo_user(db_config)
        seed_demo_punches(db_config, user_id=user_id, start=DEMO_START, end=DEMO_END, tz=container.tz)

    return container
