from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.logging_config import configure_logging
from .container import Container, PayrollSettings, build_container
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .database.connection import DBConfig
from .payroll.controller import register as register_payroll
from .shifts.controller import register as register_shifts

logger = logging.getLogger(__name__)

_DATABASE_DIR = Path(__file__).resolve().parents[2] / "database"


def create_app(container: Optional[Container] = None) -> Flask:
    """Application factory.

    A prebuilt ``container`` skips database bootstrap entirely (used by tests).
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info("settings=%s db=%s", settings_module, DBConfig.from_mapping(db_config).describe())

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=_DATABASE_DIR / "schema.sql")
            logger.info("Schema ready (tables=%s)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=_DATABASE_DIR / "seed.sql")
            logger.info("Demo seed ready")

        container = build_container(
            db_config=db_config,
            payroll_settings=PayrollSettings.from_settings(settings),
        )

    app.extensions["payroll_container"] = container

    register_attendance(app, container)
    register_shifts(app, container)
    register_payroll(app, container)

    return app
