from __future__ import annotations

import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import load_settings
from config.config import Settings

from .attendance.controller import register as register_attendance
from .common.http import register_error_handlers
from .container import Container, build_container
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .directory.controller import register as register_directory
from .leave.controller import register as register_leave
from .payroll.controller import register as register_payroll
from .schedule_blocks.controller import register as register_schedule_blocks

_logger = logging.getLogger(__name__)

_DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(settings: Settings | None = None, container: Container | None = None) -> Flask:
    load_dotenv(override=False)
    settings = settings or load_settings()
    _configure_logging(settings.log_level)

    app = Flask(__name__)
    app.secret_key = settings.secret_key
    app.config["DEBUG"] = settings.debug
    app.config["TESTING"] = settings.testing
    app.json.sort_keys = False

    if container is None:
        _logger.info("Using database %s", settings.db_label())

        if settings.auto_init_db:
            apply_schema(settings.db_config, schema_path=_DATABASE_DIR / "schema.sql")
            _logger.info("Schema ready (tables=%s)", len(list_tables(settings.db_config)))
        if settings.auto_seed_db:
            apply_seed_sql(settings.db_config, seed_path=_DATABASE_DIR / "seed.sql")
            _logger.info("Demo seed ready")

        container = build_container(settings)

    register_error_handlers(app)
    register_directory(app, container)
    register_schedule_blocks(app, container)
    register_attendance(app, container)
    register_leave(app, container)
    register_payroll(app, container)

    return app
