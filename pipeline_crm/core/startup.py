"""Startup validation and bootstrap helpers."""

from __future__ import annotations

import logging

from pipeline_crm.core.config import Config, get_config
from pipeline_crm.core.logging_config import configure_logging
from pipeline_crm.database.db import Database

logger = logging.getLogger(__name__)


def validate_startup_config(database: Database, config: Config | None = None) -> None:
    """Fail-fast config and connectivity checks."""
    cfg = config or get_config()
    database_ok = database.verify_connection()
    if not database_ok and cfg.DB_CONNECTIVITY_REQUIRED:
        raise RuntimeError("Database connectivity check failed.")
    if not database_ok:
        logger.warning(
            "startup.database.connectivity_optional_failed",
            extra={"event": "startup.database.connectivity_optional_failed"},
        )

    if cfg.is_production and database.url.startswith("sqlite"):
        logger.warning(
            "startup.production.sqlite_detected",
            extra={"event": "startup.production.sqlite_detected"},
        )

    logger.info(
        "startup.config.validated",
        extra={
            "event": "startup.config.validated",
            "env": cfg.ENV,
            "database_url_scheme": database.url.split("://", 1)[0],
            "db_connectivity_required": cfg.DB_CONNECTIVITY_REQUIRED,
        },
    )


def bootstrap(database: Database, config: Config | None = None) -> None:
    """Initialize logging and validate runtime configuration."""
    configure_logging()
    validate_startup_config(database, config)
