"""Bring the database schema up to the latest migration."""

from __future__ import annotations

import logging
from pathlib import Path

from alembic import command
from alembic.config import Config as AlembicConfig

from pipeline_crm.core.config import get_config
from pipeline_crm.core.startup import bootstrap
from pipeline_crm.database.db import Database
from pipeline_crm.models import Base

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def build_alembic_config(database_url: str) -> AlembicConfig:
    cfg = AlembicConfig(str(PROJECT_ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(PROJECT_ROOT / "migrations"))
    cfg.set_main_option("sqlalchemy.url", database_url)
    cfg.attributes["database_url"] = database_url
    return cfg


def init_db(database_url: str | None = None) -> Database:
    config = get_config()
    database = Database(database_url or config.DATABASE_URL)
    bootstrap(database, config)

    command.upgrade(build_alembic_config(database.url), "head")
    # Picks up tables added to the models ahead of a migration.
    Base.metadata.create_all(bind=database.engine)
    logger.info(
        "database.tables.created",
        extra={"event": "database.tables.created", "database_url_scheme": database.url.split("://", 1)[0]},
    )
    return database


def main() -> None:
    init_db().dispose()


if __name__ == "__main__":
    main()
