"""Dependency providers for API handlers."""

from __future__ import annotations

from collections.abc import Generator

from fastapi import Request
from sqlalchemy.orm import Session

from pipeline_crm.core.config import Config
from pipeline_crm.database.db import Database


def get_settings(request: Request) -> Config:
    """Return the configuration the running application was built with."""
    return request.app.state.settings


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_db_session(request: Request) -> Generator[Session, None, None]:
    """Yield a request-scoped SQLAlchemy session."""
    yield from get_database(request).iter_session()
