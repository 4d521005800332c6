"""Database connection and session management."""

from __future__ import annotations

import logging
from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_conn, connection_record) -> None:
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine with pool settings suited to the backend."""
    if database_url.startswith("sqlite"):
        kwargs: dict = {"connect_args": {"check_same_thread": False}}
        if database_url in {"sqlite://", "sqlite:///:memory:"}:
            # Share a single in-memory database across sessions.
            kwargs["poolclass"] = StaticPool
        engine = create_engine(database_url, echo=echo, **kwargs)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,
        pool_recycle=3600,
        pool_size=10,
        max_overflow=20,
    )


class Database:
    """Engine plus session factory owned by one application instance."""

    def __init__(self, database_url: str, echo: bool = False) -> None:
        self.url = database_url
        self.engine = build_engine(database_url, echo=echo)
        self.session_factory = sessionmaker(
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            bind=self.engine,
        )

    def create_all(self) -> None:
        """Create every table known to the model metadata."""
        from pipeline_crm.models import Base

        Base.metadata.create_all(bind=self.engine)

    def iter_session(self) -> Generator[Session, None, None]:
        """Yield a session for dependency injection contexts."""
        db = self.session_factory()
        try:
            yield db
        finally:
            db.close()

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """Context-manager wrapper for safe DB session lifecycle."""
        db = self.session_factory()
        try:
            yield db
        finally:
            db.close()

    def verify_connection(self) -> bool:
        """Verify DB connectivity during startup."""
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception as exc:  # pragma: no cover - exercised in deployment.
            logger.error(
                "database.connection_failed",
                extra={"event": "database.connection_failed", "reason": str(exc)},
            )
            return False

    def dispose(self) -> None:
        self.engine.dispose()
