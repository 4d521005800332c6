"""Shared service base around an injected SQLAlchemy session."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.orm import Session


class BaseService:
    """Base class for services that operate on an injected SQLAlchemy session."""

    def __init__(self, db: Session) -> None:
        self.db = db

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """Run a unit of work that either commits completely or not at all."""
        try:
            yield self.db
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
