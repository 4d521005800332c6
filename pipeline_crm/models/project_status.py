"""Project status model module."""

from __future__ import annotations

from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from pipeline_crm.models.base import AuditMixin, Base, IdMixin


class ProjectStatus(Base, IdMixin, AuditMixin):
    __tablename__ = "project_statuses"

    name: Mapped[str] = mapped_column(String(120), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    # Projects in a status with this flag are expected to keep a negotiation log.
    requires_log: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
