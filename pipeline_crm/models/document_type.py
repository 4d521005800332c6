"""Document type model module."""

from __future__ import annotations

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from pipeline_crm.models.base import AuditMixin, Base, IdMixin


class DocumentType(Base, IdMixin, AuditMixin):
    __tablename__ = "document_types"

    code: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
