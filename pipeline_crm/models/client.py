"""Client model module."""

from __future__ import annotations

from sqlalchemy import ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pipeline_crm.models.base import AuditMixin, Base, IdMixin


class Client(Base, IdMixin, AuditMixin):
    __tablename__ = "clients"
    __table_args__ = (Index("idx_clients_document", "document_type_id", "document_number"),)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    document_type_id: Mapped[str] = mapped_column(ForeignKey("document_types.id", ondelete="RESTRICT"), nullable=False)
    document_number: Mapped[str] = mapped_column(String(64), nullable=False)

    document_type = relationship("DocumentType")
