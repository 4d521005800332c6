"""Negotiation and negotiation log model module."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import ForeignKey, Index, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pipeline_crm.models.base import AuditMixin, Base, IdMixin, UTCDateTime, utcnow


class Negotiation(Base, IdMixin, AuditMixin):
    __tablename__ = "negotiations"
    __table_args__ = (
        UniqueConstraint("project_id", name="uq_negotiations_project_id"),
        Index("idx_negotiations_created_at", "created_at"),
    )

    project_id: Mapped[str] = mapped_column(ForeignKey("projects.id", ondelete="RESTRICT"), nullable=False)
    client_id: Mapped[str] = mapped_column(ForeignKey("clients.id", ondelete="RESTRICT"), nullable=False)

    project = relationship("Project", back_populates="negotiation")
    client = relationship("Client")
    logs = relationship(
        "NegotiationLog",
        back_populates="negotiation",
        order_by="NegotiationLog.date.desc()",
    )


class NegotiationLog(Base, IdMixin):
    __tablename__ = "negotiation_logs"
    __table_args__ = (Index("idx_negotiation_logs_negotiation_date", "negotiation_id", "date"),)

    negotiation_id: Mapped[str] = mapped_column(ForeignKey("negotiations.id", ondelete="CASCADE"), nullable=False)
    seller_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="RESTRICT"), nullable=False)
    date: Mapped[datetime] = mapped_column(UTCDateTime(), default=utcnow, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    negotiation = relationship("Negotiation", back_populates="logs")
    seller = relationship("User")
