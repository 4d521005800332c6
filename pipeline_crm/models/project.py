"""Project model module."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import CheckConstraint, ForeignKey, Index, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pipeline_crm.models.base import AuditMixin, Base, IdMixin


class Project(Base, IdMixin, AuditMixin):
    __tablename__ = "projects"
    __table_args__ = (
        CheckConstraint("estimated_value >= 0", name="ck_projects_estimated_value_non_negative"),
        Index("idx_projects_status", "status_id"),
        Index("idx_projects_client", "client_id"),
        Index("idx_projects_created_at", "created_at"),
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    client_id: Mapped[str] = mapped_column(ForeignKey("clients.id", ondelete="RESTRICT"), nullable=False)
    seller_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="RESTRICT"), nullable=False)
    business_type_id: Mapped[str] = mapped_column(ForeignKey("business_types.id", ondelete="RESTRICT"), nullable=False)
    status_id: Mapped[str] = mapped_column(ForeignKey("project_statuses.id", ondelete="RESTRICT"), nullable=False)
    estimated_value: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)

    client = relationship("Client")
    seller = relationship("User")
    business_type = relationship("BusinessType")
    status = relationship("ProjectStatus")
    negotiation = relationship("Negotiation", back_populates="project", uselist=False, passive_deletes="all")
