"""Business type model module."""

from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from pipeline_crm.models.base import AuditMixin, Base, IdMixin


class BusinessType(Base, IdMixin, AuditMixin):
    __tablename__ = "business_types"

    name: Mapped[str] = mapped_column(String(120), nullable=False)
