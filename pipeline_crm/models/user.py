"""User model module."""

from __future__ import annotations

from sqlalchemy import ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pipeline_crm.models.base import AuditMixin, Base, IdMixin


class User(Base, IdMixin, AuditMixin):
    __tablename__ = "users"
    __table_args__ = (Index("idx_users_role", "role_id"),)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role_id: Mapped[str | None] = mapped_column(ForeignKey("roles.id", ondelete="SET NULL"))

    role = relationship("Role", back_populates="users")
