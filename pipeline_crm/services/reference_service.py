"""Read-only lookups over reference tables used by the project forms."""

from __future__ import annotations

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from pipeline_crm.core.config import Config, get_config
from pipeline_crm.core.exceptions import NotFoundError
from pipeline_crm.models import BusinessType, Client, ProjectStatus, Role, User
from pipeline_crm.services.base_service import BaseService


def status_row(status: ProjectStatus) -> dict:
    return {
        "id": status.id,
        "name": status.name,
        "label": status.name,
        "value": status.id,
        "description": status.description,
        "generaBitacora": status.requires_log,
    }


class ReferenceDataService(BaseService):
    """Lookups for clients, sellers, business types and project statuses."""

    def __init__(self, db: Session, settings: Config | None = None) -> None:
        super().__init__(db)
        self.settings = settings or get_config()

    def list_clients(self) -> list[dict]:
        clients = (
            self.db.query(Client)
            .options(joinedload(Client.document_type))
            .order_by(Client.name.asc())
            .all()
        )
        return [
            {
                "id": client.id,
                "name": client.name,
                "label": client.name,
                "value": client.id,
                "documentTypeId": client.document_type_id,
                "documentTypeName": client.document_type.name,
                "documentNumber": client.document_number,
            }
            for client in clients
        ]

    def list_sellers(self) -> list[dict]:
        """Users holding the seller role, or every user when nobody holds it."""
        sellers = (
            self.db.query(User)
            .join(Role, User.role_id == Role.id)
            .filter(Role.code == self.settings.SELLER_ROLE_CODE)
            .order_by(User.name.asc())
            .all()
        )
        if not sellers:
            sellers = self.db.query(User).order_by(User.name.asc()).all()

        return [
            {
                "id": seller.id,
                "name": seller.name,
                "label": seller.name,
                "value": seller.id,
                "email": seller.email,
            }
            for seller in sellers
        ]

    def list_statuses(self) -> list[dict]:
        statuses = (
            self.db.query(ProjectStatus)
            .order_by(ProjectStatus.created_at.asc(), ProjectStatus.id.asc())
            .all()
        )
        return [status_row(status) for status in statuses]

    def list_business_types(self) -> list[dict]:
        types = self.db.query(BusinessType).order_by(BusinessType.name.asc()).all()
        return [
            {
                "id": business_type.id,
                "name": business_type.name,
                "label": business_type.name,
                "value": business_type.id,
            }
            for business_type in types
        ]

    def get_default_status(self) -> ProjectStatus:
        """Status assigned to new projects; earliest created wins on duplicate names."""
        wanted = self.settings.DEFAULT_PROJECT_STATUS.strip().lower()
        status = (
            self.db.query(ProjectStatus)
            .filter(func.lower(ProjectStatus.name) == wanted)
            .order_by(ProjectStatus.created_at.asc(), ProjectStatus.id.asc())
            .first()
        )
        if status is None:
            raise NotFoundError(
                f"Default project status '{self.settings.DEFAULT_PROJECT_STATUS}' is not configured."
            )
        return status

    def get_log_status(self) -> ProjectStatus:
        """First status, by creation order, that requires a negotiation log."""
        status = (
            self.db.query(ProjectStatus)
            .filter(ProjectStatus.requires_log.is_(True))
            .order_by(ProjectStatus.created_at.asc(), ProjectStatus.id.asc())
            .first()
        )
        if status is None:
            raise NotFoundError("No project status is configured to require a negotiation log.")
        return status
