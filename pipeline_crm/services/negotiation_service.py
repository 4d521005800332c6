"""Negotiations and their append-only activity log."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload

from pipeline_crm.core.exceptions import ConflictError, NotFoundError, ValidationError
from pipeline_crm.models import Client, Negotiation, NegotiationLog, Project, User
from pipeline_crm.models.base import utcnow
from pipeline_crm.services.base_service import BaseService
from pipeline_crm.utils.validators import format_amount, to_non_empty_string

logger = logging.getLogger(__name__)

DUPLICATE_NEGOTIATION_MESSAGE = "Project already has a negotiation."
STALE_REFERENCE_MESSAGE = "Negotiation references a project, client or seller that no longer exists."


def log_row(log: NegotiationLog) -> dict:
    return {
        "id": log.id,
        "negotiationId": log.negotiation_id,
        "date": log.date,
        "description": log.description,
        "sellerId": log.seller.id,
        "sellerName": log.seller.name,
        "sellerEmail": log.seller.email,
    }


def _client_block(client: Client) -> dict:
    return {
        "clientId": client.id,
        "clientName": client.name,
        "documentTypeId": client.document_type_id,
        "documentTypeName": client.document_type.name,
        "documentNumber": client.document_number,
    }


def negotiation_row(negotiation: Negotiation) -> dict:
    project = negotiation.project
    logs = [log_row(log) for log in negotiation.logs]
    return {
        "id": negotiation.id,
        "negotiationId": negotiation.id,
        "createdAt": negotiation.created_at,
        "projectId": negotiation.project_id,
        "projectName": project.name,
        "statusId": project.status_id,
        "statusName": project.status.name,
        "generaBitacora": project.status.requires_log,
        **_client_block(negotiation.client),
        "logsCount": len(logs),
        "logs": logs,
    }


def negotiation_detail(negotiation: Negotiation) -> dict:
    project = negotiation.project
    detail = negotiation_row(negotiation)
    detail["project"] = {
        "id": project.id,
        "name": project.name,
        "estimatedValue": format_amount(project.estimated_value),
        "createdAt": project.created_at,
        "updatedAt": project.updated_at,
        "client": {
            "id": project.client.id,
            "name": project.client.name,
            "documentTypeId": project.client.document_type_id,
            "documentTypeName": project.client.document_type.name,
            "documentNumber": project.client.document_number,
        },
        "seller": {"id": project.seller.id, "name": project.seller.name, "email": project.seller.email},
        "businessType": {"id": project.business_type.id, "name": project.business_type.name},
        "status": {
            "id": project.status.id,
            "name": project.status.name,
            "description": project.status.description,
            "generaBitacora": project.status.requires_log,
        },
    }
    return detail


class NegotiationService(BaseService):
    """Service for negotiation creation, lookup and log appends."""

    def _query(self):
        return (
            self.db.query(Negotiation)
            .options(
                selectinload(Negotiation.project).selectinload(Project.status),
                selectinload(Negotiation.project).selectinload(Project.client).selectinload(Client.document_type),
                selectinload(Negotiation.project).selectinload(Project.seller),
                selectinload(Negotiation.project).selectinload(Project.business_type),
                selectinload(Negotiation.client).selectinload(Client.document_type),
                selectinload(Negotiation.logs).selectinload(NegotiationLog.seller),
            )
            .populate_existing()
        )

    def list_negotiations(self) -> list[dict]:
        negotiations = self._query().order_by(Negotiation.created_at.desc(), Negotiation.id.desc()).all()
        return [negotiation_row(negotiation) for negotiation in negotiations]

    def get_negotiation(self, negotiation_id: str) -> dict:
        negotiation = self._query().filter(Negotiation.id == negotiation_id).first()
        if negotiation is None:
            raise NotFoundError("Negotiation not found.")
        return negotiation_detail(negotiation)

    def _find_by_project(self, project_id: str) -> Negotiation | None:
        return self.db.query(Negotiation).filter(Negotiation.project_id == project_id).first()

    def _first_log(self, negotiation: Negotiation, seller_id: str, description: str) -> NegotiationLog:
        return NegotiationLog(
            negotiation_id=negotiation.id,
            seller_id=seller_id,
            description=description,
            date=utcnow(),
        )

    def _require(self, model: type, record_id: str, message: str) -> Any:
        record = self.db.query(model).filter(model.id == record_id).first()
        if record is None:
            raise NotFoundError(message)
        return record

    def create_negotiation(self, project_id: Any, client_id: Any, seller_id: Any, description: Any) -> dict:
        """Open the negotiation of a project together with its first log entry."""
        clean_project_id = to_non_empty_string(project_id)
        clean_client_id = to_non_empty_string(client_id)
        clean_seller_id = to_non_empty_string(seller_id)
        clean_description = to_non_empty_string(description)
        if not clean_project_id or not clean_client_id or not clean_seller_id or not clean_description:
            raise ValidationError("projectId, clientId, sellerId and description are required.")

        project = self._require(Project, clean_project_id, "Project not found.")
        client = self._require(Client, clean_client_id, "Client not found.")
        seller = self._require(User, clean_seller_id, "Seller not found.")

        if project.client_id != client.id:
            raise ValidationError("clientId does not match the project's client.")
        if self._find_by_project(project.id) is not None:
            raise ConflictError(DUPLICATE_NEGOTIATION_MESSAGE)

        negotiation = Negotiation(project_id=project.id, client_id=client.id)
        try:
            with self.transaction():
                self.db.add(negotiation)
                self.db.flush()
                self.db.add(self._first_log(negotiation, seller.id, clean_description))
        except IntegrityError as exc:
            # Concurrent creators can both pass the pre-check; the unique
            # project_id constraint rejects the second one.
            duplicate = self._find_by_project(project.id) is not None
            logger.warning(
                "negotiation.create.conflict",
                extra={"event": "negotiation.create.conflict", "project_id": project.id, "duplicate": duplicate},
            )
            if duplicate:
                raise ConflictError(DUPLICATE_NEGOTIATION_MESSAGE) from exc
            raise ConflictError(STALE_REFERENCE_MESSAGE) from exc

        logger.info(
            "negotiation.created",
            extra={"event": "negotiation.created", "negotiation_id": negotiation.id, "project_id": project.id},
        )
        return self.get_negotiation(negotiation.id)

    def add_log(
        self,
        negotiation_id: str,
        description: Any,
        seller_id: Any = None,
        caller_id: str | None = None,
    ) -> dict:
        """Append a log entry; the seller defaults to the authenticated caller."""
        clean_description = to_non_empty_string(description)
        resolved_seller_id = to_non_empty_string(seller_id) or caller_id
        if not clean_description or not resolved_seller_id:
            raise ValidationError("description and sellerId are required.")

        negotiation = self._require(Negotiation, negotiation_id, "Negotiation not found.")
        seller = self._require(User, resolved_seller_id, "Seller not found.")

        log = NegotiationLog(
            negotiation_id=negotiation.id,
            seller_id=seller.id,
            description=clean_description,
            date=utcnow(),
        )
        with self.transaction():
            self.db.add(log)

        logger.info(
            "negotiation.log.added",
            extra={"event": "negotiation.log.added", "negotiation_id": negotiation.id, "log_id": log.id},
        )
        return log_row(log)
