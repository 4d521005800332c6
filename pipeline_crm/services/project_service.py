"""Project CRUD with referential validation against reference tables."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from decimal import Decimal
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from pipeline_crm.core.config import Config, get_config
from pipeline_crm.core.exceptions import ConflictError, NotFoundError, ValidationError
from pipeline_crm.models import BusinessType, Client, Negotiation, Project, ProjectStatus, User
from pipeline_crm.services.base_service import BaseService
from pipeline_crm.services.reference_service import ReferenceDataService
from pipeline_crm.utils.validators import format_amount, normalize_estimated_value, to_non_empty_string

logger = logging.getLogger(__name__)

ESTIMATED_VALUE_MESSAGE = "estimatedValue must be a non-negative number with at most two decimals."


class _Unset:
    """Marker for a field that was not sent at all."""

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


@dataclass(frozen=True)
class ProjectPatch:
    """Partial project update.

    Each field is UNSET when absent from the request, None when sent as
    null, or the raw value that was sent.
    """

    name: Any = UNSET
    client_id: Any = UNSET
    seller_id: Any = UNSET
    business_type_id: Any = UNSET
    status_id: Any = UNSET
    estimated_value: Any = UNSET

    def present(self) -> dict[str, Any]:
        return {
            field.name: getattr(self, field.name)
            for field in fields(self)
            if getattr(self, field.name) is not UNSET
        }


# Project column -> (referenced model, request field name, not-found message)
_REFERENCES: dict[str, tuple[type, str, str]] = {
    "client_id": (Client, "clientId", "Client not found."),
    "seller_id": (User, "sellerId", "Seller not found."),
    "business_type_id": (BusinessType, "businessTypeId", "Business type not found."),
    "status_id": (ProjectStatus, "statusId", "Status not found."),
}


def project_row(project: Project) -> dict:
    negotiation = project.negotiation
    return {
        "id": project.id,
        "name": project.name,
        "project": project.name,
        "clientId": project.client_id,
        "clientName": project.client.name,
        "sellerId": project.seller_id,
        "sellerName": project.seller.name,
        "sellerEmail": project.seller.email,
        "businessTypeId": project.business_type_id,
        "typeId": project.business_type_id,
        "businessTypeName": project.business_type.name,
        "typeName": project.business_type.name,
        "estimatedValue": format_amount(project.estimated_value),
        "statusId": project.status_id,
        "statusName": project.status.name,
        "generaBitacora": project.status.requires_log,
        "negotiationId": negotiation.id if negotiation is not None else None,
        "createdAt": project.created_at,
        "updatedAt": project.updated_at,
    }


class ProjectService(BaseService):
    """Service for project CRUD."""

    def __init__(self, db: Session, settings: Config | None = None) -> None:
        super().__init__(db)
        self.settings = settings or get_config()
        self.references = ReferenceDataService(db, settings=self.settings)

    def _query(self):
        return self.db.query(Project).options(
            selectinload(Project.client),
            selectinload(Project.seller),
            selectinload(Project.business_type),
            selectinload(Project.status),
            selectinload(Project.negotiation),
        )

    def get_project(self, project_id: str) -> Project:
        project = self._query().populate_existing().filter(Project.id == project_id).first()
        if project is None:
            raise NotFoundError("Project not found.")
        return project

    def list_projects(self) -> list[dict]:
        projects = (
            self._query()
            .populate_existing()
            .order_by(Project.created_at.desc(), Project.id.desc())
            .all()
        )
        return [project_row(project) for project in projects]

    def _ensure_reference(self, field_name: str, value: str) -> None:
        model, _, message = _REFERENCES[field_name]
        if self.db.query(model.id).filter(model.id == value).first() is None:
            raise NotFoundError(message)

    def create_project(
        self,
        *,
        name: Any,
        client_id: Any,
        business_type_id: Any,
        estimated_value: Any,
        seller_id: Any = None,
        status_id: Any = None,
        caller_id: str | None = None,
    ) -> Project:
        clean_name = to_non_empty_string(name)
        clean_client_id = to_non_empty_string(client_id)
        clean_seller_id = to_non_empty_string(seller_id) or caller_id
        clean_type_id = to_non_empty_string(business_type_id)
        amount = normalize_estimated_value(estimated_value)
        clean_status_id = to_non_empty_string(status_id)

        if not clean_name or not clean_client_id or not clean_seller_id or not clean_type_id or amount is None:
            raise ValidationError(
                "Required fields: name/project, clientId, sellerId, businessTypeId/typeId, "
                "estimatedValue (non-negative number, at most two decimals)."
            )
        if clean_status_id is None:
            clean_status_id = self.references.get_default_status().id

        resolved = {
            "client_id": clean_client_id,
            "seller_id": clean_seller_id,
            "business_type_id": clean_type_id,
            "status_id": clean_status_id,
        }
        for field_name, value in resolved.items():
            self._ensure_reference(field_name, value)

        project = Project(name=clean_name, estimated_value=Decimal(amount), **resolved)
        with self.transaction():
            self.db.add(project)

        logger.info(
            "project.created",
            extra={"event": "project.created", "project_id": project.id, "seller_id": clean_seller_id},
        )
        return project

    def update_project(self, project_id: str, patch: ProjectPatch) -> dict:
        changes = patch.present()
        if not changes:
            raise ValidationError(
                "No updatable fields provided. Allowed: name, clientId, sellerId, "
                "businessTypeId, statusId, estimatedValue."
            )

        project = self.get_project(project_id)

        values: dict[str, Any] = {}
        if "name" in changes:
            values["name"] = to_non_empty_string(changes["name"])
            if values["name"] is None:
                raise ValidationError("name must be a non-empty string.")
        if "estimated_value" in changes:
            amount = normalize_estimated_value(changes["estimated_value"])
            if amount is None:
                raise ValidationError(ESTIMATED_VALUE_MESSAGE)
            values["estimated_value"] = Decimal(amount)
        for field_name, (_, request_name, _) in _REFERENCES.items():
            if field_name not in changes:
                continue
            reference_id = to_non_empty_string(changes[field_name])
            if reference_id is None:
                raise ValidationError(f"{request_name} must be a non-empty string.")
            self._ensure_reference(field_name, reference_id)
            values[field_name] = reference_id

        with self.transaction():
            for attribute, value in values.items():
                setattr(project, attribute, value)

        logger.info(
            "project.updated",
            extra={"event": "project.updated", "project_id": project.id, "fields": sorted(values)},
        )
        return project_row(self.get_project(project.id))

    def delete_project(self, project_id: str) -> None:
        project = self.db.query(Project).filter(Project.id == project_id).first()
        if project is None:
            raise NotFoundError("Project not found.")

        if self.db.query(Negotiation.id).filter(Negotiation.project_id == project.id).first() is not None:
            raise ConflictError("Project has a negotiation and cannot be deleted.")

        try:
            with self.transaction():
                self.db.delete(project)
        except IntegrityError as exc:
            raise ConflictError("Project has related records and cannot be deleted.") from exc

        logger.info("project.deleted", extra={"event": "project.deleted", "project_id": project_id})
