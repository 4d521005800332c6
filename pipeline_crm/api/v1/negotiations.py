"""Negotiation endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from pipeline_crm.api.v1._authz import get_current_user
from pipeline_crm.auth.jwt import TokenIdentity
from pipeline_crm.core.dependencies import get_db_session
from pipeline_crm.schemas.negotiations import NegotiationCreateRequest, NegotiationLogCreateRequest
from pipeline_crm.services.negotiation_service import NegotiationService

router = APIRouter(prefix="/negotiations", tags=["negotiations"], dependencies=[Depends(get_current_user)])


def _negotiations(db: Session = Depends(get_db_session)) -> NegotiationService:
    return NegotiationService(db)


@router.get("")
def list_negotiations(service: NegotiationService = Depends(_negotiations)) -> list[dict]:
    return service.list_negotiations()


@router.get("/{negotiation_id}")
def get_negotiation(negotiation_id: str, service: NegotiationService = Depends(_negotiations)) -> dict:
    return service.get_negotiation(negotiation_id)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_negotiation(
    payload: NegotiationCreateRequest,
    service: NegotiationService = Depends(_negotiations),
) -> dict:
    return service.create_negotiation(
        project_id=payload.project_id,
        client_id=payload.client_id,
        seller_id=payload.seller_id,
        description=payload.description,
    )


@router.post("/{negotiation_id}/logs", status_code=status.HTTP_201_CREATED)
def add_negotiation_log(
    negotiation_id: str,
    payload: NegotiationLogCreateRequest,
    user: TokenIdentity = Depends(get_current_user),
    service: NegotiationService = Depends(_negotiations),
) -> dict:
    return service.add_log(
        negotiation_id,
        description=payload.description,
        seller_id=payload.seller_id,
        caller_id=user.user_id,
    )
