"""Auth endpoints for API v1."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session

from pipeline_crm.api.v1._authz import get_current_user
from pipeline_crm.auth.jwt import TokenIdentity
from pipeline_crm.core.config import Config
from pipeline_crm.core.dependencies import get_db_session, get_settings
from pipeline_crm.schemas.auth import LoginRequest, RegisterRequest
from pipeline_crm.services.auth_service import AuthService, user_row

router = APIRouter(prefix="/auth", tags=["auth"])

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials."


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterRequest,
    db: Session = Depends(get_db_session),
    settings: Config = Depends(get_settings),
) -> dict:
    user = AuthService(db, settings=settings).register(payload.name, payload.email, payload.password)
    return {"user": user_row(user)}


@router.post("/login")
def login(
    body: Any = Body(default=None),
    db: Session = Depends(get_db_session),
    settings: Config = Depends(get_settings),
) -> dict:
    # Every credential failure gets the same 200 body.
    payload = LoginRequest.model_validate(body if isinstance(body, dict) else {})
    token = AuthService(db, settings=settings).authenticate(payload.email, payload.password)
    if token is None:
        return {"status": False, "message": INVALID_CREDENTIALS_MESSAGE}
    return {"status": True, "token": token}


@router.get("/me")
def me(user: TokenIdentity = Depends(get_current_user)) -> dict:
    return {"ok": True, "user": {"id": user.user_id, "email": user.email}}
