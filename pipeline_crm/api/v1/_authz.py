"""Bearer-token authentication shared by the protected v1 routers."""

from __future__ import annotations

from fastapi import Depends, Header

from pipeline_crm.auth.jwt import TokenIdentity
from pipeline_crm.core.config import Config
from pipeline_crm.core.dependencies import get_settings
from pipeline_crm.core.exceptions import AuthenticationError
from pipeline_crm.services.auth_service import verify_token


def extract_bearer_token(authorization: str | None) -> str:
    if not authorization:
        raise AuthenticationError("Authorization header is required.")
    # Exactly "Bearer <token>": case-sensitive scheme, single space.
    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        raise AuthenticationError("Authorization header must be: Bearer <token>.")
    return parts[1]


def get_current_user(
    authorization: str | None = Header(default=None, alias="Authorization"),
    settings: Config = Depends(get_settings),
) -> TokenIdentity:
    token = extract_bearer_token(authorization)
    return verify_token(token, settings=settings)
