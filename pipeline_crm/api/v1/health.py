"""Health endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from pipeline_crm.core.config import Config
from pipeline_crm.core.dependencies import get_settings

router = APIRouter(tags=["health"])


@router.get("/health")
def health(settings: Config = Depends(get_settings)) -> dict:
    return {"ok": True, "service": settings.APP_NAME, "version": settings.APP_VERSION}
