"""Root API router for v1 endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from pipeline_crm.api.v1 import auth, health, negotiations, projects


def get_api_router(prefix: str = "/api") -> APIRouter:
    api_router = APIRouter(prefix=prefix.rstrip("/"))
    api_router.include_router(health.router)
    api_router.include_router(auth.router)
    api_router.include_router(projects.router)
    api_router.include_router(negotiations.router)
    return api_router
