"""Application entrypoint: FastAPI factory and uvicorn runner."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pipeline_crm.api.errors import register_exception_handlers
from pipeline_crm.api.v1 import get_api_router, health
from pipeline_crm.core.config import Config, get_config
from pipeline_crm.core.startup import bootstrap
from pipeline_crm.database.db import Database


def create_app(settings: Config | None = None, database: Database | None = None) -> FastAPI:
    """Build the API around an explicit configuration and database handle."""
    cfg = settings or get_config()
    db = database or Database(cfg.DATABASE_URL, echo=cfg.DEBUG)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        bootstrap(db, cfg)
        yield
        db.dispose()

    app = FastAPI(title=cfg.APP_NAME, version=cfg.APP_VERSION, lifespan=lifespan)
    app.state.settings = cfg
    app.state.database = db

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(cfg.CORS_ORIGINS),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)
    app.include_router(get_api_router(cfg.API_PREFIX))
    # Liveness probe also answers outside the API prefix.
    app.include_router(health.router)
    return app


# Expose ASGI app for `uvicorn pipeline_crm.main:app`.
app = create_app()


if __name__ == "__main__":
    import uvicorn

    config = get_config()
    uvicorn.run("pipeline_crm.main:app", host=config.API_HOST, port=config.API_PORT)
