"""Translate domain exceptions into JSON error responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from pipeline_crm.core.exceptions import (
    AuthenticationError,
    ConflictError,
    CRMException,
    NotFoundError,
    ValidationError,
)
from pipeline_crm.schemas.common import ErrorEnvelope

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error."

_STATUS_BY_ERROR: tuple[tuple[type[CRMException], int], ...] = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
)


def map_error(exc: Exception) -> tuple[int, str]:
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return code, str(exc)
    return status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE


def _error_response(code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=code, content=ErrorEnvelope(message=message).model_dump())


async def handle_crm_exception(request: Request, exc: CRMException) -> JSONResponse:
    code, message = map_error(exc)
    if code >= 500:
        logger.error(
            "request.failed",
            exc_info=exc,
            extra={"event": "request.failed", "path": request.url.path, "method": request.method},
        )
    return _error_response(code, message)


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        problems.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return _error_response(status.HTTP_400_BAD_REQUEST, "; ".join(problems) or "Invalid request.")


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorEnvelope(message=str(exc.detail)).model_dump(),
        headers=getattr(exc, "headers", None),
    )


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "request.unhandled_error",
        exc_info=exc,
        extra={"event": "request.unhandled_error", "path": request.url.path, "method": request.method},
    )
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CRMException, handle_crm_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected)
