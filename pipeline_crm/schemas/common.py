"""Common schema module."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class RequestModel(BaseModel):
    """Lenient request body; field-level rules are enforced by the services."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ErrorEnvelope(BaseModel):
    message: str
