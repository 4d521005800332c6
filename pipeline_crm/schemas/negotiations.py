"""Negotiation request schemas for API contracts."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, Field

from pipeline_crm.schemas.common import RequestModel


class NegotiationCreateRequest(RequestModel):
    project_id: Any = Field(default=None, validation_alias=AliasChoices("projectId", "project_id"))
    client_id: Any = Field(default=None, validation_alias=AliasChoices("clientId", "client_id"))
    seller_id: Any = Field(default=None, validation_alias=AliasChoices("sellerId", "seller_id"))
    description: Any = None


class NegotiationLogCreateRequest(RequestModel):
    description: Any = None
    seller_id: Any = Field(default=None, validation_alias=AliasChoices("sellerId", "seller_id"))
