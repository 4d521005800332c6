"""Project request schemas for API contracts."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, Field

from pipeline_crm.schemas.common import RequestModel


class ProjectFields(RequestModel):
    """Project fields with the aliases accepted by the project forms."""

    name: Any = Field(default=None, validation_alias=AliasChoices("name", "project", "projectName"))
    client_id: Any = Field(default=None, validation_alias=AliasChoices("clientId", "client_id"))
    seller_id: Any = Field(default=None, validation_alias=AliasChoices("sellerId", "seller_id"))
    business_type_id: Any = Field(
        default=None,
        validation_alias=AliasChoices("businessTypeId", "typeId", "projectTypeId", "business_type_id"),
    )
    status_id: Any = Field(default=None, validation_alias=AliasChoices("statusId", "status_id"))
    estimated_value: Any = Field(
        default=None,
        validation_alias=AliasChoices("estimatedValue", "value", "estimated_value"),
    )


class ProjectCreateRequest(ProjectFields):
    pass


class ProjectUpdateRequest(ProjectFields):
    """Only the fields present in the body (see `model_fields_set`) are applied."""
