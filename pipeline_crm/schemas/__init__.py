"""Pydantic schema package for API contracts."""

from pipeline_crm.schemas.auth import LoginRequest, RegisterRequest
from pipeline_crm.schemas.common import ErrorEnvelope, RequestModel
from pipeline_crm.schemas.negotiations import NegotiationCreateRequest, NegotiationLogCreateRequest
from pipeline_crm.schemas.projects import ProjectCreateRequest, ProjectUpdateRequest

__all__ = [
    "ErrorEnvelope",
    "LoginRequest",
    "NegotiationCreateRequest",
    "NegotiationLogCreateRequest",
    "ProjectCreateRequest",
    "ProjectUpdateRequest",
    "RegisterRequest",
    "RequestModel",
]
