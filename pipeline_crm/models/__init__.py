"""SQLAlchemy model package for the CRM schema."""

from pipeline_crm.models.base import Base
from pipeline_crm.models.business_type import BusinessType
from pipeline_crm.models.client import Client
from pipeline_crm.models.document_type import DocumentType
from pipeline_crm.models.enums import DocumentTypeCode, RoleCode
from pipeline_crm.models.negotiation import Negotiation, NegotiationLog
from pipeline_crm.models.project import Project
from pipeline_crm.models.project_status import ProjectStatus
from pipeline_crm.models.role import Role
from pipeline_crm.models.user import User

__all__ = [
    "Base",
    "BusinessType",
    "Client",
    "DocumentType",
    "DocumentTypeCode",
    "Negotiation",
    "NegotiationLog",
    "Project",
    "ProjectStatus",
    "Role",
    "RoleCode",
    "User",
]
