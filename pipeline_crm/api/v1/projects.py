"""Project and project reference-data endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from pipeline_crm.api.v1._authz import get_current_user
from pipeline_crm.auth.jwt import TokenIdentity
from pipeline_crm.core.config import Config
from pipeline_crm.core.dependencies import get_db_session, get_settings
from pipeline_crm.schemas.projects import ProjectCreateRequest, ProjectUpdateRequest
from pipeline_crm.services.project_service import ProjectPatch, ProjectService
from pipeline_crm.services.reference_service import ReferenceDataService, status_row

router = APIRouter(prefix="/projects", tags=["projects"], dependencies=[Depends(get_current_user)])


def _projects(
    db: Session = Depends(get_db_session),
    settings: Config = Depends(get_settings),
) -> ProjectService:
    return ProjectService(db, settings=settings)


def _references(
    db: Session = Depends(get_db_session),
    settings: Config = Depends(get_settings),
) -> ReferenceDataService:
    return ReferenceDataService(db, settings=settings)


@router.get("")
def list_projects(service: ProjectService = Depends(_projects)) -> list[dict]:
    return service.list_projects()


@router.post("", status_code=status.HTTP_201_CREATED)
def create_project(
    payload: ProjectCreateRequest,
    user: TokenIdentity = Depends(get_current_user),
    service: ProjectService = Depends(_projects),
) -> dict:
    project = service.create_project(
        name=payload.name,
        client_id=payload.client_id,
        seller_id=payload.seller_id,
        business_type_id=payload.business_type_id,
        status_id=payload.status_id,
        estimated_value=payload.estimated_value,
        caller_id=user.user_id,
    )
    return {"id": project.id}


@router.get("/clients")
def list_clients(service: ReferenceDataService = Depends(_references)) -> list[dict]:
    return service.list_clients()


@router.get("/sellers")
def list_sellers(service: ReferenceDataService = Depends(_references)) -> list[dict]:
    return service.list_sellers()


@router.get("/statuses")
def list_statuses(service: ReferenceDataService = Depends(_references)) -> list[dict]:
    return service.list_statuses()


@router.get("/types")
def list_types(service: ReferenceDataService = Depends(_references)) -> list[dict]:
    return service.list_business_types()


@router.get("/statusWithBitacora")
def status_with_log(service: ReferenceDataService = Depends(_references)) -> dict:
    return status_row(service.get_log_status())


@router.put("/{project_id}")
@router.patch("/{project_id}")
def update_project(
    project_id: str,
    payload: ProjectUpdateRequest,
    service: ProjectService = Depends(_projects),
) -> dict:
    patch = ProjectPatch(**payload.model_dump(include=payload.model_fields_set))
    return service.update_project(project_id, patch)


@router.delete("/{project_id}")
def delete_project(project_id: str, service: ProjectService = Depends(_projects)) -> dict:
    service.delete_project(project_id)
    return {"id": project_id, "deleted": True}
