from __future__ import annotations

from dataclasses import replace

import pytest
from fastapi.testclient import TestClient

from pipeline_crm.core.config import get_config
from pipeline_crm.database.db import Database
from pipeline_crm.database.seed import seed_reference_data
from pipeline_crm.main import create_app
from pipeline_crm.models import BusinessType, Client, ProjectStatus
from pipeline_crm.services.auth_service import AuthService
from pipeline_crm.services.project_service import ProjectService


@pytest.fixture
def settings():
    return replace(
        get_config(),
        DEBUG=False,
        DB_CONNECTIVITY_REQUIRED=False,
        JWT_SECRET="test-secret",
        BCRYPT_ROUNDS=4,
        DEFAULT_PROJECT_STATUS="Prospect",
        SELLER_ROLE_CODE="SELLER",
        API_PREFIX="/api",
    )


@pytest.fixture
def database():
    db = Database("sqlite://")
    db.create_all()
    with db.session() as session:
        seed_reference_data(session, demo=True)
    yield db
    db.dispose()


@pytest.fixture
def session(database):
    with database.session() as db:
        yield db


@pytest.fixture
def reference_ids(session):
    clients = {client.name: client.id for client in session.query(Client).all()}
    types = {business_type.name: business_type.id for business_type in session.query(BusinessType).all()}
    statuses = {status.name: status.id for status in session.query(ProjectStatus).all()}
    return {
        "client": clients["Acme Corp"],
        "other_client": clients["Globex S.A.S."],
        "business_type": types["Consulting"],
        "prospect": statuses["Prospect"],
        "negotiating": statuses["In negotiation"],
        "sold": statuses["Sold"],
    }


@pytest.fixture
def seller(session, settings):
    return AuthService(session, settings=settings).register("Sam Seller", "sam@example.com", "s3cret-pass")


@pytest.fixture
def project(session, settings, seller, reference_ids):
    return ProjectService(session, settings=settings).create_project(
        name="CRM rollout",
        client_id=reference_ids["client"],
        business_type_id=reference_ids["business_type"],
        estimated_value="15000",
        caller_id=seller.id,
    )


@pytest.fixture
def client(settings, database):
    return TestClient(create_app(settings=settings, database=database))
