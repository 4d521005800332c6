from __future__ import annotations

from dataclasses import replace

import pytest

from pipeline_crm.core.exceptions import NotFoundError
from pipeline_crm.core.security import hash_password
from pipeline_crm.database.seed import BUSINESS_TYPES, PROJECT_STATUSES, seed_reference_data
from pipeline_crm.models import ProjectStatus, Role, User
from pipeline_crm.services.reference_service import ReferenceDataService


def test_list_statuses_keeps_creation_order(session, settings):
    rows = ReferenceDataService(session, settings=settings).list_statuses()

    assert [row["name"] for row in rows] == [name for name, _, _ in PROJECT_STATUSES]
    assert [row["generaBitacora"] for row in rows] == [flag for _, _, flag in PROJECT_STATUSES]
    assert rows[0]["value"] == rows[0]["id"]


def test_list_clients_and_business_types(session, settings):
    service = ReferenceDataService(session, settings=settings)

    clients = service.list_clients()
    assert [row["name"] for row in clients] == sorted(row["name"] for row in clients)
    assert {row["documentTypeName"] for row in clients} >= {"Tax ID (NIT)"}

    assert [row["name"] for row in service.list_business_types()] == sorted(BUSINESS_TYPES)


def test_list_sellers_returns_users_with_seller_role(session, settings, seller):
    admin_role = session.query(Role).filter(Role.code == "ADMIN").one()
    session.add(User(name="Ada Admin", email="ada@example.com", password_hash=hash_password("x", rounds=4), role_id=admin_role.id))
    session.commit()

    rows = ReferenceDataService(session, settings=settings).list_sellers()
    assert [row["id"] for row in rows] == [seller.id]


def test_list_sellers_falls_back_to_all_users(session, settings):
    session.add(User(name="Nora Norole", email="nora@example.com", password_hash=hash_password("x", rounds=4)))
    session.commit()

    rows = ReferenceDataService(session, settings=settings).list_sellers()
    assert [row["email"] for row in rows] == ["nora@example.com"]


def test_default_status_match_is_case_insensitive(session, settings, reference_ids):
    service = ReferenceDataService(session, settings=replace(settings, DEFAULT_PROJECT_STATUS="  PROSPECT "))
    assert service.get_default_status().id == reference_ids["prospect"]


def test_log_status_is_the_first_flagged_status(session, settings, reference_ids):
    service = ReferenceDataService(session, settings=settings)
    assert service.get_log_status().id == reference_ids["negotiating"]

    session.query(ProjectStatus).update({ProjectStatus.requires_log: False})
    session.commit()
    with pytest.raises(NotFoundError, match="require a negotiation log"):
        service.get_log_status()


def test_seed_is_idempotent(session):
    before = session.query(ProjectStatus).count()
    seed_reference_data(session, demo=True)
    assert session.query(ProjectStatus).count() == before
