from __future__ import annotations

from sqlalchemy import inspect

from pipeline_crm.models import Base
import pipeline_crm.models  # noqa: F401


def test_model_metadata_contains_crm_tables():
    expected = {
        "roles",
        "users",
        "document_types",
        "clients",
        "business_types",
        "project_statuses",
        "projects",
        "negotiations",
        "negotiation_logs",
    }
    assert expected == set(Base.metadata.tables.keys())


def test_one_negotiation_per_project_is_enforced_by_schema(database):
    constraints = inspect(database.engine).get_unique_constraints("negotiations")
    assert [constraint["column_names"] for constraint in constraints] == [["project_id"]]


def test_sqlite_foreign_keys_are_enabled(database):
    with database.engine.connect() as conn:
        assert conn.exec_driver_sql("PRAGMA foreign_keys").scalar() == 1
