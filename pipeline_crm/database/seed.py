"""Idempotent seed of the reference tables.

Run with ``python -m pipeline_crm.database.seed`` after ``init_db``. The
``--demo`` flag also creates a few sample clients so projects can be created
from a fresh install.
"""

from __future__ import annotations

import argparse
import logging
from datetime import timedelta

from sqlalchemy.orm import Session

from pipeline_crm.core.config import Config, get_config
from pipeline_crm.core.logging_config import configure_logging
from pipeline_crm.database.db import Database
from pipeline_crm.models import BusinessType, Client, DocumentType, DocumentTypeCode, ProjectStatus, Role, RoleCode
from pipeline_crm.models.base import utcnow

logger = logging.getLogger(__name__)

ROLES = (
    (RoleCode.ADMIN.value, "Admin", "System administrator"),
    (RoleCode.SELLER.value, "Seller", "User with seller permissions"),
)

DOCUMENT_TYPES = (
    (DocumentTypeCode.CITIZEN_ID.value, "Citizen ID card", "Natural persons"),
    (DocumentTypeCode.FOREIGNER_ID.value, "Foreigner ID card", "Resident foreigners"),
    (DocumentTypeCode.IDENTITY_CARD.value, "Identity card", "Minors"),
    (DocumentTypeCode.PASSPORT.value, "Passport", "International document"),
    (DocumentTypeCode.TAX_ID.value, "Tax ID (NIT)", "Companies and some natural persons"),
    (DocumentTypeCode.CIVIL_REGISTRY.value, "Civil registry", "Identification for minors"),
)

# Creation order matters: it is the tie-break for the default and log statuses.
PROJECT_STATUSES = (
    ("Prospect", "Initial sales opportunity", False),
    ("Quote sent", "A proposal or quote was sent to the client", False),
    ("In negotiation", "Active negotiation (requires a negotiation log)", True),
    ("Sold", "Project sold", False),
    ("Invoiced", "Project invoiced", False),
)

BUSINESS_TYPES = ("Consulting", "Products", "Services")

DEMO_CLIENTS = (
    ("Acme Corp", DocumentTypeCode.TAX_ID.value, "900123456"),
    ("Globex S.A.S.", DocumentTypeCode.TAX_ID.value, "900654321"),
    ("Jane Roe", DocumentTypeCode.CITIZEN_ID.value, "1032456789"),
)


def _seed_roles(session: Session) -> None:
    existing = {code for (code,) in session.query(Role.code).all()}
    for code, name, description in ROLES:
        if code not in existing:
            session.add(Role(code=code, name=name, description=description))


def _seed_document_types(session: Session) -> None:
    existing = {code for (code,) in session.query(DocumentType.code).all()}
    for code, name, description in DOCUMENT_TYPES:
        if code not in existing:
            session.add(DocumentType(code=code, name=name, description=description))


def _seed_statuses(session: Session) -> None:
    existing = {name.lower() for (name,) in session.query(ProjectStatus.name).all()}
    base = utcnow() - timedelta(seconds=len(PROJECT_STATUSES))
    for index, (name, description, requires_log) in enumerate(PROJECT_STATUSES):
        if name.lower() not in existing:
            session.add(
                ProjectStatus(
                    name=name,
                    description=description,
                    requires_log=requires_log,
                    created_at=base + timedelta(seconds=index),
                )
            )


def _seed_business_types(session: Session) -> None:
    existing = {name for (name,) in session.query(BusinessType.name).all()}
    for name in BUSINESS_TYPES:
        if name not in existing:
            session.add(BusinessType(name=name))


def _seed_demo_clients(session: Session) -> None:
    document_types = {row.code: row.id for row in session.query(DocumentType).all()}
    existing = {number for (number,) in session.query(Client.document_number).all()}
    for name, document_code, number in DEMO_CLIENTS:
        if number not in existing:
            session.add(Client(name=name, document_type_id=document_types[document_code], document_number=number))


def seed_reference_data(session: Session, demo: bool = False) -> None:
    """Insert any missing roles, document types, statuses and business types."""
    try:
        _seed_roles(session)
        _seed_document_types(session)
        _seed_statuses(session)
        _seed_business_types(session)
        session.flush()
        if demo:
            _seed_demo_clients(session)
        session.commit()
    except Exception:
        session.rollback()
        raise
    logger.info("database.seed.completed", extra={"event": "database.seed.completed", "demo": demo})


def main(argv: list[str] | None = None, config: Config | None = None) -> None:
    parser = argparse.ArgumentParser(description="Seed CRM reference data.")
    parser.add_argument("--demo", action="store_true", help="also create sample clients")
    args = parser.parse_args(argv)

    configure_logging()
    cfg = config or get_config()
    database = Database(cfg.DATABASE_URL)
    try:
        with database.session() as session:
            seed_reference_data(session, demo=args.demo)
    finally:
        database.dispose()


if __name__ == "__main__":
    main()
