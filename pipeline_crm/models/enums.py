"""Canonical codes for seeded reference rows."""

from __future__ import annotations

import enum


class RoleCode(str, enum.Enum):
    ADMIN = "ADMIN"
    SELLER = "SELLER"


class DocumentTypeCode(str, enum.Enum):
    CITIZEN_ID = "CC"
    FOREIGNER_ID = "CE"
    IDENTITY_CARD = "TI"
    PASSPORT = "PAS"
    TAX_ID = "NIT"
    CIVIL_REGISTRY = "RC"
