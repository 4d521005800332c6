from __future__ import annotations

from dataclasses import replace

import pytest

from pipeline_crm.core.exceptions import AuthenticationError, ConflictError, ValidationError
from pipeline_crm.models import User
from pipeline_crm.services.auth_service import AuthService, verify_token


def test_register_stores_hashed_password_and_seller_role(session, settings):
    user = AuthService(session, settings=settings).register("  Ana  ", "Ana@Example.com", "pass-1234")

    assert user.name == "Ana"
    assert user.email == "ana@example.com"
    assert user.password_hash != "pass-1234"
    assert user.password_hash.startswith("$2")
    assert user.role is not None
    assert user.role.code == "SELLER"


def test_register_rejects_duplicate_email_case_insensitively(session, settings):
    service = AuthService(session, settings=settings)
    service.register("Ana", "ana@example.com", "pass-1234")

    with pytest.raises(ConflictError):
        service.register("Other Ana", "ANA@example.com", "pass-5678")
    assert session.query(User).count() == 1


@pytest.mark.parametrize(
    ("name", "email", "password"),
    [(None, "a@example.com", "pw"), ("Ana", "  ", "pw"), ("Ana", "a@example.com", ""), ("Ana", 7, "pw")],
)
def test_register_requires_all_fields(session, settings, name, email, password):
    with pytest.raises(ValidationError, match="required"):
        AuthService(session, settings=settings).register(name, email, password)


def test_register_rejects_password_longer_than_bcrypt_limit(session, settings):
    with pytest.raises(ValidationError, match="72 bytes"):
        AuthService(session, settings=settings).register("Ana", "ana@example.com", "x" * 73)


def test_register_without_seller_role_leaves_role_empty(session, settings):
    cfg = replace(settings, SELLER_ROLE_CODE="NOT_A_ROLE")
    user = AuthService(session, settings=cfg).register("Ana", "ana@example.com", "pass-1234")
    assert user.role_id is None


def test_authenticate_returns_verifiable_token(session, settings, seller):
    token = AuthService(session, settings=settings).authenticate("SAM@example.com", "s3cret-pass")

    assert token is not None
    identity = verify_token(token, settings=settings)
    assert identity.user_id == seller.id
    assert identity.email == "sam@example.com"


@pytest.mark.parametrize(
    ("email", "password"),
    [("sam@example.com", "wrong"), ("nobody@example.com", "s3cret-pass"), (None, "s3cret-pass"), ("sam@example.com", None)],
)
def test_authenticate_failures_are_indistinguishable(session, settings, seller, email, password):
    assert AuthService(session, settings=settings).authenticate(email, password) is None


def test_verify_token_rejects_token_signed_with_other_secret(session, settings, seller):
    token = AuthService(session, settings=settings).authenticate("sam@example.com", "s3cret-pass")
    with pytest.raises(AuthenticationError):
        verify_token(token, settings=replace(settings, JWT_SECRET="another-secret"))
