from __future__ import annotations

from datetime import timedelta

import pytest

from pipeline_crm.auth.jwt import create_access_token, decode_jwt, encode_jwt, verify_access_token
from pipeline_crm.core.exceptions import AuthenticationError


def test_access_token_roundtrip_contains_required_claims():
    token = create_access_token(user_id="user-1", email="sam@example.com", secret="test-secret")
    claims = decode_jwt(token, secret="test-secret")
    assert claims["sub"] == "user-1"
    assert claims["email"] == "sam@example.com"
    assert "exp" in claims
    assert "iat" in claims
    assert "jti" in claims

    identity = verify_access_token(token, secret="test-secret")
    assert identity.user_id == "user-1"
    assert identity.email == "sam@example.com"


def test_decode_rejects_wrong_secret():
    token = create_access_token(user_id="user-1", secret="test-secret")
    with pytest.raises(AuthenticationError, match="signature"):
        decode_jwt(token, secret="other-secret")


def test_decode_rejects_expired_token():
    token = encode_jwt({"sub": "user-1"}, secret="test-secret", ttl=timedelta(minutes=-5))
    with pytest.raises(AuthenticationError, match="expired"):
        decode_jwt(token, secret="test-secret")


def test_decode_rejects_malformed_token():
    with pytest.raises(AuthenticationError, match="format"):
        decode_jwt("not-a-token", secret="test-secret")


def test_verify_requires_subject():
    token = encode_jwt({"email": "sam@example.com"}, secret="test-secret", ttl=timedelta(minutes=5))
    with pytest.raises(AuthenticationError, match="missing sub"):
        verify_access_token(token, secret="test-secret")
