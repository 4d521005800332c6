"""HS256 access tokens carrying the user id (``sub``) and email."""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from pipeline_crm.core.exceptions import AuthenticationError

_HEADER = {"alg": "HS256", "typ": "JWT"}


def _b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def _b64url_decode(segment: str) -> bytes:
    return base64.urlsafe_b64decode(segment + "=" * (-len(segment) % 4))


def _segment(claims: dict[str, Any]) -> str:
    return _b64url_encode(json.dumps(claims, separators=(",", ":"), sort_keys=True).encode("utf-8"))


def _signature(signing_input: str, secret: str) -> str:
    if not secret:
        raise AuthenticationError("JWT secret must be configured.")
    mac = hmac.new(secret.encode("utf-8"), signing_input.encode("utf-8"), hashlib.sha256)
    return _b64url_encode(mac.digest())


def _now() -> int:
    return int(datetime.now(timezone.utc).timestamp())


@dataclass(frozen=True)
class TokenIdentity:
    """Identity carried by a verified access token."""

    user_id: str
    email: str | None = None


def encode_jwt(payload: dict[str, Any], secret: str, ttl: timedelta) -> str:
    """Sign ``payload``, filling in ``iat``, ``exp`` and ``jti`` when absent."""
    issued_at = _now()
    claims = {
        "iat": issued_at,
        "exp": issued_at + int(ttl.total_seconds()),
        "jti": str(uuid.uuid4()),
        **payload,
    }
    signing_input = f"{_segment(_HEADER)}.{_segment(claims)}"
    return f"{signing_input}.{_signature(signing_input, secret)}"


def _claims_from(segment: str) -> dict[str, Any]:
    try:
        claims = json.loads(_b64url_decode(segment).decode("utf-8"))
    except (ValueError, UnicodeDecodeError) as exc:
        raise AuthenticationError("Invalid token payload.") from exc
    if not isinstance(claims, dict):
        raise AuthenticationError("Invalid token payload.")
    return claims


def _ensure_not_expired(claims: dict[str, Any]) -> None:
    exp = claims.get("exp")
    if exp is None:
        raise AuthenticationError("Token is missing exp claim.")
    if isinstance(exp, bool) or not isinstance(exp, (int, float)):
        raise AuthenticationError("Invalid token payload.")
    if exp < _now():
        raise AuthenticationError("Token has expired.")


def decode_jwt(token: str, secret: str, verify_exp: bool = True) -> dict[str, Any]:
    """Check the signature (and expiry) of ``token`` and return its claims."""
    parts = token.split(".")
    if len(parts) != 3:
        raise AuthenticationError("Invalid token format.")
    header_segment, payload_segment, signature = parts

    expected = _signature(f"{header_segment}.{payload_segment}", secret)
    if not hmac.compare_digest(expected, signature):
        raise AuthenticationError("Invalid token signature.")

    claims = _claims_from(payload_segment)
    if verify_exp:
        _ensure_not_expired(claims)
    return claims


def create_access_token(
    user_id: str,
    secret: str,
    email: str | None = None,
    ttl_minutes: int = 720,
) -> str:
    """Create an access token whose subject is the user id."""
    payload: dict[str, Any] = {"sub": str(user_id)}
    if email:
        payload["email"] = email
    return encode_jwt(payload=payload, secret=secret, ttl=timedelta(minutes=ttl_minutes))


def verify_access_token(token: str, secret: str) -> TokenIdentity:
    """Validate a token and extract the caller identity from its claims."""
    claims = decode_jwt(token=token, secret=secret)
    user_id = str(claims.get("sub") or "").strip()
    if not user_id:
        raise AuthenticationError("Invalid token (missing sub).")
    email = claims.get("email")
    return TokenIdentity(user_id=user_id, email=email if isinstance(email, str) else None)
