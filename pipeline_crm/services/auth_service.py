"""User registration, login and token verification."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from pipeline_crm.auth.jwt import TokenIdentity, create_access_token, verify_access_token
from pipeline_crm.core.config import Config, get_config
from pipeline_crm.core.exceptions import ConflictError, ValidationError
from pipeline_crm.core.security import hash_password, verify_password
from pipeline_crm.models import Role, User
from pipeline_crm.services.base_service import BaseService
from pipeline_crm.utils.validators import to_non_empty_string

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "Email is already registered."
# bcrypt only reads the first 72 bytes of a password.
MAX_PASSWORD_BYTES = 72


def _normalize_email(value: Any) -> str | None:
    email = to_non_empty_string(value)
    return email.lower() if email else None


def _password(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


def user_row(user: User) -> dict:
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "createdAt": user.created_at,
    }


class AuthService(BaseService):
    """Credential store operations."""

    def __init__(self, db: Session, settings: Config | None = None) -> None:
        super().__init__(db)
        self.settings = settings or get_config()

    def register(self, name: Any, email: Any, password: Any) -> User:
        clean_name = to_non_empty_string(name)
        clean_email = _normalize_email(email)
        clean_password = _password(password)
        if not clean_name or not clean_email or not clean_password:
            raise ValidationError("name, email and password are required.")
        if len(clean_password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValidationError(f"password must be at most {MAX_PASSWORD_BYTES} bytes.")

        if self.db.query(User.id).filter(User.email == clean_email).first() is not None:
            raise ConflictError(DUPLICATE_EMAIL_MESSAGE)

        seller_role = self.db.query(Role).filter(Role.code == self.settings.SELLER_ROLE_CODE).first()
        user = User(
            name=clean_name,
            email=clean_email,
            password_hash=hash_password(clean_password, rounds=self.settings.BCRYPT_ROUNDS),
            role_id=seller_role.id if seller_role else None,
        )
        try:
            with self.transaction():
                self.db.add(user)
        except IntegrityError as exc:
            raise ConflictError(DUPLICATE_EMAIL_MESSAGE) from exc

        logger.info("auth.user.registered", extra={"event": "auth.user.registered", "user_id": user.id})
        return user

    def authenticate(self, email: Any, password: Any) -> str | None:
        """Return a signed token, or None for any credential problem.

        Missing fields, unknown email and wrong password are not told apart.
        """
        clean_email = _normalize_email(email)
        clean_password = _password(password)
        if not clean_email or not clean_password:
            logger.info("auth.login.failed", extra={"event": "auth.login.failed", "reason": "missing_fields"})
            return None

        user = self.db.query(User).filter(User.email == clean_email).first()
        if user is None or not verify_password(clean_password, user.password_hash):
            logger.info("auth.login.failed", extra={"event": "auth.login.failed", "reason": "bad_credentials"})
            return None

        logger.info("auth.login.succeeded", extra={"event": "auth.login.succeeded", "user_id": user.id})
        return create_access_token(
            user_id=user.id,
            email=user.email,
            secret=self.settings.JWT_SECRET,
            ttl_minutes=self.settings.JWT_ACCESS_TTL_MINUTES,
        )


def verify_token(token: str, settings: Config | None = None) -> TokenIdentity:
    """Validate signature and expiry and return the caller identity."""
    cfg = settings or get_config()
    return verify_access_token(token, secret=cfg.JWT_SECRET)
