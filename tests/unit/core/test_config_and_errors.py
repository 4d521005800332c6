from __future__ import annotations

import pytest

from pipeline_crm.api.errors import INTERNAL_ERROR_MESSAGE, map_error
from pipeline_crm.core.config import PLACEHOLDER_JWT_SECRET, _build_config
from pipeline_crm.core.exceptions import (
    AuthenticationError,
    ConfigurationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)


@pytest.fixture
def clean_env(monkeypatch):
    for key in ("JWT_SECRET", "DATABASE_URL", "API_PREFIX", "BCRYPT_ROUNDS", "DEBUG", "CORS_ORIGINS"):
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


def test_development_config_defaults(clean_env):
    config = _build_config("development")
    assert config.JWT_SECRET == PLACEHOLDER_JWT_SECRET
    assert config.DATABASE_URL.startswith("sqlite")
    assert config.API_PREFIX == "/api"
    assert config.CORS_ORIGINS == ("*",)
    assert config.DEBUG is True


def test_production_rejects_placeholder_secret(clean_env):
    with pytest.raises(ConfigurationError, match="JWT_SECRET"):
        _build_config("production")


def test_invalid_settings_are_rejected(clean_env):
    clean_env.setenv("BCRYPT_ROUNDS", "2")
    with pytest.raises(ConfigurationError, match="BCRYPT_ROUNDS"):
        _build_config("development")

    clean_env.setenv("BCRYPT_ROUNDS", "10")
    clean_env.setenv("API_PREFIX", "api")
    with pytest.raises(ConfigurationError, match="API_PREFIX"):
        _build_config("development")

    clean_env.setenv("API_PREFIX", "/api")
    clean_env.setenv("DATABASE_URL", "mysql://db/crm")
    with pytest.raises(ConfigurationError, match="DATABASE_URL"):
        _build_config("development")


@pytest.mark.parametrize(
    ("error", "status_code"),
    [
        (ValidationError("bad"), 400),
        (AuthenticationError("who"), 401),
        (NotFoundError("gone"), 404),
        (ConflictError("taken"), 409),
    ],
)
def test_map_error_uses_domain_status_codes(error, status_code):
    assert map_error(error) == (status_code, str(error))


def test_map_error_hides_unexpected_details():
    assert map_error(ConfigurationError("connection string leaked")) == (500, INTERNAL_ERROR_MESSAGE)
    assert map_error(RuntimeError("boom")) == (500, INTERNAL_ERROR_MESSAGE)
