"""Auth schema module."""

from __future__ import annotations

from typing import Any

from pipeline_crm.schemas.common import RequestModel


class RegisterRequest(RequestModel):
    name: Any = None
    email: Any = None
    password: Any = None


class LoginRequest(RequestModel):
    email: Any = None
    password: Any = None
