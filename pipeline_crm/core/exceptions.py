"""Custom exceptions for the pipeline CRM application."""


class CRMException(Exception):
    """Base exception for pipeline CRM application."""

    pass


class ValidationError(CRMException):
    """Raised when request input is missing or malformed."""

    pass


class NotFoundError(CRMException):
    """Raised when a resource is not found."""

    pass


class ConflictError(CRMException):
    """Raised when a write collides with existing state."""

    pass


class ConfigurationError(CRMException):
    """Raised when configuration is invalid."""

    pass


class AuthenticationError(CRMException):
    """Raised when authentication fails."""

    pass
