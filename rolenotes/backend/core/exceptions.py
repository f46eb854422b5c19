"""
Custom Exceptions.

Services raise these; core.exception_handlers maps each class to an HTTP
status. The ``code`` is part of the public error envelope and must stay
stable.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    code = "SYS_INTERNAL_ERROR"
    default_message = "Internal error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(ApplicationError):
    """No such row, or the row is soft-deleted and the caller asked for live data."""

    code = "RES_NOT_FOUND"
    default_message = "Resource not found"


class ValidationError(ApplicationError):
    """Input passed the request schema but broke a business rule."""

    code = "VAL_VALIDATION_ERROR"
    default_message = "Validation failed"

    def __init__(self, message: str | None = None, details: dict | None = None) -> None:
        self.details = details or {}
        super().__init__(message)


class AuthenticationError(ApplicationError):
    """No valid bearer token, or its subject no longer exists."""

    code = "AUTH_UNAUTHORIZED"
    default_message = "Authentication required"


class AuthorizationError(ApplicationError):
    """The caller's role or ownership does not permit the operation."""

    code = "AUTHZ_FORBIDDEN"
    default_message = "Permission denied"


class ConflictError(ApplicationError):
    code = "RES_CONFLICT"
    default_message = "Resource conflict"


class DatabaseError(ApplicationError):
    code = "SYS_DATABASE_ERROR"
    default_message = "Database error"
