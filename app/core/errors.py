"""Domain errors raised by validators, CRUD operations and authorization checks.

Every error carries a stable code, a user-safe message and the HTTP status the API
layer answers with. Handlers in app/main.py do the mapping.
"""

from enum import Enum
from typing import Optional


class ErrorCode(Enum):
    """Domain error codes."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    FORBIDDEN = "FORBIDDEN"
    UNAUTHORIZED = "UNAUTHORIZED"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"


class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code = ErrorCode.INTERNAL_ERROR
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ValidationError(DomainError):
    """Raised when a field is missing, malformed or out of range."""

    code = ErrorCode.VALIDATION_ERROR
    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


class NotFoundError(DomainError):
    """Raised when an event, user or booking does not exist."""

    code = ErrorCode.NOT_FOUND
    status_code = 404

    def __init__(self, resource: str) -> None:
        super().__init__(f"{resource} not found")
        self.resource = resource


class ConflictError(DomainError):
    """Raised when a write would break a uniqueness or ownership rule."""

    code = ErrorCode.CONFLICT
    status_code = 409


class ForbiddenError(DomainError):
    code = ErrorCode.FORBIDDEN
    status_code = 403

    def __init__(self, message: str = "You are not allowed to perform this action") -> None:
        super().__init__(message)


class UnauthorizedError(DomainError):
    code = ErrorCode.UNAUTHORIZED
    status_code = 401

    def __init__(self, message: str = "Could not validate credentials") -> None:
        super().__init__(message)


class InternalError(DomainError):
    """Raised for failures the client cannot fix (hashing, unreachable store)."""

    code = ErrorCode.INTERNAL_ERROR
    status_code = 500


class ConfigurationError(InternalError):
    """Raised when required settings are missing."""

    code = ErrorCode.CONFIGURATION_ERROR
