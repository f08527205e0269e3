"""Typed error taxonomy shared by the services and the HTTP error mapping.

Every error raised on purpose below the request handlers is a ServiceError
subclass. Its ``kind`` decides the HTTP status in ``acquisitions.api.errors``;
the ``message`` is the only text a client ever sees.
"""

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Discriminant used to map an error to a response status."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    UNAUTHORIZED = "unauthorized"
    INTERNAL = "internal"


class ServiceError(Exception):
    """Base for expected failures. ``cause`` is kept for server-side logs only."""

    kind: ErrorKind = ErrorKind.INTERNAL
    default_message: str = "Internal server error"

    def __init__(
        self,
        message: str | None = None,
        cause: Exception | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message or self.default_message
        self.cause = cause
        self.details = details
        super().__init__(self.message)


class RequestValidationFailed(ServiceError):
    """Request body or path parameter did not match the expected shape."""

    kind = ErrorKind.VALIDATION
    default_message = "Invalid request data"


class UserNotFoundError(ServiceError):
    kind = ErrorKind.NOT_FOUND
    default_message = "User not found"


class EmailInUseError(ServiceError):
    """Another user already owns the requested email (update flow)."""

    kind = ErrorKind.CONFLICT
    default_message = "Email already in use"


class InvalidCredentialsError(ServiceError):
    """Same message for unknown email and wrong password."""

    kind = ErrorKind.UNAUTHORIZED
    default_message = "Invalid email or password"


class InvalidTokenError(ServiceError):
    kind = ErrorKind.UNAUTHORIZED
    default_message = "Invalid token"


class UserCreationFailed(ServiceError):
    default_message = "User creation failed"


class UserExistsError(UserCreationFailed):
    """Signup email already registered. Surfaces with the generic creation message."""


class SignInFailed(ServiceError):
    default_message = "Sign in failed"


class UserFetchFailed(ServiceError):
    default_message = "Failed to fetch user"


class UserUpdateFailed(ServiceError):
    default_message = "Failed to update user"


class DeleteFailed(ServiceError):
    default_message = "Failed to delete user"


class HashingError(ServiceError):
    default_message = "Password hashing failed"


class ComparisonError(ServiceError):
    default_message = "Password comparison failed"


class StoreError(ServiceError):
    """Unexpected database failure. Callers translate it; never shown raw."""

    default_message = "Database operation failed"


class DuplicateEmailError(StoreError):
    """Unique index on users.email rejected an insert or update."""

    kind = ErrorKind.CONFLICT
    default_message = "Email already in use"
