"""Pydantic request/response schemas."""

from acquisitions.schemas.auth import SigninRequest, SignupRequest, TokenPayload
from acquisitions.schemas.health import ApiInfoResponse, HealthResponse
from acquisitions.schemas.user import (
    ErrorResponse,
    MessageResponse,
    UserEnvelope,
    UserListEnvelope,
    UserResponse,
    UserUpdate,
)

__all__ = [
    "ApiInfoResponse",
    "ErrorResponse",
    "HealthResponse",
    "MessageResponse",
    "SigninRequest",
    "SignupRequest",
    "TokenPayload",
    "UserEnvelope",
    "UserListEnvelope",
    "UserResponse",
    "UserUpdate",
]
