"""Schemas for user management: public projection, update body and envelopes."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator

from acquisitions.schemas.auth import NAME_MAX_LEN, PASSWORD_MAX_LEN, Role

UPDATE_NAME_MIN_LEN = 2
UPDATE_PASSWORD_MIN_LEN = 8


class UserResponse(BaseModel):
    """Public projection of a user. Never carries the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str
    role: str
    created_at: datetime | None = Field(default=None, serialization_alias="createdAt")
    updated_at: datetime | None = Field(default=None, serialization_alias="updatedAt")


class UserUpdate(BaseModel):
    """Body for PUT /users/{id}: every field optional, at least one required."""

    model_config = ConfigDict(extra="ignore")

    name: str | None = Field(default=None, min_length=UPDATE_NAME_MIN_LEN, max_length=NAME_MAX_LEN)
    email: EmailStr | None = None
    role: Role | None = None
    password: str | None = Field(
        default=None, min_length=UPDATE_PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN
    )

    @model_validator(mode="after")
    def require_one_field(self) -> "UserUpdate":
        if all(v is None for v in (self.name, self.email, self.role, self.password)):
            raise ValueError("At least one field must be provided for update")
        return self


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    """Error body returned by the shared exception handlers."""

    message: str
    details: list[dict] | None = None


class UserEnvelope(BaseModel):
    data: UserResponse
    message: str


class UserListEnvelope(BaseModel):
    data: list[UserResponse]
    message: str
