"""Request/response schemas for auth endpoints."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StrictInt, StrictStr, field_validator

Role = Literal["user", "admin"]

NAME_MAX_LEN = 255
EMAIL_MAX_LEN = 255
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 128


class SignupRequest(BaseModel):
    """Body for POST /auth/signup. Strings are trimmed before length checks."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1, max_length=NAME_MAX_LEN, description="Display name")
    email: EmailStr = Field(..., max_length=EMAIL_MAX_LEN, description="Login email")
    password: str = Field(
        ..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN, description="Password"
    )
    role: Role | None = Field(default=None, description="Defaults to 'user'")

    @field_validator("name", "email", "password", mode="before")
    @classmethod
    def strip_strings(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v


class SigninRequest(BaseModel):
    """Credentials for POST /auth/signin."""

    model_config = ConfigDict(extra="ignore")

    email: EmailStr = Field(..., max_length=EMAIL_MAX_LEN)
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)

    @field_validator("email", "password", mode="before")
    @classmethod
    def strip_strings(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v


class TokenPayload(BaseModel):
    """Identity claims carried by the session token (iat/exp are ignored here)."""

    model_config = ConfigDict(extra="ignore")

    id: StrictInt
    email: StrictStr
    role: Role
