"""Signup and signin flows: user creation, credential verification, session token."""

import logging
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from acquisitions.core.errors import (
    DuplicateEmailError,
    ServiceError,
    SignInFailed,
    UserCreationFailed,
    UserExistsError,
)
from acquisitions.core.security import hash_password, issue_token, verify_password
from acquisitions.schemas.auth import TokenPayload
from acquisitions.schemas.user import UserResponse
from acquisitions.services.user_store import UserStore

if TYPE_CHECKING:
    from acquisitions.core.config import Settings

logger = logging.getLogger(__name__)

DEFAULT_ROLE = "user"


def signup(
    session: Session,
    email: str,
    name: str,
    password: str,
    role: str | None = None,
    settings: "Settings | None" = None,
) -> UserResponse:
    """
    Create a user and return its public projection.

    Raises UserExistsError when the email is taken (before insert, or when the
    unique index rejects a concurrent insert). Every other failure raises
    UserCreationFailed. Both carry the same outward message.
    """
    store = UserStore(session)
    try:
        if store.find_by_email(email) is not None:
            raise UserExistsError()
        password_hash = hash_password(password, settings)
        user = store.insert(
            email=email,
            name=name,
            password_hash=password_hash,
            role=role or DEFAULT_ROLE,
        )
    except UserExistsError:
        logger.info("Signup rejected, email already registered: email=%s", email)
        raise
    except DuplicateEmailError as e:
        logger.info("Signup lost insert race on email: email=%s", email)
        raise UserExistsError(cause=e) from e
    except ServiceError as e:
        logger.error("Error creating user: email=%s error=%s", email, type(e).__name__)
        raise UserCreationFailed(cause=e) from e

    if user is None or user.id is None:
        logger.error("User insert returned no row: email=%s", email)
        raise UserCreationFailed()

    logger.info("User created successfully: id=%s email=%s role=%s", user.id, user.email, user.role)
    return UserResponse.model_validate(user)


def sign_in_user(session: Session, email: str, password: str) -> UserResponse | None:
    """
    Verify credentials. Returns None for an unknown email or a wrong password,
    so callers cannot tell the two apart. Raises SignInFailed on unexpected errors.
    """
    store = UserStore(session)
    try:
        user = store.find_by_email(email)
        if user is None:
            return None
        if not verify_password(password, user.password_hash):
            return None
    except ServiceError as e:
        logger.error("Error signing in user: email=%s error=%s", email, type(e).__name__)
        raise SignInFailed(cause=e) from e

    logger.info("User signed in successfully: id=%s", user.id)
    return UserResponse.model_validate(user)


def create_session_token(user: UserResponse, settings: "Settings | None" = None) -> str:
    """Issue the session token for an authenticated user."""
    return issue_token(
        TokenPayload(id=user.id, email=user.email, role=user.role),
        settings,
    )
