"""User management: read, update and delete with existence and email uniqueness checks."""

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy.orm import Session

from acquisitions.core.errors import (
    DeleteFailed,
    DuplicateEmailError,
    EmailInUseError,
    ServiceError,
    StoreError,
    UserFetchFailed,
    UserUpdateFailed,
)
from acquisitions.core.security import hash_password
from acquisitions.schemas.user import UserResponse, UserUpdate
from acquisitions.services.user_store import UserStore

if TYPE_CHECKING:
    from acquisitions.core.config import Settings

logger = logging.getLogger(__name__)


def get_all_users(session: Session) -> list[UserResponse]:
    try:
        users = UserStore(session).list_all()
    except StoreError as e:
        raise UserFetchFailed("Failed to fetch users", cause=e) from e
    logger.info("Fetched all users: count=%s", len(users))
    return [UserResponse.model_validate(u) for u in users]


def get_user_by_id(session: Session, user_id: int) -> UserResponse | None:
    try:
        user = UserStore(session).find_by_id(user_id)
    except StoreError as e:
        raise UserFetchFailed(cause=e) from e
    if user is None:
        return None
    logger.debug("Fetched user by id: id=%s", user_id)
    return UserResponse.model_validate(user)


def get_user_by_email(session: Session, email: str) -> UserResponse | None:
    try:
        user = UserStore(session).find_by_email(email)
    except StoreError as e:
        raise UserFetchFailed(cause=e) from e
    if user is None:
        return None
    logger.debug("Fetched user by email: email=%s", email)
    return UserResponse.model_validate(user)


def update_user(
    session: Session,
    user_id: int,
    data: UserUpdate,
    settings: "Settings | None" = None,
) -> UserResponse | None:
    """
    Apply the provided fields to an existing user.

    Returns None if the user does not exist. Raises EmailInUseError if the new
    email belongs to another user, including when a concurrent writer claims it
    first. Other failures raise UserUpdateFailed. An empty update is rejected by
    UserUpdate validation before reaching this function.
    """
    existing = get_user_by_id(session, user_id)
    if existing is None:
        return None

    if data.email is not None and data.email != existing.email:
        if get_user_by_email(session, data.email) is not None:
            logger.info("Update rejected, email in use: id=%s", user_id)
            raise EmailInUseError()

    patch: dict[str, Any] = {}
    if data.name is not None:
        patch["name"] = data.name
    if data.email is not None:
        patch["email"] = data.email
    if data.role is not None:
        patch["role"] = data.role

    try:
        if data.password is not None:
            patch["password_hash"] = hash_password(data.password, settings)
        updated = UserStore(session).update_by_id(user_id, patch)
    except DuplicateEmailError as e:
        raise EmailInUseError(cause=e) from e
    except ServiceError as e:
        logger.error("Error updating user: id=%s error=%s", user_id, type(e).__name__)
        raise UserUpdateFailed(cause=e) from e

    if updated is None:
        # Deleted between the existence check and the write.
        return None

    logger.info("User updated successfully: id=%s fields=%s", user_id, sorted(patch))
    return UserResponse.model_validate(updated)


def delete_user(session: Session, user_id: int) -> bool:
    """Permanently delete a user. Returns False if it does not exist."""
    store = UserStore(session)
    try:
        if store.find_by_id(user_id) is None:
            return False
        deleted = store.delete_by_id(user_id)
    except StoreError as e:
        logger.error("Error deleting user: id=%s", user_id)
        raise DeleteFailed(cause=e) from e
    if deleted:
        logger.info("User deleted successfully: id=%s", user_id)
    return deleted
