"""User management endpoints: list, fetch, update and delete by id."""

import re
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from acquisitions.core.database import get_db
from acquisitions.core.errors import RequestValidationFailed, UserNotFoundError
from acquisitions.schemas.user import MessageResponse, UserEnvelope, UserListEnvelope, UserUpdate
from acquisitions.schemas.validation import validate_body
from acquisitions.services import user_service

router = APIRouter()

_USER_ID_RE = re.compile(r"-?[0-9]+")


def _parse_user_id(raw: str) -> int:
    # Plain ASCII digits only; int() alone would also take "1_0" or " 1".
    if not _USER_ID_RE.fullmatch(raw):
        raise RequestValidationFailed("Invalid user ID")
    try:
        return int(raw)
    except ValueError as e:
        # Exceeds the interpreter's int digit limit.
        raise RequestValidationFailed("Invalid user ID", cause=e) from e


@router.get("", response_model=UserListEnvelope)
def list_users(db: Annotated[Session, Depends(get_db)]) -> UserListEnvelope:
    users = user_service.get_all_users(db)
    return UserListEnvelope(data=users, message="Users fetched successfully")


@router.get("/{user_id}", response_model=UserEnvelope)
def get_user(user_id: str, db: Annotated[Session, Depends(get_db)]) -> UserEnvelope:
    user = user_service.get_user_by_id(db, _parse_user_id(user_id))
    if user is None:
        raise UserNotFoundError()
    return UserEnvelope(data=user, message="User fetched successfully")


@router.put("/{user_id}", response_model=UserEnvelope)
def update_user(
    user_id: str,
    db: Annotated[Session, Depends(get_db)],
    payload: Annotated[Any, Body()] = None,
) -> UserEnvelope:
    """
    Update any of name, email, role, password. An empty body is rejected with 400;
    an email owned by another user returns 409.
    """
    uid = _parse_user_id(user_id)
    body = validate_body(UserUpdate, payload, "Invalid update data")

    user = user_service.update_user(db, uid, body)
    if user is None:
        raise UserNotFoundError()
    return UserEnvelope(data=user, message="User updated successfully")


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(user_id: str, db: Annotated[Session, Depends(get_db)]) -> MessageResponse:
    if not user_service.delete_user(db, _parse_user_id(user_id)):
        raise UserNotFoundError()
    return MessageResponse(message="User deleted successfully")
