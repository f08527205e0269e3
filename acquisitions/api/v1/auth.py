"""Signup, signin and signout. Successful signup/signin set the session cookie."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Request, Response, status
from sqlalchemy.orm import Session

from acquisitions.core.config import get_settings
from acquisitions.core.cookies import clear_cookie, get_cookie, set_cookie
from acquisitions.core.database import get_db
from acquisitions.core.errors import InvalidCredentialsError, InvalidTokenError
from acquisitions.core.security import verify_token
from acquisitions.schemas.auth import SigninRequest, SignupRequest
from acquisitions.schemas.user import MessageResponse, UserEnvelope
from acquisitions.schemas.validation import validate_body
from acquisitions.services import auth_service

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/signup", response_model=UserEnvelope, status_code=status.HTTP_201_CREATED)
def signup(
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    payload: Annotated[Any, Body()] = None,
) -> UserEnvelope:
    """
    Create an account and start a session.

    Body: {name, email, password, role?}. Sets the auth cookie on success.
    """
    body = validate_body(SignupRequest, payload, "Invalid signup data")
    logger.info("Signup data validated: email=%s role=%s", body.email, body.role or "user")

    user = auth_service.signup(db, body.email, body.name, body.password, body.role)
    token = auth_service.create_session_token(user)
    set_cookie(response, get_settings().AUTH_COOKIE_NAME, token)
    return UserEnvelope(data=user, message="User signed up successfully")


@router.post("/signin", response_model=UserEnvelope)
def signin(
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    payload: Annotated[Any, Body()] = None,
) -> UserEnvelope:
    """Authenticate with email and password. Sets the auth cookie on success."""
    body = validate_body(SigninRequest, payload, "Invalid signin data")

    user = auth_service.sign_in_user(db, body.email, body.password)
    if user is None:
        raise InvalidCredentialsError()
    token = auth_service.create_session_token(user)
    set_cookie(response, get_settings().AUTH_COOKIE_NAME, token)
    return UserEnvelope(data=user, message="User signed in successfully")


@router.post("/signout", response_model=MessageResponse)
def signout(request: Request, response: Response) -> MessageResponse:
    """Clear the auth cookie. Tokens are stateless; nothing is revoked server-side."""
    cookie_name = get_settings().AUTH_COOKIE_NAME
    token = get_cookie(request, cookie_name)
    if token:
        try:
            logger.info("User signed out: id=%s", verify_token(token).id)
        except InvalidTokenError:
            logger.info("Signout with an invalid or expired session token")
    clear_cookie(response, cookie_name)
    return MessageResponse(message="User signed out successfully")
