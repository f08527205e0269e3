"""Password hashing and JWT session token issuance/verification."""

import logging
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import bcrypt
import jwt
from pydantic import ValidationError

from acquisitions.core.config import get_settings
from acquisitions.core.errors import ComparisonError, HashingError, InvalidTokenError
from acquisitions.schemas.auth import TokenPayload

if TYPE_CHECKING:
    from acquisitions.core.config import Settings

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of the password.
BCRYPT_MAX_BYTES = 72

# Used only outside prod when JWT_SECRET is not configured.
DEV_FALLBACK_SECRET = "acquisitions-dev-only-signing-secret-change-me"

_fallback_warned = False


def hash_password(plain_password: str, settings: "Settings | None" = None) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    settings = settings or get_settings()
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    try:
        hashed = bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS))
    except (ValueError, TypeError) as e:
        logger.error("Error hashing password: %s", type(e).__name__)
        raise HashingError(cause=e) from e
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """
    Verify a plain password against a stored hash.

    Returns False on mismatch. Raises ComparisonError if the stored hash is malformed.
    """
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError) as e:
        logger.error("Error comparing passwords: %s", type(e).__name__)
        raise ComparisonError(cause=e) from e


def get_signing_secret(settings: "Settings | None" = None) -> str:
    """Return JWT_SECRET, or the development fallback when it is unset outside prod."""
    global _fallback_warned
    settings = settings or get_settings()
    if settings.JWT_SECRET is not None:
        return settings.JWT_SECRET.get_secret_value()
    if settings.is_production:
        # Settings refuses to load in prod without a secret; guard direct callers too.
        raise RuntimeError("JWT_SECRET must be set when APP_ENV=prod")
    if not _fallback_warned:
        logger.warning(
            "JWT_SECRET is not set; using the development-only signing secret (APP_ENV=%s)",
            settings.APP_ENV,
        )
        _fallback_warned = True
    return DEV_FALLBACK_SECRET


def issue_token(
    payload: TokenPayload,
    settings: "Settings | None" = None,
    expires_in: timedelta | None = None,
) -> str:
    """Create a signed JWT carrying id, email, role plus iat and exp."""
    settings = settings or get_settings()
    now = datetime.now(UTC)
    lifetime = (
        expires_in if expires_in is not None else timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    )
    claims: dict[str, Any] = {
        "id": payload.id,
        "email": payload.email,
        "role": payload.role,
        "iat": now,
        "exp": now + lifetime,
    }
    return jwt.encode(
        claims,
        get_signing_secret(settings),
        algorithm=settings.JWT_ALGORITHM,
    )


def verify_token(token: str, settings: "Settings | None" = None) -> TokenPayload:
    """
    Decode and validate a session token; return its identity claims.

    Raises InvalidTokenError on bad signature, malformed payload or expiry.
    A token whose exp equals the current time is already expired.
    """
    settings = settings or get_settings()
    try:
        claims = jwt.decode(
            token,
            get_signing_secret(settings),
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["exp", "iat"]},
        )
    except jwt.PyJWTError as e:
        logger.info("Token verification failed: %s", type(e).__name__)
        raise InvalidTokenError(cause=e) from e
    try:
        return TokenPayload.model_validate(claims)
    except ValidationError as e:
        logger.info("Token payload malformed")
        raise InvalidTokenError(cause=e) from e
