"""Persistence for user records: CRUD over the users table with email uniqueness."""

import logging
from datetime import UTC, datetime
from typing import Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from acquisitions.core.errors import DuplicateEmailError, StoreError
from acquisitions.models import User

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({"name", "email", "role", "password_hash"})

# users.id is a 32-bit INTEGER; ids outside this range cannot name a row.
MAX_USER_ID = 2**31 - 1


def _is_storable_id(user_id: int) -> bool:
    return 1 <= user_id <= MAX_USER_ID


class UserStore:
    """
    Thin repository over a request-scoped Session.

    Reads return None for a missing row. Database failures roll the session back
    and raise StoreError; the raw cause is logged here and never formatted for clients.
    The unique index on users.email is the final arbiter for concurrent writers:
    a violation surfaces as DuplicateEmailError.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def _failure(self, operation: str, exc: SQLAlchemyError) -> StoreError:
        self.session.rollback()
        logger.error("User store %s failed: %s", operation, exc)
        return StoreError(cause=exc)

    def _duplicate(self, operation: str, exc: IntegrityError) -> DuplicateEmailError:
        # email is the only unique column; other constraints are satisfied by construction.
        self.session.rollback()
        logger.warning("User store %s rejected by unique email index", operation)
        return DuplicateEmailError(cause=exc)

    def find_by_email(self, email: str) -> User | None:
        try:
            return self.session.query(User).filter(User.email == email).first()
        except SQLAlchemyError as e:
            raise self._failure("find_by_email", e) from e

    def find_by_id(self, user_id: int) -> User | None:
        if not _is_storable_id(user_id):
            return None
        try:
            return self.session.get(User, user_id)
        except SQLAlchemyError as e:
            raise self._failure("find_by_id", e) from e

    def list_all(self) -> list[User]:
        try:
            return self.session.query(User).order_by(User.id).all()
        except SQLAlchemyError as e:
            raise self._failure("list_all", e) from e

    def insert(self, *, email: str, name: str, password_hash: str, role: str) -> User:
        """Insert a user and return the persisted row (id and timestamps populated)."""
        user = User(email=email, name=name, password_hash=password_hash, role=role)
        try:
            self.session.add(user)
            self.session.commit()
            self.session.refresh(user)
        except IntegrityError as e:
            raise self._duplicate("insert", e) from e
        except SQLAlchemyError as e:
            raise self._failure("insert", e) from e
        return user

    def update_by_id(self, user_id: int, patch: dict[str, Any]) -> User | None:
        """Apply a sparse patch and refresh updated_at. Returns None if the id does not exist."""
        unknown = set(patch) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields not updatable: {sorted(unknown)}")
        if not _is_storable_id(user_id):
            return None
        try:
            user = self.session.get(User, user_id)
            if user is None:
                return None
            for field, value in patch.items():
                setattr(user, field, value)
            user.updated_at = datetime.now(UTC)
            self.session.commit()
            self.session.refresh(user)
        except IntegrityError as e:
            raise self._duplicate("update_by_id", e) from e
        except SQLAlchemyError as e:
            raise self._failure("update_by_id", e) from e
        return user

    def delete_by_id(self, user_id: int) -> bool:
        """Permanently delete a user. Returns False if the id does not exist."""
        if not _is_storable_id(user_id):
            return False
        try:
            user = self.session.get(User, user_id)
            if user is None:
                return False
            self.session.delete(user)
            self.session.commit()
        except SQLAlchemyError as e:
            raise self._failure("delete_by_id", e) from e
        return True
