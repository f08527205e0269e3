"""Core configuration, database session, errors and session security."""

from acquisitions.core.config import Settings, get_settings, settings
from acquisitions.core.database import SessionLocal, get_db
from acquisitions.core.errors import ErrorKind, ServiceError

__all__ = ["ErrorKind", "ServiceError", "SessionLocal", "Settings", "get_db", "get_settings", "settings"]
