"""Shared helpers: isolated in-memory databases and a TestClient wired to them."""

from collections.abc import Generator

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from acquisitions.core.database import get_db
from acquisitions.models import Base


def make_session_factory() -> sessionmaker:
    """Fresh in-memory SQLite database with the schema created; one per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def make_client(session_factory: sessionmaker) -> TestClient:
    """TestClient whose get_db dependency yields sessions from session_factory."""
    from acquisitions.main import app

    def override_get_db() -> Generator[Session, None, None]:
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


def clear_overrides() -> None:
    from acquisitions.main import app

    app.dependency_overrides.clear()
