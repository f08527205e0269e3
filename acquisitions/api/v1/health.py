"""Liveness endpoint: environment, database reachability, clock and process uptime."""

import logging
import time
from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from acquisitions.core.config import get_settings
from acquisitions.core.database import check_db_connected, get_db
from acquisitions.schemas.health import HealthResponse

router = APIRouter()
logger = logging.getLogger(__name__)

_STARTED_AT = time.monotonic()


@router.get("", response_model=HealthResponse)
def get_health(db: Annotated[Session, Depends(get_db)]) -> HealthResponse:
    logger.debug("Health check endpoint called")
    return HealthResponse(
        status="ok",
        environment=get_settings().APP_ENV,
        database="connected" if check_db_connected(db) else "disconnected",
        timestamp=datetime.now(UTC),
        uptime=round(time.monotonic() - _STARTED_AT, 3),
    )
