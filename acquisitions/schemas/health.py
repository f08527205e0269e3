"""Pydantic schemas for health and discovery responses."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response body for the health check endpoint."""

    status: Literal["ok"] = Field(default="ok", description="Service status")
    environment: str = Field(description="Current app environment (e.g. dev, prod)")
    database: Literal["connected", "disconnected"] | None = Field(
        default=None,
        description="Database connectivity status when check is performed",
    )
    timestamp: datetime = Field(description="Server time (UTC) when the check ran")
    uptime: float = Field(description="Seconds since the process loaded the API")


class ApiInfoResponse(BaseModel):
    message: str
    version: str
