"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

from dotenv import load_dotenv

load_dotenv()

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from acquisitions.api.errors import register_exception_handlers
from acquisitions.api.v1 import router as v1_router
from acquisitions.core.config import settings
from acquisitions.core.logging_config import configure_logging
from acquisitions.schemas.health import ApiInfoResponse

API_VERSION = "1.0.0"

configure_logging(settings)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Acquisitions API",
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.APP_ENV == "dev" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(v1_router, prefix=settings.API_V1_PREFIX)


@app.get("/", response_class=PlainTextResponse)
def root() -> str:
    """Root route; minimal payload for discovery."""
    logger.debug("Root endpoint called")
    return "Hello, from acquisitions api!"


@app.get("/api", response_model=ApiInfoResponse)
def api_info() -> ApiInfoResponse:
    return ApiInfoResponse(message="Welcome to the Acquisitions API", version=API_VERSION)
