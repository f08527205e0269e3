"""Single place where service outcomes become HTTP error responses.

Status codes are chosen from the error's ``kind``, never from its message.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from acquisitions.core.errors import ErrorKind, ServiceError
from acquisitions.schemas.user import ErrorResponse
from acquisitions.schemas.validation import format_validation_errors

logger = logging.getLogger(__name__)

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _error_response(status_code: int, message: str, details: list[dict] | None = None) -> JSONResponse:
    body = ErrorResponse(message=message, details=details).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body)


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Map a typed service error to its status; the cause is logged, never returned."""
    status_code = STATUS_BY_KIND.get(exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= 500:
        logger.error(
            "%s %s failed: %s (cause: %r)",
            request.method,
            request.url.path,
            exc.message,
            exc.cause,
        )
    return _error_response(status_code, exc.message, exc.details)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed JSON or missing body: 400 with field-level details instead of FastAPI's 422."""
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        "Invalid request data",
        format_validation_errors(exc.errors()),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all: log the traceback server-side, return a generic message."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
