"""Explicit request-body validation: typed DTO or a structured list of field errors."""

from collections.abc import Iterable
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from acquisitions.core.errors import RequestValidationFailed

ModelT = TypeVar("ModelT", bound=BaseModel)


def format_validation_errors(errors: Iterable[Any]) -> list[dict[str, str]]:
    """Flatten pydantic error dicts into [{field, message}]; model-level errors use 'body'."""
    details = []
    for err in errors:
        loc = ".".join(str(part) for part in err.get("loc", ()))
        details.append({"field": loc or "body", "message": err.get("msg", "Invalid value")})
    return details


def validate_body(model: type[ModelT], payload: Any, message: str) -> ModelT:
    """Validate a decoded JSON payload against ``model``; raise RequestValidationFailed on error."""
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise RequestValidationFailed(
            message, cause=e, details=format_validation_errors(e.errors())
        ) from e
