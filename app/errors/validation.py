"""Custom validation error handling for FastAPI."""

from typing import Any, cast

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_400_BAD_REQUEST

from app.errors.base import BaseAppError
from app.monitoring import get_logger
from app.utils.helpers import host

logger = get_logger(__name__)


class ValidationError(BaseAppError):
    """Malformed input, reported field by field."""

    code = "ValidationError"

    def __init__(
        self,
        detail: str = "Validation failed",
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(detail=detail, status_code=HTTP_400_BAD_REQUEST)
        self.errors = errors or []

    def to_content(self) -> dict[str, Any]:
        content = super().to_content()
        content["errors"] = self.errors
        return content


def format_errors(errors: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Flatten pydantic error dicts into `{field, message, type}` entries."""
    formatted_errors = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", [])]
        if loc and loc[0] in {"body", "query", "path", "cookie", "header"}:
            loc = loc[1:]
        formatted_errors.append(
            {
                "field": ".".join(loc),
                "message": error.get("msg", "Invalid value"),
                "type": error.get("type", "validation_error"),
            },
        )
    return formatted_errors


async def validation_exception_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """
    Handle request validation errors with the standard envelope.

    Args:
        request: The incoming request.
        exc: The RequestValidationError exception.

    Returns:
        ORJSONResponse with a 400 status and formatted errors.
    """
    exec_error = cast(RequestValidationError, exc)
    error = ValidationError(errors=format_errors(list(exec_error.errors())))

    logger.warning(
        f"Validation error for ip: {host(request)} at endpoint {request.url.path}",
        errors=error.errors,
    )

    return ORJSONResponse(status_code=error.status_code, content=error.to_content())
