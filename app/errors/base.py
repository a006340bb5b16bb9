from collections.abc import Awaitable, Callable
from typing import Any

from fastapi import Request
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR
from structlog.stdlib import BoundLogger

from app.configs.settings import DEFAULT_ERROR_MESSAGE
from app.utils.helpers import host


class BaseAppError(Exception):
    """Base exception class for application errors."""

    code: str = "InternalError"

    def __init__(
        self,
        detail: str = DEFAULT_ERROR_MESSAGE,
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code

    def __str__(self) -> str:
        return self.detail

    def to_content(self) -> dict[str, Any]:
        """Render the error as a response envelope."""
        return {"success": False, "error": self.detail, "code": self.code}


class InternalError(BaseAppError):
    """Unexpected failure. The message never carries internal detail."""

    def __init__(self) -> None:
        super().__init__(DEFAULT_ERROR_MESSAGE, HTTP_500_INTERNAL_SERVER_ERROR)


def create_exception_handler(
    logger: BoundLogger,
) -> Callable[[Request, Exception], Awaitable[ORJSONResponse]]:
    """
    Create a standardized exception handler for the application.

    Args:
        logger: Logger instance to use for logging exceptions.

    Returns:
        A callable exception handler.
    """

    async def handler(request: Request, exc: Exception) -> ORJSONResponse:
        if not isinstance(exc, BaseAppError):
            exc = InternalError()

        logger.warning(
            f"{exc.detail} for ip: {host(request)} for endpoint {request.url.path}",
            code=exc.code,
            status_code=exc.status_code,
        )
        return ORJSONResponse(content=exc.to_content(), status_code=exc.status_code)

    return handler


def create_unhandled_exception_handler(
    logger: BoundLogger,
) -> Callable[[Request, Exception], Awaitable[ORJSONResponse]]:
    """Create the last-resort handler turning any uncaught failure into a 500."""

    async def handler(request: Request, exc: Exception) -> ORJSONResponse:
        logger.exception(
            f"Unhandled error for ip: {host(request)} for endpoint {request.url.path}",
            exc_info=exc,
        )
        error = InternalError()
        return ORJSONResponse(content=error.to_content(), status_code=error.status_code)

    return handler
