# app/main.py

"""Quillpost Backend - blogging REST API with categories, posts and comments."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.responses import Response
from starlette.status import HTTP_503_SERVICE_UNAVAILABLE
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from app.configs import settings
from app.db import ping_db
from app.errors import (
    AuthenticationError,
    AuthorizationError,
    BaseAppError,
    DatabaseError,
    auth_exception_handler,
    create_exception_handler,
    create_unhandled_exception_handler,
    database_exception_handler,
    validation_exception_handler,
)
from app.managers import limiter, rate_limit_exceeded_handler
from app.middleware import (
    LoggingMiddleware,
    SecurityHeadersMiddleware,
    configure_cors,
    lifespan,
)
from app.monitoring import get_logger
from app.routes import auth_router, category_router, post_router
from app.utils.helpers import today_str

API_PREFIX = "/api"

logger = get_logger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Blogging API: authentication, categories, posts and comments",
    version="1.0.0",
    lifespan=lifespan,
    default_response_class=ORJSONResponse,
    swagger_ui_parameters={
        "docExpansion": "none",
        "operationsSorter": "method",
    },
)

configure_cors(app)

app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(LoggingMiddleware)
# Trust X-Forwarded-* from the reverse proxy
app.add_middleware(ProxyHeadersMiddleware, trusted_hosts="*")


routes = [auth_router, category_router, post_router]

_ = [app.include_router(router, prefix=API_PREFIX) for router in routes]

errors = [
    (AuthenticationError, auth_exception_handler),
    (AuthorizationError, auth_exception_handler),
    (DatabaseError, database_exception_handler),
    (BaseAppError, create_exception_handler(logger)),
    (RequestValidationError, validation_exception_handler),
    (RateLimitExceeded, rate_limit_exceeded_handler),
    (Exception, create_unhandled_exception_handler(logger)),
]

_ = [app.add_exception_handler(exc_type, handler) for exc_type, handler in errors]

app.state.limiter = limiter


@app.get(
    "/health",
    tags=["🩺 Health"],
    summary="Health check endpoint",
    response_class=ORJSONResponse,
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "version": "1.0.0",
                        "status": "ok",
                        "timestamp": "2025-01-01 00:00:00",
                        "database": "reachable",
                    },
                },
            },
        },
        503: {
            "description": "Database unreachable",
            "content": {
                "application/json": {
                    "example": {
                        "version": "1.0.0",
                        "status": "degraded",
                        "timestamp": "2025-01-01 00:00:00",
                        "database": "unreachable",
                    },
                },
            },
        },
    },
    operation_id="health_check",
)
@limiter.exempt
async def health_check(request: Request) -> ORJSONResponse:
    """
    Liveness and database reachability.

    Parameters
    ----------
    request : Request
        Current request context.

    Returns
    -------
    ORJSONResponse
        200 when the database answers, 503 otherwise.
    """
    database_ok = await ping_db()
    content = {
        "version": app.version,
        "status": "ok" if database_ok else "degraded",
        "timestamp": today_str(),
        "database": "reachable" if database_ok else "unreachable",
    }
    if database_ok:
        return ORJSONResponse(content)
    return ORJSONResponse(content, status_code=HTTP_503_SERVICE_UNAVAILABLE)


@app.get("/", tags=["🏠 Root"], summary="Root access", operation_id="root_access")
@limiter.limit("30/minute")
async def root(request: Request, response: Response) -> dict[str, str]:
    return {"message": f"Welcome to {settings.APP_NAME}", "docs": "/docs"}


if __name__ == "__main__":
    from uvicorn import run

    run(
        app,
        host="127.0.0.1",
        port=8000,
        log_level="info",
    )
