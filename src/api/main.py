"""FastAPI application entry point."""
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.responses import (
    CORS_HEADERS,
    api_error_response,
    bad_request,
    error_response,
    internal_server_error,
)
from api.routers import health, urls
from core.config import get_settings
from core.errors import ApiError, ErrorKind
from core.logging import configure_logging

logger = logging.getLogger(__name__)

HTTP_ERROR_CATEGORIES: dict[int, str] = {
    400: "BadRequest",
    401: "Unauthorized",
    404: "NotFound",
    405: "MethodNotAllowed",
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:  # noqa: ARG001
    """Configure logging and warn early about a missing API key."""
    settings = get_settings()
    configure_logging(settings.log_level)
    if not settings.is_api_key_configured:
        logger.error("api_key_not_configured")
    logger.info("api_started", extra={"table_name": settings.table_name})
    yield


app = FastAPI(
    title="Recollect API",
    description="Save and list bookmarks captured by the Recollect browser extension.",
    version="0.1.0",
    lifespan=lifespan,
)


@app.middleware("http")
async def cors_headers_middleware(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Attach the fixed CORS headers to every response."""
    response = await call_next(request)
    for name, value in CORS_HEADERS.items():
        response.headers.setdefault(name, value)
    return response


@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError) -> Response:
    """Validation (400), authentication (401) and internal (500) errors."""
    if exc.kind is ErrorKind.INTERNAL:
        logger.error(
            "request_internal_error",
            extra={"path": request.url.path, "error_type": type(exc).__name__, "detail": exc.message},
            exc_info=exc,
        )
    return api_error_response(exc)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(
    request: Request,  # noqa: ARG001
    exc: RequestValidationError,
) -> Response:
    """Framework-level parse failures use the same 400 envelope."""
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return bad_request(str(message))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
    request: Request,  # noqa: ARG001
    exc: StarletteHTTPException,
) -> Response:
    """Routing errors (unknown path, wrong method) in the error envelope."""
    category = HTTP_ERROR_CATEGORIES.get(exc.status_code, "Error")
    if exc.status_code >= 500:
        return internal_server_error()
    return error_response(exc.status_code, category, str(exc.detail))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> Response:  # noqa: ARG001
    """Anything unexpected: log with traceback, return a generic 500."""
    logger.exception("request_unhandled_error", extra={"path": request.url.path})
    return internal_server_error()


app.include_router(health.router)
app.include_router(urls.router)
