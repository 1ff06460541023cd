"""
Uniform JSON responses for the bookmark API.

Success bodies are the raw payload. Error bodies are always
{"error": <category>, "message": <text>, "statusCode": <code>}.
"""
import logging
from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from core.errors import ApiError, ErrorKind

logger = logging.getLogger(__name__)

# Attached to every response (see cors_headers_middleware in api.main)
CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type,X-API-Key,Authorization",
    "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
}

GENERIC_INTERNAL_MESSAGE = "Internal server error"

ERROR_STATUS: dict[ErrorKind, tuple[int, str]] = {
    ErrorKind.VALIDATION: (400, "BadRequest"),
    ErrorKind.AUTHENTICATION: (401, "Unauthorized"),
    ErrorKind.INTERNAL: (500, "InternalServerError"),
}


def success_response(status_code: int, data: Any) -> JSONResponse:
    """Serialize data (pydantic models by alias, None fields omitted)."""
    content = jsonable_encoder(data, by_alias=True, exclude_none=True)
    return JSONResponse(status_code=status_code, content=content, headers=CORS_HEADERS)


def error_response(status_code: int, error: str, message: str) -> JSONResponse:
    """Build the error envelope."""
    logger.warning("request_failed", extra={"status_code": status_code, "error": error})
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "message": message, "statusCode": status_code},
        headers=CORS_HEADERS,
    )


def ok(data: Any) -> JSONResponse:
    """200 OK."""
    return success_response(200, data)


def created(data: Any) -> JSONResponse:
    """201 Created."""
    return success_response(201, data)


def bad_request(message: str) -> JSONResponse:
    """400 Bad Request."""
    return error_response(400, "BadRequest", message)


def internal_server_error(message: str = GENERIC_INTERNAL_MESSAGE) -> JSONResponse:
    """500 Internal Server Error."""
    return error_response(500, "InternalServerError", message)


def api_error_response(error: ApiError) -> JSONResponse:
    """
    Map an ApiError to its envelope.

    Internal errors never expose their message; the detail stays in the logs.
    """
    status_code, category = ERROR_STATUS[error.kind]
    message = GENERIC_INTERNAL_MESSAGE if error.kind is ErrorKind.INTERNAL else error.message
    return error_response(status_code, category, message)
