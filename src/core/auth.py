"""Shared-secret authentication for the bookmark API."""
import logging
import secrets
from collections.abc import Mapping

from fastapi import Depends, Request

from core.config import Settings, get_settings
from core.errors import AuthenticationError, ConfigurationError

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-API-Key"


def authenticate(headers: Mapping[str, str], settings: Settings) -> None:
    """
    Check the API key header against the configured secret.

    Fails closed: a missing secret on the server is a configuration error (500),
    never a pass-through.

    Args:
        headers: Request headers. Lookups on Starlette headers are case-insensitive.
        settings: Application settings holding the expected key.

    Raises:
        ConfigurationError: If no API key is configured.
        AuthenticationError: If the header is missing or does not match.
    """
    if not settings.is_api_key_configured:
        logger.error("api_key_not_configured")
        raise ConfigurationError("Server configuration error")

    api_key = headers.get(API_KEY_HEADER) or headers.get(API_KEY_HEADER.lower())
    if not api_key:
        raise AuthenticationError("Missing API key")

    if not secrets.compare_digest(api_key.encode("utf-8"), settings.api_key.encode("utf-8")):
        raise AuthenticationError("Invalid API key")


async def verify_api_key(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> None:
    """Dependency that rejects requests without a valid X-API-Key header."""
    authenticate(request.headers, settings)
