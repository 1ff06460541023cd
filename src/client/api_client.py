"""HTTP client for the Recollect API (save and list)."""
import logging
from typing import Any

import httpx

from client.config import API_KEY_PLACEHOLDER, API_URL_PLACEHOLDER
from schemas.bookmark import BookmarkListResponse, BookmarkResponse

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0
NOT_CONFIGURED_MESSAGE = (
    "API not configured. Set RECOLLECT_API_URL and RECOLLECT_API_KEY "
    "to your deployed API URL and key."
)


class ApiClientError(Exception):
    """Raised when a request fails; message is suitable for display."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ConfigurationRequiredError(ApiClientError):
    """Raised when a call is attempted before the API URL and key are set."""

    def __init__(self) -> None:
        super().__init__(NOT_CONFIGURED_MESSAGE)


class ApiClient:
    """
    Async client mirroring the two server operations.

    Every request carries the X-API-Key header. Non-2xx responses raise
    ApiClientError with the server's `message` when the body is the error envelope.

    Args:
        base_url: API root, e.g. https://xxxx.execute-api.us-east-1.amazonaws.com/Prod
        api_key: Shared secret.
        timeout: Request timeout in seconds.
        transport: Optional httpx transport (used by tests).
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self._timeout = timeout
        self._transport = transport

    def is_configured(self) -> bool:
        """True only when both the URL and the key differ from the placeholders."""
        return (
            self.base_url != API_URL_PLACEHOLDER
            and self.api_key != API_KEY_PLACEHOLDER
            and len(self.base_url) > 0
            and len(self.api_key) > 0
        )

    async def save_url(
        self,
        url: str,
        title: str,
        favicon_url: str | None = None,
    ) -> BookmarkResponse:
        """POST /api/urls. faviconUrl is only sent when provided."""
        if not self.is_configured():
            raise ConfigurationRequiredError

        body: dict[str, Any] = {"url": url, "title": title}
        if favicon_url:
            body["faviconUrl"] = favicon_url

        response = await self._request("POST", json=body, fallback="Failed to save URL")
        return BookmarkResponse.model_validate(response.json())

    async def get_urls(
        self,
        limit: int | None = None,
        last_key: str | None = None,
    ) -> BookmarkListResponse:
        """GET /api/urls with optional limit and continuation token."""
        if not self.is_configured():
            raise ConfigurationRequiredError

        params: dict[str, str] = {}
        if limit:
            params["limit"] = str(limit)
        if last_key:
            params["lastKey"] = last_key

        response = await self._request("GET", params=params, fallback="Failed to fetch URLs")
        return BookmarkListResponse.model_validate(response.json())

    async def _request(
        self,
        method: str,
        *,
        fallback: str,
        json: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
    ) -> httpx.Response:
        headers = {"X-API-Key": self.api_key}
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.request(
                    method,
                    f"{self.base_url}/api/urls",
                    headers=headers,
                    json=json,
                    params=params,
                )
        except httpx.HTTPError as e:
            logger.warning("api_request_failed", extra={"method": method, "reason": str(e)})
            raise ApiClientError(str(e) or fallback) from e

        if not response.is_success:
            raise ApiClientError(_error_message(response, fallback), response.status_code)
        return response


def _error_message(response: httpx.Response, fallback: str) -> str:
    """Extract `message` from the error envelope, else the fallback."""
    try:
        body = response.json()
    except ValueError:
        return fallback
    if isinstance(body, dict) and isinstance(body.get("message"), str) and body["message"]:
        return body["message"]
    return fallback
