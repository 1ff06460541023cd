"""Service layer for saving and listing bookmarks."""
import json
import logging
import time
import uuid
from typing import Any

from core.errors import ValidationError
from core.pagination import PaginationToken, decode_token
from core.validation import (
    sanitize_string,
    validate_bounded_number,
    validate_required_string,
    validate_url,
)
from db.dynamodb import BookmarkTable
from schemas.bookmark import (
    MAX_FAVICON_URL_LENGTH,
    MAX_TITLE_LENGTH,
    MAX_URL_LENGTH,
    BookmarkCreate,
    BookmarkListResponse,
    SavedBookmark,
)

logger = logging.getLogger(__name__)


def parse_save_request(body: bytes | str | None) -> BookmarkCreate:
    """
    Parse and validate the body of a save request.

    Check order: body present, JSON object, url and title are strings, url is
    http(s), faviconUrl is a string. An invalid favicon URL is dropped with a
    warning; every other failure rejects the request. Length limits apply to the
    trimmed values.

    Raises:
        ValidationError: On any rejected field.
    """
    if not body:
        raise ValidationError("Request body is required")

    try:
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as e:
        raise ValidationError("Invalid JSON in request body") from e

    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")

    url = data.get("url")
    title = data.get("title")
    favicon_url = data.get("faviconUrl")

    if not url or not isinstance(url, str):
        raise ValidationError('Field "url" is required and must be a string')
    if not title or not isinstance(title, str):
        raise ValidationError('Field "title" is required and must be a string')

    url = sanitize_string(url)
    validate_url(url)

    if favicon_url is not None and not isinstance(favicon_url, str):
        raise ValidationError('Field "faviconUrl" must be a string')

    favicon_url = sanitize_string(favicon_url) if favicon_url else None
    if favicon_url:
        try:
            validate_url(favicon_url, "faviconUrl")
        except ValidationError:
            logger.warning("invalid_favicon_dropped", extra={"favicon_url": favicon_url[:200]})
            favicon_url = None

    # Whitespace-only titles fail here with "cannot be empty"
    title = validate_required_string(title.replace("\0", ""), "title")

    if len(url) > MAX_URL_LENGTH:
        raise ValidationError(f"URL exceeds maximum length of {MAX_URL_LENGTH} characters")
    if len(title) > MAX_TITLE_LENGTH:
        raise ValidationError(f"Title exceeds maximum length of {MAX_TITLE_LENGTH} characters")
    if favicon_url and len(favicon_url) > MAX_FAVICON_URL_LENGTH:
        raise ValidationError(
            f"Favicon URL exceeds maximum length of {MAX_FAVICON_URL_LENGTH} characters",
        )

    return BookmarkCreate(url=url, title=title, favicon_url=favicon_url or None)


def save_bookmark(
    table: BookmarkTable,
    data: BookmarkCreate,
    now_ms: int | None = None,
) -> SavedBookmark:
    """
    Create a new bookmark with a server-generated id and savedAt.

    Saving the same URL twice creates two independent records.
    """
    bookmark = SavedBookmark(
        id=str(uuid.uuid4()),
        url=data.url,
        title=data.title,
        favicon_url=data.favicon_url,
        saved_at=now_ms if now_ms is not None else int(time.time() * 1000),
    )
    table.put(bookmark)
    logger.info("bookmark_saved", extra={"bookmark_id": bookmark.id})
    return bookmark


def parse_list_params(
    limit: Any,
    last_key: str | None,
    *,
    default_limit: int = 50,
    max_limit: int = 100,
) -> tuple[int, PaginationToken | None]:
    """
    Validate the limit and lastKey query parameters.

    limit must be an integer in [1, max_limit]; out-of-range values are rejected,
    not clamped. An absent or empty limit uses default_limit.

    Raises:
        ValidationError: On a bad limit or an undecodable lastKey.
    """
    parsed_limit = validate_bounded_number(
        limit,
        "limit",
        default=default_limit,
        min_value=1,
        max_value=max_limit,
        integer=True,
        label="Parameter",
    )
    start_key = decode_token(last_key) if last_key else None
    return int(parsed_limit), start_key


def list_bookmarks(
    table: BookmarkTable,
    limit: int,
    start_key: PaginationToken | None = None,
) -> BookmarkListResponse:
    """Fetch one page of bookmarks, newest first within the page."""
    page = table.scan(limit, start_key)
    return BookmarkListResponse(
        urls=page.items,
        has_more=page.has_more,
        last_key=page.next_token if page.has_more else None,
    )
