"""Saved URL endpoints: POST and GET /api/urls."""
import logging

from fastapi import APIRouter, Depends, Query, Request, Response
from fastapi.responses import JSONResponse

from api.responses import CORS_HEADERS, created, ok
from core.auth import verify_api_key
from core.config import Settings, get_settings
from db.dynamodb import BookmarkTable, get_bookmark_table
from schemas.bookmark import BookmarkListResponse, BookmarkResponse
from services import bookmark_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/urls", tags=["urls"])


@router.post(
    "",
    response_model=BookmarkResponse,
    status_code=201,
    dependencies=[Depends(verify_api_key)],
)
async def save_url(
    request: Request,
    table: BookmarkTable = Depends(get_bookmark_table),
) -> JSONResponse:
    """
    Save a new URL.

    id and savedAt are generated here; any client-supplied values are ignored.
    An invalid faviconUrl is dropped rather than rejecting the request.
    """
    logger.info("save_url_invoked", extra={"method": request.method, "path": request.url.path})
    data = bookmark_service.parse_save_request(await request.body())
    bookmark = bookmark_service.save_bookmark(table, data)
    return created(BookmarkResponse.model_validate(bookmark.model_dump()))


@router.get(
    "",
    response_model=BookmarkListResponse,
    dependencies=[Depends(verify_api_key)],
)
async def get_urls(
    request: Request,
    limit: str | None = Query(default=None, description="Page size, 1-100 (default 50)"),
    last_key: str | None = Query(
        default=None, alias="lastKey", description="Opaque token from the previous page",
    ),
    table: BookmarkTable = Depends(get_bookmark_table),
    settings: Settings = Depends(get_settings),
) -> JSONResponse:
    """
    List saved URLs, newest first within each page.

    limit is validated, not clamped. lastKey is only present in the response when
    hasMore is true.
    """
    logger.info("get_urls_invoked", extra={"method": request.method, "path": request.url.path})
    page_size, start_key = bookmark_service.parse_list_params(
        limit,
        last_key,
        default_limit=settings.default_page_size,
        max_limit=settings.max_page_size,
    )
    result = bookmark_service.list_bookmarks(table, page_size, start_key)
    logger.info("urls_listed", extra={"count": len(result.urls), "has_more": result.has_more})
    return ok(result)


@router.options("", include_in_schema=False)
async def preflight() -> Response:
    """CORS preflight; no authentication."""
    return Response(status_code=204, headers=CORS_HEADERS)
