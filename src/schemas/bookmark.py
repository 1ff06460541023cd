"""Pydantic schemas for the saved URL endpoints."""
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Length limits for stored fields
MAX_URL_LENGTH = 2048
MAX_TITLE_LENGTH = 500
MAX_FAVICON_URL_LENGTH = 2048


class _CamelModel(BaseModel):
    """Serializes with the camelCase names used on the wire and in the table."""

    model_config = ConfigDict(populate_by_name=True)


class BookmarkCreate(_CamelModel):
    """Validated body of POST /api/urls."""

    url: str
    title: str
    favicon_url: str | None = Field(default=None, alias="faviconUrl")


class SavedBookmark(_CamelModel):
    """
    Bookmark record as persisted in the table.

    Write-once: id and saved_at are assigned by the server at creation and never
    change. tags and notes are reserved and not written by the current handlers.
    """

    id: str
    url: str
    title: str
    favicon_url: str | None = Field(default=None, alias="faviconUrl")
    saved_at: int = Field(alias="savedAt")
    tags: list[str] | None = None
    notes: str | None = None

    def to_item(self) -> dict[str, Any]:
        """Table item with unset optional attributes omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)


class BookmarkResponse(_CamelModel):
    """Schema for the 201 response of POST /api/urls."""

    id: str
    url: str
    title: str
    favicon_url: str | None = Field(default=None, alias="faviconUrl")
    saved_at: int = Field(alias="savedAt")


class BookmarkListResponse(_CamelModel):
    """
    Schema for a page of GET /api/urls.

    last_key is present only when has_more is true.
    """

    urls: list[SavedBookmark]
    has_more: bool = Field(alias="hasMore")
    last_key: str | None = Field(default=None, alias="lastKey")
