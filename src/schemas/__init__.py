"""Pydantic schemas."""
from schemas.bookmark import (
    BookmarkCreate,
    BookmarkListResponse,
    BookmarkResponse,
    SavedBookmark,
)

__all__ = ["BookmarkCreate", "BookmarkListResponse", "BookmarkResponse", "SavedBookmark"]
