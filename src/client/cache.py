"""Local cache of the first page of saved URLs."""
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from schemas.bookmark import SavedBookmark

logger = logging.getLogger(__name__)

# Keys of the persisted cache document
CACHED_URLS_KEY = "cached_urls"
LAST_SYNC_KEY = "last_sync"


@dataclass
class CacheEntry:
    """A cached first page and the time (epoch ms) it was fetched."""

    urls: list[SavedBookmark] = field(default_factory=list)
    fetched_at_ms: int = 0

    def is_fresh(self, now_ms: int, window_ms: int) -> bool:
        """True while the entry is younger than window_ms."""
        return now_ms - self.fetched_at_ms < window_ms


class CacheStore(Protocol):
    """Storage for a single CacheEntry."""

    def load(self) -> CacheEntry | None:
        """Return the stored entry, or None if nothing is cached."""
        ...

    def save(self, entry: CacheEntry) -> None:
        """Replace the stored entry."""
        ...


class MemoryCacheStore:
    """In-process cache store."""

    def __init__(self, entry: CacheEntry | None = None) -> None:
        self.entry = entry

    def load(self) -> CacheEntry | None:
        return self.entry

    def save(self, entry: CacheEntry) -> None:
        self.entry = entry


class JsonFileCacheStore:
    """
    Cache store backed by a JSON file.

    The document holds `cached_urls` (list of bookmarks in wire format) and
    `last_sync` (epoch ms). Read errors propagate; callers treat them as a miss.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> CacheEntry | None:
        if not self.path.exists():
            return None
        document = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(document, dict):
            raise ValueError(f"Unexpected cache document in {self.path}")
        cached_urls = document.get(CACHED_URLS_KEY)
        if cached_urls is None:
            return None
        last_sync = document.get(LAST_SYNC_KEY) or 0
        if not isinstance(cached_urls, list):
            raise ValueError(f"{CACHED_URLS_KEY} is not a list in {self.path}")
        if isinstance(last_sync, bool) or not isinstance(last_sync, int):
            raise ValueError(f"{LAST_SYNC_KEY} is not a timestamp in {self.path}")
        return CacheEntry(
            urls=[SavedBookmark.model_validate(item) for item in cached_urls],
            fetched_at_ms=int(last_sync),
        )

    def save(self, entry: CacheEntry) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        document = {
            CACHED_URLS_KEY: [
                item.model_dump(by_alias=True, exclude_none=True) for item in entry.urls
            ],
            LAST_SYNC_KEY: entry.fetched_at_ms,
        }
        self.path.write_text(json.dumps(document), encoding="utf-8")
        logger.debug("cache_saved", extra={"count": len(entry.urls)})
