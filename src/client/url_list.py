"""
State and loading logic for the "Recently Saved" list.

Cache-first: a fresh cached first page is shown immediately while a refresh runs
in the background; otherwise the first page is fetched before returning.
"""
import asyncio
import logging
import time
from collections.abc import Callable

from client.api_client import ApiClient, ApiClientError
from client.cache import CacheEntry, CacheStore
from schemas.bookmark import SavedBookmark

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20
CACHE_DURATION_MS = 5 * 60 * 1000
LOAD_FAILED_MESSAGE = "Failed to load URLs"


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


class UrlListController:
    """
    Holds the list shown to the user and loads pages into it.

    Busy flags (is_loading, is_loading_more) guard against duplicate submissions
    from repeated user actions. In-flight requests are not cancelled: a
    background refresh racing a load_more may leave last_key pointing at either
    response.

    Args:
        client: API client used for fetches.
        store: Where the first page is cached between runs.
        page_size: Page size requested from the API.
        cache_duration_ms: Freshness window for the cached first page.
        clock: Returns the current time in epoch ms.
    """

    def __init__(
        self,
        client: ApiClient,
        store: CacheStore,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        cache_duration_ms: int = CACHE_DURATION_MS,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self.client = client
        self.store = store
        self.page_size = page_size
        self.cache_duration_ms = cache_duration_ms
        self.clock = clock

        self.urls: list[SavedBookmark] = []
        self.is_loading = True
        self.is_loading_more = False
        self.error: str | None = None
        self.has_more = False
        self.last_key: str | None = None
        self.refresh_task: asyncio.Task[None] | None = None

    @property
    def configuration_required(self) -> bool:
        """True when the client has not been configured; no fetch is attempted."""
        return not self.client.is_configured()

    async def initialize(self) -> None:
        """
        Show cached data if fresh, then refresh.

        With a fresh cache the refresh is started as a background task
        (self.refresh_task) and this returns immediately; otherwise it waits for
        the fetch.
        """
        if self.configuration_required:
            self.is_loading = False
            return

        if self.load_cached():
            self.refresh_task = asyncio.create_task(self.load())
        else:
            await self.load()

    def load_cached(self) -> bool:
        """Populate urls from a fresh cache entry. Returns True if it was used."""
        try:
            entry = self.store.load()
        except (OSError, ValueError):
            logger.exception("cache_load_failed")
            return False

        if entry is None or not entry.is_fresh(self.clock(), self.cache_duration_ms):
            return False

        self.urls = list(entry.urls)
        self.is_loading = False
        return True

    async def load(self, load_more: bool = False) -> None:
        """
        Fetch a page.

        A full load replaces the list and caches it as the first page; load_more
        appends the next page.
        """
        if self.configuration_required:
            self.is_loading = False
            return

        if load_more:
            self.is_loading_more = True
        else:
            self.is_loading = True
        self.error = None

        try:
            response = await self.client.get_urls(
                self.page_size,
                self.last_key if load_more else None,
            )
            if load_more:
                self.urls = [*self.urls, *response.urls]
            else:
                self.urls = list(response.urls)
                self._save_cache(response.urls)
            self.has_more = response.has_more
            self.last_key = response.last_key
        except ApiClientError as e:
            self.error = e.message or LOAD_FAILED_MESSAGE
            logger.warning("url_list_load_failed", extra={"reason": self.error})
        except ValueError:
            # Unparseable 2xx body
            self.error = LOAD_FAILED_MESSAGE
            logger.exception("url_list_load_failed")
        finally:
            self.is_loading = False
            self.is_loading_more = False

    async def load_more(self) -> None:
        """Append the next page; no-op while loading or when there is nothing more."""
        if self.is_loading_more or not self.has_more:
            return
        await self.load(load_more=True)

    async def retry(self) -> None:
        """Reload the first page after an error ("Try Again")."""
        await self.load()

    def _save_cache(self, urls: list[SavedBookmark]) -> None:
        try:
            self.store.save(CacheEntry(urls=list(urls), fetched_at_ms=self.clock()))
        except OSError:
            logger.exception("cache_save_failed")
