"""Saving the page the user is currently looking at."""
import logging
from dataclasses import dataclass

from client.api_client import ApiClient, ApiClientError
from schemas.bookmark import BookmarkResponse

logger = logging.getLogger(__name__)

# Browser-internal pages that cannot be bookmarked
INTERNAL_PAGE_PREFIXES = ("chrome://", "edge://", "about:")


@dataclass
class Tab:
    """The active browser tab as reported by the browser."""

    url: str | None
    title: str | None
    fav_icon_url: str | None = None


class PageSaver:
    """
    Saves the current tab, ignoring repeated clicks while a save is in flight.

    Args:
        client: API client used for the save.
    """

    def __init__(self, client: ApiClient) -> None:
        self.client = client
        self.is_saving = False

    async def save(self, tab: Tab) -> BookmarkResponse | None:
        """
        Save the tab's URL, title and favicon.

        Returns None (without a request) if a save is already running.

        Raises:
            ApiClientError: If the tab cannot be saved or the request fails.
        """
        if self.is_saving:
            return None

        self.is_saving = True
        try:
            if not tab.url or not tab.title:
                raise ApiClientError("Could not get current tab information")
            if tab.url.startswith(INTERNAL_PAGE_PREFIXES):
                raise ApiClientError("Cannot save browser internal pages")

            saved = await self.client.save_url(tab.url, tab.title, tab.fav_icon_url)
            logger.info("page_saved", extra={"bookmark_id": saved.id})
            return saved
        finally:
            self.is_saving = False
