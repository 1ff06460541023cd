"""
Command-line front end for Recollect.

    recollect save https://example.com --title "Example"
    recollect list --limit 20 --pages 2
"""
import argparse
import asyncio
import logging
import sys

from client.api_client import ApiClient, ApiClientError
from client.cache import JsonFileCacheStore
from client.config import ClientSettings, get_client_settings
from client.formatting import display_domain, relative_time
from client.save import PageSaver, Tab
from client.url_list import UrlListController, now_ms

logger = logging.getLogger(__name__)

SAVE_FAILED_MESSAGE = "Failed to save URL"

CONFIGURATION_REQUIRED = (
    "Configuration Required\n"
    "Set RECOLLECT_API_URL and RECOLLECT_API_KEY to your deployed API URL and key."
)


def build_parser() -> argparse.ArgumentParser:
    """Argument parser for the `save` and `list` commands."""
    parser = argparse.ArgumentParser(prog="recollect", description="Save and list bookmarks.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    save_parser = subparsers.add_parser("save", help="Save a URL")
    save_parser.add_argument("url")
    save_parser.add_argument("--title", required=True)
    save_parser.add_argument("--favicon", default=None, help="Favicon URL")

    list_parser = subparsers.add_parser("list", help="List recently saved URLs")
    list_parser.add_argument("--limit", type=int, default=None, help="Page size")
    list_parser.add_argument(
        "--pages", type=int, default=1, help="Number of pages to load (Load More)",
    )
    return parser


def build_client(settings: ClientSettings) -> ApiClient:
    """ApiClient from client settings."""
    return ApiClient(settings.api_url, settings.api_key, timeout=settings.timeout)


async def run_save(args: argparse.Namespace, settings: ClientSettings) -> int:
    """Save a URL and print the result."""
    saver = PageSaver(build_client(settings))
    try:
        saved = await saver.save(Tab(url=args.url, title=args.title, fav_icon_url=args.favicon))
    except ApiClientError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    except ValueError as e:
        # 2xx body that is not a bookmark
        logger.debug("save_response_invalid", extra={"reason": str(e)})
        print(f"Error: {SAVE_FAILED_MESSAGE}", file=sys.stderr)
        return 1
    if saved is not None:
        print(f"Page saved successfully! ({saved.id})")
    return 0


async def run_list(args: argparse.Namespace, settings: ClientSettings) -> int:
    """Print the first page (cache-first) plus any extra pages requested."""
    controller = UrlListController(
        build_client(settings),
        JsonFileCacheStore(settings.cache_path),
        page_size=args.limit or settings.page_size,
        cache_duration_ms=settings.cache_duration_ms,
    )
    await controller.initialize()
    if controller.refresh_task is not None:
        # Wait for the background refresh so has_more/last_key are known
        await controller.refresh_task

    for _ in range(args.pages - 1):
        if not controller.has_more:
            break
        await controller.load_more()

    if controller.error:
        print(f"Error: {controller.error}", file=sys.stderr)
        return 1

    if not controller.urls:
        print("No saved URLs yet")
        return 0

    now = now_ms()
    for item in controller.urls:
        print(f"{item.title}\n  {display_domain(item.url)} - {relative_time(item.saved_at, now)}")
        print(f"  {item.url}")
    if controller.has_more:
        print("(more available: use --pages)")
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    settings = get_client_settings()
    if not build_client(settings).is_configured():
        print(CONFIGURATION_REQUIRED, file=sys.stderr)
        return 2

    if args.command == "save":
        return asyncio.run(run_save(args, settings))
    return asyncio.run(run_list(args, settings))
