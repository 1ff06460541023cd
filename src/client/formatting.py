"""Display helpers for saved URL list items."""
from urllib.parse import urlparse

SECOND_MS = 1000
MINUTE_MS = 60 * SECOND_MS
HOUR_MS = 60 * MINUTE_MS
DAY_MS = 24 * HOUR_MS


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'} ago"


def relative_time(saved_at_ms: int, now_ms: int) -> str:
    """Human-friendly age of a bookmark, e.g. '3 hours ago' or 'yesterday'."""
    diff = now_ms - saved_at_ms
    seconds = diff // SECOND_MS
    minutes = diff // MINUTE_MS
    hours = diff // HOUR_MS
    days = diff // DAY_MS

    if seconds < 60:
        return "just now"
    if minutes < 60:
        return _plural(minutes, "minute")
    if hours < 24:
        return _plural(hours, "hour")
    if days == 1:
        return "yesterday"
    if days < 7:
        return f"{days} days ago"
    if days < 30:
        return _plural(days // 7, "week")
    return _plural(days // 30, "month")


def display_domain(url: str) -> str:
    """Hostname without a leading 'www.'; the raw string if it cannot be parsed."""
    try:
        hostname = urlparse(url).hostname
    except ValueError:
        return url
    if not hostname:
        return url
    return hostname.removeprefix("www.")
