"""
Access to the saved URL table in DynamoDB.

Only two operations are used: an unconditional put of a new record and a
bounded scan with an optional continuation key.
"""
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import ValidationError as PydanticValidationError

from core.config import Settings, get_settings
from core.errors import StorageError
from core.pagination import PaginationToken, encode_token
from schemas.bookmark import SavedBookmark

logger = logging.getLogger(__name__)


@dataclass
class ScanPage:
    """One page of scan results, sorted newest first."""

    items: list[SavedBookmark]
    has_more: bool
    next_token: str | None = None


def from_dynamodb(value: Any) -> Any:
    """Convert DynamoDB Decimal numbers (recursively) back to int or float."""
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, dict):
        return {k: from_dynamodb(v) for k, v in value.items()}
    if isinstance(value, list):
        return [from_dynamodb(v) for v in value]
    return value


class BookmarkTable:
    """
    Thin wrapper around a boto3 DynamoDB Table resource.

    Args:
        table: Anything exposing the boto3 Table put_item/scan interface.
    """

    def __init__(self, table: Any) -> None:
        self._table = table

    def put(self, bookmark: SavedBookmark) -> SavedBookmark:
        """
        Insert a new record.

        No existence check: records are only ever created with a fresh UUID.

        Raises:
            StorageError: If the put fails.
        """
        logger.info("saving_bookmark", extra={"bookmark_id": bookmark.id})
        try:
            self._table.put_item(Item=bookmark.to_item())
        except (BotoCoreError, ClientError) as e:
            logger.exception("bookmark_put_failed", extra={"bookmark_id": bookmark.id})
            raise StorageError(f"Failed to save URL: {e}") from e
        return bookmark

    def scan(self, limit: int, start_key: PaginationToken | None = None) -> ScanPage:
        """
        Fetch up to `limit` records, resuming after `start_key` if given.

        DynamoDB scans are unordered, so the page is sorted by savedAt descending
        after it is read. The continuation key describes a position in the
        unsorted scan order; pages are each sorted but not globally ordered.

        Raises:
            StorageError: If the scan fails or returns a record that does not
                match the bookmark shape.
        """
        params: dict[str, Any] = {"Limit": limit}
        if start_key:
            params["ExclusiveStartKey"] = start_key

        try:
            result = self._table.scan(**params)
        except (BotoCoreError, ClientError) as e:
            logger.exception("bookmark_scan_failed", extra={"limit": limit})
            raise StorageError(f"Failed to fetch URLs: {e}") from e

        try:
            items = [
                SavedBookmark.model_validate(from_dynamodb(item))
                for item in result.get("Items", [])
            ]
        except PydanticValidationError as e:
            logger.exception("bookmark_scan_malformed_item")
            raise StorageError("Failed to fetch URLs: malformed record") from e

        items.sort(key=lambda item: item.saved_at, reverse=True)

        last_evaluated_key = result.get("LastEvaluatedKey")
        next_token = encode_token(from_dynamodb(last_evaluated_key)) if last_evaluated_key else None

        logger.info(
            "bookmarks_scanned",
            extra={"count": len(items), "has_more": next_token is not None},
        )
        return ScanPage(items=items, has_more=next_token is not None, next_token=next_token)


def create_bookmark_table(settings: Settings) -> BookmarkTable:
    """Build a BookmarkTable for the configured table, region and endpoint."""
    resource = boto3.resource(
        "dynamodb",
        region_name=settings.aws_region,
        endpoint_url=settings.dynamodb_endpoint_url,
    )
    return BookmarkTable(resource.Table(settings.table_name))


# Global table state using a container to avoid global statement
class _TableState:
    """Container for the process-wide BookmarkTable."""

    table: BookmarkTable | None = None


_state = _TableState()


def get_bookmark_table() -> BookmarkTable:
    """Get the process-wide BookmarkTable, creating it on first use."""
    if _state.table is None:
        _state.table = create_bookmark_table(get_settings())
    return _state.table
