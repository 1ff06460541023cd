"""Shared fixtures: in-memory bookmark table and an in-process API client."""
from collections.abc import AsyncGenerator
from decimal import Decimal
from typing import Any

import pytest
from botocore.exceptions import ClientError
from httpx import ASGITransport, AsyncClient

from api.main import app
from core.config import Settings, get_settings
from db.dynamodb import BookmarkTable, get_bookmark_table

TEST_API_KEY = "test-api-key"


class FakeDynamoTable:
    """
    In-memory stand-in for a boto3 DynamoDB Table resource.

    Scans return items in insertion order (not savedAt order) and numbers as
    Decimal, like DynamoDB. Set `error` to make the next call raise ClientError.
    """

    def __init__(self) -> None:
        self.items: list[dict[str, Any]] = []
        self.scan_calls: list[dict[str, Any]] = []
        self.put_calls: list[dict[str, Any]] = []
        self.error: str | None = None

    def _maybe_fail(self, operation: str) -> None:
        if self.error:
            raise ClientError(
                {"Error": {"Code": self.error, "Message": f"{self.error} raised"}},
                operation,
            )

    def put_item(self, Item: dict[str, Any]) -> dict[str, Any]:  # noqa: N803
        self.put_calls.append(Item)
        self._maybe_fail("PutItem")
        stored = {k: Decimal(v) if isinstance(v, int) else v for k, v in Item.items()}
        self.items.append(stored)
        return {}

    def scan(self, **params: Any) -> dict[str, Any]:
        self.scan_calls.append(params)
        self._maybe_fail("Scan")
        start = 0
        start_key = params.get("ExclusiveStartKey")
        if start_key:
            ids = [item["id"] for item in self.items]
            start = ids.index(start_key["id"]) + 1
        limit = params.get("Limit", len(self.items))
        page = self.items[start:start + limit]
        result: dict[str, Any] = {"Items": [dict(item) for item in page]}
        if start + limit < len(self.items):
            result["LastEvaluatedKey"] = {"id": page[-1]["id"]}
        return result


@pytest.fixture
def fake_table() -> FakeDynamoTable:
    """Empty in-memory table."""
    return FakeDynamoTable()


@pytest.fixture
def settings() -> Settings:
    """Settings with a known API key and no .env lookup."""
    return Settings(_env_file=None, api_key=TEST_API_KEY)


@pytest.fixture
async def client(
    fake_table: FakeDynamoTable,
    settings: Settings,
) -> AsyncGenerator[AsyncClient]:
    """HTTP client bound to the app with the in-memory table and test settings."""
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_bookmark_table] = lambda: BookmarkTable(fake_table)
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        headers={"X-API-Key": TEST_API_KEY},
    ) as test_client:
        yield test_client
    app.dependency_overrides.clear()
