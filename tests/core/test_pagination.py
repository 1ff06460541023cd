"""Tests for pagination token encoding."""
import base64
import json

import pytest

from core.errors import ValidationError
from core.pagination import decode_token, encode_token


class TestTokenRoundTrip:
    """decode(encode(key)) returns the key."""

    @pytest.mark.parametrize(
        "key",
        [
            {"id": "0b6f3a52-4d3c-4a0e-9d5e-2f1c7b8e9a10"},
            {"id": "abc", "savedAt": 1_700_000_000_000},
            {"id": "ünïcödé"},
        ],
    )
    def test__round_trip(self, key: dict) -> None:
        """Well-formed keys survive a round trip."""
        assert decode_token(encode_token(key)) == key

    def test__encode_token__is_url_safe(self) -> None:
        """Encoded tokens contain no '+' or '/'."""
        # '?>' encodes to '/' and '>>' to '+' in standard base64
        token = encode_token({"id": "??>>??>>"})
        assert "+" not in token
        assert "/" not in token


class TestDecodeToken:
    """Tests for decode_token error handling."""

    def test__decode_token__accepts_standard_base64(self) -> None:
        """Tokens in the standard base64 alphabet are accepted."""
        key = {"id": "??>>??>>"}
        token = base64.b64encode(json.dumps(key).encode()).decode()
        assert decode_token(token) == key

    def test__decode_token__accepts_missing_padding(self) -> None:
        """Padding may be stripped by intermediaries."""
        token = encode_token({"id": "a"}).rstrip("=")
        assert decode_token(token) == {"id": "a"}

    @pytest.mark.parametrize(
        "token",
        [
            "!!!not-base64!!!",
            "a",
            base64.b64encode(b"not json").decode(),
            base64.b64encode(b"[1, 2, 3]").decode(),
            base64.b64encode(b'{"other": "x"}').decode(),
            base64.b64encode(b'{"id": 5}').decode(),
            base64.b64encode(b'{"id": "x", "savedAt": "yesterday"}').decode(),
            base64.b64encode(b'{"id": "x", "extra": 1}').decode(),
            base64.b64encode(b"\xff\xfe").decode(),
        ],
    )
    def test__decode_token__rejects_malformed(self, token: str) -> None:
        """Malformed tokens are a client error with a fixed message."""
        with pytest.raises(ValidationError, match="^Invalid pagination token$"):
            decode_token(token)

    def test__decode_token__rejects_deeply_nested_json(self) -> None:
        """Nesting deep enough to exhaust the parser is still a client error."""
        token = base64.urlsafe_b64encode(b"[" * 50_000).decode()
        with pytest.raises(ValidationError, match="^Invalid pagination token$"):
            decode_token(token)
