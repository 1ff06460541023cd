"""
Opaque pagination tokens.

A token is the table's continuation key ({"id": ..., optionally "savedAt": ...})
serialized to JSON and then to URL-safe base64. Clients never look inside it.
"""
import base64
import binascii
import json
import logging
from typing import Any

from core.errors import ValidationError

logger = logging.getLogger(__name__)

INVALID_TOKEN_MESSAGE = "Invalid pagination token"

PaginationToken = dict[str, Any]


def encode_token(key: PaginationToken) -> str:
    """Encode a continuation key as an opaque URL-safe string."""
    raw = json.dumps(key, separators=(",", ":"), sort_keys=True).encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii")


def decode_token(token: str) -> PaginationToken:
    """
    Decode a token produced by encode_token.

    Standard base64 ('+', '/') is accepted as well as the URL-safe alphabet, and
    missing padding is tolerated.

    Raises:
        ValidationError: If the token is not base64-encoded JSON with a string "id"
            (and, when present, an integer "savedAt").
    """
    try:
        normalized = token.strip().replace("+", "-").replace("/", "_")
        normalized += "=" * (-len(normalized) % 4)
        raw = base64.b64decode(normalized, altchars=b"-_", validate=True)
        key = json.loads(raw.decode("utf-8"))
    except (binascii.Error, UnicodeDecodeError, ValueError, RecursionError) as e:
        logger.warning("pagination_token_invalid", extra={"reason": str(e)})
        raise ValidationError(INVALID_TOKEN_MESSAGE) from e

    if not _has_expected_shape(key):
        logger.warning("pagination_token_invalid", extra={"reason": "unexpected shape"})
        raise ValidationError(INVALID_TOKEN_MESSAGE)

    return key


def _has_expected_shape(key: Any) -> bool:
    if not isinstance(key, dict) or not key:
        return False
    if not isinstance(key.get("id"), str) or not key["id"]:
        return False
    if "savedAt" in key:
        saved_at = key["savedAt"]
        if isinstance(saved_at, bool) or not isinstance(saved_at, int):
            return False
    return set(key) <= {"id", "savedAt"}
