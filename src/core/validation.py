"""
Input validation helpers.

Every helper raises ValidationError with a client-facing message; callers let it
propagate so the whole request fails with 400.
"""
import math
import re
from typing import Any
from urllib.parse import urlparse

from core.errors import ValidationError

ALLOWED_SCHEMES = ("http", "https")

# Code points a URL host may not contain
FORBIDDEN_HOST_CHARS = re.compile(r"[\x00-\x20\x7f#%/<>?@\[\\\]^|]")


def validate_url(value: Any, field_name: str = "url") -> str:
    """
    Validate that value is an absolute http(s) URL.

    Args:
        value: The raw value from the request.
        field_name: Field name used in error messages.

    Returns:
        The value unchanged.

    Raises:
        ValidationError: If value is not a string, cannot be parsed as an absolute
            URL, or uses a scheme other than http/https.
    """
    if not value or not isinstance(value, str):
        raise ValidationError(f'Field "{field_name}" is required and must be a string')

    try:
        parsed = urlparse(value.strip())
        # Accessing .port validates the netloc (raises on e.g. "host:notaport")
        _ = parsed.port
    except ValueError as e:
        raise ValidationError(f'Field "{field_name}" is not a valid URL') from e

    if not parsed.scheme:
        raise ValidationError(f'Field "{field_name}" is not a valid URL')

    if parsed.scheme.lower() not in ALLOWED_SCHEMES:
        raise ValidationError(f'Field "{field_name}" must use HTTP or HTTPS protocol')

    # "http:foo" parses with a scheme but no host
    if not parsed.hostname or FORBIDDEN_HOST_CHARS.search(parsed.hostname):
        raise ValidationError(f'Field "{field_name}" is not a valid URL')

    return value


def validate_required_string(
    value: Any,
    field_name: str,
    *,
    required: bool = True,
    min_length: int | None = None,
    max_length: int | None = None,
) -> str:
    """
    Validate a string field and return it with surrounding whitespace removed.

    An absent optional value returns an empty string.
    """
    if value is None or value == "":
        if required:
            raise ValidationError(f'Field "{field_name}" is required')
        return ""

    if not isinstance(value, str):
        raise ValidationError(f'Field "{field_name}" must be a string')

    trimmed = value.strip()

    if required and not trimmed:
        raise ValidationError(f'Field "{field_name}" cannot be empty')

    if min_length is not None and len(trimmed) < min_length:
        raise ValidationError(f'Field "{field_name}" must be at least {min_length} characters')

    if max_length is not None and len(trimmed) > max_length:
        raise ValidationError(f'Field "{field_name}" cannot exceed {max_length} characters')

    return trimmed


def validate_bounded_number(  # noqa: PLR0912
    value: Any,
    field_name: str,
    *,
    default: float | None = None,
    min_value: float | None = None,
    max_value: float | None = None,
    integer: bool = False,
    label: str = "Field",
) -> float | int:
    """
    Parse a numeric value (string or number) and check its bounds.

    Out-of-range values are rejected, never clamped.

    Args:
        value: Raw value; strings are parsed.
        field_name: Name used in error messages.
        default: Returned when value is missing or empty. If None, the value is required.
        min_value: Inclusive lower bound.
        max_value: Inclusive upper bound.
        integer: Reject values with a fractional part and return an int.
        label: Prefix for error messages ("Field" for body values, "Parameter" for
            query parameters).

    Raises:
        ValidationError: On missing, non-numeric, non-integer or out-of-range values.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        if default is None:
            raise ValidationError(f'{label} "{field_name}" is required')
        return default

    if isinstance(value, bool):
        raise ValidationError(f'{label} "{field_name}" must be a valid number')

    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError as e:
            raise ValidationError(f'{label} "{field_name}" must be a valid number') from e
    elif isinstance(value, int | float):
        number = float(value)
    else:
        raise ValidationError(f'{label} "{field_name}" must be a valid number')

    if not math.isfinite(number):
        raise ValidationError(f'{label} "{field_name}" must be a valid number')

    if integer and not number.is_integer():
        raise ValidationError(f'{label} "{field_name}" must be an integer')

    if min_value is not None and number < min_value:
        raise ValidationError(f'{label} "{field_name}" must be at least {min_value:g}')

    if max_value is not None and number > max_value:
        raise ValidationError(f'{label} "{field_name}" cannot exceed {max_value:g}')

    return int(number) if integer else number


def sanitize_string(value: str) -> str:
    """Strip null bytes and surrounding whitespace."""
    return value.replace("\0", "").strip()
