"""Header value rendering shared by request and response combinators."""

from datetime import datetime, timezone
from email.utils import format_datetime, parsedate_to_datetime
from typing import Any


def format_http_date(value: datetime) -> str:
    """Render a datetime per RFC 1123, naive values are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return format_datetime(value.astimezone(timezone.utc), usegmt=True)


def parse_http_date(value: str) -> datetime:
    """
    Parse an RFC 1123 date into an aware datetime.

    Raises:
        ValueError: If the value is not a valid HTTP date
    """
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, IndexError) as err:
        raise ValueError(f"invalid HTTP date {value!r}") from err
    if parsed is None:
        raise ValueError(f"invalid HTTP date {value!r}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def render_header_value(value: Any) -> str:
    """
    Render str, int or datetime as a header value.

    Raises:
        TypeError: For any other type
    """
    if isinstance(value, str):
        return value
    if isinstance(value, datetime):
        return format_http_date(value)
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    raise TypeError(f"invalid header value type {type(value).__name__}")
