"""
Response combinators.

Each combinator sends the request on first use (once per context) and then
asserts on, or extracts from, the response.
"""

from .body import body, decode_body, discard, expect, match, raw, recv
from .check import Value, check, defined, value
from .code import Status, code, status
from .header import (
    ConnectionHeader,
    ContentHeader,
    HeaderOf,
    TransferEncodingHeader,
    age,
    cache_control,
    connection,
    content_encoding,
    content_language,
    content_length,
    content_location,
    content_md5,
    content_range,
    content_type,
    date,
    etag,
    expires,
    header,
    last_modified,
    link,
    location,
    retry_after,
    server,
    set_cookie,
    transfer_encoding,
    via,
)
from .seq import Seq, seq

__all__ = [
    "ConnectionHeader",
    "ContentHeader",
    "HeaderOf",
    "Seq",
    "Status",
    "TransferEncodingHeader",
    "Value",
    "age",
    "body",
    "cache_control",
    "check",
    "code",
    "connection",
    "content_encoding",
    "content_language",
    "content_length",
    "content_location",
    "content_md5",
    "content_range",
    "content_type",
    "date",
    "decode_body",
    "defined",
    "discard",
    "etag",
    "expect",
    "expires",
    "header",
    "last_modified",
    "link",
    "location",
    "match",
    "raw",
    "recv",
    "retry_after",
    "seq",
    "server",
    "set_cookie",
    "status",
    "transfer_encoding",
    "value",
    "via",
]
