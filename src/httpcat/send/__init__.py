"""
Request combinators.

Each combinator is an arrow that writes to the context request and never
touches the response.
"""

from .body import send
from .header import (
    ConnectionHeader,
    ContentHeader,
    ContentLengthHeader,
    HeaderOf,
    TransferEncodingHeader,
    accept,
    accept_charset,
    accept_encoding,
    accept_language,
    authorization,
    cache_control,
    connection,
    content_encoding,
    content_length,
    content_type,
    cookie,
    date,
    from_,
    header,
    host,
    if_match,
    if_modified_since,
    if_none_match,
    if_range,
    if_unmodified_since,
    origin,
    range_,
    referer,
    transfer_encoding,
    upgrade,
    user_agent,
)
from .uri import Authority, Segment, build_uri, method, param, params, uri

__all__ = [
    "Authority",
    "ConnectionHeader",
    "ContentHeader",
    "ContentLengthHeader",
    "HeaderOf",
    "Segment",
    "TransferEncodingHeader",
    "accept",
    "accept_charset",
    "accept_encoding",
    "accept_language",
    "authorization",
    "build_uri",
    "cache_control",
    "connection",
    "content_encoding",
    "content_length",
    "content_type",
    "cookie",
    "date",
    "from_",
    "header",
    "host",
    "if_match",
    "if_modified_since",
    "if_none_match",
    "if_range",
    "if_unmodified_since",
    "method",
    "origin",
    "param",
    "params",
    "range_",
    "referer",
    "send",
    "transfer_encoding",
    "upgrade",
    "uri",
    "user_agent",
]
