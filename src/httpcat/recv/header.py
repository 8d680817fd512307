"""
Response header assertions and extraction.

    etag = Ref(str)
    GET(
        send.uri("https://example.com"),
        recv.status.ok,
        recv.content_type.json,
        recv.etag.to(etag),
        recv.header("X-Request-Id", "*"),
    )

A missing header is a NoMatch with ``actual=None``; a present header with
another value is a NoMatch carrying the actual value.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, Optional

from ..errors import NoMatch
from ..http.headers import parse_http_date, render_header_value
from ..pipeline.base import Arrow, Ref

if TYPE_CHECKING:
    from ..http.context import Context

WILDCARD = "*"


def match_header(ctx: "Context", name: str, value: str) -> Optional[Exception]:
    """Require header ``name`` to start with ``value``; ``*`` accepts any non-empty value."""
    err = ctx.unsafe()
    if err is not None:
        return err

    actual = ctx.response.headers.get(name, "")
    if not actual:
        return NoMatch(
            id="http.Header",
            diff=f"- {name}: {value}",
            protocol=name,
            expect=value,
            actual=None,
        )

    if value != WILDCARD and not actual.startswith(value):
        return NoMatch(
            id="http.Header",
            diff=f"+ {name}: {actual}\n- {name}: {value}",
            protocol=name,
            expect=value,
            actual=actual,
        )
    return None


def lift_header(ctx: "Context", name: str, ref: Ref) -> Optional[Exception]:
    """Copy header ``name`` into ``ref``, converted to ``ref.type`` (str, int or datetime)."""
    err = ctx.unsafe()
    if err is not None:
        return err

    actual = ctx.response.headers.get(name, "")
    if not actual:
        return NoMatch(
            id="http.Header",
            diff=f"- {name}: {WILDCARD}",
            protocol=name,
            expect=WILDCARD,
            actual=None,
        )

    kind = ref.type or str
    try:
        if kind is int:
            ref.value = int(actual)
        elif kind is datetime:
            ref.value = parse_http_date(actual)
        else:
            ref.value = actual
    except ValueError as err:
        return err
    return None


class HeaderOf:
    """Response header, matched with ``is_``/``any`` or lifted with ``to``."""

    def __init__(self, name: str) -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"

    def any(self, ctx: "Context") -> Optional[Exception]:
        return match_header(ctx, self.name, WILDCARD)

    def is_(self, value: Any) -> Arrow:
        """
        Require the header to match value (str prefix, int or datetime).

        Raises:
            TypeError: If value is not a str, int or datetime
        """
        expect = render_header_value(value)

        def arrow(ctx: "Context") -> Optional[Exception]:
            return match_header(ctx, self.name, expect)

        return arrow

    def to(self, ref: Ref) -> Arrow:
        """Lift the header value into ref."""

        def arrow(ctx: "Context") -> Optional[Exception]:
            return lift_header(ctx, self.name, ref)

        return arrow


class ContentHeader(HeaderOf):
    def application_json(self, ctx: "Context") -> Optional[Exception]:
        return match_header(ctx, self.name, "application/json")

    def json(self, ctx: "Context") -> Optional[Exception]:
        return match_header(ctx, self.name, "application/json")

    def form(self, ctx: "Context") -> Optional[Exception]:
        return match_header(ctx, self.name, "application/x-www-form-urlencoded")

    def text_plain(self, ctx: "Context") -> Optional[Exception]:
        return match_header(ctx, self.name, "text/plain")

    def text(self, ctx: "Context") -> Optional[Exception]:
        return match_header(ctx, self.name, "text/plain")

    def text_html(self, ctx: "Context") -> Optional[Exception]:
        return match_header(ctx, self.name, "text/html")

    def html(self, ctx: "Context") -> Optional[Exception]:
        return match_header(ctx, self.name, "text/html")


class ConnectionHeader(HeaderOf):
    def keep_alive(self, ctx: "Context") -> Optional[Exception]:
        return match_header(ctx, self.name, "keep-alive")

    def close(self, ctx: "Context") -> Optional[Exception]:
        return match_header(ctx, self.name, "close")


class TransferEncodingHeader(HeaderOf):
    def chunked(self, ctx: "Context") -> Optional[Exception]:
        return match_header(ctx, self.name, "chunked")

    def identity(self, ctx: "Context") -> Optional[Exception]:
        return match_header(ctx, self.name, "identity")


def header(name: str, value: Any) -> Arrow:
    """Match a header against a value, or lift it when value is a Ref."""
    if isinstance(value, Ref):
        return HeaderOf(name).to(value)
    return HeaderOf(name).is_(value)


# https://en.wikipedia.org/wiki/List_of_HTTP_header_fields#Response_fields
age = HeaderOf("Age")
cache_control = HeaderOf("Cache-Control")
connection = ConnectionHeader("Connection")
content_encoding = HeaderOf("Content-Encoding")
content_language = HeaderOf("Content-Language")
content_length = HeaderOf("Content-Length")
content_location = HeaderOf("Content-Location")
content_md5 = HeaderOf("Content-MD5")
content_range = HeaderOf("Content-Range")
content_type = ContentHeader("Content-Type")
date = HeaderOf("Date")
etag = HeaderOf("ETag")
expires = HeaderOf("Expires")
last_modified = HeaderOf("Last-Modified")
link = HeaderOf("Link")
location = HeaderOf("Location")
retry_after = HeaderOf("Retry-After")
server = HeaderOf("Server")
set_cookie = HeaderOf("Set-Cookie")
transfer_encoding = TransferEncodingHeader("Transfer-Encoding")
via = HeaderOf("Via")
