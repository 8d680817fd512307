"""
Request headers.

Typed header objects expose ``set(value)``; enumerated headers also expose
their common values as bound methods, usable directly as arrows:

    POST(
        send.uri("https://example.com/users"),
        send.accept.json,
        send.content_type.json,
        send.if_modified_since.set(last_seen),
        send.send(user),
    )
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from ..errors import UndefinedRequest
from ..http.headers import render_header_value
from ..pipeline.base import Arrow, Ref

if TYPE_CHECKING:
    from ..http.context import Context


class HeaderOf:
    """Request header with free-form values (str, int, datetime or Ref)."""

    def __init__(self, name: str) -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"

    def _put(self, ctx: "Context", value: str) -> Optional[Exception]:
        if ctx.request is None:
            return UndefinedRequest(f"header {self.name}")
        ctx.request.headers[self.name] = value
        return None

    def set(self, value: Any) -> Arrow:
        """
        Set the header value.

        A Ref is read when the arrow is evaluated, other values are checked
        right away.

        Raises:
            TypeError: If value is not a str, int or datetime
        """
        if not isinstance(value, Ref):
            rendered = render_header_value(value)

            def arrow(ctx: "Context") -> Optional[Exception]:
                return self._put(ctx, rendered)

            return arrow

        def lazy(ctx: "Context") -> Optional[Exception]:
            try:
                rendered = render_header_value(value.value)
            except TypeError as err:
                return err
            return self._put(ctx, rendered)

        return lazy


class ContentHeader(HeaderOf):
    """Content negotiation headers: Accept, Content-Type."""

    def application_json(self, ctx: "Context") -> Optional[Exception]:
        return self._put(ctx, "application/json")

    def json(self, ctx: "Context") -> Optional[Exception]:
        return self._put(ctx, "application/json")

    def form(self, ctx: "Context") -> Optional[Exception]:
        return self._put(ctx, "application/x-www-form-urlencoded")

    def text_plain(self, ctx: "Context") -> Optional[Exception]:
        return self._put(ctx, "text/plain")

    def text(self, ctx: "Context") -> Optional[Exception]:
        return self._put(ctx, "text/plain")

    def text_html(self, ctx: "Context") -> Optional[Exception]:
        return self._put(ctx, "text/html")

    def html(self, ctx: "Context") -> Optional[Exception]:
        return self._put(ctx, "text/html")


class ConnectionHeader(HeaderOf):
    def keep_alive(self, ctx: "Context") -> Optional[Exception]:
        return self._put(ctx, "keep-alive")

    def close(self, ctx: "Context") -> Optional[Exception]:
        return self._put(ctx, "close")


class TransferEncodingHeader(HeaderOf):
    """Transfer-Encoding; ``chunked`` makes ``send`` stream the body."""

    def chunked(self, ctx: "Context") -> Optional[Exception]:
        return self._put(ctx, "chunked")

    def identity(self, ctx: "Context") -> Optional[Exception]:
        return self._put(ctx, "identity")


class ContentLengthHeader(HeaderOf):
    def set(self, value: Any) -> Arrow:
        """Set Content-Length, only non-negative integers are accepted."""
        if not isinstance(value, Ref) and (not isinstance(value, int) or isinstance(value, bool) or value < 0):
            raise TypeError(f"invalid Content-Length {value!r}")
        return super().set(value)


def header(name: str, value: Any) -> Arrow:
    """Set an arbitrary request header."""
    return HeaderOf(name).set(value)


# https://en.wikipedia.org/wiki/List_of_HTTP_header_fields#Request_fields
accept = ContentHeader("Accept")
accept_charset = HeaderOf("Accept-Charset")
accept_encoding = HeaderOf("Accept-Encoding")
accept_language = HeaderOf("Accept-Language")
authorization = HeaderOf("Authorization")
cache_control = HeaderOf("Cache-Control")
connection = ConnectionHeader("Connection")
content_encoding = HeaderOf("Content-Encoding")
content_length = ContentLengthHeader("Content-Length")
content_type = ContentHeader("Content-Type")
cookie = HeaderOf("Cookie")
date = HeaderOf("Date")
from_ = HeaderOf("From")
host = HeaderOf("Host")
if_match = HeaderOf("If-Match")
if_modified_since = HeaderOf("If-Modified-Since")
if_none_match = HeaderOf("If-None-Match")
if_range = HeaderOf("If-Range")
if_unmodified_since = HeaderOf("If-Unmodified-Since")
origin = HeaderOf("Origin")
range_ = HeaderOf("Range")
referer = HeaderOf("Referer")
transfer_encoding = TransferEncodingHeader("Transfer-Encoding")
upgrade = HeaderOf("Upgrade")
user_agent = HeaderOf("User-Agent")
