"""Request target: method, URI templating and query parameters."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional, Sequence, Union
from urllib.parse import ParseResult, SplitResult, parse_qsl, quote, urlencode, urlsplit, urlunsplit

from ..errors import CodecError, NotSupported, UndefinedRequest
from ..http.codec import flatten
from ..http.context import Request
from ..pipeline.base import Arrow, Ref
from ..pipeline.base import set_method as method  # re-exported as send.method

if TYPE_CHECKING:
    from ..http.context import Context

logger = logging.getLogger(__name__)

SUPPORTED_SCHEMES = ("http", "https")

# Characters allowed unescaped inside a single path segment
SEGMENT_SAFE = "$&+:=@"


class Segment(str):
    """Path fragment inserted into a URI template without escaping."""


class Authority(str):
    """Host (and optional port) inserted into a URI template without escaping."""


def _segment(arg: Any) -> str:
    if isinstance(arg, Ref):
        arg = arg.value
    if isinstance(arg, (Segment, Authority)):
        return str(arg)
    if isinstance(arg, (ParseResult, SplitResult)):
        return arg.geturl().rstrip("/")
    if isinstance(arg, bool):
        return quote(str(arg).lower(), safe=SEGMENT_SAFE)
    if isinstance(arg, int):
        return str(arg)
    return quote(str(arg), safe=SEGMENT_SAFE)


def build_uri(template: str, args: Sequence[Any], defaults: Sequence[Any] = ()) -> str:
    """
    Render a positional ``str.format`` template into a URI.

    Plain strings are escaped as a path segment; Segment and Authority values
    go in verbatim; None is replaced by the default at the same position.

    Raises:
        IndexError: If the template references a missing argument
    """
    values = []
    for i, arg in enumerate(args):
        if isinstance(arg, Ref) and arg.value is None:
            arg = None
        if arg is None:
            arg = defaults[i] if i < len(defaults) else None
        values.append("" if arg is None else _segment(arg))
    return template.format(*values)


def uri(template: str, *args: Any, defaults: Sequence[Any] = ()) -> Arrow:
    """
    Define the request target.

    A relative URI is resolved against the stack's default host. Any
    previous response on the context is drained first, so one context can
    chain several requests.

    Example:
        send.uri("https://{}/users/{}", send.Authority("example.com"), user_id)
        send.uri("/search/{}", Segment("a/b"))
    """

    def arrow(ctx: "Context") -> Optional[Exception]:
        try:
            url = build_uri(template, args, defaults) if args else template
        except (IndexError, KeyError, ValueError) as err:
            return err

        if not url.startswith("http") and ctx.host:
            url = ctx.host.rstrip("/") + url

        scheme = urlsplit(url).scheme.lower()
        if scheme not in SUPPORTED_SCHEMES:
            return NotSupported(url)

        err = ctx.reset()
        if err is not None:
            return err

        ctx.request = Request(method=ctx.method, url=url)
        return None

    return arrow


def _append_query(url: str, pairs: list[tuple[str, str]]) -> str:
    parts = urlsplit(url)
    query = parse_qsl(parts.query, keep_blank_values=True)
    query.extend(pairs)
    query.sort(key=lambda kv: kv[0])
    return urlunsplit(parts._replace(query=urlencode(query)))


def params(query: Any) -> Arrow:
    """
    Append a record as query parameters.

    The record (dict, dataclass or pydantic model) must flatten to scalars;
    None fields are omitted.
    """

    def arrow(ctx: "Context") -> Optional[Exception]:
        if ctx.request is None:
            return UndefinedRequest("params")

        value = query.value if isinstance(query, Ref) else query
        try:
            flat = flatten(value)
        except CodecError as err:
            return err

        ctx.request.url = _append_query(ctx.request.url, list(flat.items()))
        return None

    return arrow


def param(key: str, value: Union[str, int, Ref]) -> Arrow:
    """Append a single query parameter."""

    def arrow(ctx: "Context") -> Optional[Exception]:
        if ctx.request is None:
            return UndefinedRequest("param")

        val = value.value if isinstance(value, Ref) else value
        if val is None:
            return None
        ctx.request.url = _append_query(ctx.request.url, [(key, str(val))])
        return None

    return arrow
