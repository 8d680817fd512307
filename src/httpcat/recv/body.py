"""
Response body combinators.

Every combinator here consumes and closes the body, so the drain step of
``Stack.io`` has nothing left to do for the context.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any, Optional

import requests

from ..errors import CodecError, NoMatch
from ..http import codec
from ..pipeline.base import Arrow, Ref
from .diff import diff_values

if TYPE_CHECKING:
    from ..http.context import Context

logger = logging.getLogger(__name__)

WILDCARD = "_"


def _unsupported(content_type: str) -> NoMatch:
    supported = " | ".join(codec.supported())
    return NoMatch(
        id="http.Recv",
        diff=f"- Content-Type: application/{{{supported}}}\n+ Content-Type: {content_type}",
        protocol="codec",
        actual=content_type,
    )


def decode_body(ctx: "Context", into: Any) -> tuple[Any, Optional[Exception]]:
    """Send the request if needed, consume the body and decode it per its Content-Type."""
    err = ctx.unsafe()
    if err is not None:
        return None, err

    content_type = ctx.response.headers.get("Content-Type", "")
    try:
        data = ctx.read_body()
    except (requests.RequestException, NoMatch) as err:
        return None, err

    if codec.lookup(content_type) is None:
        return None, _unsupported(content_type)

    try:
        return codec.decode(content_type, data, into), None
    except CodecError as err:
        logger.debug(f"Failed to decode {content_type} body: {err}")
        return None, err


def body(ref: Ref) -> Arrow:
    """
    Decode the response into ``ref``.

    ``ref.type`` selects the target (a pydantic model, dataclass, TypedDict or
    plain type); None keeps the JSON-like data as is.
    """

    def arrow(ctx: "Context") -> Optional[Exception]:
        value, err = decode_body(ctx, ref.type)
        if err is not None:
            return err
        ref.value = value
        return None

    return arrow


recv = body


def raw(ref: Ref) -> Arrow:
    """Read the response body as bytes into ``ref``."""

    def arrow(ctx: "Context") -> Optional[Exception]:
        err = ctx.unsafe()
        if err is not None:
            return err
        try:
            ref.value = ctx.read_body()
        except (requests.RequestException, NoMatch) as err:
            return err
        return None

    return arrow


def discard(ctx: "Context") -> Optional[Exception]:
    """Drain and close the response body."""
    err = ctx.unsafe()
    if err is not None:
        return err
    return ctx.discard_body()


def expect(value: Any, into: Any = None) -> Arrow:
    """
    Decode the body and require it to equal value.

    The body is decoded into ``into``, by default ``type(value)``. Values are
    compared through their JSON rendering, so a list of models matches the
    decoded list of objects:

        recv.expect([Site(site="example.com")])
        recv.expect(sites, into=list[Site])
    """
    if into is None:
        into = type(value)

    def arrow(ctx: "Context") -> Optional[Exception]:
        actual, err = decode_body(ctx, into)
        if err is not None:
            return err
        if actual == value:
            return None
        diff = diff_values(value, actual)
        if not diff:
            return None
        return NoMatch(
            id="http.Recv",
            diff=diff,
            protocol="body",
            expect=value,
            actual=actual,
        )

    return arrow


def _equiv(pattern: Any, value: Any) -> bool:
    if pattern == WILDCARD:
        return True
    if pattern is None or value is None:
        return pattern is None and value is None
    if isinstance(value, bool) or isinstance(pattern, bool):
        return isinstance(value, bool) and isinstance(pattern, bool) and value == pattern
    if isinstance(value, (int, float)):
        return isinstance(pattern, (int, float)) and value == pattern
    if isinstance(value, str):
        return isinstance(pattern, str) and value == pattern
    if isinstance(value, list):
        return (
            isinstance(pattern, list)
            and len(pattern) == len(value)
            and all(_equiv(p, v) for p, v in zip(pattern, value))
        )
    if isinstance(value, dict):
        return isinstance(pattern, dict) and all(k in value and _equiv(p, value[k]) for k, p in pattern.items())
    return False


def match(pattern: str) -> Arrow:
    """
    Match the body against a JSON pattern.

    ``"_"`` matches anything, arrays must have the same length and objects
    match when every key of the pattern matches.

        recv.match('{"site": "example.com", "tags": ["_", "_"]}')

    Raises:
        ValueError: If pattern is not valid JSON
    """
    pat = json.loads(pattern)

    def arrow(ctx: "Context") -> Optional[Exception]:
        actual, err = decode_body(ctx, None)
        if err is not None:
            return err
        if not _equiv(pat, actual):
            return NoMatch(id="http.Match", protocol="body", expect=pat, actual=actual)
        return None

    return arrow
