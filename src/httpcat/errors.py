"""Error taxonomy for the HTTP category.

Arrows never raise for expected failures, they return one of these values.
Transport failures are the socket's own exceptions and pass through unchanged.
"""

from __future__ import annotations

import json
from typing import Any, Optional


class HttpCatError(Exception):
    """Base class for all httpcat errors."""


class NotSupported(HttpCatError):
    """The request URL uses a scheme other than http or https."""

    def __init__(self, url: str) -> None:
        super().__init__(url)
        self.url = url

    def __str__(self) -> str:
        return f"Not supported: {self.url}"


class UndefinedRequest(HttpCatError):
    """A request combinator ran before any request was defined."""

    def __init__(self, arrow: str) -> None:
        super().__init__(arrow)
        self.arrow = arrow

    def __str__(self) -> str:
        return f"{self.arrow}: request is not defined, use send.uri(...) first"


class Cancelled(HttpCatError):
    """The execution scope was cancelled before the request was sent."""

    def __str__(self) -> str:
        return "request cancelled"


class CodecError(HttpCatError, ValueError):
    """A value could not be encoded or decoded for the given Content-Type."""


class NoMatch(HttpCatError):
    """
    Assertion failure: the response does not match an expectation.

    Attributes:
        id: Name of the combinator that failed (e.g. "http.Header")
        diff: Human-readable diff, "-" lines are expected, "+" lines are actual
        protocol: What was being matched (header name, "body", "codec", ...)
        expect: Expected value
        actual: Actual value, None when the value is absent
    """

    def __init__(
        self,
        id: str = "",
        diff: str = "",
        protocol: str = "",
        expect: Any = None,
        actual: Any = None,
    ) -> None:
        super().__init__(id, diff)
        self.id = id
        self.diff = diff
        self.protocol = protocol
        self.expect = expect
        self.actual = actual

    def render_diff(self) -> str:
        """Return the diff, falling back to a JSON rendering of expect/actual."""
        if self.diff:
            return self.diff
        expect = json.dumps(self.expect, default=str)
        actual = json.dumps(self.actual, default=str)
        return f"- {expect}\n+ {actual}"

    def __str__(self) -> str:
        return f"{self.id}: no match\n{self.render_diff()}"


class Undefined(NoMatch):
    """The looked-up value is not present (missing key, empty lifted value)."""

    def __init__(self, id: str, key: Any, protocol: str = "", diff: Optional[str] = None) -> None:
        super().__init__(
            id=id,
            diff=diff if diff is not None else f"- {key}",
            protocol=protocol,
            expect=key,
            actual=None,
        )
        self.key = key
        self.args = (id, key, protocol, diff)

    def __str__(self) -> str:
        return f"{self.id}: undefined {self.key}"
