"""Per-call state of the HTTP category and the single network step."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional, Union

import requests
from requests.structures import CaseInsensitiveDict

from ..errors import Cancelled, NoMatch, UndefinedRequest
from ..pipeline.base import Arrow, join

if TYPE_CHECKING:
    from .stack import Stack

logger = logging.getLogger(__name__)

DRAIN_CHUNK_SIZE = 128 * 1024

Timeout = Union[float, tuple[float, float]]


class Scope:
    """
    Cancellable execution scope of a single call.

    The timeout is handed to the socket; cancellation is checked right
    before the request is sent. A scope may be shared by several calls and
    cancelled from another thread.

    Example:
        scope = Scope(timeout=5.0)
        err = stack.io(GET(...), recv.status.ok, scope=scope)
    """

    def __init__(self, timeout: Optional[Timeout] = None) -> None:
        self.timeout = timeout
        self._cancelled = threading.Event()

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()


@dataclass
class Request:
    """
    Outgoing request, built incrementally by send combinators.

    Attributes:
        method: HTTP verb
        url: Target URL
        headers: Case-insensitive header map
        body: Stream or iterable of bytes, None for an empty body
    """

    method: str
    url: str
    headers: CaseInsensitiveDict = field(default_factory=CaseInsensitiveDict)
    body: Any = None


@dataclass
class Context:
    """
    Context threaded through the arrows of one call.

    A context is created per call by ``Stack.with_context`` and must not be
    shared between threads. Send combinators mutate ``request``; the first
    receive combinator triggers ``unsafe()``, which fills ``response``.

    Attributes:
        stack: Owning protocol stack (socket and configuration)
        scope: Optional timeout/cancellation scope
        host: Default host for relative URIs
        method: Verb used when the next request is created
        request: Outgoing request, None until a URI is defined
        response: Transport response, None until the request is sent
        payload: Buffered response body (memento)
        consumed: True once the response body was read or drained
        discarded: True once the body was drained without being kept
    """

    stack: "Stack"
    scope: Optional[Scope] = None
    host: Optional[str] = None
    method: str = "GET"
    request: Optional[Request] = None
    response: Optional[requests.Response] = None
    payload: Optional[bytes] = None
    consumed: bool = False
    discarded: bool = False

    def io(self, *arrows: Optional[Arrow]) -> Optional[Exception]:
        """
        Evaluate arrows against this context, then drain the response body.

        The body is drained on every exit path. A drain failure is reported
        only when the arrows themselves succeeded.
        """
        err: Optional[Exception] = None
        try:
            err = join(*arrows)(self)
        finally:
            drained = self.discard_body()
        return err if err is not None else drained

    def unsafe(self) -> Optional[Exception]:
        """
        Send the request unless a response was already obtained.

        This is the only blocking point of the category. Transport failures
        are returned, not raised.
        """
        if self.response is not None:
            return None
        if self.request is None:
            return UndefinedRequest("unsafe")
        if self.scope is not None and self.scope.cancelled:
            return Cancelled()

        config = self.stack.config
        timeout: Timeout = config.timeout
        if self.scope is not None and self.scope.timeout is not None:
            timeout = self.scope.timeout

        try:
            prepared = self.stack.prepare(self.request)
            log_send(config.log_level, prepared)
            response = self.stack.socket.send(
                prepared,
                stream=True,
                timeout=timeout,
                allow_redirects=config.redirects,
            )
        except requests.RequestException as err:
            logger.debug(f"{self.request.method} {self.request.url} failed: {err}")
            return err

        self.response = response
        self.consumed = False
        self.discarded = False

        try:
            if config.memento:
                self.payload = response.content
            log_recv(config.log_level, response)
        except requests.RequestException as err:
            return err

        return None

    def read_body(self) -> bytes:
        """
        Consume the response body and release the connection.

        Raises:
            UndefinedRequest: If no response was obtained
            NoMatch: If the body was already discarded
            requests.RequestException: If reading the stream fails
        """
        if self.response is None:
            raise UndefinedRequest("read_body")
        if self.discarded:
            if self.payload is not None:
                return self.payload
            raise NoMatch(
                id="http.Recv",
                diff="- body\n+ discarded",
                protocol="body",
            )

        try:
            data = self.response.content
        finally:
            self.response.close()
            self.consumed = True

        if self.stack.config.memento:
            self.payload = data
        return data

    def discard_body(self) -> Optional[Exception]:
        """Drain and close an unconsumed body so the connection returns to the pool."""
        response = self.response
        if response is None or self.consumed:
            return None

        self.consumed = True
        self.discarded = True
        try:
            for _ in response.iter_content(DRAIN_CHUNK_SIZE):
                pass
        except (requests.RequestException, OSError) as err:
            logger.debug(f"Failed to drain response body: {err}")
            return err
        finally:
            response.close()
        return None

    def reset(self) -> Optional[Exception]:
        """Drop the current response, draining its body first."""
        err = self.discard_body()
        self.response = None
        self.consumed = False
        self.discarded = False
        self.payload = None
        return err


def _render_body(body: Any) -> str:
    if body is None:
        return ""
    if hasattr(body, "getvalue"):
        body = body.getvalue()
    if isinstance(body, (bytes, bytearray)):
        return bytes(body).decode("utf-8", errors="replace")
    if isinstance(body, str):
        return body
    return f"<{type(body).__name__}>"


def log_send(level: int, request: requests.PreparedRequest) -> None:
    if level < 1:
        return
    lines = [f"{request.method} {request.url}"]
    lines.extend(f"{key}: {value}" for key, value in request.headers.items())
    if level == 3:
        lines.append("")
        lines.append(_render_body(request.body))
    msg = "\n".join(lines)
    logger.debug(f">>>>\n{msg}\n")


def log_recv(level: int, response: requests.Response) -> None:
    if level < 2:
        return
    lines = [f"HTTP {response.status_code} {response.reason or ''}".rstrip()]
    lines.extend(f"{key}: {value}" for key, value in response.headers.items())
    if level == 3:
        lines.append("")
        lines.append(_render_body(response.content))
    msg = "\n".join(lines)
    logger.debug(f"<<<<\n{msg}\n")
