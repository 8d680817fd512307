"""Protocol stack: the long-lived owner of the transport socket."""

from __future__ import annotations

import logging
from http.cookiejar import DefaultCookiePolicy
from types import TracebackType
from typing import Optional

import requests
from requests.adapters import HTTPAdapter

from ..models.config import StackConfig
from ..pipeline.base import Arrow
from .context import Context, Request, Scope
from .protocols import Socket

logger = logging.getLogger(__name__)


class Stack:
    """
    HTTP protocol stack.

    Owns the socket and the configuration, both fixed at construction. A
    stack is shared and may be used from many threads; every call gets its
    own Context.

    Features:
    - Pooled requests.Session by default (redirects and cookies disabled)
    - Any object implementing the Socket protocol can replace the session
    - Response bodies are always drained so connections return to the pool

    A non-zero log_level enables DEBUG on the wire-dump logger
    (httpcat.http.context). Its records reach whatever handlers are
    installed, e.g. setup_logging("DEBUG") or logging.basicConfig().

    Example:
        stack = Stack(StackConfig(host="https://example.com", log_level=1))

        site = Ref(Site)
        err = stack.io(
            GET(
                send.uri("/site"),
                recv.status.ok,
                recv.body(site),
            )
        )
    """

    def __init__(
        self,
        config: Optional[StackConfig] = None,
        *,
        socket: Optional[Socket] = None,
    ) -> None:
        """
        Build the stack.

        Args:
            config: Stack configuration, defaults to StackConfig()
            socket: Custom transport, defaults to a pooled requests.Session

        Raises:
            TypeError: If TLS options are requested for a socket that is not
                a requests.Session
        """
        self.config = config or StackConfig()
        self._owns_socket = socket is None
        self.socket: Socket = socket if socket is not None else self._default_socket()
        self._configure_socket()
        if self.config.log_level > 0:
            logging.getLogger(Context.__module__).setLevel(logging.DEBUG)

    def _default_socket(self) -> requests.Session:
        session = requests.Session()
        adapter = HTTPAdapter(
            pool_connections=self.config.pool_size,
            pool_maxsize=self.config.pool_size,
        )
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        return session

    def _configure_socket(self) -> None:
        if not isinstance(self.socket, requests.Session):
            if self.config.insecure_tls:
                raise TypeError(f"unsupported socket type {type(self.socket).__name__}: insecure_tls requires requests.Session")
            if self.config.cookie_jar:
                logger.debug(f"cookie_jar ignored for socket type {type(self.socket).__name__}")
            return

        self.socket.verify = not self.config.insecure_tls
        if self.config.cookie_jar:
            self.socket.cookies.set_policy(DefaultCookiePolicy())
        else:
            # empty allow-list rejects every cookie
            self.socket.cookies.set_policy(DefaultCookiePolicy(allowed_domains=[]))

    def prepare(self, request: Request) -> requests.PreparedRequest:
        """Turn the context request into a prepared request for the socket."""
        headers = dict(request.headers)
        if self.config.user_agent and not any(k.lower() == "user-agent" for k in headers):
            headers["User-Agent"] = self.config.user_agent

        req = requests.Request(
            method=request.method,
            url=request.url,
            headers=headers,
            data=request.body,
        )
        prepare_request = getattr(self.socket, "prepare_request", None)
        if prepare_request is not None:
            return prepare_request(req)
        return req.prepare()

    def with_context(self, scope: Optional[Scope] = None) -> Context:
        """Create a fresh context for one call."""
        return Context(stack=self, scope=scope, host=self.config.host)

    def io(self, *arrows: Optional[Arrow], scope: Optional[Scope] = None) -> Optional[Exception]:
        """
        Evaluate arrows in a fresh context.

        Args:
            *arrows: Arrows composed with join
            scope: Optional timeout/cancellation scope

        Returns:
            The first error returned by an arrow, a drain error, or None
        """
        return self.with_context(scope).io(*arrows)

    def close(self) -> None:
        """Close the default session; custom sockets are left to their owner."""
        if self._owns_socket and isinstance(self.socket, requests.Session):
            self.socket.close()

    def __enter__(self) -> "Stack":
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        self.close()
