"""Shared fixtures: an in-process socket returning canned responses."""

import io
from typing import Any, Optional

import pytest
import requests
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict

from httpcat import Stack, StackConfig
from httpcat.http.status import status_text


class Raw(io.BytesIO):
    """Response stream recording how much was read and whether the connection was released."""

    def __init__(self, data: bytes) -> None:
        super().__init__(data)
        self.size = len(data)
        self.consumed = 0
        self.released = False

    def read(self, size: Optional[int] = -1) -> bytes:
        chunk = super().read(size)
        self.consumed += len(chunk)
        return chunk

    def release_conn(self) -> None:
        self.released = True

    @property
    def drained(self) -> bool:
        return self.consumed == self.size and (self.released or self.closed)


def make_response(
    status: int = 200,
    headers: Optional[dict] = None,
    body: Any = b"",
    url: str = "",
) -> requests.Response:
    """Build a streamed requests.Response backed by a Raw stream."""
    if isinstance(body, str):
        body = body.encode("utf-8")

    response = requests.Response()
    response.status_code = status
    response.reason = status_text(status)
    response.headers = CaseInsensitiveDict(headers or {})
    response.raw = Raw(body)
    response.url = url
    return response


class FakeSocket:
    """
    Socket replying with canned responses.

    Replies are used in order; the last one is repeated. Every prepared
    request and the keyword arguments of each send are recorded.
    """

    def __init__(self, status: int = 200, headers: Optional[dict] = None, body: Any = b"", error=None):
        self.replies = [(status, headers, body)]
        self.error = error
        self.requests: list[requests.PreparedRequest] = []
        self.kwargs: list[dict] = []
        self.responses: list[requests.Response] = []

    def then(self, status: int = 200, headers: Optional[dict] = None, body: Any = b"") -> "FakeSocket":
        self.replies.append((status, headers, body))
        return self

    def send(self, request: requests.PreparedRequest, **kwargs) -> requests.Response:
        self.requests.append(request)
        self.kwargs.append(kwargs)
        if self.error is not None:
            raise self.error

        status, headers, body = self.replies[min(len(self.responses), len(self.replies) - 1)]
        response = make_response(status, headers, body, url=request.url)
        response.request = request
        self.responses.append(response)
        return response

    @property
    def last(self) -> requests.PreparedRequest:
        return self.requests[-1]


class StubAdapter(BaseAdapter):
    """Transport adapter for a real requests.Session, no network involved."""

    def __init__(self, status: int = 200, headers: Optional[dict] = None, body: Any = b"") -> None:
        super().__init__()
        self.reply = (status, headers, body)
        self.requests: list[requests.PreparedRequest] = []
        self.kwargs: list[dict] = []
        self.responses: list[requests.Response] = []

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        self.requests.append(request)
        self.kwargs.append({"stream": stream, "timeout": timeout, "verify": verify})

        response = make_response(*self.reply, url=request.url)
        response.request = request
        response.connection = self
        self.responses.append(response)
        return response

    def close(self) -> None:
        pass


JSON = {"Content-Type": "application/json"}


@pytest.fixture
def make_stack():
    """Factory building a Stack over a FakeSocket: (stack, socket)."""

    def factory(status: int = 200, headers: Optional[dict] = None, body: Any = b"", **config):
        socket = FakeSocket(status, headers, body)
        return Stack(StackConfig(**config), socket=socket), socket

    return factory


@pytest.fixture
def json_stack(make_stack):
    """Stack answering 200 with the site document."""
    return make_stack(200, JSON, '{"site":"example.com"}')


@pytest.fixture
def session_stack():
    """Factory building a Stack over its default Session with a stub adapter: (stack, adapter)."""

    def factory(status: int = 200, headers: Optional[dict] = None, body: Any = b"", **config):
        stack = Stack(StackConfig(**config))
        adapter = StubAdapter(status, headers, body)
        stack.socket.mount("https://", adapter)
        stack.socket.mount("http://", adapter)
        return stack, adapter

    return factory
