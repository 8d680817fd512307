"""Protocol definitions for the transport socket."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

import requests


@runtime_checkable
class Socket(Protocol):
    """
    Protocol for the transport owned by a Stack.

    Anything with a requests-compatible ``send`` qualifies: a
    ``requests.Session`` (the default), a decorator that signs requests
    before delegating, or an in-process fake used by tests.

    The stack calls ``send`` with ``stream=True`` and expects the body to
    stay unconsumed on the returned response. Transport failures are raised
    as ``requests.RequestException`` subclasses.
    """

    def send(self, request: requests.PreparedRequest, **kwargs: Any) -> requests.Response:
        """
        Send a prepared request.

        Args:
            request: Fully prepared request (method, URL, headers, body)
            **kwargs: stream, timeout, allow_redirects as accepted by requests

        Returns:
            The response with an unconsumed body
        """
        ...
