"""Request payload."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, Any, Optional

from ..errors import CodecError, UndefinedRequest
from ..http import codec
from ..pipeline.base import Arrow

if TYPE_CHECKING:
    from ..http.context import Context

RAW_TYPES = (bytes, bytearray, memoryview)


def _is_stream(data: Any) -> bool:
    return hasattr(data, "read") or isinstance(data, Iterator)


def send(data: Any) -> Arrow:
    """
    Attach a payload to the request.

    Strings, bytes, file-like objects and iterators of bytes are sent as is.
    Any other value is encoded by the codec matching the Content-Type header,
    which must be set beforehand. With ``Transfer-Encoding: chunked`` the body
    is streamed instead of sent with a Content-Length.
    """

    def arrow(ctx: "Context") -> Optional[Exception]:
        if ctx.request is None:
            return UndefinedRequest("send")

        headers = ctx.request.headers
        content_type = headers.get("Content-Type")
        if not content_type:
            return CodecError("unknown Content-Type")

        if isinstance(data, str):
            payload: Any = data.encode("utf-8")
        elif isinstance(data, RAW_TYPES):
            payload = bytes(data)
        elif _is_stream(data):
            payload = data
        else:
            try:
                payload = codec.encode(content_type, data)
            except CodecError as err:
                return err

        if isinstance(payload, bytes) and headers.get("Transfer-Encoding", "").lower() == "chunked":
            payload = iter((payload,))

        ctx.request.body = payload
        return None

    return arrow
