"""
httpcat - Composable HTTP request/response pipelines.

Usage:
    from httpcat import GET, Ref, Stack, StackConfig, recv, send

    site = Ref(Site)

    with Stack(StackConfig(log_level=1)) as stack:
        err = stack.io(
            GET(
                send.uri("https://example.com/{}", "site"),
                send.accept.json,
                recv.status.ok,
                recv.content_type.json,
                recv.body(site),
            )
        )
"""

__version__ = "1.0.0"

from . import recv, send
from .core.once import once, write_once
from .errors import Cancelled, CodecError, HttpCatError, NoMatch, NotSupported, Undefined, UndefinedRequest
from .http import codec, status
from .http.context import Context, Request, Scope
from .http.stack import Stack
from .http.status import StatusCode
from .logging_config import setup_logging
from .models.config import StackConfig
from .models.report import StatusKind, TestStatus
from .pipeline.base import DELETE, GET, HEAD, PATCH, POST, PUT, Arrow, Builder, Ref, bind, flat_map, fmap, join, method

__all__ = [
    "__version__",
    # Pipeline
    "Arrow",
    "Builder",
    "Ref",
    "join",
    "bind",
    "method",
    "fmap",
    "flat_map",
    "GET",
    "HEAD",
    "POST",
    "PUT",
    "DELETE",
    "PATCH",
    # Stack
    "Stack",
    "StackConfig",
    "Context",
    "Request",
    "Scope",
    # Combinators
    "send",
    "recv",
    "codec",
    "status",
    "StatusCode",
    # Errors
    "HttpCatError",
    "NoMatch",
    "Undefined",
    "NotSupported",
    "CodecError",
    "Cancelled",
    "UndefinedRequest",
    # Runner
    "once",
    "write_once",
    "StatusKind",
    "TestStatus",
    # Logging
    "setup_logging",
]
