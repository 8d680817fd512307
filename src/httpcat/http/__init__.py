"""HTTP protocol stack, context, status codes and codecs."""

from . import codec, status
from .context import Context, Request, Scope
from .protocols import Socket
from .stack import Stack
from .status import StatusCode

__all__ = [
    "Context",
    "Request",
    "Scope",
    "Socket",
    "Stack",
    "StatusCode",
    "codec",
    "status",
]
