"""Arrow composition for HTTP calls."""

from .base import DELETE, GET, HEAD, PATCH, POST, PUT, Arrow, Builder, Ref, bind, flat_map, fmap, join, method

__all__ = [
    "Arrow",
    "Builder",
    "DELETE",
    "GET",
    "HEAD",
    "PATCH",
    "POST",
    "PUT",
    "Ref",
    "bind",
    "flat_map",
    "fmap",
    "join",
    "method",
]
