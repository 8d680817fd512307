"""
Composition of arrows, the building blocks of an HTTP call.

An arrow is a function ``Context -> Optional[Exception]``. It either mutates
the context and returns None, or returns the error that stops the pipeline.
``join`` composes arrows left to right:

    (a -> b, b -> c, c -> d) => a -> d

Example:
    site = Ref(Site)
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

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Generic, Optional, Protocol, TypeVar, Union, runtime_checkable

from ..errors import NoMatch

if TYPE_CHECKING:
    from ..http.context import Context

T = TypeVar("T")

Arrow = Callable[["Context"], Optional[Exception]]


class Ref(Generic[T]):
    """
    Output cell for values lifted out of a response.

    Example:
        etag = Ref(str)
        stack.io(GET(..., recv.etag.to(etag)))
        print(etag.value)

    Attributes:
        type: Target type used to decode or convert into, None for raw data
        value: Lifted value, None until an arrow sets it
    """

    def __init__(self, type: Any = None, value: Optional[T] = None) -> None:
        self.type = type
        self.value = value

    def __repr__(self) -> str:
        name = getattr(self.type, "__name__", repr(self.type))
        return f"Ref[{name}]({self.value!r})"


@runtime_checkable
class Builder(Protocol):
    """Anything able to produce an arrow, used by ``bind`` for reusable configuration."""

    def build(self) -> Arrow: ...


def join(*arrows: Optional[Arrow]) -> Arrow:
    """
    Compose arrows into one; evaluation stops at the first failure.

    None entries are skipped, an empty composition always succeeds.
    """

    def composite(ctx: "Context") -> Optional[Exception]:
        for arrow in arrows:
            if arrow is None:
                continue
            err = arrow(ctx)
            if err is not None:
                return err
        return None

    return composite


def bind(*builders: Optional[Builder]) -> Arrow:
    """Compose builders, each one built at evaluation time."""

    def composite(ctx: "Context") -> Optional[Exception]:
        return join(*(b.build() for b in builders if b is not None))(ctx)

    return composite


def set_method(verb: str) -> Arrow:
    """Set the HTTP verb of the current and the next request."""
    verb = verb.upper()

    def arrow(ctx: "Context") -> Optional[Exception]:
        ctx.method = verb
        if ctx.request is not None:
            ctx.request.method = verb
        return None

    return arrow


def method(verb: str, *arrows: Optional[Arrow]) -> Arrow:
    """Set the HTTP method, then evaluate the arrows."""
    return join(set_method(verb), *arrows)


def GET(*arrows: Optional[Arrow]) -> Arrow:
    return method("GET", *arrows)


def HEAD(*arrows: Optional[Arrow]) -> Arrow:
    return method("HEAD", *arrows)


def POST(*arrows: Optional[Arrow]) -> Arrow:
    return method("POST", *arrows)


def PUT(*arrows: Optional[Arrow]) -> Arrow:
    return method("PUT", *arrows)


def DELETE(*arrows: Optional[Arrow]) -> Arrow:
    return method("DELETE", *arrows)


def PATCH(*arrows: Optional[Arrow]) -> Arrow:
    return method("PATCH", *arrows)


def fmap(fn: Callable[[], Union[Exception, bool, None]]) -> Arrow:
    """
    Lift a plain callable into the category.

    The callable returns None or True on success, an exception or False on
    failure.
    """

    def arrow(ctx: "Context") -> Optional[Exception]:
        result = fn()
        if result is None or result is True:
            return None
        if isinstance(result, Exception):
            return result
        return NoMatch(id="http.FMap", protocol=getattr(fn, "__name__", "fmap"), expect=True, actual=result)

    return arrow


def flat_map(fn: Callable[[], Optional[Arrow]]) -> Arrow:
    """Evaluate the continuation returned by fn; a None continuation is a no-op."""

    def arrow(ctx: "Context") -> Optional[Exception]:
        continuation = fn()
        if continuation is None:
            return None
        return continuation(ctx)

    return arrow
