"""Free-form assertions over the context and lifted values."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Optional, Union

from ..errors import NoMatch, Undefined
from ..pipeline.base import Arrow, Ref
from .diff import diff_values

if TYPE_CHECKING:
    from ..http.context import Context

Predicate = Callable[["Context"], Union[bool, Exception, None]]


def check(predicate: Predicate) -> Arrow:
    """
    Assert with an arbitrary predicate over the context.

    The request is sent first. The predicate returns True or None on
    success, False or an exception on failure; an AssertionError raised by
    the predicate is a failure too.

        recv.check(lambda ctx: ctx.response.elapsed.total_seconds() < 1)
    """

    def arrow(ctx: "Context") -> Optional[Exception]:
        err = ctx.unsafe()
        if err is not None:
            return err

        try:
            result = predicate(ctx)
        except AssertionError as err:
            return err

        if result is None or result is True:
            return None
        if isinstance(result, Exception):
            return result
        return NoMatch(
            id="http.Check",
            protocol=getattr(predicate, "__name__", "check"),
            expect=True,
            actual=result,
        )

    return arrow


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    return hasattr(value, "__len__") and len(value) == 0


def defined(ref: Ref) -> Arrow:
    """Require a lifted value to be present: not None and not empty."""

    def arrow(ctx: "Context") -> Optional[Exception]:
        if _is_empty(ref.value):
            name = getattr(ref.type, "__name__", repr(ref.type))
            return Undefined(id="http.Defined", key=name, protocol="value")
        return None

    return arrow


class Value:
    """Assertions on a lifted value."""

    def __init__(self, ref: Ref) -> None:
        self.ref = ref

    def is_(self, expect: Any) -> Arrow:
        def arrow(ctx: "Context") -> Optional[Exception]:
            actual = self.ref.value
            if actual == expect:
                return None
            return NoMatch(
                id="http.Value",
                diff=diff_values(expect, actual),
                protocol="value",
                expect=expect,
                actual=actual,
            )

        return arrow


def value(ref: Ref) -> Value:
    return Value(ref)
