"""Membership checks over a sequence lifted from a response."""

from __future__ import annotations

from bisect import bisect_left
from operator import attrgetter, itemgetter
from typing import TYPE_CHECKING, Any, Callable, Iterable, Optional, Union

from ..errors import NoMatch, Undefined
from ..pipeline.base import Arrow, Ref
from .diff import diff_values

if TYPE_CHECKING:
    from ..http.context import Context

_MISSING = object()

Key = Union[str, Callable[[Any], Any], None]


def _key_fn(key: Key) -> Callable[[Any], Any]:
    if key is None:
        return lambda item: item
    if callable(key):
        return key

    attr = attrgetter(key)
    item = itemgetter(key)

    def by_name(element: Any) -> Any:
        return item(element) if isinstance(element, dict) else attr(element)

    return by_name


class Seq:
    """
    Ordered lookup over a sequence of elements.

    Example:
        sites = Ref(list[Site])
        GET(
            send.uri("https://example.com/sites"),
            recv.status.ok,
            recv.body(sites),
            recv.seq(sites, key="site").has("s.example.com"),
        )

    Args:
        items: Elements, or a Ref read when the arrow is evaluated
        key: Attribute/dict key name or a callable giving the ordering key,
            None to order the elements themselves
    """

    def __init__(self, items: Union[Iterable[Any], Ref], key: Key = None) -> None:
        self.items = items
        self.key = _key_fn(key)

    def _elements(self) -> list[Any]:
        items = self.items.value if isinstance(self.items, Ref) else self.items
        return sorted(items or (), key=self.key)

    def has(self, key: Any, expect: Any = _MISSING) -> Arrow:
        """Require an element with the key, and that it equals expect when given."""

        def arrow(ctx: "Context") -> Optional[Exception]:
            try:
                elements = self._elements()
                keys = [self.key(e) for e in elements]
                i = bisect_left(keys, key)
            except TypeError as err:
                # keys of mixed or unordered types
                return NoMatch(
                    id="http.Seq",
                    diff=f"- {key}\n+ {err}",
                    protocol="seq",
                    expect=key,
                )

            if i == len(keys) or keys[i] != key:
                return Undefined(id="http.Seq", key=key, protocol="seq")

            actual = elements[i]
            if expect is not _MISSING and actual != expect:
                return NoMatch(
                    id="http.Seq",
                    diff=diff_values(expect, actual),
                    protocol="seq",
                    expect=expect,
                    actual=actual,
                )
            return None

        return arrow


def seq(items: Union[Iterable[Any], Ref], key: Key = None) -> Seq:
    return Seq(items, key)
