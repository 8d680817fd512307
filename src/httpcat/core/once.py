"""
Run a batch of HTTP tests once and report their outcome.

A test is a zero-argument factory returning an arrow. Each test runs in its
own context; failures never stop the batch.

Example:
    def fetch_site() -> Arrow:
        return GET(
            send.uri("/site"),
            recv.status.ok,
            recv.match('{"site": "_"}'),
        )

    with Stack(StackConfig(host="https://example.com", memento=True)) as stack:
        write_once(sys.stdout, stack, fetch_site)
"""

import json
import logging
import time
from typing import Callable, Optional, TextIO

from ..errors import NoMatch
from ..http.context import Context
from ..http.stack import Stack
from ..models.report import StatusKind, TestStatus
from ..pipeline.base import Arrow

logger = logging.getLogger(__name__)

Test = Callable[[], Arrow]


def test_id(test: Test) -> str:
    """Qualified name of a test factory, without the ``__main__`` prefix."""
    name = getattr(test, "__qualname__", None) or repr(test)
    module = getattr(test, "__module__", None)
    if module and module != "__main__":
        return f"{module}.{name}"
    return name


def _status(ctx: Context, id: str, duration: float, err: Optional[Exception]) -> TestStatus:
    payload = ctx.payload.decode("utf-8", errors="replace") if ctx.payload else ""

    if err is None:
        return TestStatus(id=id, status=StatusKind.SUCCESS, duration=duration, payload=payload)

    if isinstance(err, NoMatch):
        return TestStatus(
            id=id,
            status=StatusKind.NOMATCH,
            duration=duration,
            reason=err.render_diff(),
            payload=payload,
        )

    return TestStatus(
        id=id,
        status=StatusKind.FAILURE,
        duration=duration,
        reason=str(err) or type(err).__name__,
        payload=payload,
    )


def once(stack: Stack, *tests: Test) -> list[TestStatus]:
    """
    Evaluate each test once.

    Args:
        stack: Protocol stack shared by all tests
        *tests: Zero-argument factories returning the arrow to evaluate

    Returns:
        One TestStatus per test, in order
    """
    results = []
    for test in tests:
        id = test_id(test)
        ctx = stack.with_context()

        start = time.perf_counter()
        try:
            err = ctx.io(test())
        except Exception as exc:
            logger.error(f"Test {id} raised: {exc}")
            err = exc
        duration = time.perf_counter() - start

        status = _status(ctx, id, duration, err)
        logger.debug(f"Test {id}: {status.status.value} in {duration:.3f}s")
        results.append(status)

    return results


def write_once(stream: TextIO, stack: Stack, *tests: Test) -> None:
    """Evaluate the tests once and write the report to stream as indented JSON."""
    report = [status.to_dict() for status in once(stack, *tests)]
    json.dump(report, stream, indent=2)
    stream.write("\n")
