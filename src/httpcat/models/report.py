"""Report types for the once() test runner."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class StatusKind(str, Enum):
    """Outcome of a single test."""

    SUCCESS = "success"
    NOMATCH = "nomatch"
    FAILURE = "failure"


@dataclass
class TestStatus:
    """
    Result of one test evaluated by ``once``.

    Attributes:
        id: Qualified name of the test factory
        status: success, nomatch (assertion failed) or failure (any other error)
        duration: Wall time of the call in seconds
        reason: Diff for nomatch, error message for failure
        payload: Buffered response body, empty unless memento is enabled
    """

    __test__ = False

    id: str
    status: StatusKind
    duration: float
    reason: Optional[str] = None
    payload: str = ""

    @property
    def ok(self) -> bool:
        return self.status == StatusKind.SUCCESS

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "status": self.status.value,
            "duration": self.duration,
        }
        if self.reason:
            data["reason"] = self.reason
        data["payload"] = self.payload
        return data
