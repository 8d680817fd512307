"""httpcat configuration and report models."""

from .config import StackConfig
from .report import StatusKind, TestStatus

__all__ = [
    # Config
    "StackConfig",
    # Reports
    "StatusKind",
    "TestStatus",
]
