"""Structural diff of expected and actual values."""

import difflib
import json
from typing import Any

from pydantic_core import to_jsonable_python


def _lines(value: Any) -> list[str]:
    data = to_jsonable_python(value, serialize_unknown=True)
    return json.dumps(data, indent=2, sort_keys=True).splitlines()


def diff_values(expect: Any, actual: Any) -> str:
    """Unified diff of the JSON renderings, empty when they are identical."""
    return "\n".join(
        difflib.unified_diff(_lines(expect), _lines(actual), "expect", "actual", lineterm="")
    )
