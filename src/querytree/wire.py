"""
Wire encoding for structured queries.

Compact, order-preserving JSON, byte-compatible with what a browser's
JSON.stringify produces for the same nested mappings and lists.
"""

import json
from typing import Any

_SEPARATORS = (",", ":")


def to_wire(value: Any) -> str:
    """Serialize a reified tree or highlight spec to its wire text."""
    return json.dumps(value, separators=_SEPARATORS, ensure_ascii=False, allow_nan=False)


def from_wire(text: str) -> Any:
    """Parse wire text produced by to_wire."""
    return json.loads(text)
