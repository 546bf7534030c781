"""Dot-notation property access over parsed JSON content."""

import math
from typing import Any, Optional


def is_falsy(value: Any) -> bool:
    """Return True for values JSON-style lookups treat as falsy.

    ``None``, ``False``, numeric zero, NaN and the empty string. Empty
    containers are not falsy.
    """
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (int, float)):
        return value == 0 or (isinstance(value, float) and math.isnan(value))
    return False


def _descend(value: Any, segment: str) -> Any:
    if isinstance(value, dict):
        return value.get(segment)
    if isinstance(value, list) and segment.isdigit():
        index = int(segment)
        return value[index] if index < len(value) else None
    return None


def resolve_dot_path(path: str, obj: Any) -> Optional[Any]:
    """Get a nested property from ``obj`` where ``path`` is like ``"a.b.c"``.

    Lookup stops with None as soon as the value reached so far is falsy,
    so ``{"a": 0}`` resolves ``"a.b"`` to None rather than failing.
    """
    current = obj
    for segment in path.split("."):
        if is_falsy(current):
            return None
        current = _descend(current, segment)
    return current
