"""Utility functions for the comparer engine."""

from __future__ import annotations

import functools
import importlib
import re
from typing import Any, Callable

_IDENTIFIER = re.compile(r'^[a-zA-Z_][a-zA-Z0-9_]*$')

_COLLECTION_TYPES = (list, tuple, set, frozenset, dict)


def build_path(parent_path: str, key: str | int) -> str:
    """Build a JSONPath from parent path and key."""
    if isinstance(key, int):
        return f"{parent_path}[{key}]"
    else:
        # Handle special characters in key names
        if _IDENTIFIER.match(str(key)):
            return f"{parent_path}.{key}"
        else:
            return f"{parent_path}['{key}']"


def is_empty_collection(value: Any) -> bool:
    """Check if a value is a present-but-empty list, tuple, set or dict."""
    return isinstance(value, _COLLECTION_TYPES) and len(value) == 0


def less_to_key(less: Callable[[Any, Any], bool]) -> Callable[[Any], Any]:
    """Turn a strict weak ordering 'less' into a sort key."""
    def cmp(a: Any, b: Any) -> int:
        if less(a, b):
            return -1
        if less(b, a):
            return 1
        return 0

    return functools.cmp_to_key(cmp)


def is_sorted(items: Any, less: Callable[[Any, Any], bool]) -> bool:
    """Check if a sequence is already ordered under 'less'."""
    return all(not less(items[i], items[i - 1]) for i in range(1, len(items)))


def format_value(value: Any, limit: int = 200) -> str:
    """repr() of a value, shortened for reports."""
    text = repr(value)
    if len(text) > limit:
        return text[:limit - 3] + "..."
    return text


def import_object(spec: str) -> Any:
    """
    Import an object from a 'package.module:QualName' string.

    Args:
        spec: Import path, module and qualified name separated by a colon

    Returns:
        The imported object
    """
    if ":" not in spec:
        raise ValueError(f"Invalid import path (expected 'module:Name'): {spec}")

    module_name, qualname = spec.split(":", 1)
    obj: Any = importlib.import_module(module_name)
    for part in qualname.split("."):
        obj = getattr(obj, part)
    return obj
