"""Data models for the comparer engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class FieldKind(Enum):
    STRUCT = "STRUCT"
    POINTER = "POINTER"
    SEQUENCE = "SEQUENCE"
    MAPPING = "MAPPING"
    PRIMITIVE = "PRIMITIVE"


class DiffType(Enum):
    VALUE_MISMATCH = "VALUE_MISMATCH"
    TYPE_MISMATCH = "TYPE_MISMATCH"
    MISSING_IN_Y = "MISSING_IN_Y"
    EXTRA_IN_Y = "EXTRA_IN_Y"
    UNINSPECTABLE = "UNINSPECTABLE"


class _Missing:
    """Marker for the absent side of a slice index or map key."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "<missing>"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


@dataclass(frozen=True)
class Result:
    """Outcome of comparing one pair of values, handed to reporters."""
    equal: bool
    by_ignore: bool = False
    by_method: bool = False
    by_func: bool = False


@dataclass
class DiffEntry:
    """A single difference found during comparison."""
    path: str
    type: DiffType
    x_value: Any
    y_value: Any
    message: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "type": self.type.value,
            "x_value": self.x_value,
            "y_value": self.y_value,
            "message": self.message,
        }
