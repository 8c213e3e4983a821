"""Objects comparer: a builder of comparison options with equal/diff terminals."""

from __future__ import annotations

import logging
from typing import Any

from . import engine
from .models import DiffEntry, DiffType
from .options import (
    IgnoreFields,
    LessSlices,
    Option,
    ReporterOption,
    build_allow_unexported,
    build_ignore_unexported,
    slices_compare_option,
    sort_slices_option,
)
from .report import Reporter, render_entries

logger = logging.getLogger(__name__)


class ObjectsComparer:
    """
    Compares two objects of the same type under a set of relaxations.

    Every with_* method returns a new comparer with one more option; the
    comparer it was called on is left unchanged, so a partly configured
    comparer can be shared and extended in different directions.

    Usage:
        comparer = (
            ObjectsComparer()
            .with_ignore_unexported_of(Order())
            .with_ignore_empty_slices()
            .with_ignore_fields(Order, "updated_at")
        )
        if not comparer.objects_equal(old, new):
            print(comparer.objects_diff(old, new))
    """

    def __init__(self, *opts: Option):
        """
        Initialize the comparer.

        Args:
            *opts: Options to start from
        """
        self._opts: tuple[Option, ...] = tuple(opts)

    @property
    def options(self) -> tuple[Option, ...]:
        """Accumulated options, in configuration order."""
        return self._opts

    def _with(self, option: Option) -> "ObjectsComparer":
        logger.debug("Adding option %r", option)
        return type(self)(*self._opts, option)

    def with_ignore_unexported_of(self, *samples: Any) -> "ObjectsComparer":
        """
        Ignore private fields of the samples' types and of every dataclass
        type reachable from them.
        """
        return self._with(build_ignore_unexported(*samples))

    def with_allow_unexported_of(self, *samples: Any) -> "ObjectsComparer":
        """
        Compare private fields of the samples' types and of every dataclass
        type reachable from them.
        """
        return self._with(build_allow_unexported(*samples))

    def with_ignore_empty_slices(self) -> "ObjectsComparer":
        """Treat None and an empty collection as equal."""
        return self._with(slices_compare_option())

    def with_sort_slices(self, less_func: LessSlices) -> "ObjectsComparer":
        """Sort lists and tuples with less_func before comparing them."""
        return self._with(sort_slices_option(less_func))

    def with_ignore_fields(self, typ: Any, *names: str) -> "ObjectsComparer":
        """Leave the named fields of typ out of the comparison."""
        return self._with(IgnoreFields(typ, *names))

    def with_custom_reporter(self, rep: Reporter) -> "ObjectsComparer":
        """Register a reporter the engine drives during every comparison."""
        return self._with(ReporterOption(rep))

    def objects_equal(self, x: Any, y: Any) -> bool:
        """
        Compare two objects of the same type.

        Args:
            x: The first object
            y: The second object

        Returns:
            False if either object is None or their types differ, otherwise
            the engine's verdict under the accumulated options
        """
        return objects_equal(x, y, *self._opts)

    def objects_diff(self, x: Any, y: Any) -> str:
        """
        Describe how two objects of the same type differ.

        Returns:
            Empty string if objects_equal(x, y) holds, otherwise the diff
        """
        # Unequal by the None/type rules alone; the engine is never built
        if not _inspectable(x, y):
            return render_entries([_root_entry(x, y)])

        if engine.equal(x, y, *self._opts):
            return ""

        return engine.diff(x, y, *self._opts)

    def __repr__(self) -> str:
        return f"ObjectsComparer({', '.join(repr(o) for o in self._opts)})"


def new_objects_comparer(*opts: Option) -> ObjectsComparer:
    """Create an objects comparer starting from the given options."""
    return ObjectsComparer(*opts)


def objects_equal(x: Any, y: Any, *opts: Option) -> bool:
    """Compare two objects of the same type under the options."""
    if not _inspectable(x, y):
        return False

    return engine.equal(x, y, *opts)


def _inspectable(x: Any, y: Any) -> bool:
    """Check that neither object is None and both have the same type."""
    return x is not None and y is not None and type(x) is type(y)


def _root_entry(x: Any, y: Any) -> DiffEntry:
    if x is None or y is None:
        return DiffEntry("$", DiffType.UNINSPECTABLE, x, y, "cannot compare None")
    return DiffEntry(
        "$",
        DiffType.TYPE_MISMATCH,
        x,
        y,
        f"type mismatch: {type(x).__qualname__} vs {type(y).__qualname__}",
    )
