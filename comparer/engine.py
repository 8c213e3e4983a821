"""Deep equality engine driven by options."""

from __future__ import annotations

import dataclasses
import logging
from typing import Any

from .exceptions import AmbiguousOptionsError, UnexportedFieldError
from .models import MISSING, DiffEntry, Result
from .options import (
    AllowUnexported,
    Comparer,
    Ignore,
    Option,
    ReporterOption,
    Transformer,
)
from .path import MapIndex, Path, PathStep, Root, SliceIndex, StructField, Transform
from .report import DiffReporter
from .typegraph import is_struct_type

logger = logging.getLogger(__name__)


class Engine:
    """
    Performs a deep comparison of two values under a list of options.

    Handles:
    - Dataclasses, compared field by field
    - Lists and tuples, compared index by index
    - Dicts, compared key by key
    - Everything else with ==
    - Cyclic data (a pair already being compared is equal if it pairs
      the same two objects again)
    """

    def __init__(self, options: tuple[Option, ...] | list[Option] = ()):
        self.options: list[Option] = []
        for option in options:
            self.options.extend(option.flatten())

        for option in self.options:
            option.validate()

        self.reporters = [
            o.reporter for o in self.options if isinstance(o, ReporterOption)
        ]
        self._exporters = [
            o for o in self.options if isinstance(o, AllowUnexported)
        ]

        self.path = Path()
        self.is_equal = True
        self._x_stack: dict[int, int] = {}
        self._y_stack: dict[int, int] = {}

    def compare(self, x: Any, y: Any) -> bool:
        """
        Compare two values.

        Args:
            x: The first value
            y: The second value

        Returns:
            True if the values are equal under the options, False otherwise
        """
        logger.debug("Comparing %s with %s under %d options",
                     type(x).__name__, type(y).__name__, len(self.options))
        self.is_equal = True
        self._compare(Root(x, y))
        return self.is_equal

    def _compare(self, step: PathStep):
        self.path.push(step)
        for reporter in self.reporters:
            reporter.push_step(step)

        self._compare_step(step)

        for reporter in self.reporters:
            reporter.pop_step()
        self.path.pop()

    def _compare_step(self, step: PathStep):
        vx, vy = step.values()

        # Element or key present on one side only (or attribute never set)
        if vx is MISSING or vy is MISSING:
            self._report(Result(equal=vx is vy))
            return

        applicable = self._applicable_options()

        # Ignore is the only option that may skip a private field
        if any(isinstance(o, Ignore) for o in applicable):
            self._report(Result(equal=True, by_ignore=True))
            return

        if isinstance(step, StructField) and not step.exported:
            if not self._allows(step.struct_type):
                raise UnexportedFieldError(step.struct_type, step.name, str(self.path))

        if self._apply_options(applicable, vx, vy):
            return

        if type(vx) is not type(vy):
            self._report(Result(equal=False))
            return

        if is_struct_type(type(vx)):
            self._with_cycle_guard(vx, vy, self._compare_struct)
        elif isinstance(vx, (list, tuple)):
            self._with_cycle_guard(vx, vy, self._compare_sequence)
        elif isinstance(vx, dict):
            self._with_cycle_guard(vx, vy, self._compare_mapping)
        else:
            self._compare_leaf(vx, vy)

    def _applicable_options(self) -> list[Option]:
        """Core options that apply to the current pair, each one once."""
        applicable: list[Option] = []
        for option in self.options:
            for core in option.applicable(self.path):
                if not any(core is seen for seen in applicable):
                    applicable.append(core)
        return applicable

    def _apply_options(self, applicable: list[Option], vx: Any, vy: Any) -> bool:
        """Apply the transformer or comparer governing the pair. Returns True if one did."""
        if not applicable:
            return False

        if len(applicable) > 1:
            raise AmbiguousOptionsError(str(self.path), applicable)

        option = applicable[0]
        if isinstance(option, Transformer):
            self._compare(Transform(option.fn(vx), option.fn(vy), option.name, option))
            return True

        if isinstance(option, Comparer):
            self._report(Result(equal=bool(option.fn(vx, vy)), by_func=True))
            return True

        return False

    def _allows(self, struct_type: type) -> bool:
        return any(e.allows(struct_type) for e in self._exporters)

    def _with_cycle_guard(self, vx: Any, vy: Any, compare_fn):
        seen_x = self._x_stack.get(id(vx))
        seen_y = self._y_stack.get(id(vy))
        if seen_x is not None or seen_y is not None:
            # Revisiting a pair on the current path: equal only if it pairs
            # the same two objects as the first visit did.
            self._report(Result(equal=seen_x == id(vy) and seen_y == id(vx)))
            return

        self._x_stack[id(vx)] = id(vy)
        self._y_stack[id(vy)] = id(vx)
        compare_fn(vx, vy)
        del self._x_stack[id(vx)]
        del self._y_stack[id(vy)]

    def _compare_struct(self, vx: Any, vy: Any):
        struct_type = type(vx)
        for field in dataclasses.fields(struct_type):
            self._compare(StructField(
                getattr(vx, field.name, MISSING),
                getattr(vy, field.name, MISSING),
                field.name,
                struct_type,
            ))

    def _compare_sequence(self, vx: Any, vy: Any):
        for i in range(max(len(vx), len(vy))):
            self._compare(SliceIndex(
                vx[i] if i < len(vx) else MISSING,
                vy[i] if i < len(vy) else MISSING,
                i,
            ))

    def _compare_mapping(self, vx: dict, vy: dict):
        keys = list(vx.keys()) + [k for k in vy.keys() if k not in vx]
        for key in keys:
            self._compare(MapIndex(vx.get(key, MISSING), vy.get(key, MISSING), key))

    def _compare_leaf(self, vx: Any, vy: Any):
        by_method = _has_own_eq(type(vx))
        self._report(Result(equal=bool(vx == vy), by_method=by_method))

    def _report(self, result: Result):
        if not result.equal:
            self.is_equal = False
        for reporter in self.reporters:
            reporter.report(result)


def _has_own_eq(tp: type) -> bool:
    """Check if a non-builtin type defines its own __eq__."""
    return tp.__module__ != "builtins" and tp.__eq__ is not object.__eq__


def equal(x: Any, y: Any, *options: Option) -> bool:
    """Check if two values are deeply equal under the options."""
    return Engine(options).compare(x, y)


def diff_entries(x: Any, y: Any, *options: Option) -> list[DiffEntry]:
    """Collect every unequal leaf between two values under the options."""
    reporter = DiffReporter()
    Engine(options + (ReporterOption(reporter),)).compare(x, y)
    return reporter.entries


def diff(x: Any, y: Any, *options: Option) -> str:
    """
    Render the differences between two values.

    Returns:
        Empty string if the values are equal, otherwise one block per
        unequal leaf
    """
    reporter = DiffReporter()
    Engine(options + (ReporterOption(reporter),)).compare(x, y)
    return reporter.custom_report()
