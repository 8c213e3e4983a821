"""
Options understood by the comparison engine.

An option is evaluated at every value pair the engine visits. Core options
(Ignore, Transformer, Comparer) decide what happens to the pair; filters
narrow where a core option applies; the remaining options configure the
engine as a whole (visibility of private fields, reporters).
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable

from .exceptions import InvalidOptionError
from .models import MISSING, FieldKind
from .path import Path, StructField, Transform
from .typegraph import (
    TypeDescriptor,
    is_struct_type,
    struct_items_recursive_of,
    type_name,
)
from .utils import is_empty_collection, is_sorted, less_to_key

logger = logging.getLogger(__name__)

# less(x, y) reports whether x must sort before y
LessSlices = Callable[[Any, Any], bool]


class Option:
    """Base class for all options."""

    def applicable(self, path: Path) -> list["Option"]:
        """Core options that apply to the value pair at the end of path."""
        return []

    def validate(self):
        """Check the option parameters. Called by the engine before comparing."""
        pass

    def flatten(self) -> Iterable["Option"]:
        yield self


class Ignore(Option):
    """Treat the value pair as equal without looking at it."""

    def applicable(self, path: Path) -> list[Option]:
        return [self]

    def __repr__(self) -> str:
        return "Ignore()"


class Transformer(Option):
    """Compare fn(x) with fn(y) instead of x with y."""

    def __init__(self, name: str, fn: Callable[[Any], Any]):
        self.name = name
        self.fn = fn

    def applicable(self, path: Path) -> list[Option]:
        last = path.last()
        # never re-apply directly on our own output
        if isinstance(last, Transform) and last.transformer is self:
            return []
        return [self]

    def __repr__(self) -> str:
        return f"Transformer({self.name!r})"


class Comparer(Option):
    """Decide equality of the value pair with fn(x, y)."""

    def __init__(self, fn: Callable[[Any, Any], bool]):
        self.fn = fn

    def applicable(self, path: Path) -> list[Option]:
        return [self]

    def __repr__(self) -> str:
        return f"Comparer({getattr(self.fn, '__name__', self.fn)!r})"


class FilterPath(Option):
    """Apply an option only where predicate(path) holds."""

    def __init__(self, predicate: Callable[[Path], bool], option: Option):
        self.predicate = predicate
        self.option = option

    def applicable(self, path: Path) -> list[Option]:
        if self.predicate(path):
            return self.option.applicable(path)
        return []

    def validate(self):
        self.option.validate()

    def __repr__(self) -> str:
        return f"FilterPath({self.option!r})"


class FilterValues(Option):
    """Apply an option only where predicate(x, y) holds for the value pair."""

    def __init__(self, predicate: Callable[[Any, Any], bool], option: Option):
        self.predicate = predicate
        self.option = option

    def applicable(self, path: Path) -> list[Option]:
        vx, vy = path.last().values()
        if vx is MISSING or vy is MISSING:
            return []
        if self.predicate(vx, vy):
            return self.option.applicable(path)
        return []

    def validate(self):
        self.option.validate()

    def __repr__(self) -> str:
        return f"FilterValues({self.option!r})"


class Options(Option):
    """A group of options treated as one."""

    def __init__(self, *options: Option):
        self.options = list(options)

    def applicable(self, path: Path) -> list[Option]:
        result = []
        for option in self.options:
            result.extend(option.applicable(path))
        return result

    def validate(self):
        for option in self.options:
            option.validate()

    def flatten(self) -> Iterable[Option]:
        for option in self.options:
            yield from option.flatten()

    def __repr__(self) -> str:
        return f"Options({', '.join(repr(o) for o in self.options)})"


def _validate_struct_types(option: str, types: Iterable[type]):
    for tp in types:
        if not is_struct_type(tp):
            raise InvalidOptionError(
                option, f"{getattr(tp, '__qualname__', tp)!r} is not a dataclass type"
            )


class IgnoreUnexported(Option):
    """Ignore private fields of the given dataclass types."""

    def __init__(self, *types: type):
        self.types = tuple(types)
        self._lookup = set(types)

    def applicable(self, path: Path) -> list[Option]:
        last = path.last()
        if (
            isinstance(last, StructField)
            and not last.exported
            and last.struct_type in self._lookup
        ):
            return [Ignore()]
        return []

    def validate(self):
        _validate_struct_types("IgnoreUnexported", self.types)

    def __repr__(self) -> str:
        return f"IgnoreUnexported({', '.join(t.__qualname__ for t in self.types)})"


class AllowUnexported(Option):
    """Compare private fields of the given dataclass types like public ones."""

    def __init__(self, *types: type):
        self.types = tuple(types)
        self._lookup = set(types)

    def allows(self, struct_type: type) -> bool:
        return struct_type in self._lookup

    def validate(self):
        _validate_struct_types("AllowUnexported", self.types)

    def __repr__(self) -> str:
        return f"AllowUnexported({', '.join(t.__qualname__ for t in self.types)})"


class IgnoreFields(Option):
    """
    Ignore the named fields of a dataclass type.

    A name may be dotted ("address.city") to reach a field of a nested
    dataclass, relative to the given type.
    """

    def __init__(self, typ: Any, *names: str):
        self.type = TypeDescriptor.of(typ).type
        self.names = names
        self._parts = [tuple(name.split(".")) for name in names]

    def applicable(self, path: Path) -> list[Option]:
        last = path.last()
        if not isinstance(last, StructField):
            return []

        for parts in self._parts:
            if self._matches(path, parts):
                return [Ignore()]
        return []

    def _matches(self, path: Path, parts: tuple[str, ...]) -> bool:
        n = len(parts)
        if len(path) < n:
            return False
        steps = [path.index(i) for i in range(-n, 0)]
        for step, name in zip(steps, parts):
            if not isinstance(step, StructField) or step.name != name:
                return False
        return steps[0].struct_type is self.type

    def validate(self):
        _validate_struct_types("IgnoreFields", [self.type])

        for name, parts in zip(self.names, self._parts):
            descriptor = TypeDescriptor(self.type)
            for i, part in enumerate(parts):
                field = descriptor.field(part)
                if field is None:
                    raise InvalidOptionError(
                        "IgnoreFields",
                        f"{name!r} does not name a field of {type_name(self.type)}"
                    )
                if i < len(parts) - 1:
                    if field.target is None or field.kind == FieldKind.SEQUENCE:
                        raise InvalidOptionError(
                            "IgnoreFields",
                            f"{name!r}: field {part!r} is not a nested dataclass"
                        )
                    descriptor = TypeDescriptor(field.target)

    def __repr__(self) -> str:
        return f"IgnoreFields({self.type.__qualname__}, {', '.join(self.names)})"


class ReporterOption(Option):
    """Register a reporter the engine drives while it walks the values."""

    def __init__(self, reporter: Any):
        self.reporter = reporter

    def __repr__(self) -> str:
        return f"ReporterOption({type(self.reporter).__name__})"


def _nil_slice_filter(x: Any, y: Any) -> bool:
    if x is None and y is None:
        return False
    if x is None:
        return is_empty_collection(y)
    if y is None:
        return is_empty_collection(x)
    return False


_NIL_SLICE = FilterValues(
    _nil_slice_filter,
    Transformer("nilSlice", lambda value: None),
)


def slices_compare_option() -> Option:
    """
    Treat an absent collection (None) and a present-but-empty one as equal.

    Both sides of such a pair are transformed to None before comparing.
    The same option instance is returned on every call, so registering it
    twice has the same effect as registering it once.
    """
    return _NIL_SLICE


def sort_slices_option(less_slices: LessSlices) -> Option:
    """
    Sort lists and tuples with less_slices before comparing them.

    less_slices must be a strict weak ordering over the elements, otherwise
    the result of the comparison is undefined.
    """
    key = less_to_key(less_slices)

    def needs_sort(x: Any, y: Any) -> bool:
        if type(x) is not type(y) or type(x) not in (list, tuple):
            return False
        return not is_sorted(x, less_slices) or not is_sorted(y, less_slices)

    def sort(value: Any) -> Any:
        return type(value)(sorted(value, key=key))

    return FilterValues(needs_sort, Transformer("sort", sort))


def build_ignore_unexported(*samples: Any) -> Option:
    """IgnoreUnexported for the samples and every struct type reachable from them."""
    types = struct_items_recursive_of(*samples)
    logger.debug("IgnoreUnexported over %d types", len(types))
    return IgnoreUnexported(*types)


def build_allow_unexported(*samples: Any) -> Option:
    """AllowUnexported for the samples and every struct type reachable from them."""
    types = struct_items_recursive_of(*samples)
    logger.debug("AllowUnexported over %d types", len(types))
    return AllowUnexported(*types)
