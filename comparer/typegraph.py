"""Type-graph walker: discovers dataclass types reachable from sample values."""

from __future__ import annotations

import collections.abc
import dataclasses
import logging
import types
import typing
from dataclasses import dataclass
from typing import Any, Iterator, Optional

from .models import FieldKind

logger = logging.getLogger(__name__)

_NONE_TYPE = type(None)

_SEQUENCE_ORIGINS = (
    list,
    tuple,
    set,
    frozenset,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
    collections.abc.MutableSet,
    collections.abc.Collection,
    collections.abc.Iterable,
)

_MAPPING_ORIGINS = (
    dict,
    collections.abc.Mapping,
    collections.abc.MutableMapping,
)


def is_struct_type(tp: Any) -> bool:
    """Check if a type is a dataclass class (not an instance)."""
    return isinstance(tp, type) and dataclasses.is_dataclass(tp)


def type_name(tp: type) -> str:
    """Canonical name of a type, e.g. 'app.models.Person'."""
    return f"{tp.__module__}.{tp.__qualname__}"


def _strip_optional(hint: Any) -> tuple[Any, bool]:
    """Return (inner, True) for Optional[inner], (hint, False) otherwise."""
    origin = typing.get_origin(hint)
    if origin is typing.Union or origin is types.UnionType:
        args = typing.get_args(hint)
        non_none = [a for a in args if a is not _NONE_TYPE]
        if len(non_none) == 1 and len(args) == 2:
            return non_none[0], True
    return hint, False


def _element_type(origin: Any, args: tuple) -> Optional[Any]:
    """Element type of a homogeneous collection annotation."""
    if not args:
        return None
    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return args[0]
        # heterogeneous tuple[A, B]: only when every slot has the same type
        if all(a == args[0] for a in args):
            return args[0]
        return None
    return args[0]


def classify(hint: Any) -> tuple[FieldKind, Optional[type]]:
    """
    Classify a field annotation.

    Args:
        hint: A resolved type annotation

    Returns:
        Tuple of (kind, target) where target is the dataclass the field
        refers to, or None
    """
    inner, optional = _strip_optional(hint)

    if optional:
        kind, target = classify(inner)
        if kind == FieldKind.STRUCT:
            return FieldKind.POINTER, target
        if kind in (FieldKind.SEQUENCE, FieldKind.MAPPING):
            return kind, target
        return FieldKind.PRIMITIVE, None

    origin = typing.get_origin(hint)

    if origin in _MAPPING_ORIGINS or hint in _MAPPING_ORIGINS:
        return FieldKind.MAPPING, None

    if origin in _SEQUENCE_ORIGINS or hint in (list, tuple, set, frozenset):
        elem = _element_type(origin, typing.get_args(hint))
        if elem is not None:
            elem, _ = _strip_optional(elem)
        if is_struct_type(elem):
            return FieldKind.SEQUENCE, elem
        return FieldKind.SEQUENCE, None

    if is_struct_type(hint):
        return FieldKind.STRUCT, hint

    return FieldKind.PRIMITIVE, None


@dataclass(frozen=True)
class FieldDescriptor:
    """A single field of a struct type."""
    name: str
    kind: FieldKind
    target: Optional[type] = None

    @property
    def exported(self) -> bool:
        return not self.name.startswith("_")

    def child(self) -> Optional[type]:
        """
        Struct type to recurse into, or None.

        Pointers and sequences lead to their struct target regardless of
        its field count; a direct struct field is followed only when the
        struct has at least one field.
        """
        if self.kind in (FieldKind.POINTER, FieldKind.SEQUENCE):
            return self.target
        if self.kind == FieldKind.STRUCT and dataclasses.fields(self.target):
            return self.target
        return None


class TypeDescriptor:
    """Runtime handle for a type, exposing its fields for introspection."""

    def __init__(self, tp: type):
        self.type = tp
        self._fields: Optional[list[FieldDescriptor]] = None

    @classmethod
    def of(cls, value: Any) -> "TypeDescriptor":
        """Build a descriptor from a class or from an instance of it."""
        if isinstance(value, type):
            return cls(value)
        return cls(type(value))

    @property
    def name(self) -> str:
        return type_name(self.type)

    @property
    def is_struct(self) -> bool:
        return is_struct_type(self.type)

    @property
    def fields(self) -> list[FieldDescriptor]:
        if self._fields is None:
            self._fields = self._load_fields()
        return self._fields

    def field(self, name: str) -> Optional[FieldDescriptor]:
        for f in self.fields:
            if f.name == name:
                return f
        return None

    def _load_fields(self) -> list[FieldDescriptor]:
        if not self.is_struct:
            return []

        try:
            hints = typing.get_type_hints(self.type)
        except (NameError, TypeError) as e:
            logger.debug("Cannot resolve annotations of %s: %s", self.name, e)
            hints = None

        result = []
        for f in dataclasses.fields(self.type):
            hint = hints.get(f.name, f.type) if hints is not None else self._resolve(f)
            if hint is None or isinstance(hint, str):
                result.append(FieldDescriptor(f.name, FieldKind.PRIMITIVE))
                continue
            kind, target = classify(hint)
            result.append(FieldDescriptor(f.name, kind, target))
        return result

    def _resolve(self, f: dataclasses.Field) -> Optional[Any]:
        """Resolve a single field annotation, None if it cannot be resolved."""
        # one-field stand-in living in the same module, so only this
        # annotation is evaluated
        shim = type(self.type.__name__, (), {
            "__annotations__": {f.name: f.type},
            "__module__": self.type.__module__,
        })
        try:
            localns = {self.type.__name__: self.type}
            return typing.get_type_hints(shim, localns=localns)[f.name]
        except (NameError, TypeError) as e:
            logger.debug("Cannot resolve %s.%s: %s", self.name, f.name, e)
            return None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TypeDescriptor):
            return NotImplemented
        return self.type is other.type

    def __hash__(self) -> int:
        return hash(self.type)

    def __repr__(self) -> str:
        return f"TypeDescriptor({self.name})"


def discover_types(*seeds: Any) -> Iterator[TypeDescriptor]:
    """
    Walk the type graph reachable from the seeds.

    Each type is emitted before its children; children of a type are walked
    in field order before the walk moves on to the next sibling. A type is
    visited at most once, so cyclic type definitions terminate.

    Args:
        *seeds: Dataclass instances or dataclass classes

    Yields:
        TypeDescriptor for every visited type
    """
    visited: set[type] = set()
    stack: list[Iterator[TypeDescriptor]] = [
        iter([TypeDescriptor.of(s) for s in seeds])
    ]

    while stack:
        descriptor = next(stack[-1], None)
        if descriptor is None:
            stack.pop()
            continue

        if descriptor.type in visited:
            continue
        visited.add(descriptor.type)

        yield descriptor

        children = [
            TypeDescriptor(child)
            for child in (f.child() for f in descriptor.fields)
            if child is not None and child not in visited
        ]
        if children:
            stack.append(iter(children))


def struct_items_recursive_of(*samples: Any) -> list[type]:
    """
    Collect the distinct struct types reachable from the samples.

    Args:
        *samples: Dataclass instances or dataclass classes

    Returns:
        Types in discovery order, first occurrence wins
    """
    seen: set[type] = set()
    items: list[type] = []

    for descriptor in discover_types(*samples):
        # classes are compared by identity; two classes may share a qualname
        if descriptor.type in seen:
            continue
        seen.add(descriptor.type)
        items.append(descriptor.type)

    logger.debug("Discovered %d struct types: %s", len(items),
                 [type_name(t) for t in items])
    return items
