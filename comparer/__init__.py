"""
Comparer - deep structural comparison of dataclass objects

Configures a deep equality engine with relaxations (private fields,
empty-vs-absent collections, unordered collections, excluded fields,
custom reporters) and renders a readable diff on mismatch.
"""

from .comparer import ObjectsComparer, new_objects_comparer, objects_equal
from .engine import Engine, diff, diff_entries, equal
from .exceptions import (
    AmbiguousOptionsError,
    ComparerError,
    InvalidOptionError,
    ProfileError,
    UnexportedFieldError,
)
from .models import DiffEntry, DiffType, FieldKind, Result
from .options import (
    AllowUnexported,
    Comparer,
    FilterPath,
    FilterValues,
    Ignore,
    IgnoreFields,
    IgnoreUnexported,
    LessSlices,
    Option,
    Options,
    ReporterOption,
    Transformer,
    build_allow_unexported,
    build_ignore_unexported,
    slices_compare_option,
    sort_slices_option,
)
from .path import MapIndex, Path, PathStep, Root, SliceIndex, StructField, Transform
from .profile import ComparerProfile, load_profile
from .report import DiffReporter, Reporter
from .typegraph import (
    FieldDescriptor,
    TypeDescriptor,
    discover_types,
    struct_items_recursive_of,
)

__version__ = "1.0.0"
__all__ = [
    # Comparer
    "ObjectsComparer",
    "new_objects_comparer",
    "objects_equal",
    # Engine
    "Engine",
    "equal",
    "diff",
    "diff_entries",
    # Options
    "Option",
    "Options",
    "Ignore",
    "Transformer",
    "Comparer",
    "FilterPath",
    "FilterValues",
    "IgnoreUnexported",
    "AllowUnexported",
    "IgnoreFields",
    "ReporterOption",
    "LessSlices",
    "slices_compare_option",
    "sort_slices_option",
    "build_ignore_unexported",
    "build_allow_unexported",
    # Reporting
    "Reporter",
    "DiffReporter",
    "Result",
    "DiffEntry",
    "DiffType",
    # Paths
    "Path",
    "PathStep",
    "Root",
    "StructField",
    "SliceIndex",
    "MapIndex",
    "Transform",
    # Type graph
    "TypeDescriptor",
    "FieldDescriptor",
    "FieldKind",
    "discover_types",
    "struct_items_recursive_of",
    # Profiles
    "ComparerProfile",
    "load_profile",
    # Errors
    "ComparerError",
    "InvalidOptionError",
    "AmbiguousOptionsError",
    "UnexportedFieldError",
    "ProfileError",
]
