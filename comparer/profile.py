"""Comparer profiles: comparer configuration loaded from YAML files."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .comparer import ObjectsComparer
from .exceptions import ProfileError
from .utils import import_object

logger = logging.getLogger(__name__)


@dataclass
class ComparerProfile:
    """
    Declarative comparer configuration.

    Types are given as import paths ("package.module:QualName").

    Example YAML:
        ignore_empty_slices: true
        ignore_unexported_of:
          - app.models:Order
        ignore_fields:
          app.models:Order: [updated_at, audit.trace_id]
    """
    ignore_empty_slices: bool = False
    ignore_unexported_of: list[str] = field(default_factory=list)
    allow_unexported_of: list[str] = field(default_factory=list)
    ignore_fields: dict[str, list[str]] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> "ComparerProfile":
        """Build a profile from a parsed YAML/JSON document."""
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ProfileError(
                "Profile must be a mapping",
                {"type": type(data).__name__}
            )

        unknown = set(data) - {f for f in cls.__dataclass_fields__}
        if unknown:
            raise ProfileError(
                f"Unknown profile keys: {', '.join(sorted(unknown))}",
                {"keys": sorted(unknown)}
            )

        ignore_fields = data.get("ignore_fields") or {}
        if not isinstance(ignore_fields, dict):
            raise ProfileError("ignore_fields must be a mapping of type to field names")

        return cls(
            ignore_empty_slices=bool(data.get("ignore_empty_slices", False)),
            ignore_unexported_of=list(data.get("ignore_unexported_of") or []),
            allow_unexported_of=list(data.get("allow_unexported_of") or []),
            ignore_fields={k: list(v) for k, v in ignore_fields.items()},
        )

    def build(self) -> ObjectsComparer:
        """Create an ObjectsComparer configured by this profile."""
        comparer = ObjectsComparer()

        if self.ignore_unexported_of:
            comparer = comparer.with_ignore_unexported_of(
                *self._resolve_all(self.ignore_unexported_of)
            )
        if self.allow_unexported_of:
            comparer = comparer.with_allow_unexported_of(
                *self._resolve_all(self.allow_unexported_of)
            )
        if self.ignore_empty_slices:
            comparer = comparer.with_ignore_empty_slices()
        for type_path, names in self.ignore_fields.items():
            comparer = comparer.with_ignore_fields(self._resolve(type_path), *names)

        return comparer

    def _resolve_all(self, paths: list[str]) -> list[Any]:
        return [self._resolve(p) for p in paths]

    @staticmethod
    def _resolve(path: str) -> Any:
        try:
            return import_object(path)
        except (ValueError, ImportError, AttributeError) as e:
            raise ProfileError(f"Cannot resolve type '{path}': {e}", {"path": path})


def load_profile(profile_path: str | Path) -> ComparerProfile:
    """
    Load a comparer profile from a YAML (or JSON) file.

    Args:
        profile_path: Path to the profile file

    Returns:
        The parsed ComparerProfile
    """
    profile_path = Path(profile_path)
    if not profile_path.exists():
        raise FileNotFoundError(f"Profile file not found: {profile_path}")

    with open(profile_path, 'r') as f:
        content = f.read()

    # JSON is valid YAML
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ProfileError(f"Failed to parse profile file: {e}", {"path": str(profile_path)})

    logger.debug("Loaded comparer profile from %s", profile_path)
    return ComparerProfile.from_dict(data)
