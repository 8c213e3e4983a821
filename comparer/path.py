"""Path model used by the engine while it walks a pair of values."""

from __future__ import annotations

from typing import Any, Optional

from .models import MISSING
from .utils import build_path


class PathStep:
    """A single step in a path, holding the value pair found at that step."""

    def __init__(self, vx: Any, vy: Any):
        self.vx = vx
        self.vy = vy

    def values(self) -> tuple[Any, Any]:
        return self.vx, self.vy

    @property
    def type(self) -> type:
        """Type of the values at this step (x side wins when present)."""
        return type(self.vy if self.vx is MISSING else self.vx)

    def render(self, parent: str) -> str:
        raise NotImplementedError


class Root(PathStep):
    """The top-level value pair."""

    def render(self, parent: str) -> str:
        return "$"

    def __repr__(self) -> str:
        return f"Root({self.type.__name__})"


class StructField(PathStep):
    """A field of a dataclass."""

    def __init__(self, vx: Any, vy: Any, name: str, struct_type: type):
        super().__init__(vx, vy)
        self.name = name
        self.struct_type = struct_type

    @property
    def exported(self) -> bool:
        return not self.name.startswith("_")

    def render(self, parent: str) -> str:
        return build_path(parent, self.name)

    def __repr__(self) -> str:
        return f"StructField({self.struct_type.__name__}.{self.name})"


class SliceIndex(PathStep):
    """An element of a list or tuple."""

    def __init__(self, vx: Any, vy: Any, key: int):
        super().__init__(vx, vy)
        self.key = key

    def render(self, parent: str) -> str:
        return build_path(parent, self.key)

    def __repr__(self) -> str:
        return f"SliceIndex({self.key})"


class MapIndex(PathStep):
    """An entry of a dict."""

    def __init__(self, vx: Any, vy: Any, key: Any):
        super().__init__(vx, vy)
        self.key = key

    def render(self, parent: str) -> str:
        if isinstance(self.key, str):
            return build_path(parent, self.key)
        return f"{parent}[{self.key!r}]"

    def __repr__(self) -> str:
        return f"MapIndex({self.key!r})"


class Transform(PathStep):
    """The output of a transformer applied to the parent pair."""

    def __init__(self, vx: Any, vy: Any, name: str, transformer: Any = None):
        super().__init__(vx, vy)
        self.name = name
        self.transformer = transformer

    def render(self, parent: str) -> str:
        return f"{self.name}({parent})"

    def __repr__(self) -> str:
        return f"Transform({self.name})"


class Path:
    """Ordered sequence of steps from the root to the current value pair."""

    def __init__(self, steps: Optional[list[PathStep]] = None):
        self._steps: list[PathStep] = list(steps or [])

    def push(self, step: PathStep):
        self._steps.append(step)

    def pop(self) -> PathStep:
        return self._steps.pop()

    def last(self) -> Optional[PathStep]:
        return self._steps[-1] if self._steps else None

    def index(self, i: int) -> Optional[PathStep]:
        """Step at position i (negative counts from the end), or None."""
        try:
            return self._steps[i]
        except IndexError:
            return None

    def __len__(self) -> int:
        return len(self._steps)

    def __iter__(self):
        return iter(self._steps)

    def __str__(self) -> str:
        rendered = "$"
        for step in self._steps:
            rendered = step.render(rendered)
        return rendered

    def __repr__(self) -> str:
        return f"Path({self})"
