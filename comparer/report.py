"""Reporter protocol and the default textual diff renderer."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .models import MISSING, DiffEntry, DiffType, Result
from .path import Path, PathStep
from .utils import format_value


class Reporter(ABC):
    """
    Visitor driven by the engine while it walks a pair of values.

    The engine calls push_step when it descends into a value pair, report
    exactly once for every leaf pair, and pop_step when it leaves the pair.
    custom_report is for the caller, after the comparison finished.
    """

    @abstractmethod
    def push_step(self, step: PathStep):
        ...

    @abstractmethod
    def report(self, result: Result):
        ...

    @abstractmethod
    def pop_step(self):
        ...

    @abstractmethod
    def custom_report(self) -> str:
        ...


class DiffReporter(Reporter):
    """Collects every unequal leaf as a DiffEntry."""

    def __init__(self):
        self.path = Path()
        self.entries: list[DiffEntry] = []

    def push_step(self, step: PathStep):
        self.path.push(step)

    def report(self, result: Result):
        if result.equal:
            return

        vx, vy = self.path.last().values()
        self.entries.append(DiffEntry(
            path=str(self.path),
            type=classify_difference(vx, vy),
            x_value=vx,
            y_value=vy,
        ))

    def pop_step(self):
        self.path.pop()

    def custom_report(self) -> str:
        return render_entries(self.entries)


def classify_difference(vx, vy) -> DiffType:
    """Kind of difference between two unequal leaf values."""
    if vy is MISSING:
        return DiffType.MISSING_IN_Y
    if vx is MISSING:
        return DiffType.EXTRA_IN_Y
    if type(vx) is not type(vy):
        return DiffType.TYPE_MISMATCH
    return DiffType.VALUE_MISMATCH


def render_entries(entries: list[DiffEntry]) -> str:
    """
    Render diff entries as text.

    Each entry becomes:

        $.path.to.field:
        	-: <x value>
        	+: <y value>
    """
    lines = []
    for entry in entries:
        header = f"{entry.path}:"
        if entry.message:
            header = f"{header} {entry.message}"
        lines.append(
            f"{header}\n"
            f"\t-: {format_value(entry.x_value)}\n"
            f"\t+: {format_value(entry.y_value)}\n"
        )
    return "".join(lines)
