"""Tests for the deep equality engine and its options."""

from dataclasses import dataclass
from typing import Optional

import pytest
from comparer import (
    AmbiguousOptionsError,
    Comparer,
    DiffType,
    FilterPath,
    Ignore,
    Options,
    Reporter,
    ReporterOption,
    StructField,
    Transformer,
    diff,
    diff_entries,
    equal,
    sort_slices_option,
)


@dataclass
class Link:
    name: str
    next: Optional["Link"] = None


@dataclass
class Event:
    kind: str
    updated_at: int = 0


class Money:
    """Value type with its own equality."""

    def __init__(self, cents):
        self.cents = cents

    def __eq__(self, other):
        return isinstance(other, Money) and self.cents == other.cents


class ResultCollector(Reporter):
    """Collects every leaf result."""

    def __init__(self):
        self.results = []

    def push_step(self, step):
        pass

    def report(self, result):
        self.results.append(result)

    def pop_step(self):
        pass

    def custom_report(self):
        return ""


class TestBuiltinValues:
    """Test comparison of plain Python values."""

    def test_scalars(self):
        """Test scalar comparison."""
        assert equal(1, 1) is True
        assert equal("a", "b") is False
        assert equal(float("nan"), float("nan")) is False

    def test_type_mismatch_nested(self):
        """Test nested values of different types are reported as such."""
        entries = diff_entries({"a": 1}, {"a": "1"})
        assert len(entries) == 1
        assert entries[0].path == "$.a"
        assert entries[0].type == DiffType.TYPE_MISMATCH

    def test_sequence_length(self):
        """Test missing and extra elements."""
        entries = diff_entries([1, 2, 3], [1, 2])
        assert [(e.path, e.type) for e in entries] == [("$[2]", DiffType.MISSING_IN_Y)]

        entries = diff_entries((1,), (1, 5))
        assert [(e.path, e.type) for e in entries] == [("$[1]", DiffType.EXTRA_IN_Y)]

    def test_mapping_keys(self):
        """Test missing and extra keys."""
        entries = diff_entries({"a": 1, "b": 2}, {"a": 1, "c": 3})
        assert [(e.path, e.type) for e in entries] == [
            ("$.b", DiffType.MISSING_IN_Y),
            ("$.c", DiffType.EXTRA_IN_Y),
        ]

    def test_non_string_keys(self):
        """Test non-string keys are rendered with repr."""
        entries = diff_entries({1: "a"}, {1: "b"})
        assert entries[0].path == "$[1]"

    def test_sets(self):
        """Test sets compare as a whole."""
        assert equal({1, 2}, {2, 1}) is True
        assert equal({1, 2}, {1, 3}) is False

    def test_entry_to_dict(self):
        """Test diff entries serialize to dicts."""
        entry = diff_entries({"a": 1}, {"a": 2})[0]
        assert entry.to_dict() == {
            "path": "$.a",
            "type": "VALUE_MISMATCH",
            "x_value": 1,
            "y_value": 2,
            "message": None,
        }


class TestCycles:
    """Test cyclic data."""

    def test_same_cycle_equal(self):
        """Test two cycles of the same shape are equal."""
        x = Link("a")
        x.next = x
        y = Link("a")
        y.next = y

        assert equal(x, y) is True

    def test_different_cycle_unequal(self):
        """Test cycles with different content are unequal."""
        x = Link("a")
        x.next = x
        y = Link("b")
        y.next = y

        assert equal(x, y) is False

    def test_shared_but_acyclic(self):
        """Test the same object reached twice is not mistaken for a cycle."""
        shared = Link("s")
        x = [shared, shared]
        y = [Link("s"), Link("s")]

        assert equal(x, y) is True


class TestOptions:
    """Test engine option semantics."""

    def test_ignore_wins(self):
        """Test Ignore takes precedence over other applicable options."""
        assert equal(1, 2, Comparer(lambda a, b: False), Ignore()) is True

    def test_ambiguous(self):
        """Test two transformers/comparers on the same pair is an error."""
        with pytest.raises(AmbiguousOptionsError):
            equal(1, 2, Comparer(lambda a, b: True), Transformer("abs", abs))

    def test_transformer(self):
        """Test a transformer is applied once to both sides."""
        assert equal("Hello", "hello", Transformer("lower", str.lower)) is True

        rendered = diff("Hello", "world", Transformer("lower", str.lower))
        assert rendered.startswith("lower($):")

    def test_filter_path(self):
        """Test FilterPath restricts where an option applies."""
        ignore_updated = FilterPath(
            lambda p: isinstance(p.last(), StructField) and p.last().name == "updated_at",
            Ignore(),
        )

        assert equal(Event("a", 1), Event("a", 2), ignore_updated) is True
        assert equal(Event("a", 1), Event("b", 1), ignore_updated) is False

    def test_options_group(self):
        """Test a group of options behaves like its members."""
        assert equal([2, 1], [1, 2], Options(sort_slices_option(lambda a, b: a < b))) is True

    def test_sort_keeps_tuple_type(self):
        """Test sorting a tuple yields a tuple."""
        assert equal((3, 1, 2), (1, 2, 3), sort_slices_option(lambda a, b: a < b)) is True


class TestResults:
    """Test the results reporters receive."""

    def setup_method(self):
        self.collector = ResultCollector()

    def _reporter(self):
        return ReporterOption(self.collector)

    def test_by_ignore(self):
        equal(1, 2, Ignore(), self._reporter())
        assert self.collector.results[0].by_ignore is True
        assert self.collector.results[0].equal is True

    def test_by_func(self):
        equal(1, 2, Comparer(lambda a, b: True), self._reporter())
        assert self.collector.results[0].by_func is True

    def test_by_method(self):
        equal(Money(5), Money(5), self._reporter())
        assert len(self.collector.results) == 1
        assert self.collector.results[0].by_method is True
        assert self.collector.results[0].equal is True

    def test_one_report_per_leaf(self):
        equal(Event("a", 1), Event("a", 2), self._reporter())
        assert [r.equal for r in self.collector.results] == [True, False]
