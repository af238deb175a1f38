"""Tests for tree traversal."""

from __future__ import annotations

import pytest

from packdoc import Array, DepthExceededError, Map, Value, ValueVisitor, walk
from packdoc.cli.inspect import render_tree


class EventRecorder(ValueVisitor):
    """Visitor recording every callback as a tuple."""

    def __init__(self) -> None:
        self.events: list[tuple] = []

    def visit_scalar(self, value: Value) -> None:
        self.events.append(("scalar", value))

    def enter_map(self, value: Map) -> None:
        self.events.append(("enter_map", len(value)))

    def visit_key(self, key: str) -> None:
        self.events.append(("key", key))

    def exit_map(self, value: Map) -> None:
        self.events.append(("exit_map",))

    def enter_array(self, value: Array) -> None:
        self.events.append(("enter_array", len(value)))

    def exit_array(self, value: Array) -> None:
        self.events.append(("exit_array",))


class TestWalk:
    """Test walk() callback order."""

    def test_document_order(self) -> None:
        """Test depth-first traversal with keys before values."""
        doc = Map({"a": Value.u8(1), "b": Array([True, Map({"c": None})])})
        recorder = EventRecorder()

        walk(doc, recorder)

        assert recorder.events == [
            ("enter_map", 2),
            ("key", "a"),
            ("scalar", Value.u8(1)),
            ("key", "b"),
            ("enter_array", 2),
            ("scalar", Value.boolean(True)),
            ("enter_map", 1),
            ("key", "c"),
            ("scalar", Value.null()),
            ("exit_map",),
            ("exit_array",),
            ("exit_map",),
        ]

    def test_scalar_root(self) -> None:
        """Test walking a lone scalar."""
        recorder = EventRecorder()
        walk(Value.string("x"), recorder)
        assert recorder.events == [("scalar", Value.string("x"))]

    def test_max_depth(self) -> None:
        """Test the optional depth bound."""
        doc = Array([Array([Array()])])
        walk(doc, EventRecorder(), max_depth=3)
        with pytest.raises(DepthExceededError):
            walk(doc, EventRecorder(), max_depth=2)

    def test_abstract(self) -> None:
        """Test ValueVisitor cannot be instantiated."""
        with pytest.raises(TypeError):
            ValueVisitor()  # type: ignore[abstract]


class TestTreePrinter:
    """Test the size tree rendering."""

    def test_reading(self, reading: Map) -> None:
        """Test the per-entry size report."""
        assert render_tree(reading).splitlines() == [
            "MAP (2 entries, 37 bytes)",
            "  temperature: I16 = 2350 (18 bytes)",
            "  humidity: U8 = 65 (14 bytes)",
        ]

    def test_nested(self) -> None:
        """Test nested containers and array indices."""
        doc = Map({"s": Array([Value.u8(1), b"\x01\x02"])})
        assert render_tree(doc).splitlines() == [
            "MAP (1 entry, 25 bytes)",
            "  s: ARRAY (2 elements, 20 bytes)",
            "    [0]: U8 = 1 (2 bytes)",
            "    [1]: BINARY = <2 bytes: 0102> (7 bytes)",
        ]
