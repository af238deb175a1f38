"""Depth-first traversal of Value trees.

External converters (JSON, tree printers, size reports) implement
ValueVisitor and hand it to walk(). The traversal is depth-first in document
order and announces each Map key before the entry's value.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Union

from ..codec.tags import DataType
from ..exceptions import DepthExceededError
from .array import Array
from .map import Map
from .value import Value


class ValueVisitor(ABC):
    """Abstract base class for Value tree visitors.

    Subclasses receive callbacks in document order:

        enter_map(m)
            visit_key("a")  <value of "a">
            visit_key("b")  <value of "b">
        exit_map(m)

    Example:
        ```python
        class KeyCollector(ValueVisitor):
            def __init__(self):
                self.keys = []

            def visit_key(self, key):
                self.keys.append(key)

            def visit_scalar(self, value): ...
            def enter_map(self, value): ...
            def exit_map(self, value): ...
            def enter_array(self, value): ...
            def exit_array(self, value): ...

        collector = KeyCollector()
        walk(document, collector)
        ```
    """

    @abstractmethod
    def visit_scalar(self, value: Value) -> None:
        """Called for every non-container value."""

    @abstractmethod
    def enter_map(self, value: Map) -> None:
        """Called before the entries of a Map."""

    @abstractmethod
    def visit_key(self, key: str) -> None:
        """Called with each Map key, before its value."""

    @abstractmethod
    def exit_map(self, value: Map) -> None:
        """Called after the entries of a Map."""

    @abstractmethod
    def enter_array(self, value: Array) -> None:
        """Called before the elements of an Array."""

    @abstractmethod
    def exit_array(self, value: Array) -> None:
        """Called after the elements of an Array."""


def walk(node: Union[Value, Map, Array], visitor: ValueVisitor, *, max_depth: Optional[int] = None) -> None:
    """Traverse a tree depth-first, reporting every node to visitor.

    Args:
        node: Root of the traversal
        visitor: Receiver of the callbacks
        max_depth: Maximum container nesting (unbounded if None); the root
            container is depth 1

    Raises:
        DepthExceededError: If containers nest deeper than max_depth
    """
    if isinstance(node, (Map, Array)):
        node = Value.map(node) if isinstance(node, Map) else Value.array(node)
    _walk(node, visitor, 1, max_depth)


def _walk(value: Value, visitor: ValueVisitor, depth: int, max_depth: Optional[int]) -> None:
    data_type = value.type
    if data_type is not DataType.MAP and data_type is not DataType.ARRAY:
        visitor.visit_scalar(value)
        return

    if max_depth is not None and depth > max_depth:
        raise DepthExceededError(max_depth)

    if data_type is DataType.MAP:
        container = value.payload
        visitor.enter_map(container)
        for key, item in container.items():
            visitor.visit_key(key)
            _walk(item, visitor, depth + 1, max_depth)
        visitor.exit_map(container)
    else:
        container = value.payload
        visitor.enter_array(container)
        for item in container:
            _walk(item, visitor, depth + 1, max_depth)
        visitor.exit_array(container)
