"""Document inspection CLI command."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Type, Union

from ..codec.decoder import read_document
from ..codec.tags import DataType
from ..jsonconv import dumps
from ..models.array import Array
from ..models.map import Map
from ..models.value import Value
from ..models.visitor import ValueVisitor, walk
from ..utils.sizing import element_sizes, encoded_size

logger = logging.getLogger(__name__)


def _format_scalar(value: Value) -> str:
    data_type = value.type
    payload = value.payload
    if data_type is DataType.NULL:
        return "null"
    if data_type is DataType.BOOL:
        return "true" if payload else "false"
    if data_type is DataType.STRING:
        return repr(payload)
    if data_type is DataType.BINARY:
        preview = payload[:8].hex()
        return f"<{len(payload)} bytes: {preview}{'...' if len(payload) > 8 else ''}>"
    if data_type is DataType.TIMESTAMP:
        return str(payload.seconds)
    if data_type is DataType.ID:
        return payload.hex()
    return repr(payload)


class TreePrinter(ValueVisitor):
    """Renders a document as an indented tree with the wire size of every element.

    Example output:

        MAP (2 entries, 37 bytes)
          temperature: I16 = 2350 (18 bytes)
          humidity: U8 = 65 (14 bytes)
    """

    def __init__(self) -> None:
        self.lines: list[str] = []
        self._frames: list[dict[str, Any]] = []
        self._key = ""

    def _slot(self) -> tuple[str, int | None]:
        if not self._frames:
            return "", None
        frame = self._frames[-1]
        if frame["map"]:
            return f"{self._key}: ", frame["sizes"][self._key]
        index = frame["index"]
        frame["index"] += 1
        return f"[{index}]: ", frame["sizes"][index]

    def _line(self, text: str) -> None:
        self.lines.append("  " * len(self._frames) + text)

    def visit_scalar(self, value: Value) -> None:
        label, size = self._slot()
        if size is None:
            size = encoded_size(value)
        self._line(f"{label}{value.type.name} = {_format_scalar(value)} ({size} bytes)")

    def visit_key(self, key: str) -> None:
        self._key = key

    def _enter(self, container: Map | Array, name: str, singular: str, plural: str) -> None:
        label, size = self._slot()
        if size is None:
            size = encoded_size(container)
        count = len(container)
        self._line(f"{label}{name} ({count} {singular if count == 1 else plural}, {size} bytes)")
        self._frames.append(
            {"map": isinstance(container, Map), "sizes": element_sizes(container), "index": 0}
        )

    def enter_map(self, value: Map) -> None:
        self._enter(value, "MAP", "entry", "entries")

    def exit_map(self, value: Map) -> None:
        self._frames.pop()

    def enter_array(self, value: Array) -> None:
        self._enter(value, "ARRAY", "element", "elements")

    def exit_array(self, value: Array) -> None:
        self._frames.pop()


def render_tree(node: Union[Value, Map, Array]) -> str:
    """Return the tree rendering of a node. See TreePrinter."""
    printer = TreePrinter()
    walk(node, printer)
    return "\n".join(printer.lines)


def inspect_file(
    file_path: Path,
    *,
    kind: Type[Map] | Type[Array] = Map,
    as_json: bool = False,
    extended: bool = False,
) -> None:
    """Decode a document file and print it.

    Args:
        file_path: Path to a file holding one encoded document
        kind: Map or Array, the document's top-level container
        as_json: Print JSON instead of the size tree
        extended: Print lossless extended JSON (implies as_json)

    Raises:
        OSError: If the file can't be read
        DecodeError: If the file doesn't hold a valid document
        ConversionError: If the document has no plain JSON form
    """
    data = file_path.read_bytes()
    logger.debug("Read %d bytes from %s", len(data), file_path)

    document, end = read_document(kind, data)

    if as_json or extended:
        print(dumps(document, extended=extended, indent=2))
        return

    print(f"{file_path.name}: {len(data)} bytes")
    print(render_tree(document))
    if end < len(data):
        print(f"({len(data) - end} trailing bytes after the document ignored)")
