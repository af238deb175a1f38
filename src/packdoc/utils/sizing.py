"""Document size calculation utilities.

This module provides functions to calculate the encoded size of documents
without actually encoding them.
"""

from __future__ import annotations

from typing import Union

from pydantic import BaseModel

from ..bridge.convert import to_map
from ..codec.tags import FIXED_WIDTHS, DataType
from ..codec.varlen import encode_utf8
from ..models.array import Array
from ..models.map import Map
from ..models.value import Value

# Frame overhead: 4-byte length + terminator.
FRAME_OVERHEAD = 5

Node = Union[Map, Array, Value]


def encoded_size(node: Node | BaseModel) -> int:
    """Calculate the encoded size of a node in bytes.

    For a Map or Array (or a pydantic model, which encodes as a Map) this is
    the size of the whole frame; for a scalar Value it is the payload size,
    tag excluded.

    Raises:
        SchemaError: If a model has a field without a wire type
        InvalidUtf8Error: If a string or key can't be encoded as UTF-8

    Example:
        >>> reading = Map({"temperature": Value.i16(2350), "humidity": Value.u8(65)})
        >>> encoded_size(reading)
        37
        >>> encoded_size(Value.string("abc"))
        7
    """
    if isinstance(node, BaseModel):
        node = to_map(node)
    if isinstance(node, Map):
        node = Value.map(node)
    elif isinstance(node, Array):
        node = Value.array(node)
    return _payload_size(node)


def element_sizes(container: Map | Array) -> dict[str, int] | list[int]:
    """Get the wire size of each element of a container.

    Each size covers the element's tag, its key (Map only) and its payload.

    Returns:
        Dictionary mapping keys to sizes for a Map, list of sizes for an Array

    Example:
        >>> element_sizes(Map({"temperature": Value.i16(2350), "humidity": Value.u8(65)}))
        {'temperature': 18, 'humidity': 14}
    """
    if isinstance(container, Map):
        return {key: _entry_size(key, value) for key, value in container.items()}
    return [1 + _payload_size(value) for value in container]


def field_sizes(model: BaseModel) -> dict[str, int]:
    """Get the wire size of each field of a pydantic model.

    Example:
        >>> field_sizes(Reading(temperature=2350, humidity=65))
        {'temperature': 18, 'humidity': 14}
    """
    return {key: _entry_size(key, value) for key, value in to_map(model).items()}


def _entry_size(key: str, value: Value) -> int:
    return 1 + 4 + len(encode_utf8(key)) + _payload_size(value)


def _payload_size(value: Value) -> int:
    data_type = value.type
    if data_type in FIXED_WIDTHS:
        return FIXED_WIDTHS[data_type]
    if data_type is DataType.STRING:
        return 4 + len(encode_utf8(value.payload))
    if data_type is DataType.BINARY:
        return 4 + len(value.payload)
    if data_type is DataType.MAP:
        return FRAME_OVERHEAD + sum(_entry_size(key, item) for key, item in value.payload.items())
    return FRAME_OVERHEAD + sum(1 + _payload_size(item) for item in value.payload)
