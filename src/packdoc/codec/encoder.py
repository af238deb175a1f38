"""Document encoder.

This module provides the encode() function that converts a Map or Array tree
into its binary frame. Frames are written in a single pass: a 4-byte length
slot is reserved, the elements follow, and the slot is backpatched once the
terminator has been written.
"""

from __future__ import annotations

from ..config import DEFAULT_CONFIG, MAX_U32, CodecConfig
from ..exceptions import DepthExceededError, EncodeOverflowError
from ..models.array import Array
from ..models.map import Map
from ..models.value import Value
from .bytepack import BytePacker
from .scalar import write_scalar
from .tags import TERMINATOR, VARIABLE_TYPES, DataType
from .varlen import write_key, write_var


def encode(document: Map | Array, *, config: CodecConfig | None = None) -> bytes:
    """Encode a Map or Array document to bytes.

    Frame layout (shared by Map and Array):

        u32 LE total_length | element* | 0x00

    total_length counts from the first byte of the length field through the
    terminator. Map elements are ``tag | key | payload``; Array elements are
    ``tag | payload``.

    Args:
        document: Top-level Map or Array
        config: Codec limits (defaults to DEFAULT_CONFIG)

    Returns:
        Encoded document

    Raises:
        TypeError: If document is not a Map or Array
        DepthExceededError: If containers nest deeper than config.max_depth
        EncodeOverflowError: If a payload or frame exceeds its 32-bit length
            field, or the document exceeds config.max_document_size
        InvalidUtf8Error: If a string or key can't be encoded as UTF-8

    Examples:
        ```python
        from packdoc import Map, Value, encode

        reading = Map({"temperature": Value.i16(2350), "humidity": Value.u8(65)})
        data = encode(reading)
        assert len(data) == 37
        ```
    """
    if not isinstance(document, (Map, Array)):
        raise TypeError(f"Top-level document must be a Map or Array, got {type(document).__name__}")

    config = config or DEFAULT_CONFIG
    packer = BytePacker()
    _write_container(packer, document, 1, config)

    size = packer.position()
    if size > config.max_document_size:
        raise EncodeOverflowError(
            f"Document is {size} bytes, exceeds max_document_size={config.max_document_size}"
        )
    return packer.to_bytes()


def write_value(packer: BytePacker, value: Value, depth: int, config: CodecConfig) -> None:
    """Write the payload of any value (tag excluded).

    Args:
        packer: Destination packer
        value: Value to write
        depth: Nesting depth the value would occupy if it is a container
        config: Codec limits
    """
    data_type = value.type
    if data_type is DataType.MAP or data_type is DataType.ARRAY:
        _write_container(packer, value.payload, depth, config)
    elif data_type in VARIABLE_TYPES:
        write_var(packer, value)
    else:
        write_scalar(packer, value)


def _write_container(packer: BytePacker, container: Map | Array, depth: int, config: CodecConfig) -> None:
    if depth > config.max_depth:
        raise DepthExceededError(config.max_depth)

    slot = packer.reserve_u32()

    if isinstance(container, Map):
        for key, value in container.items():
            packer.write_u8(value.tag)
            write_key(packer, key)
            write_value(packer, value, depth + 1, config)
    else:
        for value in container:
            packer.write_u8(value.tag)
            write_value(packer, value, depth + 1, config)

    packer.write_u8(TERMINATOR)

    frame_length = packer.position() - slot
    if frame_length > MAX_U32:
        raise EncodeOverflowError(f"Frame of {frame_length} bytes exceeds the 32-bit length field")
    packer.patch_u32(slot, frame_length)
