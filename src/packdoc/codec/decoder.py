"""Document decoder.

This module provides the decode() function that converts a binary frame back
into a Map or Array tree. Every frame is decoded through a window bounded by
its declared length, so a corrupt nested frame can never read its siblings'
bytes. Decoding is all-or-nothing: either the whole document is returned or a
DecodeError is raised.
"""

from __future__ import annotations

import logging
from typing import TypeVar, Union

from ..config import DEFAULT_CONFIG, MIN_FRAME_SIZE, CodecConfig
from ..exceptions import (
    DecodeError,
    DepthExceededError,
    DuplicateKeyError,
    FramingError,
    InvalidTagError,
    TruncationError,
)
from ..models.array import Array
from ..models.map import Map
from ..models.value import Value
from .bytepack import ByteUnpacker
from .scalar import read_scalar
from .tags import TERMINATOR, VARIABLE_TYPES, DataType
from .varlen import read_key, read_var

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Union[Map, Array])


def decode(kind: type[T], data: bytes | bytearray | memoryview, *, config: CodecConfig | None = None) -> T:
    """Decode a document of the given kind.

    Bytes after the end of the frame are ignored; use read_document() to learn
    where the frame ended.

    Args:
        kind: Map or Array (or a subclass of either)
        data: Encoded document
        config: Codec limits (defaults to DEFAULT_CONFIG)

    Returns:
        Decoded document

    Raises:
        TruncationError: If data ends before a declared or required length
        FramingError: If the frame length or terminator is inconsistent
        InvalidTagError: If an element carries an unknown tag
        DuplicateKeyError: If a Map frame repeats a key
        InvalidUtf8Error: If a key or string is not valid UTF-8
        DepthExceededError: If containers nest deeper than config.max_depth

    Examples:
        ```python
        from packdoc import Map, decode

        reading = decode(Map, data)
        print(reading.get_i16("temperature"))
        ```
    """
    document, _ = read_document(kind, data, config=config)
    return document


def read_document(
    kind: type[T],
    data: bytes | bytearray | memoryview,
    offset: int = 0,
    *,
    config: CodecConfig | None = None,
) -> tuple[T, int]:
    """Decode one document starting at offset.

    Useful for reading documents laid back to back in one buffer.

    Args:
        kind: Map or Array (or a subclass of either)
        data: Buffer holding the document
        offset: Position of the document's length field
        config: Codec limits (defaults to DEFAULT_CONFIG)

    Returns:
        Tuple of (document, position just past the frame's terminator)

    Raises:
        TypeError: If kind is not Map or Array
        DecodeError: See decode()
    """
    if not (isinstance(kind, type) and issubclass(kind, (Map, Array))):
        raise TypeError(f"kind must be Map or Array, got {kind!r}")
    if offset < 0:
        raise ValueError(f"offset must be >= 0, got {offset}")

    config = config or DEFAULT_CONFIG
    view = memoryview(data)
    if offset > len(view):
        raise TruncationError(f"Offset {offset} is past the end of a {len(view)}-byte buffer")

    unpacker = ByteUnpacker(view, offset)
    try:
        document = _read_container(unpacker, kind, 1, config)
    except IndexError as e:
        logger.debug("Rejected %s document at offset %d: %s", kind.__name__, offset, e)
        raise TruncationError(f"Unexpected end of data: {e}") from e
    except DecodeError as e:
        logger.debug("Rejected %s document at offset %d: %s", kind.__name__, offset, e)
        raise

    return document, unpacker.position()


def _read_container(unpacker: ByteUnpacker, kind: type[T], depth: int, config: CodecConfig) -> T:
    if depth > config.max_depth:
        raise DepthExceededError(config.max_depth)

    start = unpacker.position()
    if unpacker.bytes_remaining() < 4:
        raise TruncationError(
            f"Frame at {start} needs a 4-byte length, only {unpacker.bytes_remaining()} available"
        )
    length = unpacker.read_u32()

    if length < MIN_FRAME_SIZE:
        raise FramingError(f"Frame at {start} declares {length} bytes, minimum is {MIN_FRAME_SIZE}")
    if length > config.max_document_size:
        raise FramingError(
            f"Frame at {start} declares {length} bytes, exceeds max_document_size={config.max_document_size}"
        )
    if length - 4 > unpacker.bytes_remaining():
        raise TruncationError(
            f"Frame at {start} declares {length} bytes, only {unpacker.bytes_remaining() + 4} available"
        )

    frame = unpacker.window(length - 4)
    container = kind()
    is_map = isinstance(container, Map)

    while True:
        if frame.bytes_remaining() == 0:
            raise FramingError(f"Frame at {start} ends without a terminator")

        tag = frame.read_u8()
        if tag == TERMINATOR:
            if frame.bytes_remaining() != 0:
                raise FramingError(
                    f"Terminator at {frame.position() - 1} precedes the frame end at {start + length}"
                )
            return container

        data_type = DataType.from_tag(tag)
        if data_type is None:
            raise InvalidTagError(tag, f"Unrecognized type tag 0x{tag:02x} at {frame.position() - 1}")

        if is_map:
            key = read_key(frame)
            if container.contains_key(key):
                raise DuplicateKeyError(key)
            container.insert(key, _read_value(frame, data_type, depth + 1, config))
        else:
            container.push(_read_value(frame, data_type, depth + 1, config))


def _read_value(unpacker: ByteUnpacker, data_type: DataType, depth: int, config: CodecConfig) -> Value:
    if data_type is DataType.MAP:
        return Value.map(_read_container(unpacker, Map, depth, config))
    if data_type is DataType.ARRAY:
        return Value.array(_read_container(unpacker, Array, depth, config))
    if data_type in VARIABLE_TYPES:
        return read_var(unpacker, data_type)
    return read_scalar(unpacker, data_type)
