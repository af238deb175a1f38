"""Exception hierarchy for packdoc.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from PackdocError for easy catching of any packdoc-specific error.

Every exception class carries an ``ErrorKind`` in its ``kind`` attribute, so callers
that prefer matching on a value over matching on a class can do so:

    >>> try:
    ...     Map.from_bytes(b"\\x05\\x00")
    ... except PackdocError as e:
    ...     e.kind
    <ErrorKind.TRUNCATION: 'truncation'>
"""

from __future__ import annotations

import enum
from typing import Any


class ErrorKind(enum.Enum):
    """Closed set of failure kinds reported by packdoc."""

    TRUNCATION = "truncation"
    FRAMING = "framing"
    INVALID_TAG = "invalid_tag"
    INVALID_UTF8 = "invalid_utf8"
    DUPLICATE_KEY = "duplicate_key"
    DEPTH_EXCEEDED = "depth_exceeded"
    TYPE_MISMATCH = "type_mismatch"
    NOT_FOUND = "not_found"
    ENCODE_OVERFLOW = "encode_overflow"
    SCHEMA = "schema"
    CONVERSION = "conversion"
    IDENTIFIER = "identifier"
    UNKNOWN = "unknown"


class PackdocError(Exception):
    """Base exception for all packdoc errors."""

    kind: ErrorKind = ErrorKind.UNKNOWN


class DecodeError(PackdocError):
    """Raised when decoding binary data fails.

    Examples:
        - Truncated data (insufficient bytes)
        - Missing or misplaced terminator
        - Unknown type tag
        - Corrupted nested frame
    """


class EncodeError(PackdocError):
    """Raised when encoding a document fails.

    Examples:
        - Variable-length payload longer than the 32-bit length field allows
        - Document larger than the configured maximum
        - Top-level value is not a Map or Array
    """


class AccessError(PackdocError):
    """Raised when a getter cannot produce the requested value."""


class TruncationError(DecodeError):
    """Raised when the buffer is shorter than a declared or required length."""

    kind = ErrorKind.TRUNCATION


class FramingError(DecodeError):
    """Raised when a container frame is structurally inconsistent.

    Examples:
        - Terminator missing at the end of the frame
        - Terminator found before the frame's declared end
        - Declared frame length too small to hold a frame
        - Invalid boolean payload
    """

    kind = ErrorKind.FRAMING


class InvalidTagError(DecodeError):
    """Raised when a type tag byte is outside the known variant set."""

    kind = ErrorKind.INVALID_TAG

    def __init__(self, tag: int, msg: str = "") -> None:
        super().__init__(msg or f"Unrecognized type tag 0x{tag:02x}")
        self.tag = tag


class DuplicateKeyError(DecodeError):
    """Raised when a Map frame repeats a key within one container."""

    kind = ErrorKind.DUPLICATE_KEY

    def __init__(self, key: str) -> None:
        super().__init__(f"Duplicate key {key!r} in map frame")
        self.key = key


class InvalidUtf8Error(DecodeError, EncodeError):
    """Raised when string bytes are not valid UTF-8.

    On decode this means the wire bytes are malformed; on encode it means the
    Python string holds code points UTF-8 cannot represent (lone surrogates).
    """

    kind = ErrorKind.INVALID_UTF8


class DepthExceededError(DecodeError, EncodeError):
    """Raised when containers nest deeper than the configured bound."""

    kind = ErrorKind.DEPTH_EXCEEDED

    def __init__(self, limit: int) -> None:
        super().__init__(f"Container nesting exceeds max_depth={limit}")
        self.limit = limit


class EncodeOverflowError(EncodeError):
    """Raised when a payload or frame does not fit its length field or size limit."""

    kind = ErrorKind.ENCODE_OVERFLOW


class TypeMismatchError(AccessError):
    """Raised when the stored variant differs from the requested one."""

    kind = ErrorKind.TYPE_MISMATCH

    def __init__(self, key: Any, expected: Any, actual: Any) -> None:
        expected_name = getattr(expected, "name", expected)
        actual_name = getattr(actual, "name", actual)
        super().__init__(f"{key!r}: expected {expected_name}, found {actual_name}")
        self.key = key
        self.expected = expected
        self.actual = actual


class NotFoundError(AccessError, LookupError):
    """Raised when a getter is invoked against an absent key or index."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, key: Any) -> None:
        super().__init__(f"{key!r} not present")
        self.key = key


class SchemaError(PackdocError):
    """Raised when a model schema cannot be mapped onto packdoc types.

    Examples:
        - Integer field without a wire width (use U8(), I16(), ...)
        - Unsupported field type
        - Complex Union types
    """

    kind = ErrorKind.SCHEMA


class ConversionError(PackdocError):
    """Raised when a document cannot be converted to or from another representation."""

    kind = ErrorKind.CONVERSION


class IdentifierError(PackdocError, ValueError):
    """Raised for malformed identifiers or an identifier generator out of range."""

    kind = ErrorKind.IDENTIFIER
