"""packdoc: Compact Binary Document Codec

A Python library for self-describing, schema-less binary documents. A document
is an ordered Map (or an Array) of typed values: eight integer widths, two
float widths, strings, binary blobs, timestamps, 12-byte identifiers, and
nested containers. Every value keeps its exact type across a round-trip.

Key Features:
- Length-prefixed, terminator-closed container frames (little-endian)
- Strict decoding: truncation, bad tags, duplicate keys and invalid UTF-8
  are reported, never repaired
- Typed getters with no silent coercion
- Pydantic-based typed documents
- Lossless extended JSON

Quick Start:
    >>> from packdoc import Map, Value
    >>>
    >>> reading = Map()
    >>> reading["temperature"] = Value.i16(2350)
    >>> reading["humidity"] = Value.u8(65)
    >>>
    >>> data = reading.to_bytes()
    >>> len(data)
    37
    >>> Map.from_bytes(data).get_i16("temperature")
    2350
"""

from __future__ import annotations

from .bridge import F32, I8, I16, I32, I64, U8, U16, U32, U64, DocumentModel, describe, from_map, to_map
from .codec.decoder import decode, read_document
from .codec.encoder import encode
from .codec.tags import DataType
from .config import DEFAULT_CONFIG, CodecConfig
from .exceptions import (
    AccessError,
    ConversionError,
    DecodeError,
    DepthExceededError,
    DuplicateKeyError,
    EncodeError,
    EncodeOverflowError,
    ErrorKind,
    FramingError,
    IdentifierError,
    InvalidTagError,
    InvalidUtf8Error,
    NotFoundError,
    PackdocError,
    SchemaError,
    TruncationError,
    TypeMismatchError,
)
from .idgen import IdGenerator, default_generator, new_id, set_default_generator
from .models import Array, Id, Map, TimeStamp, Value, ValueVisitor, walk
from .utils import element_sizes, encoded_size, field_sizes

__version__ = "0.1.0"

__all__ = [
    # Core API
    "Map",
    "Array",
    "Value",
    "DataType",
    "TimeStamp",
    "Id",
    "encode",
    "decode",
    "read_document",
    # Configuration
    "CodecConfig",
    "DEFAULT_CONFIG",
    # Identifiers
    "IdGenerator",
    "default_generator",
    "set_default_generator",
    "new_id",
    # Traversal
    "ValueVisitor",
    "walk",
    # Typed documents
    "DocumentModel",
    "to_map",
    "from_map",
    "describe",
    "I8",
    "U8",
    "I16",
    "U16",
    "I32",
    "U32",
    "I64",
    "U64",
    "F32",
    # Exceptions
    "PackdocError",
    "ErrorKind",
    "DecodeError",
    "EncodeError",
    "AccessError",
    "TruncationError",
    "FramingError",
    "InvalidTagError",
    "InvalidUtf8Error",
    "DuplicateKeyError",
    "DepthExceededError",
    "EncodeOverflowError",
    "TypeMismatchError",
    "NotFoundError",
    "SchemaError",
    "ConversionError",
    "IdentifierError",
    # Sizing
    "encoded_size",
    "element_sizes",
    "field_sizes",
    # Version
    "__version__",
]
