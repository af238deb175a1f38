"""The Value tagged union.

A Value pairs a DataType with a payload. It is the single currency passed
across every boundary of the library: containers hold Values, codecs read and
write Values, and typed getters unwrap Values.

Payload types per variant:

    NULL        None
    BOOL        bool
    I8 .. U64   int, range-checked against the width
    F32         float, rounded to binary32 on construction
    F64         float
    STRING      str
    BINARY      bytes
    TIMESTAMP   TimeStamp
    ID          Id
    MAP         Map
    ARRAY       Array

The variant is part of the value's identity: ``Value.i32(5) != Value.u8(5)``.
"""

from __future__ import annotations

import math
import struct
from typing import TYPE_CHECKING, Any, Optional

from ..codec.tags import INTEGER_RANGES, DataType
from ..exceptions import TypeMismatchError
from .id import Id
from .timestamp import TimeStamp

if TYPE_CHECKING:
    from .array import Array
    from .map import Map

_F32 = struct.Struct("<f")
_F64 = struct.Struct("<d")

# Constructor name per variant, used by repr().
_CONSTRUCTOR_NAMES = {
    DataType.NULL: "null",
    DataType.BOOL: "boolean",
    DataType.I8: "i8",
    DataType.U8: "u8",
    DataType.I16: "i16",
    DataType.U16: "u16",
    DataType.I32: "i32",
    DataType.U32: "u32",
    DataType.I64: "i64",
    DataType.U64: "u64",
    DataType.F32: "f32",
    DataType.F64: "f64",
    DataType.STRING: "string",
    DataType.BINARY: "binary",
    DataType.TIMESTAMP: "timestamp",
    DataType.ID: "identifier",
    DataType.MAP: "map",
    DataType.ARRAY: "array",
}


def _round_f32(value: float) -> float:
    try:
        return float(_F32.unpack(_F32.pack(value))[0])
    except OverflowError as e:
        raise ValueError(f"{value} is out of range for F32") from e


def _check_payload(data_type: DataType, payload: Any) -> Any:
    """Validate a payload for a variant and return its stored form.

    Raises:
        TypeError: If the payload has the wrong Python type
        ValueError: If the payload doesn't fit the variant
    """
    if data_type is DataType.NULL:
        if payload is not None:
            raise TypeError(f"NULL takes no payload, got {type(payload).__name__}")
        return None

    if data_type is DataType.BOOL:
        if not isinstance(payload, bool):
            raise TypeError(f"BOOL requires bool, got {type(payload).__name__}")
        return payload

    if data_type in INTEGER_RANGES:
        # bool is an int subclass; True must never become an integer variant
        if isinstance(payload, bool) or not isinstance(payload, int):
            raise TypeError(f"{data_type.name} requires int, got {type(payload).__name__}")
        low, high = INTEGER_RANGES[data_type]
        if not low <= payload <= high:
            raise ValueError(f"{payload} out of range for {data_type.name} [{low}, {high}]")
        return int(payload)

    if data_type is DataType.F32 or data_type is DataType.F64:
        if isinstance(payload, bool) or not isinstance(payload, (int, float)):
            raise TypeError(f"{data_type.name} requires float, got {type(payload).__name__}")
        if data_type is DataType.F32:
            return _round_f32(float(payload))
        return float(payload)

    if data_type is DataType.STRING:
        if not isinstance(payload, str):
            raise TypeError(f"STRING requires str, got {type(payload).__name__}")
        return payload

    if data_type is DataType.BINARY:
        if not isinstance(payload, (bytes, bytearray, memoryview)):
            raise TypeError(f"BINARY requires bytes, got {type(payload).__name__}")
        return bytes(payload)

    if data_type is DataType.TIMESTAMP:
        if isinstance(payload, TimeStamp):
            return payload
        return TimeStamp(payload)

    if data_type is DataType.ID:
        if isinstance(payload, Id):
            return payload
        if isinstance(payload, (bytes, bytearray)):
            return Id(payload)
        raise TypeError(f"ID requires Id, got {type(payload).__name__}")

    # Import here to avoid circular dependency
    from .array import Array
    from .map import Map

    if data_type is DataType.MAP:
        if not isinstance(payload, Map):
            raise TypeError(f"MAP requires Map, got {type(payload).__name__}")
        return payload

    if data_type is DataType.ARRAY:
        if not isinstance(payload, Array):
            raise TypeError(f"ARRAY requires Array, got {type(payload).__name__}")
        return payload

    raise TypeError(f"Unsupported data type {data_type!r}")


class Value:
    """A single typed element of a document.

    Build values with the per-variant constructors, or convert plain Python
    data with from_native():

        >>> Value.i16(2350)
        Value.i16(2350)
        >>> Value.u8(256)
        Traceback (most recent call last):
        ...
        ValueError: 256 out of range for U8 [0, 255]
        >>> Value.from_native({"name": "north-7", "ok": True}).type
        <DataType.MAP: 50>
    """

    __slots__ = ("_type", "_payload")

    def __init__(self, data_type: DataType | int, payload: Any = None) -> None:
        """Create a Value of the given variant.

        Args:
            data_type: Variant of the value
            payload: Payload matching the variant (None for NULL)

        Raises:
            TypeError: If the payload has the wrong Python type
            ValueError: If the payload doesn't fit the variant (e.g. 256 as U8)
        """
        data_type = DataType(data_type)
        self._type = data_type
        self._payload = _check_payload(data_type, payload)

    # -- constructors -------------------------------------------------------

    @classmethod
    def null(cls) -> Value:
        return cls(DataType.NULL)

    @classmethod
    def boolean(cls, value: bool) -> Value:
        return cls(DataType.BOOL, value)

    @classmethod
    def i8(cls, value: int) -> Value:
        return cls(DataType.I8, value)

    @classmethod
    def u8(cls, value: int) -> Value:
        return cls(DataType.U8, value)

    @classmethod
    def i16(cls, value: int) -> Value:
        return cls(DataType.I16, value)

    @classmethod
    def u16(cls, value: int) -> Value:
        return cls(DataType.U16, value)

    @classmethod
    def i32(cls, value: int) -> Value:
        return cls(DataType.I32, value)

    @classmethod
    def u32(cls, value: int) -> Value:
        return cls(DataType.U32, value)

    @classmethod
    def i64(cls, value: int) -> Value:
        return cls(DataType.I64, value)

    @classmethod
    def u64(cls, value: int) -> Value:
        return cls(DataType.U64, value)

    @classmethod
    def f32(cls, value: float) -> Value:
        return cls(DataType.F32, value)

    @classmethod
    def f64(cls, value: float) -> Value:
        return cls(DataType.F64, value)

    @classmethod
    def string(cls, value: str) -> Value:
        return cls(DataType.STRING, value)

    @classmethod
    def binary(cls, value: bytes | bytearray | memoryview) -> Value:
        return cls(DataType.BINARY, value)

    @classmethod
    def timestamp(cls, value: TimeStamp | int) -> Value:
        return cls(DataType.TIMESTAMP, value)

    @classmethod
    def identifier(cls, value: Id | bytes) -> Value:
        return cls(DataType.ID, value)

    @classmethod
    def map(cls, value: Map) -> Value:
        """Wrap a Map. The Map is shared, not copied."""
        return cls(DataType.MAP, value)

    @classmethod
    def array(cls, value: Array) -> Value:
        """Wrap an Array. The Array is shared, not copied."""
        return cls(DataType.ARRAY, value)

    @classmethod
    def from_native(cls, obj: Any) -> Value:
        """Convert plain Python data into a Value tree.

        Conversion table:
            None                          -> NULL
            bool                          -> BOOL
            float                         -> F64
            str                           -> STRING
            bytes, bytearray, memoryview  -> BINARY
            TimeStamp, Id, Map, Array     -> their own variant
            dict (str keys)               -> MAP, recursively
            list, tuple                   -> ARRAY, recursively
            Value                         -> unchanged

        A bare int is rejected: its wire width is ambiguous, and the width is
        part of the document. Wrap it explicitly, e.g. ``Value.u16(4000)``.

        Raises:
            TypeError: If obj (or anything nested in it) can't be converted
        """
        if isinstance(obj, Value):
            return obj
        if obj is None:
            return cls.null()
        if isinstance(obj, bool):
            return cls.boolean(obj)
        if isinstance(obj, int):
            raise TypeError(
                f"Cannot infer the integer width of {obj}; "
                f"use Value.i8/u8/i16/u16/i32/u32/i64/u64"
            )
        if isinstance(obj, float):
            return cls.f64(obj)
        if isinstance(obj, str):
            return cls.string(obj)
        if isinstance(obj, (bytes, bytearray, memoryview)):
            return cls.binary(obj)
        if isinstance(obj, TimeStamp):
            return cls.timestamp(obj)
        if isinstance(obj, Id):
            return cls.identifier(obj)

        # Import here to avoid circular dependency
        from .array import Array
        from .map import Map

        if isinstance(obj, Map):
            return cls.map(obj)
        if isinstance(obj, Array):
            return cls.array(obj)
        if isinstance(obj, dict):
            return cls.map(Map(obj))
        if isinstance(obj, (list, tuple)):
            return cls.array(Array(obj))

        raise TypeError(f"Cannot convert {type(obj).__name__} to Value")

    # -- inspection ---------------------------------------------------------

    @property
    def type(self) -> DataType:
        """Variant of this value."""
        return self._type

    @property
    def tag(self) -> int:
        """One-byte wire discriminant of this value."""
        return int(self._type)

    @property
    def payload(self) -> Any:
        """Payload in its stored Python form (see module docstring)."""
        return self._payload

    def expect(self, data_type: DataType, key: Any = None) -> Any:
        """Return the payload if this value is of ``data_type``.

        Args:
            data_type: Requested variant
            key: Key or index reported in the error, if any

        Raises:
            TypeMismatchError: If the variant differs
        """
        if self._type is not data_type:
            raise TypeMismatchError(key, data_type, self._type)
        return self._payload

    def _view(self, data_type: DataType) -> Any:
        return self._payload if self._type is data_type else None

    def is_null(self) -> bool:
        return self._type is DataType.NULL

    def as_bool(self) -> Optional[bool]:
        return self._view(DataType.BOOL)

    def as_i8(self) -> Optional[int]:
        return self._view(DataType.I8)

    def as_u8(self) -> Optional[int]:
        return self._view(DataType.U8)

    def as_i16(self) -> Optional[int]:
        return self._view(DataType.I16)

    def as_u16(self) -> Optional[int]:
        return self._view(DataType.U16)

    def as_i32(self) -> Optional[int]:
        return self._view(DataType.I32)

    def as_u32(self) -> Optional[int]:
        return self._view(DataType.U32)

    def as_i64(self) -> Optional[int]:
        return self._view(DataType.I64)

    def as_u64(self) -> Optional[int]:
        return self._view(DataType.U64)

    def as_f32(self) -> Optional[float]:
        return self._view(DataType.F32)

    def as_f64(self) -> Optional[float]:
        return self._view(DataType.F64)

    def as_str(self) -> Optional[str]:
        return self._view(DataType.STRING)

    def as_binary(self) -> Optional[bytes]:
        return self._view(DataType.BINARY)

    def as_timestamp(self) -> Optional[TimeStamp]:
        return self._view(DataType.TIMESTAMP)

    def as_id(self) -> Optional[Id]:
        return self._view(DataType.ID)

    def as_map(self) -> Optional[Map]:
        return self._view(DataType.MAP)

    def as_array(self) -> Optional[Array]:
        return self._view(DataType.ARRAY)

    def copy(self) -> Value:
        """Return a deep copy; scalar values are immutable and returned as is."""
        if self._type is DataType.MAP or self._type is DataType.ARRAY:
            return Value(self._type, self._payload.copy())
        return self

    # -- protocol -----------------------------------------------------------

    def _float_bits(self) -> bytes:
        packer = _F32 if self._type is DataType.F32 else _F64
        return packer.pack(self._payload)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        if self._type is not other._type:
            return False
        # Floats compare by bit pattern so NaN equals itself after a round-trip
        if self._type is DataType.F32 or self._type is DataType.F64:
            return self._float_bits() == other._float_bits()
        return bool(self._payload == other._payload)

    def __hash__(self) -> int:
        if self._type is DataType.MAP or self._type is DataType.ARRAY:
            raise TypeError(f"unhashable Value of type {self._type.name}")
        if self._type is DataType.F32 or self._type is DataType.F64:
            return hash((self._type, self._float_bits()))
        return hash((self._type, self._payload))

    def __repr__(self) -> str:
        name = _CONSTRUCTOR_NAMES[self._type]
        if self._type is DataType.NULL:
            return f"Value.{name}()"
        if self._type in (DataType.F32, DataType.F64) and not math.isfinite(self._payload):
            return f"Value.{name}(float({str(self._payload)!r}))"
        return f"Value.{name}({self._payload!r})"
