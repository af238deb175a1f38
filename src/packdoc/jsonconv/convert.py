"""Conversion between Value trees and JSON.

Two output modes are provided:

- Plain mode is lossy and one-way: every number becomes a JSON number, binary
  becomes base64 text, identifiers become hex text. Good for logs and humans.
- Extended mode is lossless: bool, string, null, arrays and maps stay native,
  every other variant is wrapped in a single-key object naming its type:

    {"$i8": -3}  {"$u16": 4000}  {"$f32": 23.5}  {"$f64": "NaN"}
    {"$bin": "3q2+7w=="}  {"$tim": 1732694400}  {"$mid": "016f9dbd9df7..."}

from_json() reverses extended mode. A map whose only key is a wrapper name
(or "$map" itself) is written escaped as {"$map": {...}} so it reads back as
a map instead of a wrapped scalar.
"""

from __future__ import annotations

import base64
import binascii
import json
import math
from typing import Any, Optional, Union

from ..codec.tags import INTEGER_RANGES, DataType
from ..exceptions import ConversionError, IdentifierError
from ..models.array import Array
from ..models.id import Id
from ..models.map import Map
from ..models.value import Value
from ..models.visitor import ValueVisitor, walk

Node = Union[Value, Map, Array]

# Extended-mode wrapper key per wrapped variant.
WRAPPER_KEYS: dict[DataType, str] = {
    DataType.I8: "$i8",
    DataType.U8: "$u8",
    DataType.I16: "$i16",
    DataType.U16: "$u16",
    DataType.I32: "$i32",
    DataType.U32: "$u32",
    DataType.I64: "$i64",
    DataType.U64: "$u64",
    DataType.F32: "$f32",
    DataType.F64: "$f64",
    DataType.BINARY: "$bin",
    DataType.TIMESTAMP: "$tim",
    DataType.ID: "$mid",
}
_WRAPPED_TYPES = {key: data_type for data_type, key in WRAPPER_KEYS.items()}
MAP_WRAPPER = "$map"

_NON_FINITE = {"NaN": math.nan, "Infinity": math.inf, "-Infinity": -math.inf}


def _float_to_json(x: float, extended: bool) -> Any:
    if math.isfinite(x):
        return x
    if not extended:
        raise ConversionError(f"{x} has no plain JSON form; use extended=True")
    if math.isnan(x):
        return "NaN"
    return "Infinity" if x > 0 else "-Infinity"


def _scalar_to_json(value: Value, extended: bool) -> Any:
    data_type = value.type
    payload = value.payload

    if data_type is DataType.NULL or data_type is DataType.BOOL or data_type is DataType.STRING:
        return payload

    if data_type is DataType.F32 or data_type is DataType.F64:
        encoded = _float_to_json(payload, extended)
    elif data_type is DataType.BINARY:
        encoded = base64.b64encode(payload).decode("ascii")
    elif data_type is DataType.TIMESTAMP:
        encoded = payload.seconds
    elif data_type is DataType.ID:
        encoded = payload.hex()
    else:
        encoded = payload

    if extended:
        return {WRAPPER_KEYS[data_type]: encoded}
    return encoded


class _JsonBuilder(ValueVisitor):
    """Builds the JSON-compatible object for a tree, one callback at a time."""

    def __init__(self, extended: bool) -> None:
        self.extended = extended
        self.result: Any = None
        self._stack: list[Any] = []
        self._keys: list[str] = []

    def _emit(self, obj: Any) -> None:
        if not self._stack:
            self.result = obj
            return
        top = self._stack[-1]
        if isinstance(top, dict):
            top[self._keys.pop()] = obj
        else:
            top.append(obj)

    def visit_scalar(self, value: Value) -> None:
        self._emit(_scalar_to_json(value, self.extended))

    def enter_map(self, value: Map) -> None:
        self._stack.append({})

    def visit_key(self, key: str) -> None:
        self._keys.append(key)

    def exit_map(self, value: Map) -> None:
        obj = self._stack.pop()
        if self.extended and len(obj) == 1:
            (key,) = obj
            if key in _WRAPPED_TYPES or key == MAP_WRAPPER:
                obj = {MAP_WRAPPER: obj}
        self._emit(obj)

    def enter_array(self, value: Array) -> None:
        self._stack.append([])

    def exit_array(self, value: Array) -> None:
        self._emit(self._stack.pop())


def to_json(node: Node, *, extended: bool = False) -> Any:
    """Convert a tree to a JSON-compatible Python object.

    Args:
        node: Value, Map or Array
        extended: Produce lossless extended JSON instead of plain JSON

    Raises:
        ConversionError: If a non-finite float is converted in plain mode

    Example:
        >>> reading = Map({"temperature": Value.i16(2350), "ok": True})
        >>> to_json(reading)
        {'temperature': 2350, 'ok': True}
        >>> to_json(reading, extended=True)
        {'temperature': {'$i16': 2350}, 'ok': True}
    """
    builder = _JsonBuilder(extended)
    walk(node, builder)
    return builder.result


def from_json(obj: Any) -> Value:
    """Convert a JSON-compatible object (plain or extended) to a Value.

    Plain integers become I32 when they fit, else I64, else U64. Plain floats
    become F64.

    Raises:
        ConversionError: If obj holds an unsupported type, an integer outside
            the U64/I64 range, or a malformed wrapper
    """
    if obj is None:
        return Value.null()
    if isinstance(obj, bool):
        return Value.boolean(obj)
    if isinstance(obj, int):
        return _plain_int(obj)
    if isinstance(obj, float):
        return Value.f64(obj)
    if isinstance(obj, str):
        return Value.string(obj)
    if isinstance(obj, (list, tuple)):
        return Value.array(Array(from_json(item) for item in obj))
    if isinstance(obj, dict):
        if len(obj) == 1:
            (key, payload), = obj.items()
            if key == MAP_WRAPPER:
                if not isinstance(payload, dict):
                    raise ConversionError(f"{MAP_WRAPPER} expects an object, got {type(payload).__name__}")
                obj = payload
            else:
                data_type = _WRAPPED_TYPES.get(key)
                if data_type is not None:
                    return _unwrap(data_type, payload)
        document = Map()
        for key, item in obj.items():
            if not isinstance(key, str):
                raise ConversionError(f"JSON object keys must be str, got {type(key).__name__}")
            document.insert(key, from_json(item))
        return Value.map(document)
    raise ConversionError(f"Cannot convert {type(obj).__name__} from JSON")


def _plain_int(n: int) -> Value:
    for data_type in (DataType.I32, DataType.I64, DataType.U64):
        low, high = INTEGER_RANGES[data_type]
        if low <= n <= high:
            return Value(data_type, n)
    raise ConversionError(f"Integer {n} does not fit any wire type")


def _unwrap(data_type: DataType, payload: Any) -> Value:
    key = WRAPPER_KEYS[data_type]

    if data_type in INTEGER_RANGES or data_type is DataType.TIMESTAMP:
        if isinstance(payload, bool) or not isinstance(payload, int):
            raise ConversionError(f"{key} requires an integer, got {payload!r}")
        try:
            return Value(data_type, payload)
        except ValueError as e:
            raise ConversionError(f"{key}: {e}") from e

    if data_type is DataType.F32 or data_type is DataType.F64:
        number: Optional[float] = None
        if isinstance(payload, str):
            number = _NON_FINITE.get(payload)
        elif isinstance(payload, (int, float)) and not isinstance(payload, bool):
            number = float(payload)
        if number is None:
            raise ConversionError(f"{key} requires a number, got {payload!r}")
        try:
            return Value(data_type, number)
        except ValueError as e:
            raise ConversionError(f"{key}: {e}") from e

    if data_type is DataType.BINARY:
        if not isinstance(payload, str):
            raise ConversionError(f"{key} requires base64 text, got {payload!r}")
        try:
            return Value.binary(base64.b64decode(payload, validate=True))
        except binascii.Error as e:
            raise ConversionError(f"{key}: invalid base64: {e}") from e

    if not isinstance(payload, str):
        raise ConversionError(f"{key} requires hex text, got {payload!r}")
    try:
        return Value.identifier(Id.from_hex(payload))
    except IdentifierError as e:
        raise ConversionError(f"{key}: {e}") from e


def dumps(node: Node, *, extended: bool = False, indent: Optional[int] = None) -> str:
    """Serialize a tree to JSON text. See to_json()."""
    return json.dumps(to_json(node, extended=extended), indent=indent, allow_nan=False)


def loads(text: str | bytes) -> Value:
    """Parse JSON text (plain or extended) to a Value. See from_json().

    Raises:
        ConversionError: If text is not valid JSON or can't be converted
    """
    try:
        obj = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConversionError(f"Invalid JSON: {e}") from e
    return from_json(obj)
