"""Wire type tags and fixed payload widths.

Every encoded element starts with one of these single-byte tags. The values
are part of the wire format and never change. ``TERMINATOR`` (0x00) is not a
type tag; it closes a container frame.
"""

from __future__ import annotations

import enum
from typing import Optional

TERMINATOR: int = 0x00


class DataType(enum.IntEnum):
    """Type tag of a Value variant."""

    BOOL = 0x01
    NULL = 0x02
    F32 = 0x11
    F64 = 0x12
    I32 = 0x13
    I64 = 0x14
    U32 = 0x15
    U64 = 0x16
    I8 = 0x17
    U8 = 0x18
    I16 = 0x19
    U16 = 0x1A
    STRING = 0x21
    BINARY = 0x22
    ARRAY = 0x31
    MAP = 0x32
    TIMESTAMP = 0x41
    ID = 0x42

    @classmethod
    def from_tag(cls, tag: int) -> Optional[DataType]:
        """Return the DataType for a tag byte, or None if the tag is unknown."""
        try:
            return cls(tag)
        except ValueError:
            return None


# struct formats for fixed-width numeric payloads, all little-endian.
STRUCT_FORMATS: dict[DataType, str] = {
    DataType.I8: "<b",
    DataType.U8: "<B",
    DataType.I16: "<h",
    DataType.U16: "<H",
    DataType.I32: "<i",
    DataType.U32: "<I",
    DataType.I64: "<q",
    DataType.U64: "<Q",
    DataType.F32: "<f",
    DataType.F64: "<d",
    DataType.TIMESTAMP: "<Q",
}

# Payload width in bytes of every fixed-width variant (tag excluded).
FIXED_WIDTHS: dict[DataType, int] = {
    DataType.NULL: 0,
    DataType.BOOL: 1,
    DataType.I8: 1,
    DataType.U8: 1,
    DataType.I16: 2,
    DataType.U16: 2,
    DataType.I32: 4,
    DataType.U32: 4,
    DataType.I64: 8,
    DataType.U64: 8,
    DataType.F32: 4,
    DataType.F64: 8,
    DataType.TIMESTAMP: 8,
    DataType.ID: 12,
}

# Inclusive (min, max) of every integer variant. The type is the range contract.
INTEGER_RANGES: dict[DataType, tuple[int, int]] = {
    DataType.I8: (-(2**7), 2**7 - 1),
    DataType.U8: (0, 2**8 - 1),
    DataType.I16: (-(2**15), 2**15 - 1),
    DataType.U16: (0, 2**16 - 1),
    DataType.I32: (-(2**31), 2**31 - 1),
    DataType.U32: (0, 2**32 - 1),
    DataType.I64: (-(2**63), 2**63 - 1),
    DataType.U64: (0, 2**64 - 1),
}

VARIABLE_TYPES = frozenset({DataType.STRING, DataType.BINARY})
CONTAINER_TYPES = frozenset({DataType.MAP, DataType.ARRAY})
SCALAR_TYPES = frozenset(FIXED_WIDTHS)
