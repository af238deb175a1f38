"""Fixed-width scalar codec.

This module encodes and decodes the payload of every fixed-width variant
(Null, Bool, the eight integer widths, F32, F64, TimeStamp and Id). Payloads
are little-endian with no padding; the tag byte is written by the caller.
"""

from __future__ import annotations

from ..exceptions import FramingError, InvalidTagError, TruncationError
from ..models.id import Id
from ..models.timestamp import TimeStamp
from ..models.value import Value
from .bytepack import BytePacker, ByteUnpacker
from .tags import FIXED_WIDTHS, STRUCT_FORMATS, DataType


def write_scalar(packer: BytePacker, value: Value) -> None:
    """Write the payload of a fixed-width value.

    Args:
        packer: Destination packer
        value: Scalar value to write

    Raises:
        TypeError: If the value is not a fixed-width variant
    """
    data_type = value.type
    if data_type is DataType.NULL:
        return
    if data_type is DataType.BOOL:
        packer.write_u8(1 if value.payload else 0)
    elif data_type is DataType.TIMESTAMP:
        packer.write_struct("<Q", value.payload.seconds)
    elif data_type is DataType.ID:
        packer.write_bytes(value.payload.to_bytes())
    elif data_type in STRUCT_FORMATS:
        packer.write_struct(STRUCT_FORMATS[data_type], value.payload)
    else:
        raise TypeError(f"{data_type.name} is not a fixed-width scalar")


def read_scalar(unpacker: ByteUnpacker, data_type: DataType) -> Value:
    """Read the payload of a fixed-width variant.

    Args:
        unpacker: Source unpacker, positioned at the payload
        data_type: Variant announced by the tag

    Returns:
        Decoded value

    Raises:
        InvalidTagError: If data_type is not a fixed-width variant
        TruncationError: If fewer bytes remain than the variant's width
        FramingError: If a Bool payload is neither 0x00 nor 0x01
    """
    if data_type not in FIXED_WIDTHS:
        raise InvalidTagError(int(data_type), f"Tag 0x{int(data_type):02x} is not a scalar type")

    width = FIXED_WIDTHS[data_type]
    if unpacker.bytes_remaining() < width:
        raise TruncationError(
            f"{data_type.name} payload needs {width} bytes, "
            f"only {unpacker.bytes_remaining()} available"
        )

    if data_type is DataType.NULL:
        return Value.null()

    if data_type is DataType.BOOL:
        byte = unpacker.read_u8()
        if byte > 1:
            raise FramingError(f"Invalid BOOL payload 0x{byte:02x}")
        return Value.boolean(byte == 1)

    if data_type is DataType.ID:
        return Value.identifier(Id(unpacker.read_bytes(width)))

    raw = unpacker.read_struct(STRUCT_FORMATS[data_type], width)
    if data_type is DataType.TIMESTAMP:
        return Value.timestamp(TimeStamp(raw))  # type: ignore[arg-type]
    return Value(data_type, raw)


def encode_scalar(value: Value) -> bytes:
    """Encode the payload of a scalar value (tag excluded).

    Example:
        >>> encode_scalar(Value.i16(2350))
        b'.\\t'
        >>> encode_scalar(Value.u8(65))
        b'A'
    """
    packer = BytePacker()
    write_scalar(packer, value)
    return packer.to_bytes()


def decode_scalar(tag: int | DataType, data: bytes) -> Value:
    """Decode one scalar payload from the start of data.

    Args:
        tag: Tag byte announcing the variant
        data: Bytes holding the payload (extra bytes are ignored)

    Raises:
        InvalidTagError: If tag is unknown or not a scalar variant
        TruncationError: If data is shorter than the variant's width
        FramingError: If a Bool payload is neither 0x00 nor 0x01
    """
    data_type = DataType.from_tag(tag)
    if data_type is None:
        raise InvalidTagError(int(tag))
    return read_scalar(ByteUnpacker(data), data_type)
