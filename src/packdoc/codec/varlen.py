"""Variable-length codec for String and Binary payloads.

Layout: u32 little-endian byte length N, then N bytes of content. Map keys
share the String layout. Strings are strict UTF-8 both ways; invalid input is
rejected, never repaired.
"""

from __future__ import annotations

from ..config import MAX_U32
from ..exceptions import EncodeOverflowError, InvalidTagError, InvalidUtf8Error, TruncationError
from ..models.value import Value
from .bytepack import BytePacker, ByteUnpacker
from .tags import VARIABLE_TYPES, DataType

# Largest content length the 4-byte length prefix can describe.
MAX_VAR_LENGTH = MAX_U32


def encode_utf8(text: str) -> bytes:
    """Encode text as strict UTF-8.

    Raises:
        InvalidUtf8Error: If text holds lone surrogates
    """
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise InvalidUtf8Error(f"String is not encodable as UTF-8: {e.reason}") from e


def _write_content(packer: BytePacker, content: bytes) -> None:
    if len(content) > MAX_VAR_LENGTH:
        raise EncodeOverflowError(
            f"Payload of {len(content)} bytes exceeds the {MAX_VAR_LENGTH}-byte length field"
        )
    packer.write_u32(len(content))
    packer.write_bytes(content)


def _read_content(unpacker: ByteUnpacker, what: str) -> bytes:
    if unpacker.bytes_remaining() < 4:
        raise TruncationError(f"{what} length needs 4 bytes, only {unpacker.bytes_remaining()} available")
    length = unpacker.read_u32()
    if length > unpacker.bytes_remaining():
        raise TruncationError(
            f"{what} declares {length} bytes, only {unpacker.bytes_remaining()} available"
        )
    return unpacker.read_bytes(length)


def _decode_utf8(content: bytes, what: str) -> str:
    try:
        return content.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidUtf8Error(f"{what} is not valid UTF-8: {e.reason} at byte {e.start}") from e


def write_var(packer: BytePacker, value: Value) -> None:
    """Write a String or Binary payload.

    Raises:
        TypeError: If value is neither String nor Binary
        InvalidUtf8Error: If a String holds code points UTF-8 can't represent
        EncodeOverflowError: If the content exceeds MAX_VAR_LENGTH bytes
    """
    if value.type is DataType.STRING:
        _write_content(packer, encode_utf8(value.payload))
    elif value.type is DataType.BINARY:
        _write_content(packer, value.payload)
    else:
        raise TypeError(f"{value.type.name} is not a variable-length type")


def read_var(unpacker: ByteUnpacker, data_type: DataType) -> Value:
    """Read a String or Binary payload.

    Raises:
        InvalidTagError: If data_type is neither String nor Binary
        TruncationError: If the length or content runs past the window
        InvalidUtf8Error: If String content is not valid UTF-8
    """
    if data_type not in VARIABLE_TYPES:
        raise InvalidTagError(int(data_type), f"Tag 0x{int(data_type):02x} is not a variable-length type")
    content = _read_content(unpacker, data_type.name)
    if data_type is DataType.STRING:
        return Value.string(_decode_utf8(content, "STRING"))
    return Value.binary(content)


def write_key(packer: BytePacker, key: str) -> None:
    """Write a Map key (String layout)."""
    _write_content(packer, encode_utf8(key))


def read_key(unpacker: ByteUnpacker) -> str:
    """Read a Map key (String layout).

    Raises:
        TruncationError: If the key runs past the window
        InvalidUtf8Error: If the key is not valid UTF-8
    """
    return _decode_utf8(_read_content(unpacker, "Key"), "Key")


def encode_var(value: Value) -> bytes:
    """Encode a String or Binary value as length prefix plus content.

    Example:
        >>> encode_var(Value.string("héllo"))
        b'\\x06\\x00\\x00\\x00h\\xc3\\xa9llo'
    """
    packer = BytePacker()
    write_var(packer, value)
    return packer.to_bytes()


def decode_var(data: bytes, data_type: DataType = DataType.STRING) -> tuple[Value, int]:
    """Decode a String or Binary payload from the start of data.

    Args:
        data: Bytes starting with the 4-byte length
        data_type: STRING (default) or BINARY

    Returns:
        Tuple of (value, bytes consumed), where consumed is 4 + N
    """
    unpacker = ByteUnpacker(data)
    value = read_var(unpacker, DataType(data_type))
    return value, unpacker.position()
