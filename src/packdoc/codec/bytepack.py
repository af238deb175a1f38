"""Byte-level packing and unpacking utilities.

This module provides the low-level buffer handling shared by the scalar,
variable-length and container codecs. All multi-byte values are little-endian.
"""

from __future__ import annotations

import struct

from ..config import MAX_U32

_U32 = struct.Struct("<I")


class BytePacker:
    """Packs values into a growing byte buffer.

    Besides plain writes, the packer supports reserving a 4-byte length slot
    and patching it once the length is known, which is how container frames
    are built in a single pass.

    Example:
        >>> packer = BytePacker()
        >>> slot = packer.reserve_u32()
        >>> packer.write_u8(0x18)
        >>> packer.write_u8(65)
        >>> packer.patch_u32(slot, packer.position() - slot)
        >>> packer.to_bytes()
        b'\\x06\\x00\\x00\\x00\\x18A'
    """

    def __init__(self) -> None:
        """Initialize an empty byte packer."""
        self._buf = bytearray()

    def write_u8(self, value: int) -> None:
        """Write a single unsigned byte.

        Args:
            value: Byte value (0-255)

        Raises:
            ValueError: If value doesn't fit in one byte
        """
        if not 0 <= value <= 0xFF:
            raise ValueError(f"write_u8 requires 0-255, got {value}")
        self._buf.append(value)

    def write_u32(self, value: int) -> None:
        """Write an unsigned 32-bit little-endian integer.

        Args:
            value: Value to write (0-4294967295)

        Raises:
            ValueError: If value doesn't fit in 32 bits
        """
        if not 0 <= value <= MAX_U32:
            raise ValueError(f"write_u32 requires 0-{MAX_U32}, got {value}")
        self._buf += _U32.pack(value)

    def write_struct(self, fmt: str, value: object) -> None:
        """Write a value packed with a struct format string.

        Args:
            fmt: struct format (e.g. "<h")
            value: Value to pack
        """
        self._buf += struct.pack(fmt, value)

    def write_bytes(self, data: bytes) -> None:
        """Write raw bytes."""
        self._buf += data

    def reserve_u32(self) -> int:
        """Reserve a 4-byte slot for a length written later.

        Returns:
            Position of the reserved slot
        """
        position = len(self._buf)
        self._buf += b"\x00\x00\x00\x00"
        return position

    def patch_u32(self, position: int, value: int) -> None:
        """Overwrite a slot previously returned by reserve_u32().

        Args:
            position: Slot position
            value: Value to store (0-4294967295)

        Raises:
            ValueError: If value doesn't fit in 32 bits
        """
        if not 0 <= value <= MAX_U32:
            raise ValueError(f"patch_u32 requires 0-{MAX_U32}, got {value}")
        _U32.pack_into(self._buf, position, value)

    def position(self) -> int:
        """Return the number of bytes written so far."""
        return len(self._buf)

    def to_bytes(self) -> bytes:
        """Return the packed bytes."""
        return bytes(self._buf)


class ByteUnpacker:
    """Unpacks values from a bounded window of a byte buffer.

    The unpacker never reads outside ``[start, end)``. Nested container frames
    are decoded through a child unpacker obtained from ``window()``, so a
    nested frame can never read its sibling's bytes.

    Example:
        >>> unpacker = ByteUnpacker(data)
        >>> length = unpacker.read_u32()
        >>> tag = unpacker.read_u8()
    """

    def __init__(self, data: bytes | bytearray | memoryview, start: int = 0, end: int | None = None) -> None:
        """Initialize an unpacker over data[start:end].

        Args:
            data: Byte buffer to unpack
            start: First readable position
            end: End of the readable window (exclusive); defaults to len(data)
        """
        self._view = memoryview(data)
        if self._view.ndim != 1 or self._view.itemsize != 1:
            self._view = self._view.cast("B")
        self._end = len(self._view) if end is None else end
        if not 0 <= start <= self._end <= len(self._view):
            raise ValueError(f"Invalid window [{start}, {self._end}) over {len(self._view)} bytes")
        self._position = start

    def read_u8(self) -> int:
        """Read a single unsigned byte.

        Raises:
            IndexError: If no bytes remain in the window
        """
        if self._position >= self._end:
            raise IndexError("Attempted to read past end of buffer")
        value = self._view[self._position]
        self._position += 1
        return value

    def read_u32(self) -> int:
        """Read an unsigned 32-bit little-endian integer.

        Raises:
            IndexError: If fewer than 4 bytes remain
        """
        return int(_U32.unpack(self._take(4))[0])

    def read_struct(self, fmt: str, size: int) -> object:
        """Read one value with a struct format string.

        Args:
            fmt: struct format (e.g. "<h")
            size: Width of the packed value in bytes

        Raises:
            IndexError: If fewer than size bytes remain
        """
        return struct.unpack(fmt, self._take(size))[0]

    def read_bytes(self, num_bytes: int) -> bytes:
        """Read raw bytes.

        Raises:
            IndexError: If fewer than num_bytes remain
        """
        return bytes(self._take(num_bytes))

    def window(self, length: int) -> ByteUnpacker:
        """Split off the next ``length`` bytes as a child unpacker.

        The parent skips past the window, so it resumes after the child's bytes
        regardless of how much of the window the child consumes.

        Raises:
            IndexError: If fewer than length bytes remain
        """
        if length > self.bytes_remaining():
            raise IndexError(f"Not enough bytes: need {length}, have {self.bytes_remaining()}")
        child = ByteUnpacker(self._view, self._position, self._position + length)
        self._position += length
        return child

    def bytes_remaining(self) -> int:
        """Return the number of unread bytes in the window."""
        return self._end - self._position

    def position(self) -> int:
        """Return the current read position (absolute, within the underlying buffer)."""
        return self._position

    def _take(self, num_bytes: int) -> memoryview:
        if num_bytes < 0:
            raise ValueError(f"num_bytes must be >= 0, got {num_bytes}")
        if self._position + num_bytes > self._end:
            raise IndexError(
                f"Not enough bytes: need {num_bytes}, have {self._end - self._position}"
            )
        chunk = self._view[self._position : self._position + num_bytes]
        self._position += num_bytes
        return chunk
