"""12-byte globally unique identifier type.

Byte layout produced by the identifier generator (see ``packdoc.idgen``):

    +---+---+---+---+---+---+---+---+---+---+---+---+
    |     milliseconds      | count |    random     |
    +---+---+---+---+---+---+---+---+---+---+---+---+
      0   1   2   3   4   5   6   7   8   9  10  11

The wire format treats an Id as 12 opaque bytes; the layout above is this
library's convention and is not validated on decode.
"""

from __future__ import annotations

import binascii
from typing import Any

from ..exceptions import IdentifierError

ID_SIZE = 12


class Id:
    """Immutable 12-byte identifier.

    Ids are hashable and order bytewise, so ids from one generator sort in
    creation order.

    Example:
        >>> id_ = Id.from_hex("016f9dbd9df7f7dc9c86d573")
        >>> id_.hex()
        '016f9dbd9df7f7dc9c86d573'
        >>> id_.timestamp_ms
        1578899447287
    """

    __slots__ = ("_bytes",)

    def __init__(self, data: bytes | bytearray) -> None:
        """Create an Id from exactly 12 bytes.

        Raises:
            IdentifierError: If data is not 12 bytes long
        """
        if not isinstance(data, (bytes, bytearray)):
            raise TypeError(f"Id requires bytes, got {type(data).__name__}")
        if len(data) != ID_SIZE:
            raise IdentifierError(f"Id requires exactly {ID_SIZE} bytes, got {len(data)}")
        self._bytes = bytes(data)

    @classmethod
    def new(cls) -> Id:
        """Generate a new Id from the process-wide generator."""
        # Import here to avoid circular dependency
        from ..idgen import new_id

        return new_id()

    @classmethod
    def from_hex(cls, text: str) -> Id:
        """Parse a 24-character hexadecimal string.

        Raises:
            IdentifierError: If text is not valid hex of 12 bytes
        """
        try:
            data = binascii.unhexlify(text)
        except (binascii.Error, ValueError, TypeError) as e:
            raise IdentifierError(f"Invalid Id hex string {text!r}: {e}") from e
        if len(data) != ID_SIZE:
            raise IdentifierError(
                f"Provided string must be a {ID_SIZE}-byte hexadecimal string, got {len(data)} bytes"
            )
        return cls(data)

    @classmethod
    def zero(cls) -> Id:
        """Return the all-zero Id."""
        return cls(bytes(ID_SIZE))

    def is_zero(self) -> bool:
        return self._bytes == bytes(ID_SIZE)

    def to_bytes(self) -> bytes:
        """Return the 12 raw bytes."""
        return self._bytes

    def hex(self) -> str:
        """Return the 24-character lowercase hex form."""
        return self._bytes.hex()

    @property
    def timestamp_ms(self) -> int:
        """Millisecond component (bytes 0-5, big-endian)."""
        return int.from_bytes(self._bytes[:6], "big")

    @property
    def counter(self) -> int:
        """Per-tick counter component (bytes 6-7, big-endian)."""
        return int.from_bytes(self._bytes[6:8], "big")

    def __bytes__(self) -> bytes:
        return self._bytes

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Id):
            return NotImplemented
        return self._bytes == other._bytes

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, Id):
            return NotImplemented
        return self._bytes < other._bytes

    def __le__(self, other: Any) -> bool:
        if not isinstance(other, Id):
            return NotImplemented
        return self._bytes <= other._bytes

    def __gt__(self, other: Any) -> bool:
        if not isinstance(other, Id):
            return NotImplemented
        return self._bytes > other._bytes

    def __ge__(self, other: Any) -> bool:
        if not isinstance(other, Id):
            return NotImplemented
        return self._bytes >= other._bytes

    def __hash__(self) -> int:
        return hash((Id, self._bytes))

    def __str__(self) -> str:
        return self.hex()

    def __repr__(self) -> str:
        return f"Id({self.hex()})"
