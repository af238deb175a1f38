"""Ordered heterogeneous sequence container."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, Any, Optional

from ..exceptions import NotFoundError
from .access import TypedAccessMixin
from .value import Value

if TYPE_CHECKING:
    from ..config import CodecConfig


class Array(TypedAccessMixin):
    """Ordered sequence of Values.

    Elements may repeat and may be of different variants. Typed getters take a
    non-negative position; ``array[i]`` follows Python indexing.

    Example:
        >>> samples = Array([Value.u16(4000), Value.u16(4012), None])
        >>> samples.get_u16(1)
        4012
        >>> samples.is_null(2)
        True
    """

    __slots__ = ("_values",)

    def __init__(self, values: Iterable[Any] | None = None) -> None:
        self._values: list[Value] = []
        if values is not None:
            self.extend(values)

    @classmethod
    def with_capacity(cls, capacity: int) -> Array:
        """Create an empty Array. The capacity is a hint only."""
        if capacity < 0:
            raise ValueError(f"capacity must be >= 0, got {capacity}")
        return cls()

    # -- mutation -----------------------------------------------------------

    def push(self, value: Any) -> None:
        """Append a Value (or plain data accepted by Value.from_native()).

        A Map or Array is stored by reference, not copied. Use value.copy()
        when the caller keeps mutating it.
        """
        self._values.append(Value.from_native(value))

    def insert(self, index: int, value: Any) -> None:
        """Insert before position index (0 <= index <= len).

        Raises:
            NotFoundError: If index is outside [0, len]
        """
        if not 0 <= index <= len(self._values):
            raise NotFoundError(index)
        self._values.insert(index, Value.from_native(value))

    def extend(self, values: Iterable[Any]) -> None:
        for value in values:
            self.push(value)

    def pop(self, index: int = -1) -> Value:
        """Remove and return the element at index (last by default).

        Raises:
            NotFoundError: If the array is empty or index is out of range
        """
        try:
            return self._values.pop(index)
        except IndexError:
            raise NotFoundError(index) from None

    def clear(self) -> None:
        self._values.clear()

    def __setitem__(self, index: int, value: Any) -> None:
        new = Value.from_native(value)
        try:
            self._values[index] = new
        except IndexError:
            raise NotFoundError(index) from None

    def __delitem__(self, index: int) -> None:
        try:
            del self._values[index]
        except IndexError:
            raise NotFoundError(index) from None

    # -- lookup -------------------------------------------------------------

    def get(self, index: int) -> Optional[Value]:
        """Return the element at a non-negative position, or None if out of range."""
        if not 0 <= index < len(self._values):
            return None
        return self._values[index]

    def __getitem__(self, index: int) -> Value:
        try:
            return self._values[index]
        except IndexError:
            raise NotFoundError(index) from None

    def _lookup(self, key: Any) -> Optional[Value]:
        if isinstance(key, bool) or not isinstance(key, int):
            return None
        return self.get(key)

    # -- container protocol -------------------------------------------------

    def __len__(self) -> int:
        return len(self._values)

    def is_empty(self) -> bool:
        return not self._values

    def __iter__(self) -> Iterator[Value]:
        return iter(self._values)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Array):
            return NotImplemented
        return self._values == other._values

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Array({self._values!r})"

    def copy(self) -> Array:
        """Return a deep copy of this Array."""
        clone = Array()
        clone._values = [value.copy() for value in self._values]
        return clone

    # -- codec --------------------------------------------------------------

    def to_bytes(self, *, config: CodecConfig | None = None) -> bytes:
        """Encode this Array as a document. See packdoc.codec.encoder.encode()."""
        # Import here to avoid circular dependency
        from ..codec.encoder import encode

        return encode(self, config=config)

    @classmethod
    def from_bytes(cls, data: bytes | bytearray | memoryview, *, config: CodecConfig | None = None) -> Array:
        """Decode an Array document. See packdoc.codec.decoder.decode()."""
        # Import here to avoid circular dependency
        from ..codec.decoder import decode

        return decode(cls, data, config=config)
