"""Ordered string-keyed document container."""

from __future__ import annotations

from collections.abc import Callable, ItemsView, Iterable, Iterator, KeysView, Mapping, ValuesView
from typing import TYPE_CHECKING, Any, Optional

from ..exceptions import NotFoundError
from .access import TypedAccessMixin
from .value import Value

if TYPE_CHECKING:
    from ..config import CodecConfig


class Map(TypedAccessMixin):
    """Ordered mapping from str keys to Values.

    Keys are unique and keep insertion order. Re-inserting an existing key
    replaces its value in place; a new key is appended. Equality is order
    sensitive, so two maps holding the same pairs in a different order are
    not equal (their encodings differ too).

    Plain Python values are converted with Value.from_native(), so integers
    must be wrapped to pick a width.

    Example:
        ```python
        from packdoc import Map, Value

        reading = Map()
        reading["temperature"] = Value.i16(2350)
        reading["humidity"] = Value.u8(65)
        reading["station"] = "north-7"

        data = reading.to_bytes()
        decoded = Map.from_bytes(data)
        assert decoded.get_i16("temperature") == 2350
        ```
    """

    __slots__ = ("_items",)

    def __init__(self, pairs: Mapping[str, Any] | Iterable[tuple[str, Any]] | None = None) -> None:
        self._items: dict[str, Value] = {}
        if pairs is not None:
            self.extend(pairs)

    @classmethod
    def with_capacity(cls, capacity: int) -> Map:
        """Create an empty Map. The capacity is a hint only."""
        if capacity < 0:
            raise ValueError(f"capacity must be >= 0, got {capacity}")
        return cls()

    # -- mutation -----------------------------------------------------------

    def insert(self, key: str, value: Any) -> Optional[Value]:
        """Insert or replace a key.

        Args:
            key: Map key
            value: Value, or plain data accepted by Value.from_native()

        Returns:
            The previous value under key, or None if the key was new

        A Map or Array value is stored by reference, not copied: later
        changes to it show through this map. Pass value.copy() to keep an
        independent snapshot.

        Raises:
            TypeError: If key is not a str or value can't be converted
        """
        if not isinstance(key, str):
            raise TypeError(f"Map keys must be str, got {type(key).__name__}")
        new = Value.from_native(value)
        previous = self._items.get(key)
        self._items[key] = new
        return previous

    def __setitem__(self, key: str, value: Any) -> None:
        self.insert(key, value)

    def extend(self, pairs: Mapping[str, Any] | Iterable[tuple[str, Any]]) -> None:
        """Insert every (key, value) pair, in order."""
        if isinstance(pairs, (Map, Mapping)):
            pairs = pairs.items()
        for key, value in pairs:
            self.insert(key, value)

    def remove(self, key: str) -> Optional[Value]:
        """Remove a key and return its value, or None if absent.

        The remaining keys keep their relative order.
        """
        return self._items.pop(key, None)

    def __delitem__(self, key: str) -> None:
        if self._items.pop(key, None) is None:
            raise NotFoundError(key)

    def clear(self) -> None:
        self._items.clear()

    def pop(self) -> tuple[str, Value]:
        """Remove and return the last (key, value) pair.

        Raises:
            NotFoundError: If the map is empty
        """
        if not self._items:
            raise NotFoundError(-1)
        return self._items.popitem()

    def retain(self, predicate: Callable[[str, Value], bool]) -> None:
        """Keep only the entries for which predicate(key, value) is true.

        Survivors keep their relative order.
        """
        self._items = {key: value for key, value in self._items.items() if predicate(key, value)}

    def sort_keys(self) -> None:
        """Reorder the entries by key (code point order)."""
        self._items = dict(sorted(self._items.items(), key=lambda item: item[0]))

    # -- lookup -------------------------------------------------------------

    def get(self, key: str, default: Optional[Value] = None) -> Optional[Value]:
        """Return the value under key, or default if absent."""
        return self._items.get(key, default)

    def __getitem__(self, key: str) -> Value:
        try:
            return self._items[key]
        except (KeyError, TypeError):
            raise NotFoundError(key) from None

    def contains_key(self, key: str) -> bool:
        return key in self._items

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key in self._items

    def get_index(self, index: int) -> Optional[tuple[str, Value]]:
        """Return the (key, value) pair at a position, or None if out of range."""
        if not 0 <= index < len(self._items):
            return None
        for position, item in enumerate(self._items.items()):
            if position == index:
                return item
        return None

    def index_of(self, key: str) -> Optional[int]:
        """Return the position of key, or None if absent."""
        for position, existing in enumerate(self._items):
            if existing == key:
                return position
        return None

    def _lookup(self, key: Any) -> Optional[Value]:
        if not isinstance(key, str):
            return None
        return self._items.get(key)

    def keys(self) -> KeysView[str]:
        return self._items.keys()

    def values(self) -> ValuesView[Value]:
        return self._items.values()

    def items(self) -> ItemsView[str, Value]:
        return self._items.items()

    # -- container protocol -------------------------------------------------

    def __len__(self) -> int:
        return len(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Map):
            return NotImplemented
        return list(self._items.items()) == list(other._items.items())

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Map({self._items!r})"

    def copy(self) -> Map:
        """Return a deep copy of this Map."""
        clone = Map()
        for key, value in self._items.items():
            clone._items[key] = value.copy()
        return clone

    # -- codec --------------------------------------------------------------

    def to_bytes(self, *, config: CodecConfig | None = None) -> bytes:
        """Encode this Map as a document. See packdoc.codec.encoder.encode()."""
        # Import here to avoid circular dependency
        from ..codec.encoder import encode

        return encode(self, config=config)

    @classmethod
    def from_bytes(cls, data: bytes | bytearray | memoryview, *, config: CodecConfig | None = None) -> Map:
        """Decode a Map document. See packdoc.codec.decoder.decode()."""
        # Import here to avoid circular dependency
        from ..codec.decoder import decode

        return decode(cls, data, config=config)
