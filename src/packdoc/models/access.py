"""Typed getters shared by Map and Array.

Each getter looks up a slot and returns its payload only when the stored
variant is exactly the requested one. There is no default substitution and no
numeric coercion: an I16 stored value is not readable through get_i32().
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any

from ..codec.tags import DataType
from ..exceptions import NotFoundError

if TYPE_CHECKING:
    from .array import Array
    from .id import Id
    from .map import Map
    from .timestamp import TimeStamp
    from .value import Value


class TypedAccessMixin:
    """Mixin providing get_<type>() accessors on top of ``_lookup()``."""

    __slots__ = ()

    @abstractmethod
    def _lookup(self, key: Any) -> Value | None:
        """Return the value stored under key, or None if absent."""

    def _typed(self, key: Any, data_type: DataType) -> Any:
        value = self._lookup(key)
        if value is None:
            raise NotFoundError(key)
        return value.expect(data_type, key)

    def is_null(self, key: Any) -> bool:
        """Return True if the slot holds Null.

        Raises:
            NotFoundError: If the slot is absent
        """
        value = self._lookup(key)
        if value is None:
            raise NotFoundError(key)
        return value.is_null()

    def get_bool(self, key: Any) -> bool:
        return self._typed(key, DataType.BOOL)

    def get_i8(self, key: Any) -> int:
        return self._typed(key, DataType.I8)

    def get_u8(self, key: Any) -> int:
        return self._typed(key, DataType.U8)

    def get_i16(self, key: Any) -> int:
        return self._typed(key, DataType.I16)

    def get_u16(self, key: Any) -> int:
        return self._typed(key, DataType.U16)

    def get_i32(self, key: Any) -> int:
        return self._typed(key, DataType.I32)

    def get_u32(self, key: Any) -> int:
        return self._typed(key, DataType.U32)

    def get_i64(self, key: Any) -> int:
        return self._typed(key, DataType.I64)

    def get_u64(self, key: Any) -> int:
        return self._typed(key, DataType.U64)

    def get_f32(self, key: Any) -> float:
        return self._typed(key, DataType.F32)

    def get_f64(self, key: Any) -> float:
        return self._typed(key, DataType.F64)

    def get_str(self, key: Any) -> str:
        return self._typed(key, DataType.STRING)

    def get_binary(self, key: Any) -> bytes:
        return self._typed(key, DataType.BINARY)

    def get_timestamp(self, key: Any) -> TimeStamp:
        return self._typed(key, DataType.TIMESTAMP)

    def get_id(self, key: Any) -> Id:
        return self._typed(key, DataType.ID)

    def get_map(self, key: Any) -> Map:
        return self._typed(key, DataType.MAP)

    def get_array(self, key: Any) -> Array:
        return self._typed(key, DataType.ARRAY)
