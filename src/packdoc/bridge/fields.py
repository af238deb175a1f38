"""Field helpers that pin a model field to a wire type.

Python has one ``int`` and one ``float``; a document has eight integer widths
and two float widths. These helpers attach the wire type to a pydantic field
(and, for integers, the width's range as ``ge``/``le`` so pydantic rejects
out-of-range values on assignment).
"""

from __future__ import annotations

from typing import Any, cast

from pydantic import Field
from pydantic.fields import FieldInfo

from ..codec.tags import INTEGER_RANGES, DataType

# json_schema_extra key carrying the wire type name.
TYPE_MARKER = "packdoc_type"


def _int_field(data_type: DataType, kwargs: dict[str, Any]) -> FieldInfo:
    low, high = INTEGER_RANGES[data_type]
    return cast(FieldInfo, Field(ge=low, le=high, json_schema_extra={TYPE_MARKER: data_type.name}, **kwargs))


def I8(**kwargs: Any) -> FieldInfo:
    """Signed 8-bit integer field.

    Example:
        >>> class Reading(DocumentModel):
        ...     offset: int = I8(default=0)
    """
    return _int_field(DataType.I8, kwargs)


def U8(**kwargs: Any) -> FieldInfo:
    """Unsigned 8-bit integer field."""
    return _int_field(DataType.U8, kwargs)


def I16(**kwargs: Any) -> FieldInfo:
    """Signed 16-bit integer field.

    Example:
        >>> class Reading(DocumentModel):
        ...     temperature: int = I16()          # centi-degrees
        ...     history: list[Annotated[int, I16()]] = []
    """
    return _int_field(DataType.I16, kwargs)


def U16(**kwargs: Any) -> FieldInfo:
    """Unsigned 16-bit integer field."""
    return _int_field(DataType.U16, kwargs)


def I32(**kwargs: Any) -> FieldInfo:
    """Signed 32-bit integer field."""
    return _int_field(DataType.I32, kwargs)


def U32(**kwargs: Any) -> FieldInfo:
    """Unsigned 32-bit integer field."""
    return _int_field(DataType.U32, kwargs)


def I64(**kwargs: Any) -> FieldInfo:
    """Signed 64-bit integer field."""
    return _int_field(DataType.I64, kwargs)


def U64(**kwargs: Any) -> FieldInfo:
    """Unsigned 64-bit integer field."""
    return _int_field(DataType.U64, kwargs)


def F32(**kwargs: Any) -> FieldInfo:
    """Single-precision float field.

    Plain ``float`` fields encode as F64. Values are rounded to binary32 on
    encode, so a decoded model may differ from the original in the low digits.
    """
    return cast(FieldInfo, Field(json_schema_extra={TYPE_MARKER: DataType.F32.name}, **kwargs))


def wire_type_of(field_info: FieldInfo) -> DataType | None:
    """Return the wire type attached by one of the helpers above, if any."""
    extra = field_info.json_schema_extra
    if isinstance(extra, dict) and TYPE_MARKER in extra:
        return DataType[str(extra[TYPE_MARKER])]
    return None
