"""Schema introspection for pydantic models.

This module analyzes a pydantic model and resolves every field to the wire
type it is stored as inside a Map document.
"""

from __future__ import annotations

import types
from dataclasses import dataclass
from typing import Annotated, Any, List, Optional, Type, Union, get_args, get_origin

from pydantic import BaseModel
from pydantic.fields import FieldInfo

from ..codec.tags import INTEGER_RANGES, DataType
from ..exceptions import SchemaError
from ..models.array import Array
from ..models.id import Id
from ..models.map import Map
from ..models.timestamp import TimeStamp
from ..models.value import Value
from .fields import wire_type_of

# Annotations with exactly one wire type.
_DIRECT_TYPES: dict[Any, DataType] = {
    bool: DataType.BOOL,
    str: DataType.STRING,
    bytes: DataType.BINARY,
    TimeStamp: DataType.TIMESTAMP,
    Id: DataType.ID,
    Map: DataType.MAP,
    Array: DataType.ARRAY,
}


@dataclass(frozen=True)
class FieldSchema:
    """Schema information for a single field (or list item).

    Attributes:
        name: Field name (``name[]`` for list items)
        python_type: Resolved Python type, with Optional and Annotated removed
        data_type: Wire type, or None for a ``Value`` field (any variant)
        required: Whether pydantic requires the field (it has no default)
        nullable: Whether None is accepted and stored as Null
        model: Nested model class when the field is stored as a Map
        item: Schema of the elements when the field is a list
    """

    name: str
    python_type: Any
    data_type: Optional[DataType]
    required: bool
    nullable: bool
    model: Optional[Type[BaseModel]] = None
    item: Optional[FieldSchema] = None

    def describe(self) -> str:
        """Return a one-line human readable description, e.g. ``list[I16]?``."""
        if self.item is not None:
            text = f"list[{self.item.describe()}]"
        elif self.model is not None:
            text = self.model.__name__
        elif self.data_type is None:
            text = "Value"
        else:
            text = self.data_type.name
        return text + "?" if self.nullable else text


class DocumentSchema:
    """Schema information for an entire model.

    Example:
        >>> schema = DocumentSchema.from_model(Reading)
        >>> for field in schema.fields:
        ...     print(f"{field.name}: {field.describe()}")
        temperature: I16
        humidity: U8
    """

    def __init__(self, model_class: Type[BaseModel]) -> None:
        """Initialize schema from a pydantic model.

        Raises:
            SchemaError: If a field can't be mapped to a wire type
        """
        self.model_class = model_class
        self.fields: List[FieldSchema] = []
        self._introspect()

    @classmethod
    def from_model(cls, model_class: Type[BaseModel]) -> DocumentSchema:
        return cls(model_class)

    def _introspect(self) -> None:
        for field_name, field_info in self.model_class.model_fields.items():
            annotation = field_info.annotation
            if annotation is None:
                raise SchemaError(f"Field {field_name} has no type annotation")
            # Pydantic moves Annotated metadata into field_info.metadata; the
            # wire marker lives in json_schema_extra of the merged FieldInfo.
            markers = [field_info, *field_info.metadata]
            self.fields.append(
                resolve_field(field_name, annotation, markers, required=field_info.is_required())
            )


def resolve_field(name: str, annotation: Any, markers: List[Any], *, required: bool = True) -> FieldSchema:
    """Resolve one annotation to a FieldSchema.

    Args:
        name: Field name used in error messages
        annotation: Type annotation, possibly Optional/Annotated/list
        markers: Metadata objects that may carry a wire marker
        required: Whether the field has no default

    Raises:
        SchemaError: If the annotation can't be mapped to a wire type
    """
    annotation, markers = _unwrap_annotated(annotation, markers)

    nullable = False
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        non_none = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(non_none) != 1:
            raise SchemaError(f"Field {name}: complex Union types not supported")
        nullable = True
        annotation, markers = _unwrap_annotated(non_none[0], markers)
        origin = get_origin(annotation)

    marker = None
    for candidate in markers:
        if isinstance(candidate, FieldInfo):
            marker = wire_type_of(candidate) or marker

    if origin is list:
        args = get_args(annotation)
        if not args:
            raise SchemaError(f"Field {name}: list requires an item type, e.g. list[str]")
        item = resolve_field(f"{name}[]", args[0], [])
        return FieldSchema(name, list, DataType.ARRAY, required, nullable, item=item)

    if annotation is Value:
        return FieldSchema(name, Value, None, required, nullable)

    if annotation is int:
        if marker is None or marker not in INTEGER_RANGES:
            raise SchemaError(
                f"Field {name}: int fields need a wire width, e.g. `{name}: int = U16()`"
            )
        return FieldSchema(name, int, marker, required, nullable)

    if annotation is float:
        data_type = DataType.F32 if marker is DataType.F32 else DataType.F64
        return FieldSchema(name, float, data_type, required, nullable)

    if annotation in _DIRECT_TYPES:
        return FieldSchema(name, annotation, _DIRECT_TYPES[annotation], required, nullable)

    if origin is None and isinstance(annotation, type) and issubclass(annotation, BaseModel):
        return FieldSchema(name, annotation, DataType.MAP, required, nullable, model=annotation)

    raise SchemaError(
        f"Field {name}: unsupported type {annotation!r}. Supported: bool, int (with width), "
        f"float, str, bytes, TimeStamp, Id, Map, Array, Value, list, nested models."
    )


def _unwrap_annotated(annotation: Any, markers: List[Any]) -> tuple[Any, List[Any]]:
    while get_origin(annotation) is Annotated:
        base, *extra = get_args(annotation)
        annotation, markers = base, [*markers, *extra]
    return annotation, markers


def describe(model_class: Type[BaseModel]) -> List[FieldSchema]:
    """Return the resolved schema of every field of a model, in declaration order."""
    return DocumentSchema.from_model(model_class).fields
