"""Conversion between pydantic models and Map documents.

Every model field becomes one Map entry keyed by the field name, stored as the
wire type its schema resolves to. Conversion never widens or narrows: a field
declared ``U8`` is written as U8 and must be read back from a U8.
"""

from __future__ import annotations

from typing import Any, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..codec.tags import DataType
from ..exceptions import ConversionError, NotFoundError
from ..models.array import Array
from ..models.map import Map
from ..models.value import Value
from .schema import DocumentSchema, FieldSchema

M = TypeVar("M", bound=BaseModel)


def to_map(model: BaseModel) -> Map:
    """Convert a model instance to a Map document.

    Raises:
        SchemaError: If the model has a field without a wire type
        ConversionError: If a field value doesn't fit its wire type

    Example:
        >>> reading = Reading(temperature=2350, humidity=65)
        >>> to_map(reading)
        Map({'temperature': Value.i16(2350), 'humidity': Value.u8(65)})
    """
    schema = DocumentSchema.from_model(type(model))
    document = Map()
    for field in schema.fields:
        document.insert(field.name, _to_value(getattr(model, field.name), field))
    return document


def from_map(model_class: Type[M], document: Map) -> M:
    """Build a model instance from a Map document.

    Keys without a matching field are ignored. Missing optional fields take
    their model default.

    Raises:
        NotFoundError: If a required field is absent
        TypeMismatchError: If an entry is stored as the wrong wire type
        ConversionError: If pydantic rejects the decoded values
    """
    schema = DocumentSchema.from_model(model_class)
    data: dict[str, Any] = {}
    for field in schema.fields:
        value = document.get(field.name)
        if value is None:
            if not field.required:
                continue
            if not field.nullable:
                raise NotFoundError(field.name)
            data[field.name] = None
            continue
        data[field.name] = _from_value(value, field, field.name)

    try:
        return model_class.model_validate(data)
    except ValidationError as e:
        raise ConversionError(f"{model_class.__name__}: {e}") from e


def _to_value(obj: Any, field: FieldSchema) -> Value:
    if field.data_type is None:
        return Value.from_native(obj)

    if obj is None:
        if not field.nullable:
            raise ConversionError(f"Field {field.name} is not nullable")
        return Value.null()

    if field.model is not None:
        return Value.map(to_map(obj))

    if field.item is not None:
        return Value.array(Array(_to_value(element, field.item) for element in obj))

    try:
        return Value(field.data_type, obj)
    except (TypeError, ValueError) as e:
        raise ConversionError(f"Field {field.name}: {e}") from e


def _from_value(value: Value, field: FieldSchema, key: str) -> Any:
    if field.data_type is None:
        return value

    if value.is_null() and field.nullable:
        return None

    payload = value.expect(field.data_type, key)

    if field.model is not None:
        return from_map(field.model, payload)

    if field.item is not None:
        return [
            _from_value(element, field.item, f"{key}[{index}]")
            for index, element in enumerate(payload)
        ]

    if field.data_type is DataType.F32:
        return float(payload)
    return payload
