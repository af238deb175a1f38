"""Typed documents on top of pydantic models."""

from .base import DocumentModel
from .convert import from_map, to_map
from .fields import F32, I8, I16, I32, I64, U8, U16, U32, U64
from .schema import DocumentSchema, FieldSchema, describe

__all__ = [
    "DocumentModel",
    "DocumentSchema",
    "FieldSchema",
    "describe",
    "from_map",
    "to_map",
    "F32",
    "I8",
    "I16",
    "I32",
    "I64",
    "U8",
    "U16",
    "U32",
    "U64",
]
