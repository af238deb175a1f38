"""Document model: the Value tagged union and its containers."""

from .array import Array
from .id import ID_SIZE, Id
from .map import Map
from .timestamp import TimeStamp
from .value import Value
from .visitor import ValueVisitor, walk

__all__ = [
    "Array",
    "ID_SIZE",
    "Id",
    "Map",
    "TimeStamp",
    "Value",
    "ValueVisitor",
    "walk",
]
