"""JSON interop for packdoc documents."""

from .convert import MAP_WRAPPER, WRAPPER_KEYS, dumps, from_json, loads, to_json

__all__ = [
    "MAP_WRAPPER",
    "WRAPPER_KEYS",
    "dumps",
    "from_json",
    "loads",
    "to_json",
]
