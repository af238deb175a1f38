"""Utility functions for packdoc."""

from .sizing import element_sizes, encoded_size, field_sizes

__all__ = [
    "element_sizes",
    "encoded_size",
    "field_sizes",
]
