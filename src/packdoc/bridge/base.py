"""Base document model and packdoc-specific pydantic configuration.

This module provides the DocumentModel class that typed documents inherit from.
"""

from __future__ import annotations

from typing import ClassVar, Type, TypeVar

from pydantic import BaseModel, ConfigDict

from ..config import CodecConfig
from ..exceptions import EncodeOverflowError
from ..models.map import Map
from .convert import from_map, to_map

D = TypeVar("D", bound="DocumentModel")


class DocumentModel(BaseModel):
    """Base class for typed documents.

    Fields are declared with pydantic annotations; integer fields pick their
    wire width with the helpers from ``packdoc.bridge.fields``.

    Example:
        >>> from typing import ClassVar, Optional
        >>> class Reading(DocumentModel):
        ...     temperature: int = I16()
        ...     humidity: int = U8()
        ...     station: Optional[str] = None
        ...
        ...     packdoc_max_bytes: ClassVar[Optional[int]] = 64

    Attributes:
        packdoc_max_bytes: Maximum encoded size in bytes (optional, checked by to_bytes)
    """

    model_config = ConfigDict(
        # Allow TimeStamp, Id, Map, Array and Value fields
        arbitrary_types_allowed=True,
        # Validate on assignment
        validate_assignment=True,
        # Forbid extra fields not defined in schema
        extra="forbid",
    )

    packdoc_max_bytes: ClassVar[int | None] = None

    def to_map(self) -> Map:
        """Convert this model to a Map document."""
        return to_map(self)

    @classmethod
    def from_map(cls: Type[D], document: Map) -> D:
        """Build a model from a Map document."""
        return from_map(cls, document)

    def to_bytes(self, *, config: CodecConfig | None = None) -> bytes:
        """Encode this model as a Map document.

        Raises:
            EncodeOverflowError: If the encoding exceeds packdoc_max_bytes
        """
        data = self.to_map().to_bytes(config=config)
        limit = type(self).packdoc_max_bytes
        if limit is not None and len(data) > limit:
            raise EncodeOverflowError(
                f"{type(self).__name__} encodes to {len(data)} bytes, exceeds packdoc_max_bytes={limit}"
            )
        return data

    @classmethod
    def from_bytes(cls: Type[D], data: bytes, *, config: CodecConfig | None = None) -> D:
        """Decode a Map document into a model."""
        return cls.from_map(Map.from_bytes(data, config=config))
