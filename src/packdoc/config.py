"""Codec configuration.

This module provides the configuration dataclass shared by every encode and
decode entry point. The defaults suit general message passing; constrained
devices can lower both bounds to fail fast on hostile input.
"""

from __future__ import annotations

from dataclasses import dataclass

# Smallest possible frame: 4-byte length + terminator.
MIN_FRAME_SIZE = 5

# Largest value a u32 length field can carry.
MAX_U32 = 0xFFFFFFFF


@dataclass(frozen=True)
class CodecConfig:
    """Limits applied while encoding and decoding documents.

    Attributes:
        max_depth: Maximum container nesting (default 64). The top-level Map or
            Array is depth 1; every nested container adds one. Decoding fails
            closed with DepthExceededError beyond this bound, which keeps
            adversarial input from exhausting the interpreter stack.

        max_document_size: Maximum size of one encoded document in bytes
            (default 64 MiB). Typical values:
            - Sensor telemetry: 256 bytes - 4 KiB
            - Device configuration: 4 KiB - 64 KiB
            - Bulk transfer: up to the 4 GiB wire limit

    Examples:
        ```python
        from packdoc import CodecConfig, Map

        # Small sensor node: shallow, tiny documents only
        config = CodecConfig(max_depth=4, max_document_size=512)

        data = reading.to_bytes(config=config)
        decoded = Map.from_bytes(data, config=config)
        ```
    """

    max_depth: int = 64
    max_document_size: int = 64 * 1024 * 1024

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be >= 1, got {self.max_depth}")

        if not MIN_FRAME_SIZE <= self.max_document_size <= MAX_U32:
            raise ValueError(
                f"max_document_size must be {MIN_FRAME_SIZE}-{MAX_U32}, "
                f"got {self.max_document_size}"
            )


DEFAULT_CONFIG = CodecConfig()
