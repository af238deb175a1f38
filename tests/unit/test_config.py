"""Tests for codec configuration."""

from __future__ import annotations

import dataclasses

import pytest

from packdoc import DEFAULT_CONFIG, CodecConfig


class TestCodecConfig:
    """Test CodecConfig validation."""

    def test_defaults(self) -> None:
        """Test default limits."""
        assert DEFAULT_CONFIG.max_depth == 64
        assert DEFAULT_CONFIG.max_document_size == 64 * 1024 * 1024
        assert CodecConfig() == DEFAULT_CONFIG

    def test_frozen(self) -> None:
        """Test configs are immutable."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_CONFIG.max_depth = 3  # type: ignore[misc]

    def test_invalid_depth(self) -> None:
        """Test max_depth below 1."""
        with pytest.raises(ValueError, match="max_depth"):
            CodecConfig(max_depth=0)

    @pytest.mark.parametrize("size", [0, 4, 2**32])
    def test_invalid_document_size(self, size: int) -> None:
        """Test max_document_size outside the frame limits."""
        with pytest.raises(ValueError, match="max_document_size"):
            CodecConfig(max_document_size=size)

    def test_bounds_accepted(self) -> None:
        """Test the extreme valid values."""
        assert CodecConfig(max_depth=1, max_document_size=5).max_document_size == 5
        assert CodecConfig(max_document_size=2**32 - 1).max_document_size == 2**32 - 1
