"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from packdoc import Array, Id, IdGenerator, Map, TimeStamp, Value


@pytest.fixture
def reading() -> Map:
    """Two-entry sensor reading (encodes to 37 bytes)."""
    return Map({"temperature": Value.i16(2350), "humidity": Value.u8(65)})


@pytest.fixture
def reading_bytes() -> bytes:
    """Hand-assembled encoding of the reading fixture."""
    return (
        b"\x25\x00\x00\x00"  # frame length 37
        b"\x19" b"\x0b\x00\x00\x00" b"temperature" b"\x2e\x09"  # I16 2350
        b"\x18" b"\x08\x00\x00\x00" b"humidity" b"\x41"  # U8 65
        b"\x00"
    )


@pytest.fixture
def nested_document() -> Map:
    """Map -> Array -> Map tree using every variant."""
    inner = Map(
        {
            "ok": True,
            "missing": None,
            "ratio": Value.f32(0.5),
            "label": "núcleo",
            "blob": b"\x00\xff",
        }
    )
    samples = Array([Value.u16(4000), inner, Value.i64(-(2**63)), Array()])
    return Map(
        {
            "station": "north-7",
            "samples": samples,
            "taken": TimeStamp(1732694400),
            "id": Id.from_hex("016f9dbd9df7f7dc9c86d573"),
            "limits": Map({"min": Value.i8(-128), "max": Value.u64(2**64 - 1)}),
            "pi": 3.141592653589793,
        }
    )


@pytest.fixture
def fixed_generator() -> IdGenerator:
    """Id generator with a frozen clock and fixed random component."""
    return IdGenerator(clock=lambda: 1578899447287, random_bytes=lambda n: b"\x9c\x86\xd5\x73")
