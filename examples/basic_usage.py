#!/usr/bin/env python3
"""Basic usage example for packdoc.

This example demonstrates:
1. Building a Map document with explicit value widths
2. Encoding to the binary wire format
3. Decoding and reading values back with typed getters
4. Calculating element sizes
5. The same document as a typed pydantic model
"""

from __future__ import annotations

from packdoc import I16, U8, DocumentModel, Map, TypeMismatchError, Value, element_sizes, encoded_size


class SensorReading(DocumentModel):
    """Environmental sensor reading."""

    temperature: int = I16()  # centi-degrees
    humidity: int = U8()  # percent


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("packdoc Basic Usage Example")
    print("=" * 60)
    print()

    # Build a document
    print("1. Building a sensor reading document...")
    reading = Map()
    reading["temperature"] = Value.i16(2350)
    reading["humidity"] = Value.u8(65)
    print(f"   {reading!r}")
    print()

    # Analyze element sizes
    print("2. Analyzing element sizes...")
    for key, size in element_sizes(reading).items():
        print(f"   {key}: {size} bytes")
    print(f"   Total: {encoded_size(reading)} bytes")
    print()

    # Encode the document
    print("3. Encoding to binary...")
    encoded_data = reading.to_bytes()
    print(f"   Encoded size: {len(encoded_data)} bytes")
    print(f"   Hex: {encoded_data.hex()}")
    print()

    # Decode the document
    print("4. Decoding from binary...")
    decoded = Map.from_bytes(encoded_data)
    print(f"   temperature: {decoded.get_i16('temperature') / 100:.2f} C")
    print(f"   humidity: {decoded.get_u8('humidity')}%")
    try:
        decoded.get_i32("temperature")
    except TypeMismatchError as e:
        print(f"   get_i32('temperature') refused: {e}")
    print()

    # Verify round-trip
    print("5. Verifying round-trip...")
    if decoded == reading:
        print("   ✓ Round-trip successful! Documents match.")
    else:
        print("   ✗ Round-trip failed! Documents don't match.")
    print()

    # Typed model
    print("6. Decoding into a typed model...")
    model = SensorReading.from_bytes(encoded_data)
    print(f"   {model!r}")
    print(f"   Same bytes: {model.to_bytes() == encoded_data}")
    print()

    print("=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
