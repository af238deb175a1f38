"""Property-based tests using hypothesis."""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from packdoc import (
    Array,
    DecodeError,
    Id,
    Map,
    TimeStamp,
    Value,
    decode,
    encode,
    encoded_size,
    read_document,
)
from packdoc.codec.tags import INTEGER_RANGES
from packdoc.jsonconv import MAP_WRAPPER, WRAPPER_KEYS, from_json, to_json


def _integers(data_type):
    low, high = INTEGER_RANGES[data_type]
    return st.integers(min_value=low, max_value=high).map(lambda n: Value(data_type, n))


def _f32_values():
    return st.floats(width=32, allow_nan=False).map(Value.f32)


scalars = st.one_of(
    st.just(Value.null()),
    st.booleans().map(Value.boolean),
    *[_integers(data_type) for data_type in INTEGER_RANGES],
    _f32_values(),
    st.floats(allow_nan=False).map(Value.f64),
    st.text(max_size=20).map(Value.string),
    st.binary(max_size=20).map(Value.binary),
    st.integers(min_value=0, max_value=2**64 - 1).map(lambda s: Value.timestamp(TimeStamp(s))),
    st.binary(min_size=12, max_size=12).map(lambda b: Value.identifier(Id(b))),
)

keys = st.text(max_size=8) | st.sampled_from([*WRAPPER_KEYS.values(), MAP_WRAPPER])


def _containers(children):
    maps = st.dictionaries(keys, children, max_size=5).map(lambda d: Value.map(Map(d)))
    arrays = st.lists(children, max_size=5).map(lambda items: Value.array(Array(items)))
    return maps | arrays


values = st.recursive(scalars, _containers, max_leaves=20)
documents = st.dictionaries(keys, values, max_size=6).map(Map)


class TestCodecProperties:
    """Property-based tests for codec."""

    @given(doc=documents)
    def test_encode_decode_roundtrip(self, doc: Map) -> None:
        """Test decode(encode(doc)) == doc."""
        assert decode(Map, encode(doc)) == doc

    @given(items=st.lists(values, max_size=8))
    def test_array_roundtrip(self, items: list) -> None:
        """Test Array documents round-trip."""
        doc = Array(items)
        assert decode(Array, encode(doc)) == doc

    @given(doc=documents)
    def test_encode_deterministic(self, doc: Map) -> None:
        """Test encoding is deterministic and matches the size estimate."""
        data = encode(doc)
        assert encode(doc.copy()) == data
        assert encoded_size(doc) == len(data)
        assert int.from_bytes(data[:4], "little") == len(data)

    @given(doc=documents)
    @settings(max_examples=50)
    def test_truncation_always_detected(self, doc: Map) -> None:
        """Test every strict prefix fails with a decode error."""
        data = encode(doc)
        for cut in range(len(data)):
            with pytest.raises(DecodeError):
                decode(Map, data[:cut])

    @given(first=documents, second=documents)
    def test_concatenated_documents(self, first: Map, second: Map) -> None:
        """Test read_document() walks concatenated documents."""
        buffer = encode(first) + encode(second)
        a, offset = read_document(Map, buffer)
        b, end = read_document(Map, buffer, offset)
        assert (a, b, end) == (first, second, len(buffer))

    @given(data=st.binary(max_size=64))
    def test_arbitrary_bytes_never_crash(self, data: bytes) -> None:
        """Test random input either decodes or raises a DecodeError."""
        try:
            decode(Map, data)
        except DecodeError:
            pass


class TestIntegerBoundaries:
    """Test integer ranges at their edges."""

    @pytest.mark.parametrize("data_type", list(INTEGER_RANGES))
    def test_bounds_roundtrip(self, data_type) -> None:
        """Test the minimum and maximum of every width."""
        low, high = INTEGER_RANGES[data_type]
        doc = Array([Value(data_type, low), Value(data_type, high)])
        assert decode(Array, encode(doc)) == doc

    @pytest.mark.parametrize("data_type", list(INTEGER_RANGES))
    def test_out_of_range_rejected(self, data_type) -> None:
        """Test one past either bound is refused at construction."""
        low, high = INTEGER_RANGES[data_type]
        with pytest.raises(ValueError):
            Value(data_type, high + 1)
        with pytest.raises(ValueError):
            Value(data_type, low - 1)


class TestJsonProperties:
    """Property-based tests for extended JSON."""

    @given(doc=documents)
    def test_extended_json_lossless(self, doc: Map) -> None:
        """Test extended JSON preserves every variant."""
        assert from_json(to_json(doc, extended=True)) == Value.map(doc)
