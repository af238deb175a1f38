"""Unit tests for the Value tagged union."""

from __future__ import annotations

import math

import pytest

from packdoc import Array, DataType, Id, Map, TimeStamp, TypeMismatchError, Value
from packdoc.codec.tags import INTEGER_RANGES


class TestConstruction:
    """Test per-variant construction and validation."""

    @pytest.mark.parametrize("data_type", list(INTEGER_RANGES))
    def test_integer_bounds(self, data_type: DataType) -> None:
        """Test both ends of every integer width, and one past each."""
        low, high = INTEGER_RANGES[data_type]

        assert Value(data_type, low).payload == low
        assert Value(data_type, high).payload == high

        with pytest.raises(ValueError, match="out of range"):
            Value(data_type, low - 1)
        with pytest.raises(ValueError, match="out of range"):
            Value(data_type, high + 1)

    def test_bool_is_not_an_integer(self) -> None:
        """Test True is rejected by integer variants."""
        with pytest.raises(TypeError):
            Value.u8(True)

    def test_integer_is_not_a_bool(self) -> None:
        """Test 1 is rejected by Bool."""
        with pytest.raises(TypeError):
            Value.boolean(1)  # type: ignore[arg-type]

    def test_wrong_payload_types(self) -> None:
        """Test payload type checks."""
        with pytest.raises(TypeError):
            Value.string(b"bytes")  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            Value.binary("text")  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            Value.map({"a": 1})  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            Value.i32(1.5)  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            Value(DataType.NULL, 0)

    def test_f32_rounded_on_construction(self) -> None:
        """Test F32 payloads are stored as binary32."""
        value = Value.f32(0.1)
        assert value.payload != 0.1
        assert value.payload == pytest.approx(0.1, rel=1e-7)

    def test_f32_out_of_range(self) -> None:
        """Test values too large for binary32."""
        with pytest.raises(ValueError):
            Value.f32(1e300)

    def test_f32_accepts_non_finite(self) -> None:
        """Test infinities and NaN are representable."""
        assert Value.f32(math.inf).payload == math.inf
        assert math.isnan(Value.f32(math.nan).payload)

    def test_binary_copies(self) -> None:
        """Test bytearray payloads are frozen to bytes."""
        buf = bytearray(b"ab")
        value = Value.binary(buf)
        buf[0] = 0
        assert value.payload == b"ab"

    def test_timestamp_and_id_coercion(self) -> None:
        """Test TimeStamp from int and Id from bytes."""
        assert Value.timestamp(5).payload == TimeStamp(5)
        assert Value.identifier(bytes(12)).payload == Id.zero()

    def test_tag(self) -> None:
        """Test the tag is the wire discriminant."""
        assert Value.i16(1).tag == 0x19
        assert Value.map(Map()).tag == 0x32


class TestFromNative:
    """Test conversion from plain Python data."""

    def test_conversion_table(self) -> None:
        """Test each native type maps to its variant."""
        assert Value.from_native(None).type is DataType.NULL
        assert Value.from_native(True).type is DataType.BOOL
        assert Value.from_native(1.5).type is DataType.F64
        assert Value.from_native("s").type is DataType.STRING
        assert Value.from_native(b"b").type is DataType.BINARY
        assert Value.from_native(memoryview(b"b")).type is DataType.BINARY
        assert Value.from_native(TimeStamp(0)).type is DataType.TIMESTAMP
        assert Value.from_native(Id.zero()).type is DataType.ID
        assert Value.from_native([1.0, "a"]).type is DataType.ARRAY
        assert Value.from_native((None,)).type is DataType.ARRAY
        assert Value.from_native({"k": "v"}).type is DataType.MAP

    def test_bare_int_rejected(self) -> None:
        """Test an int without a width is ambiguous."""
        with pytest.raises(TypeError, match="integer width"):
            Value.from_native(7)

    def test_nested_bare_int_rejected(self) -> None:
        """Test ambiguity is caught inside containers too."""
        with pytest.raises(TypeError):
            Value.from_native({"a": [1]})

    def test_value_passthrough(self) -> None:
        """Test a Value converts to itself."""
        value = Value.u8(1)
        assert Value.from_native(value) is value

    def test_unsupported(self) -> None:
        """Test unknown objects are rejected."""
        with pytest.raises(TypeError):
            Value.from_native(object())

    def test_non_str_keys_rejected(self) -> None:
        """Test dict keys must be strings."""
        with pytest.raises(TypeError):
            Value.from_native({1: "a"})


class TestViews:
    """Test as_* views and expect()."""

    def test_matching_view(self) -> None:
        """Test a view of the stored variant returns the payload."""
        value = Value.i16(2350)
        assert value.as_i16() == 2350
        assert value.expect(DataType.I16) == 2350

    def test_non_matching_view(self) -> None:
        """Test views of other variants return None."""
        value = Value.i16(2350)
        assert value.as_u16() is None
        assert value.as_i32() is None
        assert value.as_str() is None
        assert not value.is_null()

    def test_expect_mismatch(self) -> None:
        """Test expect() raises TypeMismatchError with details."""
        with pytest.raises(TypeMismatchError) as exc_info:
            Value.i16(1).expect(DataType.U16, "temperature")

        err = exc_info.value
        assert err.key == "temperature"
        assert err.expected is DataType.U16
        assert err.actual is DataType.I16
        assert "expected U16, found I16" in str(err)


class TestEquality:
    """Test structural equality and hashing."""

    def test_no_numeric_coercion(self) -> None:
        """Test same number, different width."""
        assert Value.i32(5) != Value.u8(5)
        assert Value.f64(5.0) != Value.i32(5)

    def test_nan_equal_to_itself(self) -> None:
        """Test floats compare by bit pattern."""
        assert Value.f64(math.nan) == Value.f64(math.nan)
        assert Value.f32(math.nan) == Value.f32(math.nan)

    def test_signed_zero_distinct(self) -> None:
        """Test 0.0 and -0.0 differ."""
        assert Value.f64(0.0) != Value.f64(-0.0)

    def test_scalars_hashable(self) -> None:
        """Test scalar values work as set members."""
        values = {Value.u8(1), Value.u8(1), Value.i8(1), Value.f64(math.nan), Value.f64(math.nan)}
        assert len(values) == 3

    def test_containers_unhashable(self) -> None:
        """Test Map and Array values are not hashable."""
        with pytest.raises(TypeError):
            hash(Value.map(Map()))
        with pytest.raises(TypeError):
            hash(Value.array(Array()))

    def test_compare_with_other_types(self) -> None:
        """Test comparison with plain Python values."""
        assert Value.u8(1) != 1
        assert Value.string("a") != "a"


class TestRepr:
    """Test repr output."""

    def test_repr(self) -> None:
        """Test repr names the constructor."""
        assert repr(Value.i16(2350)) == "Value.i16(2350)"
        assert repr(Value.null()) == "Value.null()"
        assert repr(Value.string("a")) == "Value.string('a')"
        assert repr(Value.f64(math.inf)) == "Value.f64(float('inf'))"
