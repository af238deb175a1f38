"""Unit tests for TimeStamp and Id."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from packdoc import Id, IdentifierError, TimeStamp


class TestTimeStamp:
    """Test the TimeStamp value type."""

    def test_seconds_and_datetime(self) -> None:
        """Test conversion to and from datetime."""
        ts = TimeStamp(1732694400)
        assert int(ts) == 1732694400
        assert ts.to_datetime() == datetime(2024, 11, 27, 8, 0, tzinfo=timezone.utc)
        assert TimeStamp.from_datetime(datetime(2024, 11, 27, 8, 0)) == ts

    def test_ordering(self) -> None:
        """Test integer ordering."""
        assert TimeStamp(1) < TimeStamp(2)
        assert TimeStamp(2) >= TimeStamp(2)
        assert sorted([TimeStamp(3), TimeStamp(1)]) == [TimeStamp(1), TimeStamp(3)]

    def test_bounds(self) -> None:
        """Test the unsigned 64-bit range."""
        assert TimeStamp(2**64 - 1).seconds == 2**64 - 1
        with pytest.raises(ValueError):
            TimeStamp(-1)
        with pytest.raises(ValueError):
            TimeStamp(2**64)
        with pytest.raises(TypeError):
            TimeStamp(1.5)  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            TimeStamp(True)

    def test_now(self) -> None:
        """Test now() is in seconds."""
        now = TimeStamp.now()
        assert abs(now.seconds - int(datetime.now(timezone.utc).timestamp())) < 5

    def test_not_equal_to_int(self) -> None:
        """Test a TimeStamp is not an int."""
        assert TimeStamp(1) != 1


class TestId:
    """Test the Id value type."""

    def test_hex_round_trip(self) -> None:
        """Test hex parsing and formatting."""
        id_ = Id.from_hex("016f9dbd9df7f7dc9c86d573")
        assert id_.hex() == "016f9dbd9df7f7dc9c86d573"
        assert str(id_) == id_.hex()
        assert len(id_.to_bytes()) == 12

    def test_components(self) -> None:
        """Test the millisecond and counter fields."""
        id_ = Id.from_hex("016f9dbd9df7f7dc9c86d573")
        assert id_.timestamp_ms == 1578899447287
        assert id_.counter == 0xF7DC

    def test_zero(self) -> None:
        """Test the all-zero Id."""
        assert Id.zero().is_zero()
        assert not Id(b"\x00" * 11 + b"\x01").is_zero()

    @pytest.mark.parametrize("text", ["", "00", "zz" * 12, "0" * 26])
    def test_invalid_hex(self, text: str) -> None:
        """Test malformed hex strings."""
        with pytest.raises(IdentifierError):
            Id.from_hex(text)

    def test_wrong_length(self) -> None:
        """Test byte length validation."""
        with pytest.raises(IdentifierError):
            Id(b"\x00" * 11)
        with pytest.raises(TypeError):
            Id("0" * 12)  # type: ignore[arg-type]

    def test_identifier_error_is_value_error(self) -> None:
        """Test callers can catch ValueError."""
        with pytest.raises(ValueError):
            Id.from_hex("nope")

    def test_ordering_and_hash(self) -> None:
        """Test bytewise ordering and hashing."""
        low = Id(b"\x00" * 12)
        high = Id(b"\x00" * 11 + b"\x01")
        assert low < high
        assert len({low, Id(b"\x00" * 12)}) == 1
