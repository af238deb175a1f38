"""Tests for typed documents built on pydantic models."""

from __future__ import annotations

from typing import Annotated, ClassVar, Optional

import pytest
from pydantic import BaseModel, Field, ValidationError

from packdoc import (
    F32,
    I16,
    U8,
    U16,
    U64,
    ConversionError,
    DataType,
    DocumentModel,
    EncodeOverflowError,
    Id,
    Map,
    NotFoundError,
    SchemaError,
    TimeStamp,
    TypeMismatchError,
    Value,
    describe,
    from_map,
    to_map,
)


class Reading(DocumentModel):
    """Sensor reading."""

    temperature: int = I16()
    humidity: int = U8()


class Location(DocumentModel):
    latitude: float
    longitude: float
    depth: float = F32(default=0.0)


class Report(DocumentModel):
    """Report with every supported field shape."""

    station: str
    reading: Reading
    history: list[Annotated[int, U16()]] = []
    location: Optional[Location] = None
    note: Optional[str] = None
    taken: TimeStamp
    source: Id
    blob: bytes = b""
    sequence: int = U64(default=0)
    extra: Value = Value.null()


@pytest.fixture
def report() -> Report:
    return Report(
        station="north-7",
        reading=Reading(temperature=2350, humidity=65),
        history=[4000, 4010, 3990],
        location=Location(latitude=42.358894, longitude=-71.063611, depth=25.75),
        taken=TimeStamp(1732694400),
        source=Id.from_hex("016f9dbd9df7f7dc9c86d573"),
        blob=b"\x00\x01",
        sequence=2**64 - 1,
        extra=Value.i8(-3),
    )


class TestToMap:
    """Test model to document conversion."""

    def test_reading_matches_hand_built_map(self, reading: Map, reading_bytes: bytes) -> None:
        """Test a model encodes exactly like the equivalent Map."""
        model = Reading(temperature=2350, humidity=65)

        assert model.to_map() == reading
        assert model.to_bytes() == reading_bytes

    def test_wire_types(self, report: Report) -> None:
        """Test each field is stored as its declared wire type."""
        document = to_map(report)

        assert document.get("reading").type is DataType.MAP
        assert document.get_map("reading").get("humidity").type is DataType.U8
        assert [v.type for v in document.get_array("history")] == [DataType.U16] * 3
        assert document.get_map("location").get("latitude").type is DataType.F64
        assert document.get_map("location").get("depth").type is DataType.F32
        assert document.get("note").is_null()
        assert document.get_u64("sequence") == 2**64 - 1
        assert document.get_i8("extra") == -3

    def test_field_order_follows_declaration(self, report: Report) -> None:
        """Test keys appear in field declaration order."""
        assert list(to_map(report).keys()) == list(Report.model_fields)


class TestFromMap:
    """Test document to model conversion."""

    def test_round_trip(self, report: Report) -> None:
        """Test a model survives encode/decode."""
        decoded = Report.from_bytes(report.to_bytes())

        assert decoded == report
        assert decoded.location is not None
        assert decoded.location.depth == 25.75

    def test_missing_required_field(self) -> None:
        """Test an absent required key."""
        with pytest.raises(NotFoundError) as exc_info:
            Reading.from_map(Map({"temperature": Value.i16(1)}))
        assert exc_info.value.key == "humidity"

    def test_missing_optional_field_uses_default(self) -> None:
        """Test absent keys with defaults."""
        loc = Location.from_map(Map({"latitude": 1.0, "longitude": 2.0}))
        assert loc.depth == 0.0

    def test_wrong_wire_type(self) -> None:
        """Test a key stored with another width."""
        document = Map({"temperature": Value.i32(2350), "humidity": Value.u8(65)})
        with pytest.raises(TypeMismatchError) as exc_info:
            from_map(Reading, document)
        assert "expected I16, found I32" in str(exc_info.value)

    def test_wrong_list_item_type(self) -> None:
        """Test a mistyped list element names its position."""

        class Series(DocumentModel):
            values: list[Annotated[int, U16()]]

        with pytest.raises(TypeMismatchError) as exc_info:
            Series.from_map(Map({"values": [Value.u16(1), Value.u8(2)]}))
        assert exc_info.value.key == "values[1]"

    def test_unknown_keys_ignored(self, reading: Map) -> None:
        """Test extra keys in a document are skipped."""
        document = reading.copy()
        document["firmware"] = "1.2.0"
        assert Reading.from_map(document) == Reading(temperature=2350, humidity=65)

    def test_pydantic_rejection_is_conversion_error(self) -> None:
        """Test values pydantic refuses."""

        class Named(DocumentModel):
            name: str = Field(min_length=3)

        with pytest.raises(ConversionError):
            Named.from_map(Map({"name": "ab"}))


class TestValidation:
    """Test pydantic validation of typed fields."""

    def test_width_range_enforced(self) -> None:
        """Test integer helpers carry their range."""
        with pytest.raises(ValidationError):
            Reading(temperature=40000, humidity=65)
        with pytest.raises(ValidationError):
            Reading(temperature=0, humidity=-1)

    def test_assignment_validated(self) -> None:
        """Test validate_assignment catches out-of-range updates."""
        model = Reading(temperature=0, humidity=0)
        with pytest.raises(ValidationError):
            model.humidity = 256

    def test_extra_fields_forbidden(self) -> None:
        """Test unknown constructor arguments."""
        with pytest.raises(ValidationError):
            Reading(temperature=0, humidity=0, pressure=1)  # type: ignore[call-arg]

    def test_max_bytes(self) -> None:
        """Test packdoc_max_bytes bounds to_bytes()."""

        class Tiny(DocumentModel):
            label: str

            packdoc_max_bytes: ClassVar[Optional[int]] = 24

        assert len(Tiny(label="ab").to_bytes()) == 21
        with pytest.raises(EncodeOverflowError):
            Tiny(label="a much longer label").to_bytes()


class TestSchema:
    """Test schema introspection."""

    def test_describe(self) -> None:
        """Test field descriptions."""
        fields = {f.name: f.describe() for f in describe(Report)}
        assert fields == {
            "station": "STRING",
            "reading": "Reading",
            "history": "list[U16]",
            "location": "Location?",
            "note": "STRING?",
            "taken": "TIMESTAMP",
            "source": "ID",
            "blob": "BINARY",
            "sequence": "U64",
            "extra": "Value",
        }

    def test_required_flags(self) -> None:
        """Test required reflects pydantic defaults."""
        required = {f.name: f.required for f in describe(Location)}
        assert required == {"latitude": True, "longitude": True, "depth": False}

    def test_bare_int_rejected(self) -> None:
        """Test int fields without a width."""

        class Untyped(BaseModel):
            count: int

        with pytest.raises(SchemaError, match="wire width"):
            to_map(Untyped(count=1))

    def test_complex_union_rejected(self) -> None:
        """Test unions of several types."""

        class Mixed(BaseModel):
            value: Optional[str | bytes] = None

        with pytest.raises(SchemaError, match="Union"):
            describe(Mixed)

    def test_unsupported_type_rejected(self) -> None:
        """Test annotations with no wire type."""

        class Odd(BaseModel):
            value: tuple = ()

        with pytest.raises(SchemaError, match="unsupported type"):
            describe(Odd)

    def test_plain_models_supported(self) -> None:
        """Test to_map() and from_map() accept any pydantic model."""

        class Plain(BaseModel):
            name: str
            ok: bool

        document = to_map(Plain(name="x", ok=True))
        assert from_map(Plain, document) == Plain(name="x", ok=True)
