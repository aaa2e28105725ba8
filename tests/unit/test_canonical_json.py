"""
Schemas & Canonicalization
File: tests/unit/test_canonical_json.py

Purpose: Unit tests for canonical JSON serialization and the error models.
These tests ensure deterministic serialization across runs.
"""

from enum import Enum

import pytest
from pydantic import BaseModel, ConfigDict

from zksmt.schemas import (
    CanonicalizationException,
    ErrorCodes,
    OccupiedSlotException,
    ReservedElementException,
    SmtError,
    SmtException,
    UnsupportedSchemaVersionError,
    assert_supported_protocol_version,
    assert_supported_schema_version,
    canonicalize_value,
    dumps_canonical,
    loads_canonical,
)


# =============================================================================
# Test Fixtures
# =============================================================================


class SampleEnum(str, Enum):
    """Sample enum for testing."""
    OPTION_A = "option_a"
    OPTION_B = "option_b"


class SampleModel(BaseModel):
    """Sample Pydantic model for testing."""
    model_config = ConfigDict(extra="forbid")

    name: str
    value: int
    optional_field: str | None = None


# =============================================================================
# canonicalize_value
# =============================================================================


class TestCanonicalizeValue:
    """Tests for canonicalize_value()."""

    def test_scalars_pass_through(self):
        assert canonicalize_value(None) is None
        assert canonicalize_value(True) is True
        assert canonicalize_value(7) == 7
        assert canonicalize_value("x") == "x"

    def test_enum_uses_value(self):
        assert canonicalize_value(SampleEnum.OPTION_B) == "option_b"

    def test_bytes_become_hex(self):
        assert canonicalize_value(b"\x00\xff") == "0x00ff"

    def test_dict_drops_none(self):
        assert canonicalize_value({"a": 1, "b": None}) == {"a": 1}

    def test_tuple_becomes_list(self):
        assert canonicalize_value((1, b"\x01")) == [1, "0x01"]

    def test_model_excludes_none(self):
        model = SampleModel(name="n", value=1)

        assert canonicalize_value(model) == {"name": "n", "value": 1}

    def test_float_rejected(self):
        with pytest.raises(CanonicalizationException) as exc_info:
            canonicalize_value({"ratio": 0.5})

        assert exc_info.value.details["path"] == "ratio"
        assert exc_info.value.code == ErrorCodes.CANONICALIZATION_ERROR


# =============================================================================
# dumps_canonical / loads_canonical
# =============================================================================


class TestDumpsCanonical:
    """Tests for dumps_canonical()."""

    def test_sorted_compact(self):
        assert dumps_canonical({"b": 2, "a": 1}) == '{"a":1,"b":2}'

    def test_key_order_independent(self):
        assert dumps_canonical({"x": 1, "y": [1, 2]}) == dumps_canonical({"y": [1, 2], "x": 1})

    def test_nested_bytes(self):
        assert dumps_canonical({"a": b"\x01"}) == '{"a":"0x01"}'

    def test_deterministic_across_calls(self):
        data = {"root": "0x01", "depth": 64, "items": [3, 1, 2]}

        assert len({dumps_canonical(data) for _ in range(10)}) == 1

    def test_list_order_preserved(self):
        assert dumps_canonical([3, 1, 2]) == "[3,1,2]"

    def test_loads_round_trip(self):
        data = {"a": [1, 2], "b": {"c": "d"}}

        assert loads_canonical(dumps_canonical(data)) == data

    def test_unserializable_raises(self):
        with pytest.raises(CanonicalizationException):
            dumps_canonical({"s": {1, 2}})


# =============================================================================
# Versioning
# =============================================================================


class TestVersioning:
    """Tests for schema and protocol version checks."""

    def test_supported(self):
        assert_supported_schema_version("v1")
        assert_supported_protocol_version("v1")

    def test_unsupported_schema(self):
        with pytest.raises(UnsupportedSchemaVersionError, match="schema version: 'v2'"):
            assert_supported_schema_version("v2")

    def test_unsupported_protocol(self):
        with pytest.raises(UnsupportedSchemaVersionError, match="protocol version: 'v0'") as exc_info:
            assert_supported_protocol_version("v0")

        assert exc_info.value.kind == "protocol"


# =============================================================================
# Error models
# =============================================================================


class TestErrorModels:
    """Tests for SmtException -> SmtError conversion."""

    def test_exception_to_model(self):
        exc = OccupiedSlotException("slot taken", bits="0101", existing="0x05", duplicate=False)
        model = exc.to_error_model()

        assert model.code == ErrorCodes.OCCUPIED_SLOT
        assert model.details == {"bits": "0101", "existing": "0x05", "duplicate": False}
        assert model.retryable is False

    def test_reserved_element_to_model(self):
        model = ReservedElementException("no", element="0x01").to_error_model()

        assert model.code == ErrorCodes.RESERVED_ELEMENT
        assert model.details == {"element": "0x01"}

    def test_model_forbids_extra(self):
        with pytest.raises(ValueError):
            SmtError(code="X", message="m", severity="high")

    def test_repr(self):
        assert repr(SmtException("m", code="C")) == "SmtException(code='C', message='m')"
