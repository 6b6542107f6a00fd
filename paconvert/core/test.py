"""Tests for the error taxonomy."""

import pytest

from paconvert.core import (
    ConversionError,
    DialectParseError,
    InvalidMappingConfigurationError,
    StructuralError,
    UnsupportedControlTypeError,
    UnsupportedInputError,
)


class TestErrorTaxonomy:
    """Tests for ConversionError subclasses."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "error_cls",
        [
            StructuralError,
            DialectParseError,
            UnsupportedInputError,
            InvalidMappingConfigurationError,
        ],
    )
    def test_subclasses_share_base(self, error_cls):
        """Every error is catchable as ConversionError."""
        with pytest.raises(ConversionError):
            raise error_cls("boom")

    @pytest.mark.unit
    def test_unsupported_type_names_the_type(self):
        """The message and attribute carry the classic type verbatim."""
        error = UnsupportedControlTypeError("Classic/Widget@1.0.0")
        assert error.control_type == "Classic/Widget@1.0.0"
        assert "Classic/Widget@1.0.0" in str(error)

    @pytest.mark.unit
    def test_log_defaults_to_empty(self):
        """Errors carry an empty log until one is attached."""
        error = UnsupportedInputError("no control")
        assert error.log == ()

    @pytest.mark.unit
    def test_attach_log_copies_entries(self):
        """Attached entries are frozen into a tuple."""
        entries = ["first", "second"]
        error = ConversionError("failed")
        error.attach_log(entries)
        entries.append("third")
        assert error.log == ("first", "second")

    @pytest.mark.unit
    def test_parse_error_keeps_cause(self):
        """DialectParseError keeps the underlying parser message."""
        error = DialectParseError("YAML parsing error: bad", cause="bad")
        assert error.cause == "bad"

    @pytest.mark.unit
    def test_mapping_error_details(self):
        """InvalidMappingConfigurationError exposes problem details."""
        error = InvalidMappingConfigurationError("bad", ["controlTypes: missing"])
        assert error.details == ["controlTypes: missing"]
