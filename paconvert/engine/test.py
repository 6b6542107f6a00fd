"""Unit tests for the conversion engine.

Tests for:
- End-to-end conversion with the built-in tables
- Conversion log contents, reset and error attachment
- Type precedence, dropped properties and default injection
- Mapping import/export and samples
"""

import pytest

from paconvert.core.errors import (
    ConversionError,
    DialectParseError,
    InvalidMappingConfigurationError,
    UnsupportedControlTypeError,
    UnsupportedInputError,
)
from paconvert.dialect import parse_dialect, render_dialect
from paconvert.engine import (
    ConversionEngine,
    ConversionLog,
    convert,
    get_conversion_log,
    sample_classic_yaml,
)
from paconvert.model import PropertyValue, ValueKind

UNKNOWN_CONTROL = """\
- Thing1:
    Control: Classic/Teleporter@1.0.0
    Properties:
      X: 1
"""


def _number(value):
    return PropertyValue(ValueKind.NUMBER, value)


def _messages(entries):
    return [entry.message for entry in entries]


# =============================================================================
# End-to-end
# =============================================================================


class TestConvert:
    """End-to-end conversion tests."""

    @pytest.mark.unit
    def test_classic_button_scenario(self, engine, classic_button):
        """Versioned classic button converts with text and radius intact."""
        result = engine.convert_with_log(classic_button)
        props = result.document.control.properties

        assert result.modern_type == "Button@0.0.45"
        assert result.document.control.type_tag == "Button@0.0.45"
        assert props["Text"] == PropertyValue.string("Submit")
        assert props["BorderRadius"].value["TopLeft"] == _number(5)
        assert "RadiusTopLeft" not in props

    @pytest.mark.unit
    def test_classic_button_output(self, engine, classic_button_full):
        """Full button output: renames, drops, radius object and defaults."""
        assert engine.convert(classic_button_full) == (
            "- Button1:\n"
            "    Control: Button@0.0.45\n"
            "    Properties:\n"
            "      OnSelect: =Navigate(Screen2, ScreenTransition.Fade)\n"
            '      Text: ="Submit"\n'
            "      BasePaletteColor: =RGBA(56, 96, 178, 1)\n"
            "      FontColor: =RGBA(255, 255, 255, 1)\n"
            "      FontSize: =13\n"
            "      BorderRadius:\n"
            "        TopLeft: =10\n"
            "        TopRight: 0\n"
            "        BottomLeft: 0\n"
            "        BottomRight: =10\n"
            "      X: =40\n"
            "      Y: =200\n"
            "      ButtonType: Standard\n"
        )

    @pytest.mark.unit
    def test_mapping_top_level_kept(self, engine):
        """Documents without a sequence dash convert to the same shape."""
        text = 'Label1:\n  Control: Label\n  Properties:\n    Text: ="Hi"\n'
        assert engine.convert(text) == (
            'Label1:\n  Control: Text@0.0.51\n  Properties:\n    Text: ="Hi"\n'
        )

    @pytest.mark.unit
    def test_output_reparses_unchanged(self, engine, classic_button_full):
        """Rendered output is stable under parse and render."""
        output = engine.convert(classic_button_full)
        assert render_dialect(parse_dialect(output)) == output

    @pytest.mark.unit
    def test_formulas_survive(self, engine):
        """Formula text is carried over byte for byte."""
        formula = 'If(IsBlank(txtName.Text), Notify("Name: required", Error), Back())'
        text = (
            "- Button1:\n    Control: Classic/Button@2.2.0\n    Properties:\n"
            f"      OnSelect: ={formula}\n"
        )
        assert f"      OnSelect: ={formula}\n" in engine.convert(text)

    @pytest.mark.unit
    def test_gallery_sample(self, engine):
        """Gallery extras are kept and the layout default is added."""
        output = engine.convert(sample_classic_yaml("gallery"))
        assert "    Control: Gallery@2.15.0\n" in output
        assert (
            "    Variant: BrowseLayout_Vertical_TwoTextOneImageVariant_ver5.0\n"
            in output
        )
        assert "      Layout: Vertical\n" in output

    @pytest.mark.unit
    def test_form_sample(self, engine):
        """DefaultMode becomes FormMode and is not overwritten."""
        result = engine.convert_with_log(sample_classic_yaml("form"))
        props = result.document.control.properties
        assert props["FormMode"] == PropertyValue.formula("FormMode.Edit")
        assert "DefaultMode" not in props

    @pytest.mark.unit
    def test_result_reports_types(self, engine, classic_button):
        """Results name the classic and the resolved modern type."""
        result = engine.convert_with_log(classic_button)
        assert result.classic_type == "Classic/Button@2.2.0"
        assert result.modern_type == "Button@0.0.45"

    @pytest.mark.unit
    def test_multiple_controls_rejected(self, engine):
        """Only single-control documents are converted."""
        text = "- A:\n    Control: Label\n- B:\n    Control: Label\n"
        with pytest.raises(UnsupportedInputError, match="exactly one"):
            engine.convert(text)


# =============================================================================
# Errors and log
# =============================================================================


class TestConversionErrors:
    """Tests for failing conversions."""

    @pytest.mark.unit
    def test_unknown_type(self, engine):
        """Unknown types raise and the log names them."""
        with pytest.raises(UnsupportedControlTypeError) as exc_info:
            engine.convert(UNKNOWN_CONTROL)

        error = exc_info.value
        assert error.control_type == "Classic/Teleporter@1.0.0"
        assert str(error) == "Unsupported control type: Classic/Teleporter@1.0.0"
        messages = _messages(error.log)
        assert "Unsupported control type: Classic/Teleporter@1.0.0" in messages
        assert messages[-1] == (
            "Error: Unsupported control type: Classic/Teleporter@1.0.0"
        )
        assert _messages(engine.get_conversion_log()) == messages

    @pytest.mark.unit
    def test_no_control(self, engine):
        """Text without a control declaration is rejected."""
        with pytest.raises(UnsupportedInputError) as exc_info:
            engine.convert("Text: hello\n")
        assert _messages(exc_info.value.log) == [
            "Starting conversion",
            "Error: No control definition found in input",
        ]

    @pytest.mark.unit
    def test_parse_error_keeps_partial_log(self, engine):
        """Structural failures still report the steps reached."""
        text = "- B:\n    Control: Button\n    Properties:\n\tX: 1\n"
        with pytest.raises(DialectParseError) as exc_info:
            engine.convert(text)

        messages = _messages(exc_info.value.log)
        assert messages[0] == "Starting conversion"
        assert messages[1] == "Found control B of type Button"
        assert messages[-1].startswith("Error: YAML parsing error:")

    @pytest.mark.unit
    def test_errors_share_base_class(self, engine):
        """Hosts can catch every failure as ConversionError."""
        with pytest.raises(ConversionError):
            engine.convert(UNKNOWN_CONTROL)


class TestConversionLog:
    """Tests for conversion log behaviour."""

    @pytest.mark.unit
    def test_success_log(self, engine, classic_button):
        """A successful conversion logs each step in order."""
        result = engine.convert_with_log(classic_button)
        assert _messages(result.log) == [
            "Starting conversion",
            "Found control Button1 of type Classic/Button@2.2.0",
            "Control type conversion: Classic/Button@2.2.0 -> Button@0.0.45",
            "Property Text kept unmapped",
            "Property conversion: RadiusTopLeft -> BorderRadius.TopLeft",
            "Added default property: ButtonType = Standard",
            "Applying button-specific rules",
            "Converting border radius properties",
            "Conversion completed",
        ]

    @pytest.mark.unit
    def test_log_reset_between_calls(self, engine, classic_button):
        """Each conversion starts a fresh log."""
        engine.convert(classic_button)
        engine.convert("- Label1:\n    Control: Label\n")

        messages = _messages(engine.get_conversion_log())
        assert messages.count("Starting conversion") == 1
        assert not any("Button1" in message for message in messages)
        assert "Found control Label1 of type Label" in messages

    @pytest.mark.unit
    def test_result_log_is_per_call(self, engine, classic_button):
        """Results keep their own log after later calls."""
        first = engine.convert_with_log(classic_button)
        second = engine.convert_with_log("- Label1:\n    Control: Label\n")
        assert first.log != second.log
        assert engine.get_conversion_log() == second.log

    @pytest.mark.unit
    def test_format(self, fixed_clock):
        """Entries format as [HH:MM:SS] message."""
        log = ConversionLog(clock=fixed_clock)
        log.record("Starting conversion")
        log.record("Conversion completed")

        assert log.format() == (
            "[09:30:15] Starting conversion\n[09:30:15] Conversion completed"
        )
        assert log.format(timestamps=False) == (
            "Starting conversion\nConversion completed"
        )
        assert len(log) == 2
        assert log.messages == ["Starting conversion", "Conversion completed"]

    @pytest.mark.unit
    def test_entries_mirrored_to_logging(self, caplog):
        """Recorded entries reach the paconvert.engine logger."""
        with caplog.at_level("DEBUG", logger="paconvert.engine"):
            ConversionLog().record("Applying button-specific rules")
        assert "Applying button-specific rules" in caplog.text


# =============================================================================
# Mapping behaviour through the engine
# =============================================================================


class TestEngineMappings:
    """Tests for engine-level mapping behaviour."""

    @pytest.mark.unit
    def test_versioned_type_precedence(self, small_mappings):
        """Versioned entries win over bare ones."""
        engine = ConversionEngine(small_mappings)
        versioned = engine.convert_with_log(
            "- B:\n    Control: Classic/Button@2.2.0\n"
        )
        fallback = engine.convert_with_log("- B:\n    Control: Classic/Button@1.0.0\n")

        assert versioned.modern_type == "Button@0.0.45"
        assert fallback.modern_type == "Button@0.0.44"
        assert (
            "Control type conversion (using base type): "
            "Classic/Button@1.0.0 -> Button@0.0.44"
        ) in _messages(fallback.log)

    @pytest.mark.unit
    def test_null_mapped_property_dropped(self, small_mappings):
        """Properties mapped to null are dropped and logged."""
        engine = ConversionEngine(small_mappings)
        text = (
            "- B:\n    Control: Classic/Button@2.2.0\n    Properties:\n"
            "      Fill: =Blue\n      HoverFill: =Red\n"
        )
        result = engine.convert_with_log(text)

        assert "HoverFill" not in result.output
        assert "      BasePaletteColor: =Blue\n" in result.output
        assert "Property HoverFill dropped - no modern equivalent" in _messages(
            result.log
        )

    @pytest.mark.unit
    def test_default_never_overwrites(self, small_mappings):
        """A supplied ButtonType is kept."""
        engine = ConversionEngine(small_mappings)
        text = (
            "- B:\n    Control: Classic/Button@2.2.0\n    Properties:\n"
            "      ButtonType: Custom\n"
        )
        result = engine.convert_with_log(text)

        assert result.document.control.properties["ButtonType"] == (
            PropertyValue.string("Custom")
        )
        assert not any(
            message.startswith("Added") for message in _messages(result.log)
        )

    @pytest.mark.unit
    def test_radius_folded_without_dotted_mapping(self, small_mappings):
        """The button rule folds corner properties that passed through."""
        engine = ConversionEngine(small_mappings)
        text = (
            "- B:\n    Control: Classic/Button@2.2.0\n    Properties:\n"
            "      RadiusTopLeft: 5\n      RadiusBottomRight: 3\n"
        )
        props = engine.convert_with_log(text).document.control.properties

        assert "RadiusTopLeft" not in props
        assert "RadiusBottomRight" not in props
        assert props["BorderRadius"].value == {
            "TopLeft": _number(5),
            "TopRight": _number(0),
            "BottomLeft": _number(0),
            "BottomRight": _number(3),
        }

    @pytest.mark.unit
    def test_engines_do_not_share_tables(self, small_mappings):
        """Engines with different tables coexist."""
        custom = ConversionEngine(small_mappings)
        builtin = ConversionEngine()
        text = "- T:\n    Control: Classic/TextInput@2.3.2\n"

        assert "TextInput@0.0.54" in builtin.convert(text)
        with pytest.raises(UnsupportedControlTypeError):
            custom.convert(text)


class TestMappingImportExport:
    """Tests for ConversionEngine import/export."""

    @pytest.mark.unit
    def test_export(self, engine):
        """Export uses the JSON section names."""
        data = engine.export_mappings()
        assert data["controlTypes"]["Classic/Button"] == "Button@0.0.45"
        assert "*" in data["properties"]

    @pytest.mark.unit
    def test_import_replaces(self, engine):
        """Imports replace the tables by default."""
        engine.import_mappings(
            '{"controlTypes": {"Widget": "Button@0.0.45"}, "properties": {}}'
        )
        assert engine.mappings.control_types == {"Widget": "Button@0.0.45"}
        with pytest.raises(UnsupportedControlTypeError):
            engine.convert("- B:\n    Control: Classic/Button@2.2.0\n")

    @pytest.mark.unit
    def test_import_merges(self, engine):
        """merge=True layers imports over the current tables."""
        engine.import_mappings(
            {"controlTypes": {"Widget": "Button@0.0.45"}, "properties": {}},
            merge=True,
        )
        assert engine.mappings.control_types["Widget"] == "Button@0.0.45"
        assert "Classic/Button" in engine.mappings.control_types

    @pytest.mark.unit
    def test_invalid_import_keeps_tables(self, engine):
        """A rejected import leaves the tables untouched."""
        before = engine.mappings
        with pytest.raises(InvalidMappingConfigurationError):
            engine.import_mappings({"controlTypes": []})
        assert engine.mappings is before

    @pytest.mark.unit
    def test_mappings_setter_validates(self, engine):
        """Assigning a plain dict validates it."""
        engine.mappings = {"controlTypes": {"a": "b"}, "properties": {}}
        assert engine.mappings.control_types == {"a": "b"}
        with pytest.raises(InvalidMappingConfigurationError):
            engine.mappings = {"properties": {}}

    @pytest.mark.unit
    def test_constructor_validates(self):
        """A plain dict given to the constructor is validated up front."""
        engine = ConversionEngine(
            {
                "controlTypes": {"Classic/Button": "Button@0.0.45"},
                "properties": {"Button": {"Fill": "BasePaletteColor"}},
            }
        )
        output = engine.convert(
            "- B:\n    Control: Classic/Button@2.2.0\n"
            "    Properties:\n      Fill: =Red\n"
        )
        assert "BasePaletteColor: =Red" in output

        with pytest.raises(InvalidMappingConfigurationError):
            ConversionEngine({"controlTypes": {}})

    @pytest.mark.unit
    def test_constructor_rejects_unusable_default(self):
        """Defaults that cannot be rendered fail before any conversion."""
        with pytest.raises(InvalidMappingConfigurationError):
            ConversionEngine(
                {
                    "controlTypes": {"Classic/Button": "Button@0.0.45"},
                    "properties": {},
                    "defaults": {"Button": {"Style": {"Sizes": [1]}}},
                }
            )


# =============================================================================
# Module-level interface and samples
# =============================================================================


class TestModuleInterface:
    """Tests for convert() and get_conversion_log()."""

    @pytest.mark.unit
    def test_convert_and_log(self, classic_button):
        """The shared engine records the most recent log."""
        output = convert(classic_button)
        assert "Control: Button@0.0.45" in output
        assert _messages(get_conversion_log())[-1] == "Conversion completed"

    @pytest.mark.unit
    def test_convert_with_mappings(self, small_mappings):
        """A configuration can be supplied per call."""
        output = convert("- B:\n    Control: Classic/Button@1.0.0\n", small_mappings)
        assert "Control: Button@0.0.44" in output


class TestSamples:
    """Tests for sample_classic_yaml()."""

    @pytest.mark.unit
    @pytest.mark.parametrize("kind", ["button", "gallery", "form", "Button"])
    def test_samples_convert(self, engine, kind):
        """Every sample converts with the built-in tables."""
        assert engine.convert(sample_classic_yaml(kind))

    @pytest.mark.unit
    def test_unknown_sample(self):
        """Unknown sample names raise KeyError."""
        with pytest.raises(KeyError, match="Available"):
            sample_classic_yaml("chart")
