"""Unit tests for the mapping module.

Tests for:
- MappingConfiguration validation, import/export and merging
- TypeMapper resolution order
- PropertyMapper renames, drops, nested targets and defaults
- generate_control_name
"""

import json
import random

import pytest

from paconvert.core.errors import InvalidMappingConfigurationError
from paconvert.mapping import (
    COMMON_TABLE_KEY,
    MappingConfiguration,
    PropertyMapper,
    TypeMapper,
    default_mappings,
    generate_control_name,
    load_mappings,
)
from paconvert.model import PropertyValue, ValueKind


def _config(control_types=None, properties=None, defaults=None):
    return MappingConfiguration.from_data(
        {
            "controlTypes": control_types or {},
            "properties": properties or {},
            "defaults": defaults or {},
        }
    )


def _number(value):
    return PropertyValue(ValueKind.NUMBER, value)


# =============================================================================
# MappingConfiguration
# =============================================================================


class TestMappingConfiguration:
    """Tests for MappingConfiguration."""

    @pytest.mark.unit
    def test_default_tables_load(self):
        """Built-in tables validate."""
        config = default_mappings()
        assert config.control_types["Classic/Button@2.2.0"] == "Button@0.0.45"
        assert COMMON_TABLE_KEY in config.properties

    @pytest.mark.unit
    def test_export_uses_aliases(self):
        """Exported data uses the JSON section names."""
        data = default_mappings().to_data()
        assert set(data) == {"controlTypes", "properties", "defaults"}

    @pytest.mark.unit
    def test_export_import_round_trip(self):
        """Exported JSON imports back to an equal configuration."""
        config = default_mappings()
        assert MappingConfiguration.from_json(config.to_json()) == config

    @pytest.mark.unit
    def test_flat_properties_become_common_table(self):
        """A flat classic -> modern table is the common table."""
        config = _config(properties={"HintText": "Placeholder", "Wrap": None})
        assert config.properties == {
            COMMON_TABLE_KEY: {"HintText": "Placeholder", "Wrap": None}
        }

    @pytest.mark.unit
    def test_defaults_optional(self):
        """The defaults section may be omitted."""
        config = MappingConfiguration.from_data(
            {"controlTypes": {"a": "b"}, "properties": {}}
        )
        assert config.defaults == {}

    @pytest.mark.unit
    def test_default_value_types_kept(self):
        """Default values keep their JSON types."""
        config = _config(defaults={"Button": {"A": True, "B": 1, "C": "x"}})
        assert config.defaults["Button"] == {"A": True, "B": 1, "C": "x"}
        assert config.defaults["Button"]["A"] is True

    @pytest.mark.unit
    def test_frozen(self):
        """Configurations are immutable snapshots."""
        config = default_mappings()
        with pytest.raises(Exception):
            config.control_types = {}

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "data",
        [
            [],
            "text",
            {"controlTypes": {}},
            {"properties": {}},
            {"controlTypes": {"a": 1}, "properties": {}},
            {"controlTypes": {"a": ""}, "properties": {}},
            {"controlTypes": {}, "properties": {"Button": {"X": ""}}},
            {"controlTypes": {}, "properties": {"Button": {"X": "A..B"}}},
            {"controlTypes": {}, "properties": {}, "unknown": {}},
            {"controlTypes": {}, "properties": {}, "defaults": {"B": {"N": [1]}}},
            {
                "controlTypes": {},
                "properties": {},
                "defaults": {"B": {"N": {"a": [1]}}},
            },
        ],
    )
    def test_invalid_shape(self, data):
        """Wrongly shaped data raises InvalidMappingConfigurationError."""
        with pytest.raises(InvalidMappingConfigurationError):
            MappingConfiguration.from_data(data)

    @pytest.mark.unit
    def test_invalid_shape_details(self):
        """Validation problems are listed on the error."""
        with pytest.raises(InvalidMappingConfigurationError) as exc_info:
            MappingConfiguration.from_data({"controlTypes": {"a": 1}})
        assert len(exc_info.value.details) == 2

    @pytest.mark.unit
    def test_unusable_nested_default_reported(self):
        """Defaults that cannot become property values fail at import."""
        with pytest.raises(InvalidMappingConfigurationError) as exc_info:
            MappingConfiguration.from_data(
                {
                    "controlTypes": {},
                    "properties": {},
                    "defaults": {"Button": {"Style": {"Sizes": [1, 2]}}},
                }
            )
        assert "Button.Style" in str(exc_info.value)

    @pytest.mark.unit
    def test_invalid_json(self):
        """Text that is not JSON is rejected."""
        with pytest.raises(InvalidMappingConfigurationError, match="not valid JSON"):
            MappingConfiguration.from_json("{controlTypes:")

    @pytest.mark.unit
    def test_merged_overlays_per_key(self):
        """Merging replaces entries key by key."""
        base = _config(
            control_types={"a": "A", "b": "B"},
            properties={"Button": {"Fill": "BasePaletteColor", "Size": "FontSize"}},
        )
        overlay = _config(
            control_types={"b": "B2"},
            properties={"Button": {"Size": None}},
            defaults={"Button": {"ButtonType": "Primary"}},
        )
        merged = base.merged(overlay)

        assert merged.control_types == {"a": "A", "b": "B2"}
        assert merged.properties["Button"] == {
            "Fill": "BasePaletteColor",
            "Size": None,
        }
        assert merged.defaults == {"Button": {"ButtonType": "Primary"}}
        assert base.properties["Button"]["Size"] == "FontSize"

    @pytest.mark.unit
    def test_property_table_lookup(self):
        """Versioned table first, then bare, then common."""
        config = _config(
            properties={
                "Button@0.0.45": {"A": "Versioned"},
                "Button": {"A": "Bare"},
                COMMON_TABLE_KEY: {"A": "Common"},
            }
        )
        assert config.property_table("Button@0.0.45") == {"A": "Versioned"}
        assert config.property_table("Button@0.0.44") == {"A": "Bare"}
        assert config.property_table("Text@0.0.51") == {"A": "Common"}

    @pytest.mark.unit
    def test_load_mappings_merges(self, tmp_path):
        """Files are layered over the built-in tables by default."""
        path = tmp_path / "mappings.json"
        path.write_text(
            json.dumps(
                {"controlTypes": {"MyButton": "Button@0.0.45"}, "properties": {}}
            )
        )

        merged = load_mappings(path)
        assert merged.control_types["MyButton"] == "Button@0.0.45"
        assert "Classic/Button" in merged.control_types

        replaced = load_mappings(path, merge=False)
        assert replaced.control_types == {"MyButton": "Button@0.0.45"}

    @pytest.mark.unit
    def test_load_mappings_missing_file(self, tmp_path):
        """Unreadable files raise InvalidMappingConfigurationError."""
        with pytest.raises(InvalidMappingConfigurationError, match="Cannot read"):
            load_mappings(tmp_path / "absent.json")


# =============================================================================
# TypeMapper
# =============================================================================


class TestTypeMapper:
    """Tests for TypeMapper.resolve()."""

    @pytest.mark.unit
    def test_versioned_entry_wins(self):
        """An exact versioned entry beats the bare entry."""
        mapper = TypeMapper(
            _config(control_types={"Button@2.2.0": "Modern@2", "Button": "Modern@1"})
        )
        assert mapper.resolve("Button@2.2.0") == "Modern@2"
        assert mapper.resolve("Button@9.9.9") == "Modern@1"

    @pytest.mark.unit
    def test_case_insensitive_bare_fallback(self):
        """Bare types match ignoring case as a last resort."""
        mapper = TypeMapper(_config(control_types={"button": "Button@0.0.45"}))
        assert mapper.resolve("Button@2.2.0") == "Button@0.0.45"
        assert mapper.resolve("BUTTON") == "Button@0.0.45"

    @pytest.mark.unit
    def test_quotes_and_whitespace_ignored(self):
        """Tokens are trimmed and unquoted before lookup."""
        mapper = TypeMapper(_config(control_types={"Label": "Text@0.0.51"}))
        assert mapper.resolve(' "Label" ') == "Text@0.0.51"

    @pytest.mark.unit
    def test_unknown_returns_none(self):
        """Unknown types resolve to None."""
        mapper = TypeMapper(default_mappings())
        assert mapper.resolve("Classic/Teleporter@1.0.0") is None

    @pytest.mark.unit
    def test_log_messages(self):
        """Exact and fallback matches are reported differently."""
        mapper = TypeMapper(
            _config(control_types={"Button@2.2.0": "Modern@2", "Button": "Modern@1"})
        )
        messages = []
        mapper.resolve("Button@2.2.0", messages.append)
        mapper.resolve("Button@1.0.0", messages.append)
        assert messages == [
            "Control type conversion: Button@2.2.0 -> Modern@2",
            "Control type conversion (using base type): Button@1.0.0 -> Modern@1",
        ]

    @pytest.mark.unit
    def test_case_folded_matches_reported(self):
        """Matches that ignore case say so; only bare matches drop the version."""
        mapper = TypeMapper(
            _config(control_types={"Classic/Button@2.2.0": "Modern@2", "label": "T@1"})
        )
        messages = []
        mapper.resolve("classic/button@2.2.0", messages.append)
        mapper.resolve("Label@2.5.1", messages.append)
        assert messages == [
            "Control type conversion (ignoring case): "
            "classic/button@2.2.0 -> Modern@2",
            "Control type conversion (using base type, ignoring case): "
            "Label@2.5.1 -> T@1",
        ]

    @pytest.mark.unit
    def test_default_tables_cover_classic_types(self):
        """Built-in tables resolve the common classic controls."""
        mapper = TypeMapper(default_mappings())
        assert mapper.resolve("Classic/TextInput@2.3.2") == "TextInput@0.0.54"
        assert mapper.resolve("Label@2.5.1") == "Text@0.0.51"
        assert mapper.resolve("Gallery@2.15.0") == "Gallery@2.15.0"
        assert mapper.resolve("textbox") == "TextInput@0.0.54"


# =============================================================================
# PropertyMapper
# =============================================================================


class TestPropertyMapper:
    """Tests for PropertyMapper.map_properties()."""

    @pytest.mark.unit
    def test_rename_drop_and_pass_through(self):
        """Mapped keys rename, null keys drop, unknown keys pass."""
        config = _config(
            properties={"Button": {"Fill": "BasePaletteColor", "HoverFill": None}}
        )
        messages = []
        result = PropertyMapper(config).map_properties(
            {
                "Fill": PropertyValue.formula("RGBA(0, 0, 0, 1)"),
                "HoverFill": PropertyValue.formula("Red"),
                "X": _number(40),
            },
            "Button@0.0.45",
            messages.append,
        )

        assert list(result) == ["BasePaletteColor", "X"]
        assert result["BasePaletteColor"].value == "RGBA(0, 0, 0, 1)"
        assert messages == [
            "Property conversion: Fill -> BasePaletteColor",
            "Property HoverFill dropped - no modern equivalent",
            "Property X kept unmapped",
        ]

    @pytest.mark.unit
    def test_null_values_skipped(self):
        """Keys without a value are skipped and logged."""
        messages = []
        result = PropertyMapper(_config()).map_properties(
            {"Height": None}, "Button", messages.append
        )
        assert result == {}
        assert messages == ["Property Height skipped - no value"]

    @pytest.mark.unit
    def test_dotted_targets_nest(self):
        """Dotted targets build nested objects in key order."""
        config = _config(
            properties={
                "Button": {
                    "RadiusTopLeft": "BorderRadius.TopLeft",
                    "RadiusBottomRight": "BorderRadius.BottomRight",
                }
            }
        )
        result = PropertyMapper(config).map_properties(
            {"RadiusTopLeft": _number(5), "RadiusBottomRight": _number(2)},
            "Button",
        )
        radius = result["BorderRadius"]
        assert radius.is_object
        assert radius.value == {"TopLeft": _number(5), "BottomRight": _number(2)}

    @pytest.mark.unit
    def test_dotted_target_onto_scalar_dropped(self):
        """A dotted target never replaces an existing scalar."""
        config = _config(
            properties={"Button": {"RadiusTopLeft": "BorderRadius.TopLeft"}}
        )
        messages = []
        result = PropertyMapper(config).map_properties(
            {"BorderRadius": _number(8), "RadiusTopLeft": _number(5)},
            "Button",
            messages.append,
        )
        assert result == {"BorderRadius": _number(8)}
        assert "non-object" in messages[-1]

    @pytest.mark.unit
    def test_override_of_renamed_value_logged(self):
        """A later key landing on a filled modern key is logged."""
        config = _config(properties={"Button": {"Color": "FontColor"}})
        messages = []
        result = PropertyMapper(config).map_properties(
            {
                "Color": PropertyValue.formula("Red"),
                "FontColor": PropertyValue.formula("Blue"),
            },
            "Button",
            messages.append,
        )
        assert result == {"FontColor": PropertyValue.formula("Blue")}
        assert messages == [
            "Property conversion: Color -> FontColor",
            "Property FontColor overrides earlier value of FontColor",
            "Property FontColor kept unmapped",
        ]

    @pytest.mark.unit
    def test_override_of_nested_value_logged(self):
        """Replacing a nested object or one of its entries is logged."""
        config = _config(
            properties={
                "Button": {
                    "RadiusTopLeft": "BorderRadius.TopLeft",
                    "CornerTopLeft": "BorderRadius.TopLeft",
                }
            }
        )
        messages = []
        result = PropertyMapper(config).map_properties(
            {
                "RadiusTopLeft": PropertyValue.formula("5"),
                "CornerTopLeft": _number(6),
                "BorderRadius": _number(4),
            },
            "Button",
            messages.append,
        )
        assert result == {"BorderRadius": _number(4)}
        assert messages == [
            "Property conversion: RadiusTopLeft -> BorderRadius.TopLeft",
            "Property CornerTopLeft overrides earlier value of BorderRadius.TopLeft",
            "Property conversion: CornerTopLeft -> BorderRadius.TopLeft",
            "Property BorderRadius overrides earlier value of BorderRadius",
            "Property BorderRadius kept unmapped",
        ]

    @pytest.mark.unit
    def test_common_table_used_without_type_table(self):
        """Types without a table use the common table."""
        config = _config(properties={"Size": "FontSize"})
        result = PropertyMapper(config).map_properties({"Size": _number(13)}, "Text")
        assert result == {"FontSize": _number(13)}

    @pytest.mark.unit
    def test_defaults_never_overwrite(self):
        """Defaults only fill keys absent after mapping."""
        config = _config(
            defaults={"Button": {"ButtonType": "Standard", "Align": "Center"}}
        )
        messages = []
        result = PropertyMapper(config).map_properties(
            {"ButtonType": PropertyValue.string("Custom")},
            "Button@0.0.45",
            messages.append,
        )
        assert result["ButtonType"] == PropertyValue.string("Custom")
        assert result["Align"] == PropertyValue.string("Center")
        assert messages[-1] == "Added default property: Align = Center"

    @pytest.mark.unit
    def test_formula_defaults(self):
        """Default strings starting with '=' are formulas."""
        config = _config(defaults={"TextInput": {"Mode": "=TextMode.SingleLine"}})
        result = PropertyMapper(config).map_properties({}, "TextInput@0.0.54")
        assert result["Mode"] == PropertyValue.formula("TextMode.SingleLine")

    @pytest.mark.unit
    def test_input_not_modified(self):
        """Mapping returns a new table."""
        classic = {"Fill": PropertyValue.formula("Red")}
        PropertyMapper(default_mappings()).map_properties(classic, "Button@0.0.45")
        assert classic == {"Fill": PropertyValue.formula("Red")}


# =============================================================================
# generate_control_name
# =============================================================================


class TestGenerateControlName:
    """Tests for generate_control_name()."""

    @pytest.mark.unit
    def test_explicit_name_kept(self):
        """A given name is returned unchanged."""
        assert generate_control_name("Button@0.0.45", name="Save") == "Save"

    @pytest.mark.unit
    def test_prefix_and_version_removed(self):
        """Generated names use the bare type without the Classic prefix."""
        name = generate_control_name("Classic/Button@2.2.0", rng=random.Random(7))
        assert name.startswith("Button")
        assert name[len("Button") :].isdigit()

    @pytest.mark.unit
    def test_seeded_rng_is_repeatable(self):
        """The same seed produces the same name."""
        first = generate_control_name("Text@0.0.51", rng=random.Random(3))
        second = generate_control_name("Text@0.0.51", rng=random.Random(3))
        assert first == second
