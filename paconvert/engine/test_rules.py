"""Unit tests for category rules."""

import pytest

from paconvert.engine.rules import (
    _registry,
    consolidate_border_radius,
    control_category,
    get_rule,
    list_rules,
    register_rule,
)
from paconvert.model import PropertyValue, ValueKind


def _number(value):
    return PropertyValue(ValueKind.NUMBER, value)


def _object(**entries):
    return PropertyValue(ValueKind.OBJECT, entries)


class TestRegistry:
    """Tests for rule registration and lookup."""

    @pytest.mark.unit
    def test_builtin_categories(self):
        """Button, form, gallery and text input rules are registered."""
        assert {"button", "form", "gallery", "textinput", "textbox"} <= set(
            list_rules()
        )

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "token, expected",
        [
            ("Classic/Button@2.2.0", "button"),
            ("Button@0.0.45", "button"),
            ("TextInput", "textinput"),
            ("Gallery@2.15.0", "gallery"),
        ],
    )
    def test_control_category(self, token, expected):
        """Categories drop prefix and version and ignore case."""
        assert control_category(token) == expected

    @pytest.mark.unit
    def test_modern_type_first(self):
        """The modern type decides before the classic type."""
        assert get_rule("Form@2.4.4", "Classic/Button") is _registry["form"]

    @pytest.mark.unit
    def test_classic_type_fallback(self):
        """Types without a modern rule fall back to the classic type."""
        assert get_rule("Custom@1.0.0", "textbox") is _registry["textbox"]
        assert get_rule("Text@0.0.51", "Label") is None

    @pytest.mark.unit
    def test_register_rule(self):
        """Decorated functions are registered under every category."""
        try:

            @register_rule("Slider", "classicslider")
            def slider_rule(classic, modern, record):
                modern["Step"] = _number(1)

            assert get_rule("Slider@1.0.32") is slider_rule
            assert get_rule("x", "ClassicSlider") is slider_rule
        finally:
            _registry.pop("slider", None)
            _registry.pop("classicslider", None)


class TestCategoryRules:
    """Tests for the built-in rules."""

    @pytest.mark.unit
    def test_button_adds_button_type(self):
        """Buttons get a Standard ButtonType when none is set."""
        modern = {}
        messages = []
        get_rule("Button")({}, modern, messages.append)
        assert modern == {"ButtonType": PropertyValue.string("Standard")}
        assert messages == [
            "Applying button-specific rules",
            "Added ButtonType property: Standard",
        ]

    @pytest.mark.unit
    def test_button_keeps_button_type(self):
        """An existing ButtonType is never replaced."""
        modern = {"ButtonType": PropertyValue.string("Custom")}
        get_rule("Button")({}, modern, lambda message: None)
        assert modern["ButtonType"] == PropertyValue.string("Custom")

    @pytest.mark.unit
    def test_form_mode(self):
        """Forms default to Edit mode."""
        modern = {}
        get_rule("Form")({}, modern, lambda message: None)
        assert modern == {"FormMode": PropertyValue.string("Edit")}

    @pytest.mark.unit
    def test_gallery_layout(self):
        """Galleries default to a vertical layout."""
        modern = {"Layout": PropertyValue.formula("Layout.Horizontal")}
        get_rule("Gallery")({}, modern, lambda message: None)
        assert modern == {"Layout": PropertyValue.formula("Layout.Horizontal")}

        modern = {}
        get_rule("Gallery")({}, modern, lambda message: None)
        assert modern == {"Layout": PropertyValue.string("Vertical")}

    @pytest.mark.unit
    def test_text_input_placeholder(self):
        """Classic HintText becomes Placeholder when absent."""
        hint = PropertyValue.formula('"Search"')
        modern = {}
        messages = []
        get_rule("TextInput")({"HintText": hint}, modern, messages.append)
        assert modern == {"Placeholder": hint}
        assert messages[-1] == "Converted HintText to Placeholder"

    @pytest.mark.unit
    def test_text_input_placeholder_kept(self):
        """An existing Placeholder wins over HintText."""
        modern = {"Placeholder": PropertyValue.string("Name")}
        get_rule("TextInput")(
            {"HintText": PropertyValue.string("Other")}, modern, lambda message: None
        )
        assert modern == {"Placeholder": PropertyValue.string("Name")}


class TestBorderRadius:
    """Tests for consolidate_border_radius()."""

    @pytest.mark.unit
    def test_corners_folded(self):
        """Corner properties become one object; missing corners are 0."""
        modern = {
            "RadiusTopLeft": _number(5),
            "X": _number(1),
            "RadiusBottomRight": PropertyValue.formula("Parent.Radius"),
        }
        consolidate_border_radius(modern, lambda message: None)

        assert list(modern) == ["X", "BorderRadius"]
        assert list(modern["BorderRadius"].value.items()) == [
            ("TopLeft", _number(5)),
            ("TopRight", _number(0)),
            ("BottomLeft", _number(0)),
            ("BottomRight", PropertyValue.formula("Parent.Radius")),
        ]

    @pytest.mark.unit
    def test_partial_object_completed(self):
        """A partial BorderRadius object is filled in place."""
        modern = {
            "BorderRadius": _object(BottomLeft=_number(4)),
            "X": _number(1),
        }
        consolidate_border_radius(modern, lambda message: None)

        assert list(modern) == ["BorderRadius", "X"]
        assert modern["BorderRadius"].value == {
            "TopLeft": _number(0),
            "TopRight": _number(0),
            "BottomLeft": _number(4),
            "BottomRight": _number(0),
        }

    @pytest.mark.unit
    def test_object_entries_win(self):
        """Corners already in the object beat corner properties."""
        modern = {
            "BorderRadius": _object(TopLeft=_number(8)),
            "RadiusTopLeft": _number(2),
        }
        consolidate_border_radius(modern, lambda message: None)
        assert modern["BorderRadius"].value["TopLeft"] == _number(8)
        assert "RadiusTopLeft" not in modern

    @pytest.mark.unit
    def test_scalar_border_radius_kept(self):
        """A non-object BorderRadius is kept; corner properties go."""
        modern = {
            "BorderRadius": PropertyValue.formula("Self.Height / 2"),
            "RadiusTopLeft": _number(2),
        }
        messages = []
        consolidate_border_radius(modern, messages.append)
        assert modern == {"BorderRadius": PropertyValue.formula("Self.Height / 2")}
        assert messages

    @pytest.mark.unit
    def test_nothing_to_do(self):
        """Without corner properties nothing changes or is logged."""
        complete = _object(
            TopLeft=_number(1),
            TopRight=_number(1),
            BottomLeft=_number(1),
            BottomRight=_number(1),
        )
        for modern in ({"X": _number(1)}, {"BorderRadius": complete}):
            before = dict(modern)
            messages = []
            consolidate_border_radius(modern, messages.append)
            assert modern == before
            assert messages == []
