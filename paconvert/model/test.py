"""Unit tests for the control document model."""

import pytest

from paconvert.model import (
    ControlDocument,
    ControlNode,
    PropertyValue,
    ValueKind,
    join_type_token,
    split_type_token,
)


class TestPropertyValue:
    """Tests for PropertyValue classification."""

    @pytest.mark.unit
    def test_bool_is_not_number(self):
        """Booleans classify as BOOLEAN even though bool subclasses int."""
        assert PropertyValue.from_python(True).kind == ValueKind.BOOLEAN
        assert PropertyValue.from_python(0).kind == ValueKind.NUMBER

    @pytest.mark.unit
    def test_numbers(self):
        """Ints and floats classify as NUMBER."""
        assert PropertyValue.from_python(5) == PropertyValue(ValueKind.NUMBER, 5)
        assert PropertyValue.from_python(1.5).value == 1.5

    @pytest.mark.unit
    def test_string_with_equals_is_formula(self):
        """Strings starting with '=' classify as formulas without the prefix."""
        value = PropertyValue.from_python("=Notify(\"hi\")")
        assert value.is_formula
        assert value.value == 'Notify("hi")'

    @pytest.mark.unit
    def test_leading_whitespace_before_equals(self):
        """Trimmed text decides formula classification."""
        assert PropertyValue.from_python("  =1+1").value == "1+1"

    @pytest.mark.unit
    def test_explicit_string_keeps_equals(self):
        """PropertyValue.string never becomes a formula."""
        value = PropertyValue.string("=not a formula")
        assert value.kind == ValueKind.STRING
        assert value.to_python() == "=not a formula"

    @pytest.mark.unit
    def test_nested_object(self):
        """Dicts classify recursively."""
        value = PropertyValue.from_python({"TopLeft": 5, "Fill": "=Red"})
        assert value.is_object
        assert value.value["TopLeft"].kind == ValueKind.NUMBER
        assert value.value["Fill"].is_formula

    @pytest.mark.unit
    def test_to_python_restores_prefix(self):
        """to_python puts the '=' back on formulas."""
        value = PropertyValue.obj({"A": "=x", "B": "y"})
        assert value.to_python() == {"A": "=x", "B": "y"}

    @pytest.mark.unit
    def test_unsupported_type_raises(self):
        """Lists have no PropertyValue equivalent."""
        with pytest.raises(TypeError, match="list"):
            PropertyValue.from_python([1, 2])

    @pytest.mark.unit
    def test_passthrough(self):
        """Existing PropertyValues are returned unchanged."""
        value = PropertyValue.formula("x")
        assert PropertyValue.from_python(value) is value

    @pytest.mark.unit
    def test_as_text(self):
        """as_text renders compact log-friendly text."""
        value = PropertyValue.obj({"TopLeft": 5, "On": True})
        assert value.as_text() == "{TopLeft: 5, On: true}"
        assert PropertyValue.formula("x").as_text() == "=x"


class TestTypeTokens:
    """Tests for version suffix handling."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "token,expected",
        [
            ("Classic/Button@2.2.0", ("Classic/Button", "2.2.0")),
            ("Button", ("Button", None)),
            (" Label@2.5.1 ", ("Label", "2.5.1")),
            ("Button@", ("Button", None)),
        ],
    )
    def test_split(self, token, expected):
        """Tokens split on the last '@'."""
        assert split_type_token(token) == expected

    @pytest.mark.unit
    def test_join(self):
        """join_type_token is the inverse of split."""
        assert join_type_token("Button", "0.0.45") == "Button@0.0.45"
        assert join_type_token("Button", None) == "Button"


class TestControlNode:
    """Tests for ControlNode helpers."""

    @pytest.mark.unit
    def test_bare_type_and_version(self):
        """Type tag parts are exposed as properties."""
        node = ControlNode(type_tag="Classic/Button@2.2.0")
        assert node.bare_type == "Classic/Button"
        assert node.version == "2.2.0"

    @pytest.mark.unit
    def test_node_keys_follow_original_order(self):
        """Extras render where they were written."""
        node = ControlNode(
            type_tag="Gallery@2.15.0",
            properties={"Items": PropertyValue.formula("Accounts")},
            extras={"Variant": "Vertical"},
            key_order=["Control", "Variant", "Properties"],
        )
        assert node.node_keys() == ["Control", "Variant", "Properties"]

    @pytest.mark.unit
    def test_node_keys_default_order(self):
        """Without a recorded order, Control comes first and Properties last."""
        node = ControlNode(
            type_tag="Button",
            properties={"Text": PropertyValue.string("Go")},
            extras={"Variant": "x"},
        )
        assert node.node_keys() == ["Control", "Variant", "Properties"]

    @pytest.mark.unit
    def test_node_keys_without_properties(self):
        """Empty property tables are omitted unless they were written."""
        assert ControlNode(type_tag="Timer").node_keys() == ["Control"]


class TestControlDocument:
    """Tests for ControlDocument accessors."""

    @pytest.mark.unit
    def test_single(self):
        """single() builds a one-control document."""
        node = ControlNode(type_tag="Button")
        document = ControlDocument.single("Button1", node)
        assert document.name == "Button1"
        assert document.control is node
        assert len(document) == 1
        assert list(document) == [("Button1", node)]
