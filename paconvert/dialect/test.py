"""Unit tests for the dialect codec."""

import pytest

from paconvert.core.errors import DialectParseError, UnsupportedInputError
from paconvert.dialect import (
    extract_control_info,
    extract_properties,
    format_control,
    parse_dialect,
    render_dialect,
    validate,
)
from paconvert.model import ControlDocument, ControlNode, PropertyValue, ValueKind

BUTTON_TEXT = """\
- Button1:
    Control: Classic/Button@2.2.0
    Properties:
      OnSelect: =Navigate(Screen2, ScreenTransition.Fade)
      Text: Submit
      X: 40
      Y: 12.5
      Visible: true
      Tooltip: '=not a formula'
      Height:
      BorderRadius:
        TopLeft: 5
        TopRight: =Parent.Radius
"""

GALLERY_TEXT = """\
- Gallery1:
    Control: Gallery@2.15.0
    Variant: BrowseLayout_Vertical_TwoTextOneImageVariant_ver5.0
    Properties:
      Items: =Accounts
    Children:
      - Title1:
          Control: Label@2.5.1
          Properties:
            Text: =ThisItem.Name
"""


class TestParseDialect:
    """Tests for parse_dialect()."""

    @pytest.mark.unit
    def test_classifies_values(self):
        """Each property lands in the right category."""
        document = parse_dialect(BUTTON_TEXT)
        props = document.control.properties

        assert document.name == "Button1"
        assert document.control.type_tag == "Classic/Button@2.2.0"
        assert props["OnSelect"] == PropertyValue.formula(
            "Navigate(Screen2, ScreenTransition.Fade)"
        )
        assert props["Text"] == PropertyValue(ValueKind.STRING, "Submit")
        assert props["X"] == PropertyValue(ValueKind.NUMBER, 40)
        assert props["Y"] == PropertyValue(ValueKind.NUMBER, 12.5)
        assert props["Visible"] == PropertyValue(ValueKind.BOOLEAN, True)
        assert props["Tooltip"] == PropertyValue.string("=not a formula")
        assert props["Height"] is None

    @pytest.mark.unit
    def test_nested_object(self):
        """Nested mappings become OBJECT values."""
        radius = parse_dialect(BUTTON_TEXT).control.properties["BorderRadius"]
        assert radius.is_object
        assert radius.value["TopLeft"].value == 5
        assert radius.value["TopRight"].is_formula

    @pytest.mark.unit
    def test_property_order_preserved(self):
        """Properties keep source order."""
        props = parse_dialect(BUTTON_TEXT).control.properties
        assert list(props)[:3] == ["OnSelect", "Text", "X"]

    @pytest.mark.unit
    def test_top_level_mapping(self):
        """Documents without the sequence dash are accepted."""
        document = parse_dialect("Label1:\n  Control: Label@2.5.1\n")
        assert document.as_sequence is False
        assert document.control.type_tag == "Label@2.5.1"
        assert document.control.properties == {}

    @pytest.mark.unit
    def test_extras_kept(self):
        """Variant and Children survive parsing."""
        node = parse_dialect(GALLERY_TEXT).control
        assert node.extras["Variant"] == (
            "BrowseLayout_Vertical_TwoTextOneImageVariant_ver5.0"
        )
        child = node.extras["Children"][0]["Title1"]
        assert child["Properties"]["Text"] == PropertyValue.formula("ThisItem.Name")

    @pytest.mark.unit
    def test_multiple_controls(self):
        """Several top-level controls keep their order."""
        text = (
            "- A:\n    Control: Label@2.5.1\n"
            "- B:\n    Control: Classic/Button@2.2.0\n"
        )
        document = parse_dialect(text)
        assert [name for name, _ in document] == ["A", "B"]

    @pytest.mark.unit
    def test_invalid_yaml(self):
        """Structural errors surface as DialectParseError."""
        with pytest.raises(DialectParseError) as exc_info:
            parse_dialect("key: value\n  nested: broken")
        assert str(exc_info.value).startswith("YAML parsing error:")
        assert exc_info.value.cause

    @pytest.mark.unit
    def test_duplicate_property_rejected(self):
        """Duplicate keys are a parse error."""
        text = "- B:\n    Control: Button\n    Properties:\n      X: 1\n      X: 2\n"
        with pytest.raises(DialectParseError):
            parse_dialect(text)

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "text",
        [
            "just some text",
            "",
            "Text: hello",
            "- Button1:\n    Properties:\n      X: 1\n",
            "- B:\n    Control: Button\n    Properties: 5\n",
        ],
    )
    def test_not_a_control(self, text):
        """Well-formed YAML without a control declaration is rejected."""
        with pytest.raises(UnsupportedInputError):
            parse_dialect(text)

    @pytest.mark.unit
    def test_sequence_property_rejected(self):
        """Sequence-valued properties are unsupported."""
        text = (
            "- G:\n    Control: Gallery\n    Properties:\n"
            "      Items:\n        - a\n        - b\n"
        )
        with pytest.raises(UnsupportedInputError, match="Items"):
            parse_dialect(text)


class TestRenderDialect:
    """Tests for render_dialect()."""

    @pytest.mark.unit
    @pytest.mark.parametrize("text", [BUTTON_TEXT, GALLERY_TEXT])
    def test_canonical_text_round_trips(self, text):
        """Canonically written documents render back unchanged."""
        assert render_dialect(parse_dialect(text)) == text

    @pytest.mark.unit
    def test_reparse_equals_document(self):
        """parse(render(d)) == d for documents built in memory."""
        node = ControlNode(
            type_tag="Button@0.0.45",
            properties={
                "OnSelect": PropertyValue.formula('Set(x, "a: b"); Notify(x)'),
                "Text": PropertyValue.string("yes"),
                "Label": PropertyValue.string("=literal"),
                "Notes": PropertyValue.string("line one\nline two"),
                "Script": PropertyValue.formula("Set(a, 1);\nBack()"),
                "Count": PropertyValue(ValueKind.NUMBER, 3),
                "Enabled": PropertyValue(ValueKind.BOOLEAN, False),
                "Empty": None,
            },
            key_order=["Control", "Properties"],
        )
        document = ControlDocument.single("Button1", node)
        assert parse_dialect(render_dialect(document)) == document

    @pytest.mark.unit
    def test_formulas_render_bare(self):
        """Formulas come out as key: =expr lines."""
        node = ControlNode(
            type_tag="Label@2.5.1",
            properties={"Text": PropertyValue.formula('"Hello, " & User().FullName')},
        )
        output = render_dialect(ControlDocument.single("Label1", node))
        assert '      Text: ="Hello, " & User().FullName\n' in output
        assert "\x1e" not in output

    @pytest.mark.unit
    def test_multiline_formula_is_block(self):
        """Formulas with line breaks become literal blocks."""
        node = ControlNode(
            type_tag="Button",
            properties={"OnSelect": PropertyValue.formula("Set(a, 1);\nBack()")},
        )
        output = render_dialect(ControlDocument.single("B", node))
        assert "      OnSelect: |-\n        =Set(a, 1);\n        Back()\n" in output

    @pytest.mark.unit
    def test_control_tag_unquoted(self):
        """Versioned control tags are written without quotes."""
        node = ControlNode(type_tag="Button@0.0.45")
        output = render_dialect(ControlDocument.single("B", node, as_sequence=False))
        assert output == "B:\n  Control: Button@0.0.45\n"

    @pytest.mark.unit
    def test_record_separator_text_is_a_string(self):
        """Quoted text starting with the record separator stays a string."""
        text = (
            "- B:\n    Control: Button\n    Properties:\n"
            '      Text: "\\x1eabc"\n'
        )
        document = parse_dialect(text)
        assert document.control.properties["Text"] == PropertyValue.string("\x1eabc")

        reparsed = parse_dialect(render_dialect(document))
        assert reparsed.control.properties["Text"] == PropertyValue.string("\x1eabc")


class TestFormatControl:
    """Tests for format_control()."""

    @pytest.mark.unit
    def test_sequence_form(self):
        """Plain values render as a one-control document."""
        output = format_control("Label1", "Label@2.5.1", {"Text": '="Hi"', "X": 10})
        assert output == (
            "- Label1:\n"
            "    Control: Label@2.5.1\n"
            "    Properties:\n"
            '      Text: ="Hi"\n'
            "      X: 10\n"
        )

    @pytest.mark.unit
    def test_mapping_form(self):
        """as_sequence=False drops the dash."""
        output = format_control("L", "Label", {"Visible": True}, as_sequence=False)
        assert output == "L:\n  Control: Label\n  Properties:\n    Visible: true\n"


class TestExtractControlInfo:
    """Tests for extract_control_info()."""

    @pytest.mark.unit
    def test_versioned(self):
        """Name, type and version are all found."""
        info = extract_control_info(BUTTON_TEXT)
        assert info.name == "Button1"
        assert info.bare_type == "Classic/Button"
        assert info.version == "2.2.0"
        assert info.full_type == "Classic/Button@2.2.0"

    @pytest.mark.unit
    def test_bare_type(self):
        """Types without a version are reported bare."""
        info = extract_control_info("Label1:\n  Control: Label\n")
        assert info.name == "Label1"
        assert info.version is None
        assert info.full_type == "Label"

    @pytest.mark.unit
    def test_quoted_type(self):
        """Quotes around the type are ignored."""
        info = extract_control_info('- B:\n    Control: "Button@0.0.45"\n')
        assert info.full_type == "Button@0.0.45"

    @pytest.mark.unit
    def test_crlf(self):
        """Windows line endings are accepted."""
        info = extract_control_info("- B:\r\n    Control: Button@1.0\r\n")
        assert info.version == "1.0"

    @pytest.mark.unit
    def test_absent(self):
        """Text without a declaration yields None."""
        assert extract_control_info("Text: hello\nX: 1\n") is None


class TestExtractProperties:
    """Tests for extract_properties()."""

    @pytest.mark.unit
    def test_direct_values(self):
        """Direct key: value lines are classified in source order."""
        props = extract_properties(BUTTON_TEXT)
        assert props == {
            "OnSelect": PropertyValue.formula(
                "Navigate(Screen2, ScreenTransition.Fade)"
            ),
            "Text": PropertyValue.string("Submit"),
            "X": PropertyValue(ValueKind.NUMBER, 40),
            "Y": PropertyValue(ValueKind.NUMBER, 12.5),
            "Visible": PropertyValue(ValueKind.BOOLEAN, True),
            "Tooltip": PropertyValue.string("=not a formula"),
        }
        assert list(props) == ["OnSelect", "Text", "X", "Y", "Visible", "Tooltip"]

    @pytest.mark.unit
    def test_stops_at_section_end(self):
        """Only the first Properties block is read."""
        props = extract_properties(GALLERY_TEXT)
        assert props == {"Items": PropertyValue.formula("Accounts")}

    @pytest.mark.unit
    def test_block_scalars_skipped(self):
        """Block scalar values are left to the full parser."""
        text = (
            "- B:\n    Control: Button\n    Properties:\n"
            "      OnSelect: |-\n        =Back()\n      X: 1\n"
        )
        assert extract_properties(text) == {"X": PropertyValue(ValueKind.NUMBER, 1)}

    @pytest.mark.unit
    def test_empty_section(self):
        """A Properties line with nothing under it yields an empty table."""
        assert extract_properties("- B:\n    Control: Button\n    Properties:\n") == {}

    @pytest.mark.unit
    def test_absent(self):
        """Text without a Properties section yields None."""
        assert extract_properties("- B:\n    Control: Button\n") is None


class TestValidate:
    """Tests for validate()."""

    @pytest.mark.unit
    def test_control_document(self):
        """Documents with Control and Properties are valid."""
        assert validate(BUTTON_TEXT) is True

    @pytest.mark.unit
    def test_plain_yaml(self):
        """Any YAML that parses after escaping is valid."""
        assert validate("Text: =1 + 2\nX: 3") is True

    @pytest.mark.unit
    def test_broken_yaml(self):
        """Unparseable text is invalid and does not raise."""
        assert validate("key: value\n  nested: broken") is False
