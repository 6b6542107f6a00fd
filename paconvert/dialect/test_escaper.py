"""Unit tests for formula escaping."""

import pytest

from paconvert.dialect import LITERAL_SENTINEL, SENTINEL, escape, parse_tree, unescape


class TestEscape:
    """Tests for escape()."""

    @pytest.mark.unit
    def test_formula_becomes_sentinel_string(self):
        """Formula lines parse as sentinel-tagged strings."""
        text = 'OnSelect: =Notify("Saved: done", NotificationType.Success)'
        tree = parse_tree(escape(text))
        assert tree == {
            "OnSelect": SENTINEL + 'Notify("Saved: done", NotificationType.Success)'
        }

    @pytest.mark.unit
    def test_formula_with_backslashes_and_quotes(self):
        """Quotes and backslashes inside formulas survive escaping."""
        text = r'Text: ="C:\temp\" & "x"'
        tree = parse_tree(escape(text))
        assert tree["Text"] == SENTINEL + r'"C:\temp\" & "x"'

    @pytest.mark.unit
    def test_empty_formula(self):
        """A bare '=' is an empty formula, not a YAML value tag."""
        tree = parse_tree(escape("Default: ="))
        assert tree == {"Default": SENTINEL}

    @pytest.mark.unit
    def test_formula_in_sequence_item(self):
        """Keys following a sequence dash are escaped too."""
        tree = parse_tree(escape("- OnVisible: =Refresh(Accounts)"))
        assert tree == [{"OnVisible": SENTINEL + "Refresh(Accounts)"}]

    @pytest.mark.unit
    def test_control_tag_is_quoted(self):
        """Versioned control references are quoted."""
        assert escape("    Control: Classic/Button@2.2.0") == (
            '    Control: "Classic/Button@2.2.0"'
        )

    @pytest.mark.unit
    @pytest.mark.parametrize("word", ["yes", "No", "ON", "off", "True", "FALSE"])
    def test_yaml11_booleans_stay_strings(self, word):
        """Boolean spellings YAML would reinterpret are kept as written."""
        tree = parse_tree(escape(f"Mode: {word}"))
        assert tree == {"Mode": word}

    @pytest.mark.unit
    def test_canonical_booleans_stay_booleans(self):
        """Lowercase true/false remain boolean literals."""
        tree = parse_tree(escape("Visible: true\nItalic: false"))
        assert tree == {"Visible": True, "Italic": False}

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value",
        [
            "RGBA(56, 96, 178, 1)",
            "a: b",
            "{not a mapping}",
            "[1, 2]",
            "*alias",
            "&anchor",
            "!tag",
            "100%",
            "a | b",
            "@mention",
        ],
    )
    def test_special_characters_are_quoted(self, value):
        """Values with structural characters parse as plain strings."""
        tree = parse_tree(escape(f"Text: {value}"))
        assert tree == {"Text": value}

    @pytest.mark.unit
    def test_quoted_values_untouched(self):
        """Already quoted values are left alone."""
        text = "Text: \"a: b\"\nTip: 'x, y'"
        assert escape(text) == text

    @pytest.mark.unit
    def test_empty_collections_untouched(self):
        """Empty flow collections keep their meaning."""
        assert parse_tree(escape("Properties: {}")) == {"Properties": {}}

    @pytest.mark.unit
    def test_block_scalar_content_untouched(self):
        """Lines inside a block scalar are never rewritten."""
        text = "OnSelect: |-\n  =If(a: =b, c)\n  Next: =x\nText: =y"
        escaped = escape(text)
        lines = escaped.split("\n")
        assert lines[:3] == ["OnSelect: |-", "  =If(a: =b, c)", "  Next: =x"]
        assert lines[3].startswith('Text: "')

    @pytest.mark.unit
    def test_crlf_normalized(self):
        """Windows line endings do not leak into formulas."""
        tree = parse_tree(escape("A: =1\r\nB: =2\r\n"))
        assert tree == {"A": SENTINEL + "1", "B": SENTINEL + "2"}

    @pytest.mark.unit
    def test_text_without_formulas_unchanged(self):
        """Plain documents pass through untouched."""
        text = "- Label1:\n    Properties:\n      X: 40\n"
        assert escape(text) == text

    @pytest.mark.unit
    def test_sentinel_prefix_text_is_not_a_formula(self):
        """Ordinary words resembling a marker are not treated as formulas."""
        text = "Text: __FORMULA__notes"
        assert unescape(escape(text)) == text

    @pytest.mark.unit
    def test_quoted_sentinel_text_marked_literal(self):
        """Quoted strings that decode to a leading SENTINEL get a second mark."""
        tree = parse_tree(escape('Text: "\\x1eabc"'))
        assert tree == {"Text": LITERAL_SENTINEL + "abc"}


class TestUnescape:
    """Tests for unescape()."""

    @pytest.mark.unit
    def test_restores_formula_lines(self):
        """unescape undoes escape for formula lines."""
        text = (
            "- Button1:\n"
            "    Control: Classic/Button@2.2.0\n"
            "    Properties:\n"
            '      OnSelect: =Navigate(Screen2, ScreenTransition.Fade); Set(x, "y")\n'
        )
        assert unescape(escape(text)) == text

    @pytest.mark.unit
    def test_emitter_hex_escapes(self):
        """Sentinels written as \\x1E by the emitter are recognized."""
        line = '  Fill: "\\x1ERGBA(0, 0, 0, 1)"'
        assert unescape(line) == "  Fill: =RGBA(0, 0, 0, 1)"

    @pytest.mark.unit
    def test_literal_sentinel_drops_one_mark(self):
        """Literal-marked strings stay quoted strings with one SENTINEL."""
        line = '      Text: "\\x1E\\x1Eabc"'
        assert unescape(line) == '      Text: "\\u001eabc"'
        assert parse_tree(escape(unescape(line))) == {"Text": LITERAL_SENTINEL + "abc"}

    @pytest.mark.unit
    def test_multiline_formula_becomes_block(self):
        """Formulas with line breaks are written as literal blocks."""
        line = '      OnSelect: "\\x1ESet(a, 1);\\nBack()"'
        assert unescape(line) == (
            "      OnSelect: |-\n        =Set(a, 1);\n        Back()"
        )

    @pytest.mark.unit
    def test_multiline_formula_with_trailing_newline(self):
        """A trailing line break is kept with the '+' chomping indicator."""
        line = 'A: "\\x1Ex\\ny\\n"'
        assert unescape(line) == "A: |+\n  =x\n  y"

    @pytest.mark.unit
    def test_control_tag_unquoted(self):
        """Quoted control tags lose their quotes."""
        assert unescape('    Control: "Button@0.0.45"') == "    Control: Button@0.0.45"

    @pytest.mark.unit
    def test_other_quoted_values_untouched(self):
        """Ordinary double-quoted strings are left alone."""
        text = '  Text: "a: b"\n  Control: "not a tag"'
        assert unescape(text) == text

    @pytest.mark.unit
    def test_never_raises_on_garbage(self):
        """Malformed quoting is passed through."""
        text = 'A: "\\q"\nB: "unterminated'
        assert unescape(text) == text
