"""Unit tests for the PyYAML boundary."""

import pytest

from paconvert.core.errors import StructuralError
from paconvert.dialect import QuotedText, Styled, parse_tree, render_tree


class TestParseTree:
    """Tests for parse_tree()."""

    @pytest.mark.unit
    def test_quoted_scalars_marked(self):
        tree = parse_tree("a: \"x\"\nb: 'y'\nc: z\n")
        assert isinstance(tree["a"], QuotedText)
        assert isinstance(tree["b"], QuotedText)
        assert not isinstance(tree["c"], QuotedText)
        assert tree == {"a": "x", "b": "y", "c": "z"}

    @pytest.mark.unit
    def test_timestamps_stay_text(self):
        assert parse_tree("Due: 2024-05-01\n") == {"Due": "2024-05-01"}

    @pytest.mark.unit
    def test_scalar_types(self):
        tree = parse_tree("a: 1\nb: 1.5\nc: true\nd:\n")
        assert tree == {"a": 1, "b": 1.5, "c": True, "d": None}

    @pytest.mark.unit
    def test_duplicate_keys_rejected(self):
        with pytest.raises(StructuralError, match="duplicate key"):
            parse_tree("a: 1\na: 2\n")

    @pytest.mark.unit
    def test_invalid_yaml(self):
        with pytest.raises(StructuralError):
            parse_tree("a: [1, 2\n")


class TestRenderTree:
    """Tests for render_tree()."""

    @pytest.mark.unit
    def test_insertion_order(self):
        assert render_tree({"b": 1, "a": 2}) == "b: 1\na: 2\n"

    @pytest.mark.unit
    def test_sequences_indented(self):
        assert render_tree({"a": [1, 2]}) == "a:\n  - 1\n  - 2\n"

    @pytest.mark.unit
    def test_none_renders_bare_key(self):
        assert render_tree({"Height": None, "X": 1}) == "Height:\nX: 1\n"

    @pytest.mark.unit
    def test_forced_styles(self):
        tree = {"a": Styled("x"), "b": Styled("y", "'")}
        assert render_tree(tree) == "a: \"x\"\nb: 'y'\n"

    @pytest.mark.unit
    def test_no_line_folding(self):
        text = " ".join(["word"] * 60)
        assert render_tree({"a": text}) == f"a: {text}\n"

    @pytest.mark.unit
    def test_no_aliases(self):
        shared = [1]
        assert render_tree({"a": shared, "b": shared}) == "a:\n  - 1\nb:\n  - 1\n"

    @pytest.mark.unit
    def test_unicode_kept(self):
        assert render_tree({"Text": "Grüße"}) == "Text: Grüße\n"

    @pytest.mark.unit
    def test_unrepresentable_value(self):
        with pytest.raises(StructuralError, match="YAML conversion error"):
            render_tree({"a": object()})
