"""Power Apps YAML dialect codec.

Layers, leaf first:
    escaper: formula line escaping around the YAML parser
    structural: PyYAML parse/render boundary
    lib: dialect documents, validation and control-info extraction
"""

from paconvert.dialect.escaper import LITERAL_SENTINEL, SENTINEL, escape, unescape
from paconvert.dialect.lib import (
    CONTROL_KEY,
    PROPERTIES_KEY,
    extract_control_info,
    extract_properties,
    format_control,
    parse_dialect,
    render_dialect,
    validate,
)
from paconvert.dialect.structural import QuotedText, Styled, parse_tree, render_tree

__all__ = [
    # Escaping
    "SENTINEL",
    "LITERAL_SENTINEL",
    "escape",
    "unescape",
    # Structural codec
    "QuotedText",
    "Styled",
    "parse_tree",
    "render_tree",
    # Dialect codec
    "CONTROL_KEY",
    "PROPERTIES_KEY",
    "parse_dialect",
    "render_dialect",
    "format_control",
    "extract_control_info",
    "extract_properties",
    "validate",
]
