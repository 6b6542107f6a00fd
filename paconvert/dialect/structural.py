"""Thin boundary around PyYAML.

``parse_tree`` turns escaped dialect text into plain Python trees and
``render_tree`` turns trees back into text with the options the dialect
needs: two-space indentation, indented sequences, no line folding, no
anchors and insertion order preserved.
"""

from collections.abc import Hashable

import yaml
from yaml.constructor import ConstructorError

from paconvert.core.errors import StructuralError

_DROPPED_RESOLVERS = frozenset(
    {"tag:yaml.org,2002:timestamp", "tag:yaml.org,2002:value"}
)


class QuotedText(str):
    """A string that was written as a quoted scalar."""

    __slots__ = ()


class Styled(str):
    """A string emitted with a forced scalar style (``'"'`` or ``"'"``)."""

    def __new__(cls, value: str, style: str = '"'):
        obj = super().__new__(cls, value)
        obj.style = style
        return obj


class _TreeLoader(yaml.SafeLoader):
    """SafeLoader that keeps quoting information and leaves dates as text."""


_TreeLoader.yaml_implicit_resolvers = {
    first: [
        (tag, regexp) for tag, regexp in resolvers if tag not in _DROPPED_RESOLVERS
    ]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def _construct_str(loader: _TreeLoader, node: yaml.ScalarNode) -> str:
    value = loader.construct_scalar(node)
    if node.style in ("'", '"'):
        return QuotedText(value)
    return value


def _construct_mapping(loader: _TreeLoader, node: yaml.MappingNode) -> dict:
    loader.flatten_mapping(node)
    mapping: dict = {}
    for key_node, value_node in node.value:
        key = loader.construct_object(key_node, deep=True)
        if not isinstance(key, Hashable):
            raise ConstructorError(
                "while constructing a mapping",
                node.start_mark,
                "found unhashable key",
                key_node.start_mark,
            )
        if key in mapping:
            raise ConstructorError(
                "while constructing a mapping",
                node.start_mark,
                f"found duplicate key {key!r}",
                key_node.start_mark,
            )
        mapping[key] = loader.construct_object(value_node, deep=True)
    return mapping


_TreeLoader.add_constructor("tag:yaml.org,2002:str", _construct_str)
_TreeLoader.add_constructor("tag:yaml.org,2002:map", _construct_mapping)


class _TreeDumper(yaml.SafeDumper):
    """SafeDumper with indented sequences and no aliases."""

    def increase_indent(self, flow=False, indentless=False):
        return super().increase_indent(flow, False)

    def ignore_aliases(self, data):
        return True


def _represent_styled(dumper: _TreeDumper, data: Styled) -> yaml.ScalarNode:
    return dumper.represent_scalar("tag:yaml.org,2002:str", str(data), style=data.style)


def _represent_quoted(dumper: _TreeDumper, data: QuotedText) -> yaml.ScalarNode:
    return dumper.represent_str(str(data))


def _represent_none(dumper: _TreeDumper, data: None) -> yaml.ScalarNode:
    # keys without a value render as a bare "key:"
    return dumper.represent_scalar("tag:yaml.org,2002:null", "")


_TreeDumper.add_representer(Styled, _represent_styled)
_TreeDumper.add_representer(QuotedText, _represent_quoted)
_TreeDumper.add_representer(type(None), _represent_none)


def parse_tree(text: str):
    """Parse YAML text into mappings, lists and scalars.

    Raises:
        StructuralError: If the text is not a single valid YAML document.
    """
    try:
        return yaml.load(text, Loader=_TreeLoader)
    except yaml.YAMLError as exc:
        raise StructuralError(str(exc)) from exc


def render_tree(tree) -> str:
    """Serialize a tree to YAML text.

    Raises:
        StructuralError: If the tree holds values YAML cannot represent.
    """
    try:
        return yaml.dump(
            tree,
            Dumper=_TreeDumper,
            indent=2,
            width=float("inf"),
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )
    except yaml.YAMLError as exc:
        raise StructuralError(f"YAML conversion error: {exc}") from exc


__all__ = ["QuotedText", "Styled", "parse_tree", "render_tree"]
