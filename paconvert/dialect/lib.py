"""Dialect codec for Power Apps control YAML.

Composes the formula escaper and the PyYAML boundary into
``parse_dialect``/``render_dialect``, and provides the cheap checks hosts run
before a full parse: ``validate`` and ``extract_control_info``.

Example:
    >>> document = parse_dialect(
    ...     "- Button1:\\n"
    ...     "    Control: Classic/Button@2.2.0\\n"
    ...     "    Properties:\\n"
    ...     "      OnSelect: =Navigate(Home)\\n"
    ... )
    >>> document.control.properties["OnSelect"].value
    'Navigate(Home)'
    >>> "OnSelect: =Navigate(Home)" in render_dialect(document)
    True
"""

import re
from typing import Any

from paconvert.core.errors import (
    DialectParseError,
    StructuralError,
    UnsupportedInputError,
)
from paconvert.core.log import get_logger
from paconvert.dialect.escaper import LITERAL_SENTINEL, SENTINEL, escape, unescape
from paconvert.dialect.structural import QuotedText, Styled, parse_tree, render_tree
from paconvert.model import (
    FORMULA_PREFIX,
    ControlDocument,
    ControlInfo,
    ControlNode,
    PropertyValue,
    ValueKind,
)

logger = get_logger(__name__)

CONTROL_KEY = "Control"
PROPERTIES_KEY = "Properties"

_CONTROL_DECLARATION = re.compile(
    r"^[ \t]*(?:-[ \t]+)?(?P<name>[^\s:#-][^:\n]*?)[ \t]*:[ \t]*\n"
    r"\s*Control:[ \t]*[\"']?(?P<type>[^@\s\"']+)(?:@(?P<version>[\d.]+))?"
    r"[\"']?[ \t]*$",
    re.MULTILINE,
)
_PROPERTIES_LINE = re.compile(r"^[ \t]*Properties:[ \t]*$")
_NUMBER = re.compile(r"^-?\d+(?:\.\d+)?$")


# =============================================================================
# Parsing
# =============================================================================


def parse_dialect(text: str) -> ControlDocument:
    """Parse dialect text into a ControlDocument.

    Args:
        text: Dialect document, a one-entry mapping (optionally written as a
            sequence item) from control name to its definition.

    Returns:
        ControlDocument with every property value classified.

    Raises:
        DialectParseError: If the escaped text is not valid YAML.
        UnsupportedInputError: If the YAML is not a control document.
    """
    try:
        tree = parse_tree(escape(text))
    except StructuralError as exc:
        raise DialectParseError(f"YAML parsing error: {exc}", cause=str(exc)) from exc

    return _build_document(tree)


def _build_document(tree: Any) -> ControlDocument:
    """Turn a parsed tree into a ControlDocument."""
    if isinstance(tree, list):
        entries: list[tuple[Any, Any]] = []
        for item in tree:
            if not isinstance(item, dict) or len(item) != 1:
                raise UnsupportedInputError(
                    "Each sequence item must be a single control definition"
                )
            entries.extend(item.items())
        as_sequence = True
    elif isinstance(tree, dict):
        entries = list(tree.items())
        as_sequence = False
    else:
        raise UnsupportedInputError("No control definition found")

    if not entries:
        raise UnsupportedInputError("No control definition found")

    controls: dict[str, ControlNode] = {}
    for name, body in entries:
        name = str(name)
        if name in controls:
            raise UnsupportedInputError(f"Duplicate control name: {name}")
        controls[name] = _build_node(name, body)

    return ControlDocument(controls=controls, as_sequence=as_sequence)


def _build_node(name: str, body: Any) -> ControlNode:
    if not isinstance(body, dict) or CONTROL_KEY not in body:
        raise UnsupportedInputError(f"Control '{name}' has no Control declaration")

    type_tag = body[CONTROL_KEY]
    if not isinstance(type_tag, str) or not type_tag.strip():
        raise UnsupportedInputError(f"Control '{name}' has an invalid Control type")

    raw_properties = body.get(PROPERTIES_KEY)
    if raw_properties is None:
        raw_properties = {}
    if not isinstance(raw_properties, dict):
        raise UnsupportedInputError(f"Properties of '{name}' must be a mapping")

    properties = {
        str(key): _classify(value, f"{name}.{key}")
        for key, value in raw_properties.items()
    }
    extras = {
        str(key): _normalize_extra(value)
        for key, value in body.items()
        if key not in (CONTROL_KEY, PROPERTIES_KEY)
    }

    return ControlNode(
        type_tag=_unwrap_tag(type_tag),
        properties=properties,
        extras=extras,
        key_order=[str(key) for key in body],
    )


def _unwrap_tag(tag: str) -> str:
    """Strip stray quoting from a ``Type@version`` control reference."""
    return tag.strip().strip("\"'").strip()


def _formula_text(value: str) -> str | None:
    """Formula expression held by a parsed string, if it is one."""
    if value.startswith(LITERAL_SENTINEL):
        return None
    if value.startswith(SENTINEL):
        return value[len(SENTINEL) :]
    if isinstance(value, QuotedText):
        return None
    stripped = value.lstrip()
    if stripped.startswith(FORMULA_PREFIX):
        return stripped[len(FORMULA_PREFIX) :]
    return None


def _string_text(value: str) -> str:
    """Text of a parsed non-formula string."""
    if value.startswith(LITERAL_SENTINEL):
        return value[len(SENTINEL) :]
    return str(value)


def _classify(value: Any, path: str) -> PropertyValue | None:
    """Classify a parsed leaf or nested mapping into a PropertyValue."""
    if value is None:
        return None
    if isinstance(value, bool):
        return PropertyValue(ValueKind.BOOLEAN, value)
    if isinstance(value, (int, float)):
        return PropertyValue(ValueKind.NUMBER, value)
    if isinstance(value, str):
        expression = _formula_text(value)
        if expression is not None:
            return PropertyValue.formula(expression)
        return PropertyValue.string(_string_text(value))
    if isinstance(value, dict):
        return PropertyValue(
            ValueKind.OBJECT,
            {str(k): _classify(v, f"{path}.{k}") for k, v in value.items()},
        )
    raise UnsupportedInputError(
        f"Property '{path}' holds a {type(value).__name__}, "
        "which is not a supported property value"
    )


def _normalize_extra(value: Any) -> Any:
    """Restore formulas inside non-property node keys, keeping structure."""
    if isinstance(value, dict):
        return {str(k): _normalize_extra(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_normalize_extra(item) for item in value]
    if isinstance(value, str):
        expression = _formula_text(value)
        if expression is not None:
            return PropertyValue.formula(expression)
        return _string_text(value)
    return value


# =============================================================================
# Rendering
# =============================================================================


def render_dialect(document: ControlDocument) -> str:
    """Render a ControlDocument as dialect text.

    Property order follows the document; formulas come out as bare
    ``key: =expr`` lines and control tags unquoted.

    Raises:
        StructuralError: If a value cannot be represented in YAML.
    """
    if document.as_sequence:
        tree: Any = [{name: _node_tree(node)} for name, node in document]
    else:
        tree = {name: _node_tree(node) for name, node in document}

    return unescape(render_tree(tree))


def _node_tree(node: ControlNode) -> dict[str, Any]:
    tree: dict[str, Any] = {}
    for key in node.node_keys():
        if key == CONTROL_KEY:
            tag = node.type_tag
            tree[key] = Styled(tag) if "@" in tag else tag
        elif key == PROPERTIES_KEY:
            tree[key] = {
                name: _value_tree(value) for name, value in node.properties.items()
            }
        else:
            tree[key] = _extra_tree(node.extras[key])
    return tree


def _string_tree(text: str) -> str:
    """Emit strings so they never reparse as formulas or split across lines."""
    if text.startswith(SENTINEL):
        return Styled(SENTINEL + text, '"')
    if "\n" in text:
        return Styled(text, '"')
    if text.lstrip().startswith(FORMULA_PREFIX):
        return Styled(text, "'")
    return text


def _value_tree(value: PropertyValue | None) -> Any:
    if value is None:
        return None
    if value.kind == ValueKind.FORMULA:
        return Styled(SENTINEL + value.value)
    if value.kind == ValueKind.STRING:
        return _string_tree(value.value)
    if value.kind == ValueKind.OBJECT:
        return {key: _value_tree(item) for key, item in value.value.items()}
    return value.value


def _extra_tree(value: Any) -> Any:
    if isinstance(value, PropertyValue):
        return _value_tree(value)
    if isinstance(value, dict):
        return {key: _extra_tree(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_extra_tree(item) for item in value]
    if isinstance(value, str):
        return _string_tree(value)
    return value


def format_control(
    name: str,
    type_tag: str,
    properties: dict[str, Any],
    as_sequence: bool = True,
) -> str:
    """Render a one-control document from plain Python values.

    Strings starting with ``=`` become formulas.

    Example:
        >>> print(format_control("Label1", "Label@2.5.1", {"Text": "=\\"Hi\\""}))
        - Label1:
            Control: Label@2.5.1
            Properties:
              Text: ="Hi"
        <BLANKLINE>
    """
    node = ControlNode(
        type_tag=type_tag,
        properties={
            key: None if value is None else PropertyValue.from_python(value)
            for key, value in properties.items()
        },
        key_order=[CONTROL_KEY, PROPERTIES_KEY],
    )
    return render_dialect(ControlDocument.single(name, node, as_sequence))


# =============================================================================
# Fast-path checks
# =============================================================================


def extract_control_info(text: str) -> ControlInfo | None:
    """Find the first ``- <name>:`` / ``Control: <type>@<version>`` pair.

    This is a textual scan independent of the full parse.

    Returns:
        ControlInfo, or None if no control declaration is present.
    """
    normalized = text.replace("\r\n", "\n")
    match = _CONTROL_DECLARATION.search(normalized)
    if match is None:
        return None

    name = match.group("name").strip().strip("\"'")
    bare_type = match.group("type")
    version = match.group("version") or None
    full_type = f"{bare_type}@{version}" if version else bare_type

    return ControlInfo(
        name=name,
        bare_type=bare_type,
        version=version,
        full_type=full_type,
    )


def _indent_of(line: str) -> int:
    return len(line) - len(line.lstrip())


def _scan_value(value: str) -> PropertyValue | None:
    """Classify one ``key: value`` text without the YAML parser."""
    if value.startswith(FORMULA_PREFIX):
        return PropertyValue.formula(value[len(FORMULA_PREFIX) :])
    if value in ("true", "false"):
        return PropertyValue(ValueKind.BOOLEAN, value == "true")
    if _NUMBER.match(value):
        number = float(value) if "." in value else int(value)
        return PropertyValue(ValueKind.NUMBER, number)
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return PropertyValue.string(value[1:-1])
    if value[0] in "|>":
        return None
    return PropertyValue.string(value)


def extract_properties(text: str) -> dict[str, PropertyValue] | None:
    """Read the first ``Properties:`` block line by line.

    A textual scan like extract_control_info: only direct ``key: value``
    lines are read; nested objects, block scalars and keys without a value
    are skipped. Use parse_dialect for exact results.

    Returns:
        Properties in source order, or None if no properties section is
        present.
    """
    lines = text.replace("\r\n", "\n").split("\n")
    start = next(
        (index for index, line in enumerate(lines) if _PROPERTIES_LINE.match(line)),
        None,
    )
    if start is None:
        return None

    base = _indent_of(lines[start])
    level: int | None = None
    properties: dict[str, PropertyValue] = {}

    for line in lines[start + 1 :]:
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        indent = _indent_of(line)
        if indent <= base:
            break
        if level is None:
            level = indent
        if indent != level:
            continue

        key, sep, value = stripped.partition(":")
        value = value.strip()
        if not sep or not value:
            continue
        scanned = _scan_value(value)
        if scanned is not None:
            properties[key.strip()] = scanned

    return properties


def validate(text: str) -> bool:
    """Check whether text looks like a dialect document.

    True when the text declares both a control and a properties section,
    or when it parses as YAML after escaping. Never raises.
    """
    if f"{CONTROL_KEY}:" in text and f"{PROPERTIES_KEY}:" in text:
        return True

    try:
        parse_tree(escape(text))
    except StructuralError as exc:
        logger.warning(f"YAML validation failed: {exc}")
        return False
    return True


__all__ = [
    "CONTROL_KEY",
    "PROPERTIES_KEY",
    "parse_dialect",
    "render_dialect",
    "format_control",
    "extract_properties",
    "extract_control_info",
    "validate",
]
