"""Formula escaping around the generic YAML layer.

Dialect documents write formulas as bare ``key: =expr`` lines, which a YAML
parser would read as plain scalars and, for many expressions, reject
outright. ``escape`` rewrites those lines into double-quoted scalars tagged
with SENTINEL before parsing; ``unescape`` turns the emitter's quoted
sentinel scalars back into ``key: =expr`` after serialization.

SENTINEL is the ASCII record separator. YAML streams may not contain it
raw; a quoted escape such as ``"\\x1e..."`` can, so such user strings are
marked with LITERAL_SENTINEL and keep their text.
"""

import json
import re

import yaml

SENTINEL = "\x1e"
# quoted text that itself starts with SENTINEL is marked with a second one
LITERAL_SENTINEL = SENTINEL * 2

# key line: optional sequence dash, a key without colons, then ": value" or ":"
_KEY_LINE = re.compile(
    r"^(?P<head>(?P<indent>[ \t]*(?:-[ \t]+)?)"
    r"(?P<key>[^\s#'\"\-][^:\n]*?)):(?:[ \t]+(?P<value>.*))?$"
)
_QUOTED_LINE = re.compile(
    r"^(?P<head>(?P<indent>[ \t]*(?:-[ \t]+)?)"
    r"(?P<key>[^\s#'\"\-][^:\n]*?)):[ \t]+(?P<quoted>\"(?:[^\"\\]|\\.)*\")[ \t]*$"
)
_BLOCK_INDICATOR = re.compile(r"^[|>][0-9+-]*(?:[ \t]+#.*)?$")
_CONTROL_TAG = re.compile(r"^[^@\s\"']+@[\d.]+$")
_YAML11_BOOLEAN = re.compile(r"^(?:yes|no|on|off|true|false)$", re.IGNORECASE)
_SPECIAL_CHARS = frozenset(":{}[]|>*&!%,")
_RESERVED_START = ("@", "`")
_EMPTY_COLLECTIONS = ("{}", "[]")


def _quote(text: str) -> str:
    """Render text as a YAML double-quoted scalar."""
    return json.dumps(text, ensure_ascii=False)


def _needs_quoting(key: str, value: str) -> bool:
    """Whether a plain value would be reinterpreted by the YAML parser."""
    if value.startswith(("'", '"')) or value in _EMPTY_COLLECTIONS:
        return False
    if key == "Control" and _CONTROL_TAG.match(value):
        return True
    if _YAML11_BOOLEAN.match(value) and value not in ("true", "false"):
        return True
    if value.startswith(_RESERVED_START):
        return True
    return any(ch in _SPECIAL_CHARS for ch in value)


def escape(raw_text: str) -> str:
    """Make dialect text safe for the generic YAML parser.

    Args:
        raw_text: Dialect document text.

    Returns:
        Text where formula lines are sentinel-tagged quoted scalars and
        values the parser would reinterpret are quoted. Lines inside
        block scalars are left alone.
    """
    lines = raw_text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    result: list[str] = []
    block_indent: int | None = None

    for line in lines:
        if block_indent is not None:
            stripped = line.strip()
            indent = len(line) - len(line.lstrip(" "))
            if not stripped or indent > block_indent:
                result.append(line)
                continue
            block_indent = None

        match = _KEY_LINE.match(line)
        if match is None or match.group("value") is None:
            result.append(line)
            continue

        head = match.group("head")
        key = match.group("key").strip()
        value = match.group("value")

        if value.startswith("="):
            result.append(f"{head}: {_quote(SENTINEL + value[1:])}")
            continue

        value = value.rstrip()
        literal = _decode_quoted(value) if value.startswith('"') else None
        if literal is not None and literal.startswith(SENTINEL):
            result.append(f"{head}: {_quote(SENTINEL + literal)}")
        elif not value or value.startswith("#"):
            result.append(line)
        elif _BLOCK_INDICATOR.match(value):
            block_indent = len(match.group("indent"))
            result.append(line)
        elif _needs_quoting(key, value):
            result.append(f"{head}: {_quote(value)}")
        else:
            result.append(line)

    return "\n".join(result)


def _decode_quoted(quoted: str) -> str | None:
    """Decode an emitted double-quoted scalar, or None if it is not one."""
    try:
        decoded = yaml.safe_load(quoted)
    except yaml.YAMLError:
        return None
    return decoded if isinstance(decoded, str) else None


def _block_formula(indent: str, head: str, formula: str) -> list[str]:
    """Lay a multi-line formula out as a literal block scalar."""
    chomp = "+" if formula.endswith("\n") else "-"
    body = formula.split("\n")
    if chomp == "+":
        body = body[:-1]
    pad = " " * (len(indent) + 2)
    return [f"{head}: |{chomp}"] + [f"{pad}{part}" if part else "" for part in body]


def unescape(intermediate_text: str) -> str:
    """Restore dialect syntax in emitter output.

    Sentinel-tagged scalars become ``key: =expr`` again (multi-line
    formulas become literal blocks) and quoted ``Control: Type@1.2.3`` tags
    lose their quotes. LITERAL_SENTINEL strings drop their extra mark.
    Everything else passes through.
    """
    result: list[str] = []

    for line in intermediate_text.split("\n"):
        match = _QUOTED_LINE.match(line)
        decoded = _decode_quoted(match.group("quoted")) if match else None
        if decoded is None:
            result.append(line)
            continue

        head = match.group("head")
        if decoded.startswith(LITERAL_SENTINEL):
            result.append(f"{head}: {_quote(decoded[len(SENTINEL) :])}")
        elif decoded.startswith(SENTINEL):
            formula = "=" + decoded[len(SENTINEL) :]
            if "\n" in formula:
                result.extend(_block_formula(match.group("indent"), head, formula))
            else:
                result.append(f"{head}: {formula}")
        elif match.group("key") == "Control" and _CONTROL_TAG.match(decoded):
            result.append(f"{head}: {decoded}")
        else:
            result.append(line)

    return "\n".join(result)


__all__ = ["SENTINEL", "LITERAL_SENTINEL", "escape", "unescape"]
