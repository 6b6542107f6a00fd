"""In-memory model of dialect control documents.

A ControlDocument maps control names to ControlNodes. Each node carries a
type tag (``Classic/Button@2.2.0``) and an ordered property table whose
values are PropertyValues: a tagged union that keeps formula expressions
apart from literal scalars so no value changes category on a round trip.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator


class ValueKind(str, Enum):
    """Categories a property value can belong to."""

    FORMULA = "formula"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    OBJECT = "object"


FORMULA_PREFIX = "="


@dataclass(frozen=True)
class PropertyValue:
    """A single classified property value.

    Attributes:
        kind: Category of the value.
        value: Payload. Formula text without the leading ``=`` for
            FORMULA, the literal for BOOLEAN/NUMBER/STRING and a
            ``dict[str, PropertyValue]`` for OBJECT.
    """

    kind: ValueKind
    value: Any

    @classmethod
    def formula(cls, expression: str) -> "PropertyValue":
        """Build a formula from the expression text after ``=``."""
        return cls(ValueKind.FORMULA, expression)

    @classmethod
    def string(cls, text: str) -> "PropertyValue":
        """Build a string literal, even one starting with ``=``."""
        return cls(ValueKind.STRING, text)

    @classmethod
    def obj(cls, entries: dict[str, Any]) -> "PropertyValue":
        """Build a nested object, classifying each entry."""
        return cls(
            ValueKind.OBJECT,
            {
                key: None if value is None else cls.from_python(value)
                for key, value in entries.items()
            },
        )

    @classmethod
    def from_python(cls, raw: Any) -> "PropertyValue":
        """Classify a plain Python value.

        Strings whose trimmed text starts with ``=`` become formulas, which
        is how mapping defaults express computed values.

        Raises:
            TypeError: If the value has no PropertyValue equivalent.
        """
        if isinstance(raw, PropertyValue):
            return raw
        # bool before int: bool is an int subclass
        if isinstance(raw, bool):
            return cls(ValueKind.BOOLEAN, raw)
        if isinstance(raw, (int, float)):
            return cls(ValueKind.NUMBER, raw)
        if isinstance(raw, str):
            stripped = raw.lstrip()
            if stripped.startswith(FORMULA_PREFIX):
                return cls.formula(stripped[len(FORMULA_PREFIX) :])
            return cls.string(raw)
        if isinstance(raw, dict):
            return cls.obj(raw)
        raise TypeError(f"Unsupported property value type: {type(raw).__name__}")

    @property
    def is_formula(self) -> bool:
        return self.kind == ValueKind.FORMULA

    @property
    def is_object(self) -> bool:
        return self.kind == ValueKind.OBJECT

    def to_python(self) -> Any:
        """Convert back to plain Python; formulas regain their ``=``."""
        if self.kind == ValueKind.FORMULA:
            return FORMULA_PREFIX + self.value
        if self.kind == ValueKind.OBJECT:
            return {
                key: None if item is None else item.to_python()
                for key, item in self.value.items()
            }
        return self.value

    def as_text(self) -> str:
        """Short human-readable form used in conversion logs."""
        if self.kind == ValueKind.OBJECT:
            inner = ", ".join(
                f"{k}: {v.as_text() if v is not None else ''}"
                for k, v in self.value.items()
            )
            return "{" + inner + "}"
        if self.kind == ValueKind.BOOLEAN:
            return "true" if self.value else "false"
        return str(self.to_python())


def split_type_token(token: str) -> tuple[str, str | None]:
    """Split ``Type@1.2.3`` into ``("Type", "1.2.3")``.

    Bare tokens return ``(token, None)``.
    """
    token = token.strip()
    bare, sep, version = token.rpartition("@")
    if not sep or not bare:
        return token, None
    return bare, version or None


def join_type_token(bare: str, version: str | None) -> str:
    """Inverse of split_type_token."""
    return f"{bare}@{version}" if version else bare


@dataclass
class ControlNode:
    """One control definition.

    Attributes:
        type_tag: Control type, bare or versioned.
        properties: Ordered property table; None marks a key written
            without a value.
        extras: Other node keys (``Variant``, ``Children``...) kept verbatim.
        key_order: Original order of the node's keys, so extras render
            back in place.
    """

    type_tag: str
    properties: dict[str, PropertyValue | None] = field(default_factory=dict)
    extras: dict[str, Any] = field(default_factory=dict)
    key_order: list[str] = field(default_factory=list)

    @property
    def bare_type(self) -> str:
        return split_type_token(self.type_tag)[0]

    @property
    def version(self) -> str | None:
        return split_type_token(self.type_tag)[1]

    def node_keys(self) -> list[str]:
        """Node keys in render order."""
        present = ["Control", *self.extras]
        if self.properties or "Properties" in self.key_order:
            present.append("Properties")

        ordered = [key for key in self.key_order if key in present]
        ordered.extend(key for key in present if key not in ordered)
        return ordered


@dataclass
class ControlDocument:
    """Ordered mapping of control names to nodes.

    Attributes:
        controls: Control name to node.
        as_sequence: True when the top level was written as a sequence
            item (``- Button1:``) rather than a plain mapping.
    """

    controls: dict[str, ControlNode] = field(default_factory=dict)
    as_sequence: bool = True

    def __iter__(self) -> Iterator[tuple[str, ControlNode]]:
        return iter(self.controls.items())

    def __len__(self) -> int:
        return len(self.controls)

    @property
    def name(self) -> str:
        """Name of the first control."""
        return next(iter(self.controls))

    @property
    def control(self) -> ControlNode:
        """The first control node."""
        return self.controls[self.name]

    @classmethod
    def single(
        cls, name: str, node: ControlNode, as_sequence: bool = True
    ) -> "ControlDocument":
        """Build a one-control document."""
        return cls(controls={name: node}, as_sequence=as_sequence)


@dataclass(frozen=True)
class ControlInfo:
    """Control identity found by the fast-path scan.

    Attributes:
        name: Control name (``Button1``).
        bare_type: Type without version (``Classic/Button``).
        version: Version suffix or None.
        full_type: Type as written (``Classic/Button@2.2.0``).
    """

    name: str
    bare_type: str
    version: str | None
    full_type: str


__all__ = [
    "ValueKind",
    "PropertyValue",
    "ControlNode",
    "ControlDocument",
    "ControlInfo",
    "FORMULA_PREFIX",
    "split_type_token",
    "join_type_token",
]
