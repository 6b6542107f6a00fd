"""Mapping configuration and the mappers that apply it.

A MappingConfiguration is an immutable snapshot of three tables:

- ``controlTypes``: classic type token -> modern type token
- ``properties``: modern type token -> (classic key -> modern key | null)
- ``defaults``: modern type token -> (modern key -> default value)

TypeMapper resolves a classic type against the first table; PropertyMapper
rewrites a property table against the other two. Both report every decision
through a ``record`` callable so the engine can keep an audit trail.

Example:
    >>> config = default_mappings()
    >>> TypeMapper(config).resolve("Classic/Button@2.2.0")
    'Button@0.0.45'
"""

import json
import random
from pathlib import Path
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from paconvert.core.errors import InvalidMappingConfigurationError
from paconvert.core.log import get_logger
from paconvert.mapping.tables import (
    COMMON_TABLE_KEY,
    CONTROL_TYPES,
    DEFAULTS,
    PROPERTIES,
)
from paconvert.model import PropertyValue, ValueKind, split_type_token

logger = get_logger(__name__)

Recorder = Callable[[str], None]
DefaultValue = bool | int | float | str | dict[str, Any]

CLASSIC_PREFIX = "Classic/"


# =============================================================================
# Configuration
# =============================================================================


class MappingConfiguration(BaseModel):
    """Validated classic to modern mapping tables.

    Field aliases match the JSON import/export format. A flat ``properties``
    object (classic key -> modern key) is read as the common table.
    """

    control_types: dict[str, str] = Field(
        ...,
        alias="controlTypes",
        description="Classic type token to modern type token",
    )
    properties: dict[str, dict[str, str | None]] = Field(
        ...,
        description="Per modern type property renames; '*' is the common table",
    )
    defaults: dict[str, dict[str, DefaultValue]] = Field(
        default_factory=dict,
        description="Per modern type default properties",
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    @field_validator("properties", mode="before")
    @classmethod
    def _flat_table_is_common(cls, value: Any) -> Any:
        if isinstance(value, dict) and all(
            item is None or isinstance(item, str) for item in value.values()
        ):
            return {COMMON_TABLE_KEY: value} if value else {}
        return value

    @field_validator("control_types")
    @classmethod
    def _no_blank_types(cls, value: dict[str, str]) -> dict[str, str]:
        blank = [
            key
            for key, target in value.items()
            if not key.strip() or not target.strip()
        ]
        if blank:
            raise ValueError(f"blank control type entries: {blank}")
        return value

    @field_validator("properties")
    @classmethod
    def _no_blank_targets(
        cls, value: dict[str, dict[str, str | None]]
    ) -> dict[str, dict[str, str | None]]:
        for type_key, table in value.items():
            for classic_key, target in table.items():
                if target is not None and not target.strip():
                    raise ValueError(
                        f"{type_key}.{classic_key}: target must be a key or null"
                    )
                if target is not None and any(not part for part in target.split(".")):
                    raise ValueError(
                        f"{type_key}.{classic_key}: malformed dotted target '{target}'"
                    )
        return value

    @field_validator("defaults")
    @classmethod
    def _defaults_are_property_values(
        cls, value: dict[str, dict[str, DefaultValue]]
    ) -> dict[str, dict[str, DefaultValue]]:
        for type_key, table in value.items():
            for key, default in table.items():
                try:
                    PropertyValue.from_python(default)
                except TypeError as exc:
                    raise ValueError(f"{type_key}.{key}: {exc}") from exc
        return value

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def from_data(cls, data: Any) -> "MappingConfiguration":
        """Validate an imported mapping object.

        Raises:
            InvalidMappingConfigurationError: If the object has the wrong shape.
        """
        if isinstance(data, cls):
            return data
        if not isinstance(data, dict):
            raise InvalidMappingConfigurationError(
                "Invalid mapping format: expected an object with "
                "'controlTypes' and 'properties'"
            )
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            details = [
                f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
                for error in exc.errors()
            ]
            raise InvalidMappingConfigurationError(
                f"Invalid mapping format: {'; '.join(details)}", details
            ) from exc

    @classmethod
    def from_json(cls, text: str) -> "MappingConfiguration":
        """Validate mapping JSON text.

        Raises:
            InvalidMappingConfigurationError: If the text is not JSON or has
                the wrong shape.
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise InvalidMappingConfigurationError(
                f"Mapping configuration is not valid JSON: {exc}"
            ) from exc
        return cls.from_data(data)

    def to_data(self) -> dict[str, Any]:
        """JSON-ready export using the import field names."""
        return self.model_dump(by_alias=True)

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_data(), indent=indent)

    def merged(self, other: "MappingConfiguration") -> "MappingConfiguration":
        """New configuration with ``other`` layered over this one.

        Control types are merged per key; property and default tables are
        merged per modern type, then per key.
        """
        properties = {key: dict(table) for key, table in self.properties.items()}
        for key, table in other.properties.items():
            properties.setdefault(key, {}).update(table)

        defaults = {key: dict(table) for key, table in self.defaults.items()}
        for key, table in other.defaults.items():
            defaults.setdefault(key, {}).update(table)

        return type(self).model_validate(
            {
                "controlTypes": {**self.control_types, **other.control_types},
                "properties": properties,
                "defaults": defaults,
            }
        )

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def property_table(self, modern_type: str) -> dict[str, str | None]:
        """Property table for a modern type, else the common table."""
        table = _typed_lookup(self.properties, modern_type)
        if table is None:
            return self.properties.get(COMMON_TABLE_KEY, {})
        return table

    def defaults_for(self, modern_type: str) -> dict[str, DefaultValue]:
        return _typed_lookup(self.defaults, modern_type) or {}


def _typed_lookup(tables: dict[str, Any], modern_type: str) -> Any:
    """Exact versioned key first, then the bare type key."""
    if modern_type in tables:
        return tables[modern_type]
    bare, _ = split_type_token(modern_type)
    return tables.get(bare)


def default_mappings() -> MappingConfiguration:
    """The built-in mapping tables."""
    return MappingConfiguration.model_validate(
        {
            "controlTypes": CONTROL_TYPES,
            "properties": PROPERTIES,
            "defaults": DEFAULTS,
        }
    )


def load_mappings(path: Path | str, merge: bool = True) -> MappingConfiguration:
    """Load a mapping JSON file.

    Args:
        path: JSON file in the import/export format.
        merge: Layer the file over the built-in tables instead of replacing
            them.

    Raises:
        InvalidMappingConfigurationError: If the file cannot be read or has
            the wrong shape.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise InvalidMappingConfigurationError(
            f"Cannot read mapping file {path}: {exc}"
        ) from exc

    config = MappingConfiguration.from_json(text)
    logger.info(f"Loaded mappings from {path} (merge={merge})")
    return default_mappings().merged(config) if merge else config


# =============================================================================
# Type Mapping
# =============================================================================


class TypeMapper:
    """Resolves classic control type tokens to modern ones.

    Lookup order: exact token, bare type, token ignoring case, bare type
    ignoring case.
    """

    def __init__(self, configuration: MappingConfiguration):
        self._table = configuration.control_types
        self._folded: dict[str, str] = {}
        for key, target in self._table.items():
            self._folded.setdefault(key.casefold(), target)

    def resolve(self, token: str, record: Recorder | None = None) -> str | None:
        """Resolve a classic type token.

        Args:
            token: Classic type, bare or versioned, possibly quoted.
            record: Receives one message describing the match.

        Returns:
            Modern type token, or None when nothing matches.
        """
        record = record or logger.debug
        normalized = token.strip().strip("\"'").strip()

        target = self._table.get(normalized)
        if target is not None:
            record(f"Control type conversion: {normalized} -> {target}")
            return target

        bare, _ = split_type_token(normalized)
        for candidate, how in (
            (self._table.get(bare), "using base type"),
            (self._folded.get(normalized.casefold()), "ignoring case"),
            (self._folded.get(bare.casefold()), "using base type, ignoring case"),
        ):
            if candidate is not None:
                record(f"Control type conversion ({how}): {normalized} -> {candidate}")
                return candidate

        return None


# =============================================================================
# Property Mapping
# =============================================================================


class PropertyMapper:
    """Rewrites classic property tables into modern ones."""

    def __init__(self, configuration: MappingConfiguration):
        self.configuration = configuration

    def map_properties(
        self,
        classic_properties: dict[str, PropertyValue | None],
        modern_type: str,
        record: Recorder | None = None,
    ) -> dict[str, PropertyValue]:
        """Map classic properties onto a modern type.

        Keys keep input order. Keys with no value are skipped, null-mapped
        keys are dropped, dotted targets write into nested objects and
        unknown keys pass through. Defaults fill keys still absent.

        Args:
            classic_properties: Parsed classic property table.
            modern_type: Resolved modern type token.
            record: Receives one message per decision.

        Returns:
            New modern property table; the input is not modified.
        """
        record = record or logger.debug
        table = self.configuration.property_table(modern_type)
        result: dict[str, PropertyValue] = {}

        for key, value in classic_properties.items():
            if value is None:
                record(f"Property {key} skipped - no value")
                continue

            if key not in table:
                _record_override(result, key, key, record)
                result[key] = value
                record(f"Property {key} kept unmapped")
                continue

            target = table[key]
            if target is None:
                record(f"Property {key} dropped - no modern equivalent")
            elif "." in target:
                _record_override(result, key, target, record)
                if _assign_path(result, target, value):
                    record(f"Property conversion: {key} -> {target}")
                else:
                    head = target.split(".", 1)[0]
                    record(
                        f"Property {key} dropped - {head} already holds a "
                        "non-object value"
                    )
            else:
                _record_override(result, key, target, record)
                result[target] = value
                record(f"Property conversion: {key} -> {target}")

        for key, default in self.configuration.defaults_for(modern_type).items():
            if key in result:
                continue
            value = PropertyValue.from_python(default)
            result[key] = value
            record(f"Added default property: {key} = {value.as_text()}")

        return result


def _lookup_path(
    properties: dict[str, PropertyValue | None], path: str
) -> PropertyValue | None:
    """Value at a dotted path, or None when any step is missing."""
    head, _, rest = path.partition(".")
    current = properties.get(head)
    if not rest or current is None:
        return current
    if not current.is_object:
        return None
    return _lookup_path(current.value, rest)


def _record_override(
    properties: dict[str, PropertyValue], key: str, target: str, record: Recorder
) -> None:
    """Log when ``key`` is about to replace a value already at ``target``."""
    if _lookup_path(properties, target) is not None:
        record(f"Property {key} overrides earlier value of {target}")


def _assign_path(
    properties: dict[str, PropertyValue], path: str, value: PropertyValue
) -> bool:
    """Write value at a dotted path, creating nested objects as needed.

    Returns False when an intermediate key holds a non-object value.
    """
    head, _, rest = path.partition(".")
    if not rest:
        properties[head] = value
        return True

    current = properties.get(head)
    if current is not None and not current.is_object:
        return False

    entries = dict(current.value) if current is not None else {}
    if not _assign_path(entries, rest, value):
        return False
    properties[head] = PropertyValue(ValueKind.OBJECT, entries)
    return True


# =============================================================================
# Naming
# =============================================================================


def generate_control_name(
    type_token: str,
    name: str | None = None,
    rng: random.Random | None = None,
) -> str:
    """Suggest a control name for a type.

    Returns ``name`` unchanged when given; otherwise the bare type without
    its ``Classic/`` prefix plus a random number. Not deterministic unless a
    seeded ``rng`` is passed.

    Example:
        >>> generate_control_name("Classic/Button@2.2.0", name="SaveButton")
        'SaveButton'
    """
    if name:
        return name

    bare, _ = split_type_token(type_token)
    if bare.startswith(CLASSIC_PREFIX):
        bare = bare[len(CLASSIC_PREFIX) :]
    bare = bare.rsplit("/", 1)[-1]
    rng = rng or random.Random()
    return f"{bare}{rng.randint(1, 9999)}"


__all__ = [
    "COMMON_TABLE_KEY",
    "MappingConfiguration",
    "default_mappings",
    "load_mappings",
    "TypeMapper",
    "PropertyMapper",
    "generate_control_name",
]
