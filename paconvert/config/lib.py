"""Environment configuration for paconvert.

Every setting is an EnvVar member carrying its name, default and type.
Resolution order is override > environment > default, so command-line
flags pass their value as the override.

Example:
    >>> from paconvert.config import EnvVar, get_environment
    >>>
    >>> level = get_environment(EnvVar.PACONVERT_LOG_LEVEL)  # "WARNING"
    >>> merge = get_environment(EnvVar.PACONVERT_MERGE_MAPPINGS)  # True
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, overload

from paconvert.mapping import MappingConfiguration, default_mappings, load_mappings

# =============================================================================
# Environment Variable Configuration
# =============================================================================


@dataclass(frozen=True)
class EnvConfig:
    """Metadata for an environment variable.

    Attributes:
        name: Environment variable name (e.g., "PACONVERT_LOG_LEVEL").
        default: Default value if not set in environment.
        var_type: Python type for value conversion (str, bool, Path).
        description: Human-readable description.
        category: Grouping category for documentation.
    """

    name: str
    default: Any
    var_type: type
    description: str = ""
    category: str = "general"


class EnvVar(Enum):
    """All environment variables used by paconvert.

    Categories:
        - logging: Log level and conversion log formatting
        - mappings: External mapping tables
    """

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------
    PACONVERT_LOG_LEVEL = EnvConfig(
        name="PACONVERT_LOG_LEVEL",
        default="WARNING",
        var_type=str,
        description="Level for the paconvert logger (DEBUG, INFO, WARNING, ...)",
        category="logging",
    )
    PACONVERT_LOG_TIMESTAMPS = EnvConfig(
        name="PACONVERT_LOG_TIMESTAMPS",
        default=True,
        var_type=bool,
        description="Prefix printed conversion log entries with [HH:MM:SS]",
        category="logging",
    )

    # -------------------------------------------------------------------------
    # Mappings
    # -------------------------------------------------------------------------
    PACONVERT_MAPPINGS_FILE = EnvConfig(
        name="PACONVERT_MAPPINGS_FILE",
        default=None,
        var_type=Path,
        description="JSON mapping file loaded instead of the built-in tables",
        category="mappings",
    )
    PACONVERT_MERGE_MAPPINGS = EnvConfig(
        name="PACONVERT_MERGE_MAPPINGS",
        default=True,
        var_type=bool,
        description="Layer the mapping file over the built-in tables",
        category="mappings",
    )


# =============================================================================
# Type Conversion Helpers
# =============================================================================


def _parse_bool(value: str) -> bool | None:
    """Parse string to boolean.

    Recognizes: true/false, 1/0, yes/no, on/off (case-insensitive).
    Returns None for unrecognized values.
    """
    normalized = value.lower().strip()
    if normalized in ("true", "1", "yes", "on"):
        return True
    if normalized in ("false", "0", "no", "off"):
        return False
    return None


def _convert_value(value: str | None, var_type: type, default: Any) -> Any:
    """Convert a raw environment string to ``var_type``.

    Empty strings count as unset.
    """
    if value is None or not value.strip():
        return default

    if var_type is str:
        return value

    if var_type is bool:
        result = _parse_bool(value)
        return result if result is not None else default

    if var_type is Path:
        return Path(value).expanduser()

    return value


# =============================================================================
# Main Interface
# =============================================================================


@overload
def get_environment(env_var: EnvVar, override: str) -> str: ...
@overload
def get_environment(env_var: EnvVar, override: bool) -> bool: ...
@overload
def get_environment(env_var: EnvVar, override: Path) -> Path: ...
@overload
def get_environment(env_var: EnvVar, override: None = None) -> Any: ...


def get_environment(env_var: EnvVar, override: Any = None) -> Any:
    """Get environment variable value with type conversion.

    Resolution priority:
        1. Explicit override parameter (highest)
        2. Environment variable value
        3. Default from EnvConfig (lowest)

    Example:
        >>> get_environment(EnvVar.PACONVERT_MERGE_MAPPINGS, override=False)
        False
    """
    config: EnvConfig = env_var.value

    if override is not None:
        return override

    raw_value = os.environ.get(config.name)
    return _convert_value(raw_value, config.var_type, config.default)


def get_environment_info(env_var: EnvVar) -> EnvConfig:
    """Get metadata for an environment variable."""
    return env_var.value


def list_environment_variables(category: str | None = None) -> list[EnvVar]:
    """List all environment variables, optionally filtered by category.

    Args:
        category: Filter by category (logging, mappings).
                 None returns all variables.
    """
    if category is None:
        return list(EnvVar)

    return [var for var in EnvVar if var.value.category == category]


# =============================================================================
# Convenience Functions
# =============================================================================


def get_mappings(
    path: Path | str | None = None, merge: bool | None = None
) -> MappingConfiguration:
    """Mapping tables for new engines.

    Resolution: path > PACONVERT_MAPPINGS_FILE > built-in tables.

    Raises:
        InvalidMappingConfigurationError: If the file cannot be read or has
            the wrong shape.
    """
    mapping_file = get_environment(
        EnvVar.PACONVERT_MAPPINGS_FILE,
        override=Path(path) if path is not None else None,
    )
    if mapping_file is None:
        return default_mappings()

    merge = get_environment(EnvVar.PACONVERT_MERGE_MAPPINGS, override=merge)
    return load_mappings(mapping_file, merge=merge)


__all__ = [
    "EnvConfig",
    "EnvVar",
    "get_environment",
    "get_environment_info",
    "list_environment_variables",
    "get_mappings",
]
