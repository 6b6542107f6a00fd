"""Centralized configuration management for paconvert.

Provides unified access to all configuration via the `get_environment()` function.

Example:
    >>> from paconvert.config import EnvVar, get_environment
    >>>
    >>> level = get_environment(EnvVar.PACONVERT_LOG_LEVEL)
    >>>
    >>> for var in list_environment_variables("mappings"):
    ...     info = get_environment_info(var)
    ...     print(f"{info.name}: {info.description}")

Environment Variable Categories:
    logging: Logger level and conversion log formatting
    mappings: External mapping file and merge behavior
"""

from .lib import (
    # Core types
    EnvConfig,
    EnvVar,
    # Main interface
    get_environment,
    get_environment_info,
    get_mappings,
    # Introspection
    list_environment_variables,
)

__all__ = [
    # Core types
    "EnvConfig",
    "EnvVar",
    # Main interface
    "get_environment",
    "get_environment_info",
    # Convenience functions
    "get_mappings",
    # Introspection
    "list_environment_variables",
]
