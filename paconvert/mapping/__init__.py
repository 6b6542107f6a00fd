"""Classic to modern mapping tables and mappers.

Example:
    >>> from paconvert.mapping import PropertyMapper, TypeMapper, default_mappings
    >>>
    >>> config = default_mappings()
    >>> modern_type = TypeMapper(config).resolve("Classic/Button@2.2.0")
    >>> PropertyMapper(config).map_properties(properties, modern_type)
"""

from paconvert.mapping.lib import (
    COMMON_TABLE_KEY,
    MappingConfiguration,
    PropertyMapper,
    TypeMapper,
    default_mappings,
    generate_control_name,
    load_mappings,
)

__all__ = [
    # Configuration
    "COMMON_TABLE_KEY",
    "MappingConfiguration",
    "default_mappings",
    "load_mappings",
    # Mappers
    "TypeMapper",
    "PropertyMapper",
    # Naming
    "generate_control_name",
]
