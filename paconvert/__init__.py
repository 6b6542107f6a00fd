"""paconvert - classic to modern Power Apps control conversion.

Example:
    >>> from paconvert import convert, get_conversion_log
    >>> modern = convert(classic_text)
    >>> for entry in get_conversion_log():
    ...     print(entry.format())
"""

from paconvert.core.errors import (
    ConversionError,
    DialectParseError,
    InvalidMappingConfigurationError,
    StructuralError,
    UnsupportedControlTypeError,
    UnsupportedInputError,
)
from paconvert.dialect import (
    extract_control_info,
    extract_properties,
    format_control,
    parse_dialect,
    render_dialect,
    validate,
)
from paconvert.engine import (
    ConversionEngine,
    ConversionResult,
    LogEntry,
    convert,
    get_conversion_log,
    sample_classic_yaml,
)
from paconvert.mapping import (
    MappingConfiguration,
    default_mappings,
    generate_control_name,
    load_mappings,
)
from paconvert.model import ControlDocument, ControlInfo, ControlNode, PropertyValue

__all__ = [
    # Conversion
    "ConversionEngine",
    "ConversionResult",
    "LogEntry",
    "convert",
    "get_conversion_log",
    "sample_classic_yaml",
    # Dialect
    "parse_dialect",
    "render_dialect",
    "format_control",
    "extract_control_info",
    "extract_properties",
    "validate",
    # Model
    "ControlDocument",
    "ControlInfo",
    "ControlNode",
    "PropertyValue",
    # Mappings
    "MappingConfiguration",
    "default_mappings",
    "load_mappings",
    "generate_control_name",
    # Errors
    "ConversionError",
    "DialectParseError",
    "InvalidMappingConfigurationError",
    "StructuralError",
    "UnsupportedControlTypeError",
    "UnsupportedInputError",
]
