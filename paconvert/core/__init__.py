"""Core utilities shared by every paconvert package."""

from paconvert.core.errors import (
    ConversionError,
    DialectParseError,
    InvalidMappingConfigurationError,
    StructuralError,
    UnsupportedControlTypeError,
    UnsupportedInputError,
)
from paconvert.core.log import get_logger, parse_level, setup_logging

__all__ = [
    # Logging
    "get_logger",
    "parse_level",
    "setup_logging",
    # Errors
    "ConversionError",
    "DialectParseError",
    "InvalidMappingConfigurationError",
    "StructuralError",
    "UnsupportedControlTypeError",
    "UnsupportedInputError",
]
