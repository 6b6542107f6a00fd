"""Error taxonomy for control conversion.

Every failure a host can observe from the core is a ConversionError
subclass. The engine attaches the partial conversion log to the error
before it propagates so callers can show how far a conversion got.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from paconvert.engine.log import LogEntry


class ConversionError(Exception):
    """Base exception for conversion failures.

    Attributes:
        log: Conversion log entries recorded before the failure.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.log: tuple[LogEntry, ...] = ()

    def attach_log(self, entries: Sequence[LogEntry]) -> None:
        """Attach the conversion log recorded up to the failure."""
        self.log = tuple(entries)


class StructuralError(ConversionError):
    """Raised when the generic YAML layer cannot parse or emit a tree."""


class DialectParseError(ConversionError):
    """Raised when a dialect document fails structural parsing.

    Attributes:
        cause: Message of the underlying parser error.
    """

    def __init__(self, message: str, cause: str | None = None):
        super().__init__(message)
        self.cause = cause


class UnsupportedInputError(ConversionError):
    """Raised when text holds no recognizable control declaration."""


class UnsupportedControlTypeError(ConversionError):
    """Raised when a classic control type has no modern mapping.

    Attributes:
        control_type: The offending classic type token, verbatim.
    """

    def __init__(self, control_type: str):
        super().__init__(f"Unsupported control type: {control_type}")
        self.control_type = control_type


class InvalidMappingConfigurationError(ConversionError):
    """Raised when a replacement mapping configuration has the wrong shape.

    Attributes:
        details: Individual problems found in the configuration.
    """

    def __init__(self, message: str, details: Sequence[str] = ()):
        super().__init__(message)
        self.details = list(details)


__all__ = [
    "ConversionError",
    "StructuralError",
    "DialectParseError",
    "UnsupportedInputError",
    "UnsupportedControlTypeError",
    "InvalidMappingConfigurationError",
]
