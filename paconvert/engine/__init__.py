"""Classic to modern conversion engine.

Example:
    >>> from paconvert.engine import ConversionEngine
    >>>
    >>> engine = ConversionEngine()
    >>> result = engine.convert_with_log(classic_text)
    >>> print(result.output)
    >>> for entry in result.log:
    ...     print(entry.format())
"""

from paconvert.engine.lib import (
    SAMPLES,
    ConversionEngine,
    ConversionResult,
    convert,
    get_conversion_log,
    get_engine,
    sample_classic_yaml,
)
from paconvert.engine.log import ConversionLog, LogEntry
from paconvert.engine.rules import (
    consolidate_border_radius,
    get_rule,
    list_rules,
    register_rule,
)

__all__ = [
    # Engine
    "ConversionEngine",
    "ConversionResult",
    "convert",
    "get_conversion_log",
    "get_engine",
    # Samples
    "SAMPLES",
    "sample_classic_yaml",
    # Log
    "ConversionLog",
    "LogEntry",
    # Rules
    "register_rule",
    "get_rule",
    "list_rules",
    "consolidate_border_radius",
]
