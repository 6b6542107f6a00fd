"""Core logging implementation for paconvert."""

import logging
import sys
from typing import Optional

__all__ = ["get_logger", "setup_logging", "parse_level"]

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: int = logging.INFO, stream=sys.stderr) -> None:
    """Configure basic logging.

    Args:
        level: Logging level.
        stream: Output stream.
    """
    logging.basicConfig(
        level=level,
        format=DEFAULT_FORMAT,
        stream=stream,
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Name of the logger.

    Returns:
        Logger instance.
    """
    return logging.getLogger(name or "paconvert")


def parse_level(value: str | int | None, default: int = logging.WARNING) -> int:
    """Resolve a level name ("debug", "INFO") or number to a logging level.

    Unknown names fall back to ``default``.
    """
    if value is None:
        return default
    if isinstance(value, int):
        return value

    level = logging.getLevelName(value.strip().upper())
    return level if isinstance(level, int) else default
