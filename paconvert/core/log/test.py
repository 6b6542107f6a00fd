"""Tests for core logging module."""

import logging
from io import StringIO

import pytest

from .lib import get_logger, parse_level, setup_logging


class TestLogging:
    """Test core logging API."""

    @pytest.mark.unit
    def test_get_logger(self) -> None:
        """Verify logger instance creation."""
        logger = get_logger("test")
        assert logger.name == "test"
        assert isinstance(logger, logging.Logger)

    @pytest.mark.unit
    def test_get_logger_default_name(self) -> None:
        """Verify default logger name."""
        logger = get_logger()
        assert logger.name == "paconvert"

    @pytest.mark.unit
    def test_setup_logging(self) -> None:
        """Verify logging setup."""
        stream = StringIO()
        setup_logging(level=logging.DEBUG, stream=stream)
        logger = get_logger("test_setup")
        logger.debug("test message")

        # basicConfig is a no-op once the root logger is configured,
        # so only the API contract is checked here.
        assert logger.level == logging.NOTSET


class TestParseLevel:
    """Tests for level name resolution."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("debug", logging.DEBUG),
            ("INFO", logging.INFO),
            (" warning ", logging.WARNING),
            (logging.ERROR, logging.ERROR),
        ],
    )
    def test_known_levels(self, value, expected) -> None:
        """Names are case-insensitive and ints pass through."""
        assert parse_level(value) == expected

    @pytest.mark.unit
    def test_unknown_level_uses_default(self) -> None:
        """Unrecognized names fall back to the default."""
        assert parse_level("loud") == logging.WARNING
        assert parse_level("loud", default=logging.INFO) == logging.INFO

    @pytest.mark.unit
    def test_none_uses_default(self) -> None:
        """None resolves to the default."""
        assert parse_level(None) == logging.WARNING
