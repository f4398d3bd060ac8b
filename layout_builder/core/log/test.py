"""Tests for the logging micro API."""

import logging
import sys
from io import StringIO

import pytest

from .lib import get_logger, parse_level, setup_logging


@pytest.fixture
def bare_root():
    """Root logger with its handlers removed, restored afterwards."""
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    root.handlers.clear()
    yield root
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


class TestLoggerAccess:
    """Tests for logger lookup and configuration."""

    @pytest.mark.unit
    def test_named_logger(self) -> None:
        assert get_logger("cli").name == "cli"

    @pytest.mark.unit
    def test_default_name_is_package(self) -> None:
        assert get_logger().name == "layout-builder"

    @pytest.mark.unit
    def test_same_name_same_instance(self) -> None:
        assert get_logger("cli") is logging.getLogger("cli")

    @pytest.mark.unit
    def test_setup_writes_formatted_records(self, bare_root) -> None:
        """With no handlers installed, setup_logging attaches one to the stream."""
        stream = StringIO()
        setup_logging(level=logging.DEBUG, stream=stream)
        get_logger().debug("placed card")
        assert "layout-builder - DEBUG - placed card" in stream.getvalue()

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "name,expected", [("warning", logging.WARNING), ("verbose", logging.INFO)]
    )
    def test_setup_accepts_level_names(self, bare_root, name, expected) -> None:
        setup_logging(level=name, stream=StringIO())
        assert bare_root.level == expected

    @pytest.mark.unit
    def test_default_stream_is_current_stderr(self, bare_root, monkeypatch) -> None:
        stream = StringIO()
        monkeypatch.setattr(sys, "stderr", stream)
        setup_logging()
        get_logger().info("exported")
        assert "INFO - exported" in stream.getvalue()


class TestParseLevel:
    """Tests for level name parsing."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "name,expected",
        [
            ("debug", logging.DEBUG),
            ("INFO", logging.INFO),
            (" warning ", logging.WARNING),
            ("error", logging.ERROR),
        ],
    )
    def test_known_names(self, name, expected) -> None:
        """Level names are case- and whitespace-insensitive."""
        assert parse_level(name) == expected

    @pytest.mark.unit
    def test_unknown_name_uses_default(self) -> None:
        """Unknown names fall back to the default level."""
        assert parse_level("chatty", default=logging.ERROR) == logging.ERROR

    @pytest.mark.unit
    def test_empty_name_uses_default(self) -> None:
        """None and empty strings fall back to the default level."""
        assert parse_level(None) == logging.INFO
        assert parse_level("") == logging.INFO
