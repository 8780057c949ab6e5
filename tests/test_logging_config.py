# tests/test_logging_config.py
"""Tests for logging configuration."""

import io
import logging

import pytest
from schema_intel.logging_config import QUIET_LOGGERS, get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_logging():
    """Restore root logger handlers replaced by setup_logging."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSetupLogging:
    """Test suite for setup_logging."""

    def test_level_name(self):
        """Test a case-insensitive level name."""
        setup_logging(level="debug", stream=io.StringIO())
        assert logging.getLogger().level == logging.DEBUG

    def test_numeric_level(self):
        """Test a numeric logging level."""
        setup_logging(level=logging.ERROR, stream=io.StringIO())
        assert logging.getLogger().level == logging.ERROR

    def test_unknown_level_falls_back_to_info(self):
        """Test that an unknown level name means INFO."""
        setup_logging(level="chatty", stream=io.StringIO())
        assert logging.getLogger().level == logging.INFO

    def test_records_written_to_stream(self):
        """Test that records reach the given console stream."""
        stream = io.StringIO()
        setup_logging(level="INFO", stream=stream, format_string="%(levelname)s:%(message)s")

        get_logger("schema_intel.engine").info("Analyzed page")

        assert "INFO:Analyzed page" in stream.getvalue()

    def test_log_file_created(self, tmp_path):
        """Test that the log file and its directory are created."""
        log_file = tmp_path / "logs" / "schema.log"
        setup_logging(level="INFO", log_file=str(log_file), stream=io.StringIO())

        get_logger("schema_intel.graph").warning("Nesting depth limit reached")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert "Nesting depth limit reached" in log_file.read_text()

    def test_quiet_loggers(self):
        """Test that loader libraries are held at WARNING."""
        setup_logging(level="DEBUG", stream=io.StringIO())

        for name in QUIET_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING


def test_get_logger_returns_named_logger():
    """Test that get_logger hands back the named logger."""
    assert get_logger("schema_intel.rules") is logging.getLogger("schema_intel.rules")
