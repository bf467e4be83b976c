"""Tests for logging configuration."""

import logging

import pytest

from protein_match.logging_config import (
    ColoredFormatter, LogTimer, get_logger, log_performance, setup_logging
)


class TestLoggingConfig:
    """Test cases for logging setup."""

    def test_setup_logging_with_file(self, tmp_path, restore_root_handlers):
        """Test that a log directory gets a rotating log file."""
        loggers = setup_logging(log_level="DEBUG", log_dir=str(tmp_path / "logs"), log_file="run.log")

        loggers['matcher'].info("scored 3 records")
        for handler in logging.getLogger().handlers:
            handler.flush()

        log_file = tmp_path / "logs" / "run.log"
        assert log_file.exists()
        assert "scored 3 records" in log_file.read_text()

    def test_setup_logging_console_only(self, restore_root_handlers):
        """Test console-only setup adds a single handler."""
        setup_logging(log_level="WARNING", quiet=True)

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert handlers[0].level == logging.ERROR

    def test_get_logger(self):
        """Test logger naming."""
        assert get_logger('matcher').name == 'protein_match.matcher'

    def test_colored_formatter_restores_levelname(self):
        """Test that coloring does not leak into the record."""
        formatter = ColoredFormatter('%(levelname)s - %(message)s', use_colors=True)
        record = logging.LogRecord('x', logging.INFO, __file__, 1, 'hello', None, None)

        assert formatter.format(record).endswith('hello')
        assert record.levelname == 'INFO'


class TestTiming:
    """Test cases for timing helpers."""

    def test_log_timer(self, caplog):
        """Test elapsed time is recorded and logged."""
        with caplog.at_level(logging.DEBUG, logger='protein_match.performance'):
            with LogTimer("scoring") as timer:
                pass

        assert timer.elapsed >= 0
        assert "scoring completed" in caplog.text

    def test_log_timer_failure(self, caplog):
        """Test failures are logged as errors."""
        with caplog.at_level(logging.DEBUG, logger='protein_match.performance'):
            with pytest.raises(RuntimeError):
                with LogTimer("scoring"):
                    raise RuntimeError("boom")

        assert "scoring failed" in caplog.text

    def test_log_performance(self, caplog):
        """Test throughput logging."""
        with caplog.at_level(logging.INFO, logger='protein_match.performance'):
            log_performance("dp best match", 2.0, items=10)

        assert "10 items in 2.00s (5.0 items/s)" in caplog.text
