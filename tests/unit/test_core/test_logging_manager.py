"""
Unit tests for LoggingManager.
"""

import logging
import logging.handlers

import pytest

from chronomatch.core.config_manager import LoggingConfig
from chronomatch.core.logging_manager import ColoredFormatter, LoggingManager, parse_file_size


def installed_handlers():
    return list(LoggingManager().handlers)


class TestLoggingManager:
    """Test suite for LoggingManager"""

    def test_singleton(self):
        assert LoggingManager() is LoggingManager()

    def test_get_logger_is_cached(self):
        logger = LoggingManager.get_logger("chronomatch.test")
        assert logger is LoggingManager.get_logger("chronomatch.test")
        assert logger.name == "chronomatch.test"

    def test_console_handler(self):
        LoggingManager.configure(LoggingConfig(level="INFO"))
        (handler,) = installed_handlers()
        assert type(handler) is logging.StreamHandler
        assert handler.level == logging.INFO
        assert isinstance(handler.formatter, ColoredFormatter)

    def test_reconfigure_replaces_handlers(self):
        LoggingManager.configure(LoggingConfig())
        LoggingManager.configure(LoggingConfig())
        package_logger = logging.getLogger("chronomatch")
        assert len([h for h in package_logger.handlers if h in installed_handlers()]) == 1

    def test_file_handlers(self, tmp_path):
        log_dir = tmp_path / "logs"
        LoggingManager.configure(LoggingConfig(log_to_console=False, log_dir=str(log_dir), max_file_size="1KB"))

        handlers = installed_handlers()
        assert len(handlers) == 2
        assert all(isinstance(h, logging.handlers.RotatingFileHandler) for h in handlers)
        assert handlers[0].maxBytes == 1024
        assert handlers[1].level == logging.ERROR
        assert log_dir.is_dir()

        LoggingManager.get_logger("chronomatch.test").error("disk full")
        for handler in handlers:
            handler.flush()
        assert any("disk full" in p.read_text() for p in log_dir.glob("chronomatch_errors_*.log"))

    def test_set_log_level(self):
        LoggingManager.configure(LoggingConfig())
        manager = LoggingManager()
        manager.set_log_level("debug")
        assert installed_handlers()[0].level == logging.DEBUG

        with pytest.raises(ValueError):
            manager.set_log_level("LOUD")

    @pytest.mark.parametrize("size,expected", [
        ("10MB", 10 * 1024 ** 2),
        ("1gb", 1024 ** 3),
        ("512KB", 512 * 1024),
    ])
    def test_parse_file_size(self, size, expected):
        assert parse_file_size(size) == expected

    def test_parse_file_size_invalid(self):
        with pytest.raises(ValueError):
            parse_file_size("huge")

    def test_colored_formatter(self):
        formatter = ColoredFormatter("%(levelname)s %(message)s")
        record = logging.LogRecord("x", logging.WARNING, __file__, 1, "careful", None, None)
        assert formatter.format(record) == "\033[33mWARNING careful\033[0m"
