"""Centralized Logging Management for chronomatch

Handles log configuration, formatting, and output management. Importing the
library never installs handlers; front ends call ``LoggingManager.configure``.
"""

import logging
import logging.handlers
import re
import sys
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .config_manager import LoggingConfig


class ColoredFormatter(logging.Formatter):
    """Custom formatter that adds colors to console output."""

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'        # Reset
    }

    def format(self, record):
        """Format log record with colors for console output."""
        log_message = super().format(record)
        return f"{self.COLORS.get(record.levelname, '')}{log_message}{self.COLORS['RESET']}"


def parse_file_size(size: str) -> int:
    """Convert a size such as ``10MB`` into bytes."""
    match = re.match(r'^(\d+)([KMG])B$', size.upper())
    if not match:
        raise ValueError(f"Invalid file size: {size}")
    multiplier = {'K': 1024, 'M': 1024 ** 2, 'G': 1024 ** 3}[match.group(2)]
    return int(match.group(1)) * multiplier


class LoggingManager:
    """Centralized logging configuration and management."""

    _instance: Optional['LoggingManager'] = None
    _initialized: bool = False

    def __new__(cls) -> 'LoggingManager':
        """Singleton pattern implementation."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """Initialize logging manager (only once)."""
        if self._initialized:
            return

        self.log_dir: Optional[Path] = None
        self.loggers: Dict[str, logging.Logger] = {}
        self.handlers: list = []
        self._initialized = True

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """Get or create a logger with the specified name.

        Args:
            name: Logger name (typically __name__ of the module)

        Returns:
            Logger instance
        """
        manager = cls()
        if name not in manager.loggers:
            manager.loggers[name] = logging.getLogger(name)
        return manager.loggers[name]

    @classmethod
    def configure(cls, config: 'LoggingConfig') -> 'LoggingManager':
        """Install handlers on the package logger according to ``config``.

        Calling it again replaces the handlers installed by the previous call.
        """
        manager = cls()
        manager._setup_package_logger(config)
        return manager

    def _setup_package_logger(self, config: 'LoggingConfig'):
        package_logger = logging.getLogger("chronomatch")
        package_logger.setLevel(logging.DEBUG)

        for handler in self.handlers:
            package_logger.removeHandler(handler)
            handler.close()
        self.handlers = []

        if config.log_to_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(config.level)
            console_handler.setFormatter(ColoredFormatter(
                '%(asctime)s | %(name)s | %(levelname)s | %(message)s',
                datefmt='%H:%M:%S'
            ))
            self._add(package_logger, console_handler)

        if config.log_dir:
            self.log_dir = Path(config.log_dir)
            self.log_dir.mkdir(parents=True, exist_ok=True)
            file_formatter = logging.Formatter(
                '%(asctime)s | %(name)s | %(levelname)s | %(funcName)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )

            # File handler for all logs
            log_file = self.log_dir / f"chronomatch_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=parse_file_size(config.max_file_size),
                backupCount=config.backup_count
            )
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(file_formatter)
            self._add(package_logger, file_handler)

            # Error file handler for errors only
            error_file = self.log_dir / f"chronomatch_errors_{datetime.now().strftime('%Y%m%d')}.log"
            error_handler = logging.handlers.RotatingFileHandler(
                error_file,
                maxBytes=parse_file_size(config.max_file_size),
                backupCount=config.backup_count
            )
            error_handler.setLevel(logging.ERROR)
            error_handler.setFormatter(file_formatter)
            self._add(package_logger, error_handler)

    def _add(self, logger: logging.Logger, handler: logging.Handler):
        logger.addHandler(handler)
        self.handlers.append(handler)

    def set_log_level(self, level: str):
        """Set the logging level for the console handler.

        Args:
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        """
        numeric_level = getattr(logging, level.upper(), None)
        if not isinstance(numeric_level, int):
            raise ValueError(f'Invalid log level: {level}')

        for handler in self.handlers:
            if type(handler) is logging.StreamHandler:
                handler.setLevel(numeric_level)
