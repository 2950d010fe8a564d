"""Error Handling for chronomatch

Exception hierarchy shared by the engine and its rule catalogs, plus a
small handler used by the command line front end.
"""

import logging
import sys
from enum import Enum
from typing import Callable, Dict, Optional, Type


class ErrorSeverity(Enum):
    """Error severity levels."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorKind(Enum):
    """Reasons a recognizer or rule failed to match."""
    UNKNOWN = "unknown"              # nothing recognized
    OUT_OF_BOUNDS = "out_of_bounds"  # number recognized but outside its range
    EMPTY = "empty"                  # tokenizer produced no characters
    AMBIGUOUS = "ambiguous"          # two or more alternatives tied


class ChronoMatchError(Exception):
    """Base exception class for chronomatch."""

    def __init__(self, message: str, severity: ErrorSeverity = ErrorSeverity.MEDIUM):
        self.message = message
        self.severity = severity
        super().__init__(self.message)


class RecognitionError(ChronoMatchError):
    """Raised by recognizers and rules when the text does not match.

    This is a local control signal: combinators catch it and move on to the
    next alternative or position. It never leaves the scanning loop.
    """

    def __init__(self, kind: ErrorKind, position: int = 0):
        self.kind = kind
        self.position = position
        super().__init__(f"{kind.value} at offset {position}", ErrorSeverity.LOW)


class SemanticError(ChronoMatchError):
    """Raised by a rule catalog when matched tokens do not form a valid value."""
    pass


class ConfigurationError(ChronoMatchError):
    """Error raised when configuration is invalid."""

    def __init__(self, message: str):
        super().__init__(message, ErrorSeverity.HIGH)


class ErrorHandler:
    """Error handler for the command line front end."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self.error_callbacks: Dict[Type[Exception], Callable[[Exception], None]] = {}

    def register_error_callback(self, exception_type: Type[Exception],
                                callback: Callable[[Exception], None]):
        """Register a callback for specific exception types.

        Args:
            exception_type: The exception type to handle
            callback: Function to call when this exception occurs
        """
        self.error_callbacks[exception_type] = callback

    def handle_error(self, error: Exception, context: Optional[str] = None) -> ErrorSeverity:
        """Log an error at a level matching its severity and run callbacks.

        Args:
            error: The exception that occurred
            context: Additional context about where the error occurred

        Returns:
            The severity the error was handled with
        """
        severity = self._get_error_severity(error)
        message = self._format_error_message(error, context)
        self._log_error(message, severity)

        for error_type, callback in self.error_callbacks.items():
            if isinstance(error, error_type):
                callback(error)
                break

        return severity

    def _get_error_severity(self, error: Exception) -> ErrorSeverity:
        """Determine error severity based on exception type."""
        if isinstance(error, ChronoMatchError):
            return error.severity

        severity_map = {
            FileNotFoundError: ErrorSeverity.MEDIUM,
            PermissionError: ErrorSeverity.HIGH,
            ValueError: ErrorSeverity.MEDIUM,
            MemoryError: ErrorSeverity.CRITICAL,
            KeyboardInterrupt: ErrorSeverity.LOW,
        }

        return severity_map.get(type(error), ErrorSeverity.MEDIUM)

    def _format_error_message(self, error: Exception, context: Optional[str] = None) -> str:
        message = str(error)
        if context:
            message = f"{context}: {message}"
        return message

    def _log_error(self, message: str, severity: ErrorSeverity):
        log_methods = {
            ErrorSeverity.LOW: self.logger.info,
            ErrorSeverity.MEDIUM: self.logger.warning,
            ErrorSeverity.HIGH: self.logger.error,
            ErrorSeverity.CRITICAL: self.logger.critical,
        }

        log_methods[severity](message, exc_info=sys.exc_info()[0] is not None)
