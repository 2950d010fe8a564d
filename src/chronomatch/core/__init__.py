"""Core services for chronomatch.

Configuration, error types and logging shared by the engine, the rule
catalogs and the command line front end.
"""

from .config_manager import AppConfig, ConfigManager, LoggingConfig, MatchingConfig
from .error_handler import (
    ChronoMatchError,
    ConfigurationError,
    ErrorHandler,
    ErrorKind,
    ErrorSeverity,
    RecognitionError,
    SemanticError,
)
from .logging_manager import LoggingManager

__all__ = [
    "AppConfig",
    "ConfigManager",
    "LoggingConfig",
    "MatchingConfig",
    "ChronoMatchError",
    "ConfigurationError",
    "ErrorHandler",
    "ErrorKind",
    "ErrorSeverity",
    "RecognitionError",
    "SemanticError",
    "LoggingManager",
]
