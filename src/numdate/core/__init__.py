"""Core modules for numdate.

Configuration, error taxonomy and logging shared by the parsing engine.
"""

from .config_manager import AppConfig, ConfigManager, LoggingConfig, ParserConfig
from .error_handler import (
    AmbiguityGroupError,
    ConfigurationError,
    ErrorSeverity,
    NumDateError,
    PatternError
)
from .logging_manager import LoggingManager

__all__ = [
    "AppConfig",
    "ConfigManager",
    "LoggingConfig",
    "ParserConfig",
    "AmbiguityGroupError",
    "ConfigurationError",
    "ErrorSeverity",
    "NumDateError",
    "PatternError",
    "LoggingManager"
]
