"""Centralized Logging Management for numdate

Handles log configuration, formatting, and output management for the
``numdate`` package logger. The root logger is left untouched so embedding
applications keep control of their own handlers. Console output is only
attached by ``configure()``, which ``default_engine()`` calls with the loaded
configuration.
"""

import logging
import logging.handlers
import re
import sys
import threading
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Optional

if TYPE_CHECKING:
    from .config_manager import LoggingConfig

PACKAGE_LOGGER = "numdate"


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


def _parse_file_size(size: str) -> int:
    """Convert a ``10MB`` style size into bytes."""
    match = re.match(r'^(\d+)([KMG])B$', size.strip().upper())
    if not match:
        raise ValueError(f"Invalid file size: {size}")
    multiplier = {'K': 1024, 'M': 1024 ** 2, 'G': 1024 ** 3}[match.group(2)]
    return int(match.group(1)) * multiplier


class LoggingManager:
    """Centralized logging configuration and management."""
    
    _instance: Optional['LoggingManager'] = None
    _initialized: bool = False
    _lock = threading.Lock()
    
    def __new__(cls) -> 'LoggingManager':
        """Singleton pattern implementation."""
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
        return cls._instance
    
    def __init__(self):
        """Initialize logging manager (only once)."""
        if self._initialized:
            return
        
        self.loggers: Dict[str, logging.Logger] = {}
        self.package_logger = logging.getLogger(PACKAGE_LOGGER)
        self.console_handler: Optional[logging.Handler] = None
        self.file_handler: Optional[logging.Handler] = None
        self._setup_package_logger()
        self._initialized = True
        
    def _setup_package_logger(self):
        """Silence the package logger until it is configured."""
        self.package_logger.setLevel(logging.INFO)
        self.package_logger.addHandler(logging.NullHandler())
        
    def _add_console_handler(self):
        """Attach the console handler to the package logger."""
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(ColoredFormatter(
            '%(asctime)s | %(name)s | %(levelname)s | %(message)s',
            datefmt='%H:%M:%S'
        ))
        self.package_logger.addHandler(console_handler)
        self.console_handler = console_handler
        
    def configure(self, config: 'LoggingConfig'):
        """Apply a logging configuration to the package logger.
        
        Args:
            config: Validated logging configuration
        """
        numeric_level = self._to_level(config.level)
        self.package_logger.setLevel(numeric_level)
        
        if config.log_to_console:
            if self.console_handler is None:
                self._add_console_handler()
            self.console_handler.setLevel(numeric_level)
        elif self.console_handler is not None:
            self.package_logger.removeHandler(self.console_handler)
            self.console_handler = None
        
        if self.file_handler is not None:
            self.package_logger.removeHandler(self.file_handler)
            self.file_handler.close()
            self.file_handler = None
            
        if config.log_to_file:
            log_file = Path(config.file_path)
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=_parse_file_size(config.max_file_size),
                backupCount=config.backup_count
            )
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(
                '%(asctime)s | %(name)s | %(levelname)s | %(funcName)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            ))
            self.package_logger.addHandler(file_handler)
            self.file_handler = file_handler
        
    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """Class method to get logger instance.
        
        Args:
            name: Logger name (typically __name__ of the module)
            
        Returns:
            Configured logger
        """
        manager = cls()
        return manager._get_logger_instance(name)
        
    def _get_logger_instance(self, name: str) -> logging.Logger:
        """Internal method to get logger instance."""
        if name in self.loggers:
            return self.loggers[name]
            
        logger = logging.getLogger(name)
        self.loggers[name] = logger
        return logger
        
    def set_log_level(self, level: str):
        """Set the logging level for the package logger and its console handler.
        
        Args:
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        """
        numeric_level = self._to_level(level)
        self.package_logger.setLevel(numeric_level)
        if self.console_handler is not None:
            self.console_handler.setLevel(numeric_level)
    
    @staticmethod
    def _to_level(level: str) -> int:
        numeric_level = getattr(logging, level.upper(), None)
        if not isinstance(numeric_level, int):
            raise ValueError(f'Invalid log level: {level}')
        return numeric_level
