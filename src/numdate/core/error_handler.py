"""Error taxonomy for numdate

Parsing never raises: a pattern that does not fit is an expected outcome and
is reported as a FAIL result. Only construction-time configuration problems
surface as exceptions.
"""

from enum import Enum


class ErrorSeverity(Enum):
    """Error severity levels."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class NumDateError(Exception):
    """Base exception class for numdate."""
    
    def __init__(self, message: str, severity: ErrorSeverity = ErrorSeverity.MEDIUM):
        self.message = message
        self.severity = severity
        super().__init__(self.message)


class ConfigurationError(NumDateError):
    """Error raised when configuration is invalid."""
    
    def __init__(self, message: str, severity: ErrorSeverity = ErrorSeverity.CRITICAL):
        super().__init__(message, severity)


class PatternError(ConfigurationError):
    """Error raised when a date pattern can not be compiled."""
    pass


class AmbiguityGroupError(ConfigurationError):
    """Error raised when an ambiguity group is built with conflicting members."""
    pass
