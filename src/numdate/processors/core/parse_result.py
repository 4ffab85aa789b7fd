"""Typed outcome of a parse operation."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, List, Optional, TypeVar

T = TypeVar("T")


class ParseStatus(Enum):
    """Result code of a parse operation."""
    SUCCESS = "success"
    FAIL = "fail"
    ERROR = "error"


class Confidence(Enum):
    """Confidence of a successful result, from highest to lowest.
    
    POSSIBLE is never produced by the numerical date engine but is kept so
    results can be compared with other parsers.
    """
    DEFINITE = "definite"
    PROBABLE = "probable"
    POSSIBLE = "possible"
    
    @property
    def rank(self) -> int:
        return list(Confidence).index(self)
    
    @classmethod
    def lower_of(cls, c1: Optional["Confidence"], c2: Optional["Confidence"]) -> Optional["Confidence"]:
        """Return the lower of two confidences, ignoring None."""
        if c1 is None:
            return c2
        if c2 is None:
            return c1
        return c1 if c1.rank > c2.rank else c2


@dataclass(frozen=True)
class ParseOutcome(Generic[T]):
    """Response of a parse operation.
    
    ``confidence`` and ``payload`` are only set when ``status`` is SUCCESS.
    """
    status: ParseStatus
    confidence: Optional[Confidence] = None
    payload: Optional[T] = None
    alternative_payloads: List[T] = field(default_factory=list)
    error: Optional[BaseException] = None
    
    @classmethod
    def success(cls, confidence: Confidence, payload: T,
                alternative_payloads: Optional[List[T]] = None) -> "ParseOutcome[T]":
        return cls(ParseStatus.SUCCESS, confidence, payload, list(alternative_payloads or []))
    
    @classmethod
    def fail(cls) -> "ParseOutcome[T]":
        return cls(ParseStatus.FAIL)
    
    @classmethod
    def error_of(cls, cause: Optional[BaseException] = None) -> "ParseOutcome[T]":
        return cls(ParseStatus.ERROR, error=cause)
    
    @property
    def is_successful(self) -> bool:
        return self.status is ParseStatus.SUCCESS
