"""Ambiguity groups

A group holds competing interpretations of the same token layout, e.g.
``d/M/uuuu`` and ``M/d/uuuu``. Every member is tried on every input and the
group reports how many of them matched.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from ...core.error_handler import AmbiguityGroupError
from ...core.logging_manager import LoggingManager
from .date_parser import CompiledDateParser
from .temporal_types import TemporalValue

logger = LoggingManager.get_logger(__name__)


@dataclass(frozen=True)
class MultiParseOutcome:
    """Result of running every member of one group against one input."""
    number_parsed: int
    preferred_result: Optional[TemporalValue] = None
    other_results: List[TemporalValue] = field(default_factory=list)

    @property
    def result(self) -> Optional[TemporalValue]:
        """The preferred result if available, otherwise the first other result."""
        if self.preferred_result is not None:
            return self.preferred_result
        if self.other_results:
            return self.other_results[0]
        return None


class AmbiguityGroup:
    """Mutually exclusive national conventions for the same token layout.

    At most one member is preferred. No two members may share a format hint.
    """

    def __init__(self, preferred: Optional[CompiledDateParser],
                 others: Sequence[CompiledDateParser]):
        """Create a group.

        Args:
            preferred: Parser whose result wins when several members match
            others: Remaining parsers, must not be empty

        Raises:
            AmbiguityGroupError: If ``others`` is empty or a hint is used twice
        """
        if not others:
            raise AmbiguityGroupError("An ambiguity group needs at least one non-preferred parser")

        self.preferred = preferred
        self.others: Tuple[CompiledDateParser, ...] = tuple(others)
        self._validate()

    def _validate(self):
        hints = set()
        for parser in self.all_parsers:
            if parser.hint in hints:
                raise AmbiguityGroupError(
                    f"Format hint can only be used once in an ambiguity group [{parser.hint.name}]"
                )
            hints.add(parser.hint)

    @property
    def all_parsers(self) -> Tuple[CompiledDateParser, ...]:
        """Preferred parser (if any) followed by the others, in declaration order."""
        if self.preferred is None:
            return self.others
        return (self.preferred,) + self.others

    def __repr__(self) -> str:
        patterns = [p.pattern for p in self.others]
        preferred = self.preferred.pattern if self.preferred else None
        return f"AmbiguityGroup(preferred={preferred!r}, others={patterns!r})"

    def evaluate(self, text: str, log_anomalies: bool = True) -> MultiParseOutcome:
        """Run every member against ``text``; the preferred parser runs last.

        Args:
            text: Input string
            log_anomalies: Warn when the preferred parser and several others match
        """
        number_parsed = 0
        other_results: List[TemporalValue] = []

        for parser in self.others:
            parsed = parser.parse(text)
            if parsed is not None:
                number_parsed += 1
                other_results.append(parsed)

        preferred_result = None
        if self.preferred is not None:
            preferred_result = self.preferred.parse(text)
            if preferred_result is not None:
                number_parsed += 1

        if log_anomalies and preferred_result is not None and len(other_results) > 1:
            logger.warning(
                f"Ambiguity group {self!r} matched '{text}' with its preferred parser "
                f"and {len(other_results)} other parsers"
            )

        return MultiParseOutcome(number_parsed, preferred_result, other_results)
