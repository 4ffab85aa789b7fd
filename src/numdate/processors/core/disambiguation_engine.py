"""Numerical Date Disambiguation Engine

Parses numerical dates of unknown origin (ISO, day-first, month-first,
CJK-separated, fixed width, 2 digit years) and reports how confident the
result is when more than one national convention could apply:

- DEFINITE: only one interpretation is possible
- PROBABLE: several interpretations are possible, the preferred (day-first)
  convention was used
- FAIL: nothing matched, or several matched without a preferred one

Months are numerical, starting at 1 for January. Parsing is timezone agnostic;
an offset is only kept when the input carries one. Engines are immutable after
construction and safe to share between threads.
"""

import threading
from datetime import date
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from ...core.config_manager import ConfigManager, ParserConfig
from ...core.error_handler import ConfigurationError
from ...core.logging_manager import LoggingManager
from .ambiguity_group import AmbiguityGroup
from .date_parser import CompiledDateParser, FormatHint, candidate_granularities
from .parse_result import Confidence, ParseOutcome
from .pattern_catalog import (
    AMBIGUOUS_2_DIGITS_YEAR_GROUPS,
    AMBIGUOUS_GROUPS,
    UNAMBIGUOUS_PATTERNS,
    build_group,
    compile_parser
)
from .pattern_compiler import CHAR_HYPHEN, DateTimeParseError, build_iso_fields_formatter
from .temporal_types import TemporalValue

logger = LoggingManager.get_logger(__name__)

ISO_FIELDS_FORMATTER = build_iso_fields_formatter()


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value.strip()


class DateDisambiguationEngine:
    """Parses numerical dates and resolves national-convention ambiguity."""

    def __init__(self, base_year: Optional[int] = None, log_anomalies: bool = True,
                 groups: Optional[Sequence[AmbiguityGroup]] = None):
        """Build the pattern catalog and ambiguity groups.

        Args:
            base_year: Enables 2 digit years, resolved within [base_year, base_year + 99]
            log_anomalies: Log a warning when several groups give a preferred result,
                or when one group matches its preferred parser and several others
            groups: Ambiguity groups replacing the built-in catalog groups

        Raises:
            ConfigurationError: If base_year is in the future or the catalog is invalid
        """
        if base_year is not None:
            if isinstance(base_year, bool) or not isinstance(base_year, int):
                raise ConfigurationError(f"Base year must be an integer, got {base_year!r}")
            if base_year > date.today().year:
                raise ConfigurationError(
                    f"Base year {base_year} must be less than or equal to the current year"
                )

        self.base_year = base_year
        self.log_anomalies = log_anomalies

        self._unambiguous: Tuple[CompiledDateParser, ...] = tuple(
            compile_parser(spec) for spec in UNAMBIGUOUS_PATTERNS
        )

        if groups is None:
            groups = [build_group(spec) for spec in AMBIGUOUS_GROUPS]
            if base_year is not None:
                groups.extend(build_group(spec, base_year) for spec in AMBIGUOUS_2_DIGITS_YEAR_GROUPS)
        self._groups: Tuple[AmbiguityGroup, ...] = tuple(groups)

        self._parsers_by_hint = self._index_by_hint()

        logger.debug(
            f"Date engine ready: {len(self._unambiguous)} unambiguous patterns, "
            f"{len(self._groups)} ambiguity groups, base year {base_year}"
        )

    @classmethod
    def from_config(cls, config: ParserConfig) -> "DateDisambiguationEngine":
        """Create an engine from a validated parser configuration."""
        return cls(base_year=config.base_year, log_anomalies=config.log_anomalies)

    def _index_by_hint(self) -> Mapping[FormatHint, Tuple[CompiledDateParser, ...]]:
        index: Dict[FormatHint, List[CompiledDateParser]] = {}
        for parser in self._unambiguous:
            index.setdefault(parser.hint, []).append(parser)
        for group in self._groups:
            for parser in group.all_parsers:
                index.setdefault(parser.hint, []).append(parser)
        return MappingProxyType({hint: tuple(parsers) for hint, parsers in index.items()})

    @property
    def unambiguous_parsers(self) -> Tuple[CompiledDateParser, ...]:
        return self._unambiguous

    @property
    def ambiguity_groups(self) -> Tuple[AmbiguityGroup, ...]:
        return self._groups

    def parsers_for(self, hint: Optional[FormatHint]) -> Tuple[CompiledDateParser, ...]:
        """Parsers tried for ``hint``; the whole unambiguous catalog when the hint has none."""
        return self._parsers_by_hint.get(hint or FormatHint.NONE, self._unambiguous)

    def parse(self, text: Optional[str], hint: Optional[FormatHint] = None) -> ParseOutcome[TemporalValue]:
        """Parse a numerical date.

        An explicit hint restricts the search to the patterns of that hint.
        Without a hint the unambiguous patterns are tried first, then every
        ambiguity group.

        Args:
            text: Input string
            hint: Expected shape of the input, defaults to FormatHint.NONE

        Returns:
            SUCCESS with a confidence and the parsed value, or FAIL
        """
        if text is None or not text.strip():
            return ParseOutcome.fail()

        if hint is None:
            hint = FormatHint.NONE

        for parser in self.parsers_for(hint):
            parsed = parser.parse(text)
            if parsed is not None:
                return ParseOutcome.success(Confidence.DEFINITE, parsed)

        # an explicit hint was already tried with all of its patterns
        if hint is not FormatHint.NONE:
            return ParseOutcome.fail()

        return self._resolve_ambiguity(text)

    def _resolve_ambiguity(self, text: str) -> ParseOutcome[TemporalValue]:
        number_of_matches = 0
        last_parsed_success: Optional[TemporalValue] = None
        last_parsed_preferred: Optional[TemporalValue] = None
        all_results: List[TemporalValue] = []

        for group in self._groups:
            outcome = group.evaluate(text, self.log_anomalies)
            number_of_matches += outcome.number_parsed

            if outcome.number_parsed > 0:
                last_parsed_success = outcome.result
                all_results.extend(outcome.other_results)

                if outcome.preferred_result is not None:
                    if last_parsed_preferred is not None and self.log_anomalies:
                        logger.warning(
                            f"Ambiguity group configuration issue: '{text}' produces 2 preferred results"
                        )
                    last_parsed_preferred = outcome.preferred_result
                    all_results.append(outcome.preferred_result)

        # only one pattern applies, so it is not ambiguous
        if number_of_matches == 1:
            return ParseOutcome.success(Confidence.DEFINITE, last_parsed_success)

        if number_of_matches > 1 and last_parsed_preferred is not None:
            alternatives = [value for value in all_results if value is not last_parsed_preferred]
            return ParseOutcome.success(Confidence.PROBABLE, last_parsed_preferred, alternatives)

        logger.debug(f"Number of matches for '{text}': {number_of_matches}")
        return ParseOutcome.fail()

    @staticmethod
    def parse_ymd(year: Optional[str] = None, month: Optional[str] = None,
                  day: Optional[str] = None) -> ParseOutcome[TemporalValue]:
        """Parse separate year, month and day strings.

        Blank parts count as missing. Only trailing parts may be missing: a
        blank year, or a day without a month, fails. The parts are joined with
        a hyphen and must read as year[-month[-day]].

        Returns:
            SUCCESS (DEFINITE) with a Year, YearMonth or date, or FAIL
        """
        year, month, day = _blank_to_none(year), _blank_to_none(month), _blank_to_none(day)
        if year is None or (month is None and day is not None):
            return ParseOutcome.fail()

        parts = [p for p in (year, month, day) if p is not None]

        joined = CHAR_HYPHEN.join(parts)
        try:
            parsed = ISO_FIELDS_FORMATTER.parse_best(joined, candidate_granularities(FormatHint.NONE))
        except DateTimeParseError:
            return ParseOutcome.fail()
        return ParseOutcome.success(Confidence.DEFINITE, parsed)


def new_engine(base_year: Optional[int] = None) -> DateDisambiguationEngine:
    """Create a new engine; 2 digit year groups are added when a base year is given."""
    return DateDisambiguationEngine(base_year=base_year)


_default_engine: Optional[DateDisambiguationEngine] = None
_default_engine_lock = threading.Lock()


def default_engine(config_manager: Optional[ConfigManager] = None) -> DateDisambiguationEngine:
    """Return the process-wide engine, building it once from configuration.

    Concurrent first callers block until the single instance is fully built.

    Args:
        config_manager: Source of configuration, a default ConfigManager if omitted
    """
    global _default_engine
    if _default_engine is not None:
        return _default_engine

    with _default_engine_lock:
        if _default_engine is None:
            manager = config_manager or ConfigManager()
            config = manager.load_config()
            LoggingManager().configure(config.logging)
            _default_engine = DateDisambiguationEngine.from_config(config.parser)
            logger.info(f"Default date engine created (base year {config.parser.base_year})")
    return _default_engine
