"""Numerical date disambiguation components.

Pattern compilation, hint-bound parsers, ambiguity groups and the engine
resolving them.
"""

from .ambiguity_group import AmbiguityGroup, MultiParseOutcome
from .date_parser import CompiledDateParser, FormatHint
from .disambiguation_engine import DateDisambiguationEngine, default_engine, new_engine
from .parse_result import Confidence, ParseOutcome, ParseStatus
from .pattern_compiler import CompiledPattern, compile_pattern
from .temporal_types import TemporalGranularity, TemporalValue, Year, YearMonth

__all__ = [
    "AmbiguityGroup",
    "MultiParseOutcome",
    "CompiledDateParser",
    "FormatHint",
    "DateDisambiguationEngine",
    "default_engine",
    "new_engine",
    "Confidence",
    "ParseOutcome",
    "ParseStatus",
    "CompiledPattern",
    "compile_pattern",
    "TemporalGranularity",
    "TemporalValue",
    "Year",
    "YearMonth"
]
