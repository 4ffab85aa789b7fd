"""numdate - Numerical Date Disambiguation

Parses numerically encoded calendar dates of unknown origin and reports how
confident the result is when several national conventions could apply.
"""

__version__ = "0.1.0"
__description__ = "Numerical date parsing with national-convention disambiguation"

from .processors.core import (
    Confidence,
    DateDisambiguationEngine,
    FormatHint,
    ParseOutcome,
    ParseStatus,
    TemporalValue,
    Year,
    YearMonth,
    default_engine,
    new_engine
)

__all__ = [
    "Confidence",
    "DateDisambiguationEngine",
    "FormatHint",
    "ParseOutcome",
    "ParseStatus",
    "TemporalValue",
    "Year",
    "YearMonth",
    "default_engine",
    "new_engine"
]
