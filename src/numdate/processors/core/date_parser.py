"""Compiled date parser bound to a format hint."""

from enum import Enum
from typing import Dict, Optional, Tuple

from .pattern_compiler import CompiledPattern, DateTimeParseError
from .temporal_types import TemporalGranularity, TemporalValue


class FormatHint(Enum):
    """Shape of a date string a caller may assert in advance."""
    NONE = "none"
    Y = "y"
    YM = "ym"
    YMD = "ymd"
    YMDT = "ymdt"
    DMY = "dmy"
    MDY = "mdy"
    HAN = "han"  # date format used in Chinese


_G = TemporalGranularity

# Only the granularities a pattern of that shape can produce, most specific first.
CANDIDATE_GRANULARITIES: Dict[FormatHint, Tuple[TemporalGranularity, ...]] = {
    FormatHint.YMDT: (_G.ZONED_DATE_TIME, _G.LOCAL_DATE_TIME, _G.LOCAL_DATE, _G.YEAR_MONTH, _G.YEAR),
    FormatHint.YMD: (_G.LOCAL_DATE, _G.YEAR_MONTH, _G.YEAR),
    FormatHint.YM: (_G.YEAR_MONTH, _G.YEAR),
    FormatHint.Y: (_G.YEAR,),
    FormatHint.DMY: (_G.LOCAL_DATE, _G.YEAR_MONTH, _G.YEAR),
    FormatHint.MDY: (_G.LOCAL_DATE, _G.YEAR_MONTH, _G.YEAR),
    FormatHint.HAN: (_G.LOCAL_DATE, _G.YEAR_MONTH, _G.YEAR),
    FormatHint.NONE: (_G.LOCAL_DATE_TIME, _G.LOCAL_DATE, _G.YEAR_MONTH, _G.YEAR),
}


def candidate_granularities(hint: Optional[FormatHint]) -> Tuple[TemporalGranularity, ...]:
    return CANDIDATE_GRANULARITIES.get(hint or FormatHint.NONE, CANDIDATE_GRANULARITIES[FormatHint.NONE])


class CompiledDateParser:
    """One compiled pattern plus the format hint it stands for."""
    
    __slots__ = ("compiled", "hint", "granularities")
    
    def __init__(self, compiled: CompiledPattern, hint: FormatHint):
        self.compiled = compiled
        self.hint = hint
        self.granularities = candidate_granularities(hint)
    
    @property
    def pattern(self) -> str:
        return self.compiled.pattern
    
    def __repr__(self) -> str:
        return f"CompiledDateParser({self.compiled.pattern!r}, {self.hint.name})"
    
    def parse(self, text: str) -> Optional[TemporalValue]:
        """Parse ``text`` as the most specific temporal value possible.
        
        Returns:
            The parsed value, or None if the pattern does not fit
        """
        # return fast if minimum length is not met
        if len(text) < self.compiled.min_length:
            return None
        
        if self.compiled.normalizer is not None:
            text = self.compiled.normalizer.normalize(text)
        
        try:
            return self.compiled.formatter.parse_best(text, self.granularities)
        except DateTimeParseError:
            return None
