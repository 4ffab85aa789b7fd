"""Partial temporal values and the granularity ladder used by the parsers.

``datetime.datetime`` and ``datetime.date`` cover fully resolved values;
``YearMonth`` and ``Year`` cover partially resolved ones.
"""

import calendar
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Union


class TemporalGranularity(Enum):
    """Granularities a parsed value can be resolved to, most specific first."""
    ZONED_DATE_TIME = "zoned_date_time"
    LOCAL_DATE_TIME = "local_date_time"
    LOCAL_DATE = "local_date"
    YEAR_MONTH = "year_month"
    YEAR = "year"


@dataclass(frozen=True, order=True)
class YearMonth:
    """A year and month without a day, e.g. ``1978-12``."""
    year: int
    month: int
    
    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise ValueError(f"Invalid month: {self.month}")
    
    def at_day(self, day: int) -> date:
        return date(self.year, self.month, day)
    
    def at_end_of_month(self) -> date:
        return date(self.year, self.month, calendar.monthrange(self.year, self.month)[1])
    
    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


@dataclass(frozen=True, order=True)
class Year:
    """A calendar year, e.g. ``1978``."""
    value: int
    
    def at_day(self, day_of_year: int) -> date:
        return date.fromordinal(date(self.value, 1, 1).toordinal() + day_of_year - 1)
    
    def at_month(self, month: int) -> YearMonth:
        return YearMonth(self.value, month)
    
    def __str__(self) -> str:
        return f"{self.value:04d}"


TemporalValue = Union[datetime, date, YearMonth, Year]
