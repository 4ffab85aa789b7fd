"""Utilities for working with parsed temporal values of mixed granularity."""

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Iterable, Optional

from dateutil.relativedelta import relativedelta
from dateutil.tz import tzutc

from .temporal_types import TemporalValue, Year, YearMonth

# resolution of a complete local date
COMPLETE_LOCAL_DATE_RESOLUTION = 3


@dataclass(frozen=True)
class AtomizedDateTime:
    """Individual fields of a temporal value, None where the value has no such field."""
    year: Optional[int] = None
    month: Optional[int] = None
    day: Optional[int] = None
    hour: Optional[int] = None
    minute: Optional[int] = None
    second: Optional[int] = None
    microsecond: Optional[int] = None

    @classmethod
    def of(cls, value: TemporalValue) -> "AtomizedDateTime":
        if isinstance(value, datetime):
            return cls(value.year, value.month, value.day, value.hour, value.minute,
                       value.second, value.microsecond)
        if isinstance(value, date):
            return cls(value.year, value.month, value.day)
        if isinstance(value, YearMonth):
            return cls(value.year, value.month)
        if isinstance(value, Year):
            return cls(value.value)
        raise TypeError(f"Unsupported temporal value: {value!r}")

    @property
    def resolution(self) -> int:
        """Number of consecutive fields present, starting from the year."""
        res = 0
        for part in (self.year, self.month, self.day, self.hour, self.minute, self.second, self.microsecond):
            if part is None:
                break
            res += 1
        return res

    @property
    def date_resolution(self) -> int:
        return min(self.resolution, COMPLETE_LOCAL_DATE_RESOLUTION)


def _strip_offset(value: datetime, ignore_offset: bool) -> datetime:
    if value.tzinfo is not None and not ignore_offset:
        return value.astimezone(tzutc()).replace(tzinfo=None)
    return value.replace(tzinfo=None)


def to_earliest_datetime(value: Optional[TemporalValue], ignore_offset: bool = False) -> Optional[datetime]:
    """Round a value to the start of the period it represents.

    A YearMonth becomes the first day of the month and a Year the first of
    January, both at midnight. An offset, if present, is applied to get a UTC
    time unless ``ignore_offset`` is set.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return _strip_offset(value, ignore_offset)
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, YearMonth):
        return datetime(value.year, value.month, 1)
    return datetime(value.value, 1, 1)


def to_latest_datetime(value: Optional[TemporalValue], ignore_offset: bool = False) -> Optional[datetime]:
    """Round a value to the end of the period it represents.

    1990 becomes 1990-12-31T23:59:59, 1996-02 becomes 1996-02-29T23:59:59.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return _strip_offset(value, ignore_offset)

    end_of_day = relativedelta(hour=23, minute=59, second=59)
    if isinstance(value, date):
        return datetime.combine(value, time.min) + end_of_day
    if isinstance(value, YearMonth):
        return datetime(value.year, value.month, 1) + relativedelta(day=31) + end_of_day
    return datetime(value.value, 12, 31) + end_of_day


def resolution(value: Optional[TemporalValue]) -> int:
    """Date resolution: 3 for a complete date (or finer), 2 for a year-month, 1 for a year, 0 for None."""
    if value is None:
        return 0
    return AtomizedDateTime.of(value).date_resolution


def best_resolution(v1: Optional[TemporalValue], v2: Optional[TemporalValue]) -> Optional[TemporalValue]:
    """Return the value with the finer resolution, provided the two do not contradict.

    2005-01 and 2005-01-01 give 2005-01-01; 2005-01 and 2005-02 give None.
    A None argument makes the other one the best resolution.
    """
    if v1 is None:
        return v2
    if v2 is None:
        return v1

    a1 = AtomizedDateTime.of(v1)
    a2 = AtomizedDateTime.of(v2)
    for name in ('year', 'month', 'day', 'hour', 'minute', 'second', 'microsecond'):
        f1, f2 = getattr(a1, name), getattr(a2, name)
        if f1 is not None and f2 is not None and f1 != f2:
            return None

    if a1.resolution > a2.resolution:
        return v1
    return v2


def same_date(v1: Optional[TemporalValue], v2: Optional[TemporalValue]) -> bool:
    """True if both values are complete dates (or finer) on the same day."""
    if v1 is None or v2 is None:
        return False

    a1 = AtomizedDateTime.of(v1)
    a2 = AtomizedDateTime.of(v2)
    if a1.date_resolution != COMPLETE_LOCAL_DATE_RESOLUTION or a2.date_resolution != COMPLETE_LOCAL_DATE_RESOLUTION:
        return False
    return (a1.year, a1.month, a1.day) == (a2.year, a2.month, a2.day)


def same_or_contained(v1: Optional[TemporalValue], v2: Optional[TemporalValue]) -> bool:
    """True if the values denote the same date or one period contains the other.

    The comparison does not go beyond date resolution. None gives False.
    """
    if v1 is None or v2 is None:
        return False

    a1 = AtomizedDateTime.of(v1)
    a2 = AtomizedDateTime.of(v2)
    if a1.year != a2.year:
        return False
    if a1.month is None or a2.month is None:
        return True
    if a1.month != a2.month:
        return False
    if a1.day is None or a2.day is None:
        return True
    return a1.day == a2.day


def resolve_ambiguous_dates(reliable: Optional[TemporalValue],
                            candidates: Iterable[TemporalValue]) -> Optional[TemporalValue]:
    """Pick the candidate falling on the same date as a reliable value.

    A DMY/MDY ambiguous date can be settled by another source, e.g. an
    event date matched against the separately recorded year, month and day.
    """
    for candidate in candidates:
        if same_date(reliable, candidate):
            return candidate
    return None
