"""Date Pattern Compiler

Compiles textual date patterns (``uuuu-M-d'T'HH[:mm[:ss]]``, ``d.M.uu`` ...)
into immutable, strict formatters. Supported pattern letters:

    uuuu  4 digit year              uu   2 digit reduced year
    M/MM  month (1-2 / 2 digits)    d/dd day of month (1-2 / 2 digits)
    HH    hour of day               mm   minute          ss  second
    Z     offset +HHMM              x/xx/xxx offset +HH[MM] / +HHMM / +HH:MM
    X/XX/XXX same as x but also accepting 'Z' for UTC

Text between single quotes is literal (``''`` is a quote), ``[...]`` marks an
optional section and any other non-letter character is a literal.
"""

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, Iterable, List, Optional, Tuple

from dateutil.tz import tzoffset, tzutc

from ...core.error_handler import PatternError
from .temporal_types import TemporalGranularity, TemporalValue, Year, YearMonth

OPTIONAL_PATTERN_PART = re.compile(r"\[.*\]")

# ISO 8601 specifies a Unicode minus, with a hyphen as an alternative.
CHAR_HYPHEN = "-"
CHAR_MINUS = "−"

YEAR_2_DIGITS_PATTERN_SUFFIX = "uu"
IS_YEAR_2_DIGITS_PATTERN = re.compile(r"^.+[^u]" + YEAR_2_DIGITS_PATTERN_SUFFIX + r"$")

# plain "uu" resolves within 2000-2099
DEFAULT_REDUCED_BASE_YEAR = 2000

_NUMERIC_FIELDS = {
    'M': 'month',
    'd': 'day',
    'H': 'hour',
    'm': 'minute',
    's': 'second',
}

_OFFSET_REGEX = {
    1: r"[+-]\d{2}(?:\d{2})?",
    2: r"[+-]\d{4}",
    3: r"[+-]\d{2}:\d{2}",
}

_RESERVED_CHARS = "#{}"


class DateTimeParseError(ValueError):
    """Raised by a formatter when the input does not fit the pattern."""
    pass


@dataclass(frozen=True)
class ParsedFields:
    """Raw field values read from an input string."""
    year: Optional[int] = None
    month: Optional[int] = None
    day: Optional[int] = None
    hour: Optional[int] = None
    minute: Optional[int] = None
    second: Optional[int] = None
    offset_seconds: Optional[int] = None

    def local_date(self) -> Optional[date]:
        if self.year is None or self.month is None or self.day is None:
            return None
        return date(self.year, self.month, self.day)

    def local_date_time(self) -> Optional[datetime]:
        local_date = self.local_date()
        if local_date is None or self.hour is None:
            return None
        # seconds without minutes can not be defaulted
        if self.minute is None and self.second is not None:
            return None
        return datetime(local_date.year, local_date.month, local_date.day,
                        self.hour, self.minute or 0, self.second or 0)


def resolve_reduced_year(value: int, base_year: int) -> int:
    """Resolve a 2 digit year to the only year in [base_year, base_year + 99] ending with it."""
    base_part = base_year - base_year % 100
    year = base_part + value
    if year < base_year:
        year += 100
    return year


def _parse_offset(text: str) -> int:
    if text == 'Z':
        return 0
    sign = -1 if text[0] == '-' else 1
    digits = text[1:].replace(':', '')
    hours = int(digits[:2])
    minutes = int(digits[2:4]) if len(digits) > 2 else 0
    if hours > 18 or minutes > 59 or (hours == 18 and minutes > 0):
        raise DateTimeParseError(f"Offset out of range: {text}")
    return sign * (hours * 3600 + minutes * 60)


class StrictFormatter:
    """Immutable formatter reading one pattern with strict resolution.

    Field values are range checked (no rollover of day 31 into the next
    month) before any temporal value is built.
    """

    def __init__(self, regex: str, description: str, reduced_base_year: int = DEFAULT_REDUCED_BASE_YEAR):
        self._regex = re.compile(regex, re.ASCII)
        self.description = description
        self.reduced_base_year = reduced_base_year

    def __repr__(self) -> str:
        return f"StrictFormatter({self.description!r})"

    def parse_fields(self, text: str) -> ParsedFields:
        """Read and validate the raw fields of ``text``.

        Raises:
            DateTimeParseError: If the text does not fit or a field is out of range
        """
        match = self._regex.fullmatch(text)
        if match is None:
            raise DateTimeParseError(f"Text '{text}' could not be parsed with {self.description}")

        groups = {name: value for name, value in match.groupdict().items() if value is not None}
        values: Dict[str, int] = {}
        for name in ('year', 'month', 'day', 'hour', 'minute', 'second'):
            if name in groups:
                values[name] = int(groups[name])
        if 'year2' in groups:
            values['year'] = resolve_reduced_year(int(groups['year2']), self.reduced_base_year)
        if 'offset' in groups:
            values['offset_seconds'] = _parse_offset(groups['offset'])

        fields = ParsedFields(**values)
        self._check_ranges(text, fields)
        return fields

    def _check_ranges(self, text: str, fields: ParsedFields):
        limits = (
            ('month', fields.month, 1, 12),
            ('day', fields.day, 1, 31),
            ('hour', fields.hour, 0, 23),
            ('minute', fields.minute, 0, 59),
            ('second', fields.second, 0, 59),
        )
        for name, value, low, high in limits:
            if value is not None and not low <= value <= high:
                raise DateTimeParseError(f"Invalid value for {name} ({value}) in '{text}'")
        try:
            fields.local_date()
        except ValueError as e:
            raise DateTimeParseError(f"Invalid date '{text}': {e}") from e

    def parse_best(self, text: str, granularities: Iterable[TemporalGranularity]) -> TemporalValue:
        """Parse ``text`` and return the first granularity that fully resolves.

        Args:
            text: Input string
            granularities: Candidate granularities, most specific first

        Returns:
            The most specific temporal value obtainable from the parsed fields

        Raises:
            DateTimeParseError: If the text does not fit or no granularity resolves
        """
        fields = self.parse_fields(text)
        candidates = list(granularities)
        for granularity in candidates:
            value = _query(fields, granularity)
            if value is not None:
                return value
        raise DateTimeParseError(
            f"Text '{text}' could not be resolved to any of {[g.value for g in candidates]}"
        )


def _query(fields: ParsedFields, granularity: TemporalGranularity) -> Optional[TemporalValue]:
    if granularity is TemporalGranularity.ZONED_DATE_TIME:
        local = fields.local_date_time()
        if local is None or fields.offset_seconds is None:
            return None
        zone = tzutc() if fields.offset_seconds == 0 else tzoffset(None, fields.offset_seconds)
        return local.replace(tzinfo=zone)
    if granularity is TemporalGranularity.LOCAL_DATE_TIME:
        return fields.local_date_time()
    if granularity is TemporalGranularity.LOCAL_DATE:
        return fields.local_date()
    if granularity is TemporalGranularity.YEAR_MONTH:
        if fields.year is None or fields.month is None:
            return None
        return YearMonth(fields.year, fields.month)
    if fields.year is None:
        return None
    return Year(fields.year)


def _letter_regex(letter: str, count: int) -> Tuple[str, str, str]:
    """Map a run of pattern letters to (logical field, group name, regex)."""
    if letter == 'u':
        if count == 4:
            return 'year', 'year', r"\d{4}"
        if count == 2:
            return 'year', 'year2', r"\d{2}"
    elif letter in _NUMERIC_FIELDS:
        name = _NUMERIC_FIELDS[letter]
        if count == 1:
            return name, name, r"\d{1,2}"
        if count == 2:
            return name, name, r"\d{2}"
    elif letter == 'Z' and count <= 3:
        return 'offset', 'offset', r"[+-]\d{4}"
    elif letter == 'x' and count <= 3:
        return 'offset', 'offset', _OFFSET_REGEX[count]
    elif letter == 'X' and count <= 3:
        return 'offset', 'offset', f"Z|{_OFFSET_REGEX[count]}"
    raise PatternError(f"Unsupported pattern letters '{letter * count}'")


def translate_pattern(pattern: str) -> str:
    """Translate a date pattern into an equivalent regular expression.

    Raises:
        PatternError: If the pattern is malformed or uses unsupported letters
    """
    out: List[str] = []
    seen_fields = set()
    depth = 0
    i = 0
    n = len(pattern)

    while i < n:
        ch = pattern[i]
        if ch == "'":
            end = i + 1
            literal: List[str] = []
            while True:
                if end >= n:
                    raise PatternError(f"Unterminated quote in pattern '{pattern}'")
                if pattern[end] == "'":
                    if end > i + 1 and end + 1 < n and pattern[end + 1] == "'":
                        literal.append("'")
                        end += 2
                        continue
                    break
                literal.append(pattern[end])
                end += 1
            out.append(re.escape("".join(literal) if end > i + 1 else "'"))
            i = end + 1
        elif ch == '[':
            out.append("(?:")
            depth += 1
            i += 1
        elif ch == ']':
            if depth == 0:
                raise PatternError(f"Unbalanced ']' in pattern '{pattern}'")
            out.append(")?")
            depth -= 1
            i += 1
        elif ch.isascii() and ch.isalpha():
            end = i
            while end < n and pattern[end] == ch:
                end += 1
            logical, group, regex = _letter_regex(ch, end - i)
            if logical in seen_fields:
                raise PatternError(f"Field '{logical}' appears twice in pattern '{pattern}'")
            seen_fields.add(logical)
            out.append(f"(?P<{group}>{regex})")
            i = end
        elif ch in _RESERVED_CHARS:
            raise PatternError(f"Reserved character '{ch}' in pattern '{pattern}'")
        else:
            out.append(re.escape(ch))
            i += 1

    if depth != 0:
        raise PatternError(f"Unbalanced '[' in pattern '{pattern}'")
    return "".join(out)


def minimum_length(pattern: str) -> int:
    """Minimum input length for ``pattern``: its length without optional sections and quotes."""
    return len(OPTIONAL_PATTERN_PART.sub("", pattern).replace("'", ""))


@dataclass(frozen=True)
class SeparatorNormalizer:
    """Rewrites alternative separators to the one the pattern uses."""
    separator: str
    alternatives: str
    _table: Dict[int, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, '_table', {ord(c): self.separator for c in self.alternatives})

    def normalize(self, text: str) -> str:
        return text.translate(self._table)


@dataclass(frozen=True)
class CompiledPattern:
    """An immutable compiled date pattern."""
    pattern: str
    formatter: StrictFormatter
    min_length: int
    normalizer: Optional[SeparatorNormalizer] = None
    base_year: Optional[int] = None


def _build_2_digits_year_formatter(pattern: str, base_year: int) -> StrictFormatter:
    if not (IS_YEAR_2_DIGITS_PATTERN.match(pattern) or pattern == YEAR_2_DIGITS_PATTERN_SUFFIX):
        raise PatternError(f"Pattern '{pattern}' must end with a 2 digit year ('uu')")

    prefix = pattern[:-len(YEAR_2_DIGITS_PATTERN_SUFFIX)]
    prefix_regex = translate_pattern(prefix)
    if "(?P<year" in prefix_regex:
        raise PatternError(f"Pattern '{pattern}' must not contain another year field")
    return StrictFormatter(prefix_regex + r"(?P<year2>\d{2})",
                           f"{pattern} (base year {base_year})",
                           reduced_base_year=base_year)


def compile_pattern(pattern: str, separator: Optional[str] = None,
                    alternative_separators: Optional[str] = None,
                    base_year: Optional[int] = None) -> CompiledPattern:
    """Compile a date pattern.

    Args:
        pattern: Date pattern, see module documentation
        separator: Separator used in the pattern, replacing ``alternative_separators``
        alternative_separators: Characters accepted in place of ``separator``
        base_year: Start of the 100 year window of a trailing 2 digit year

    Returns:
        Compiled pattern

    Raises:
        PatternError: If the pattern or separators are malformed
    """
    if not pattern:
        raise PatternError("Pattern must not be empty")

    normalizer = None
    if separator is not None or alternative_separators is not None:
        if not separator or not separator.strip():
            raise PatternError("separator must NOT be blank")
        if not alternative_separators or not alternative_separators.strip():
            raise PatternError("alternative_separators must NOT be blank")
        normalizer = SeparatorNormalizer(separator, alternative_separators)

    if base_year is not None:
        formatter = _build_2_digits_year_formatter(pattern, base_year)
    else:
        formatter = StrictFormatter(translate_pattern(pattern), pattern)

    return CompiledPattern(
        pattern=pattern,
        formatter=formatter,
        min_length=minimum_length(pattern),
        normalizer=normalizer,
        base_year=base_year
    )


def build_iso_fields_formatter() -> StrictFormatter:
    """Formatter for joined year[-month[-day]] strings (2-4 digit year, 1-2 digit month and day)."""
    return StrictFormatter(
        r"(?P<year>\d{2,4})(?:-(?P<month>\d{1,2})(?:-(?P<day>\d{1,2}))?)?",
        "uuuu[-M[-d]]"
    )
