"""Pattern catalog

Data tables the engine is built from. The letter ``u`` always refers to the
proleptic year (as opposed to year-of-era). Brackets mark optional sections.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from .ambiguity_group import AmbiguityGroup
from .date_parser import CompiledDateParser, FormatHint
from .pattern_compiler import CHAR_HYPHEN, CHAR_MINUS, compile_pattern


@dataclass(frozen=True)
class PatternSpec:
    """One pattern, the hint it stands for and its optional separator aliases."""
    pattern: str
    hint: FormatHint
    separator: Optional[str] = None
    alternative_separators: Optional[str] = None


@dataclass(frozen=True)
class AmbiguityGroupSpec:
    """Competing patterns for one token layout."""
    preferred: Optional[PatternSpec]
    others: Tuple[PatternSpec, ...]


# separator is a hyphen
UNAMBIGUOUS_PATTERNS: Tuple[PatternSpec, ...] = (
    PatternSpec("uuuuMMdd", FormatHint.YMD),
    PatternSpec("uuuu-M-d[ HH:mm:ss]", FormatHint.YMDT),
    PatternSpec("uuuu-M-d'T'HH[:mm[:ss]]", FormatHint.YMDT),
    PatternSpec("uuuu-M-d'T'HHmm[ss]", FormatHint.YMDT),
    PatternSpec("uuuu-M-d'T'HH:mm:ssZ", FormatHint.YMDT),
    PatternSpec("uuuu-M-d'T'HH:mm:ssxxx", FormatHint.YMDT),  # 1978-12-21T02:12:43+01:00
    PatternSpec("uuuu-M-d'T'HH:mm:ss'Z'", FormatHint.YMDT),
    PatternSpec("uuuu-M", FormatHint.YM),
    PatternSpec("uuuu", FormatHint.Y),
    PatternSpec("uuuu年MM月dd日", FormatHint.HAN),
    PatternSpec("uuuu年M月d日", FormatHint.HAN),
    PatternSpec("uu年M月d日", FormatHint.HAN),
)

_SLASH_ALIASES = CHAR_HYPHEN + CHAR_MINUS


def _groups_for_year(year: str) -> Tuple[AmbiguityGroupSpec, ...]:
    return (
        # DE, DK, NO
        AmbiguityGroupSpec(
            preferred=PatternSpec(f"d.M.{year}", FormatHint.DMY),
            others=(PatternSpec(f"M.d.{year}", FormatHint.MDY),)
        ),
        # mostly the difference between FR, GB, ES (DMY) and US (MDY)
        AmbiguityGroupSpec(
            preferred=PatternSpec(f"d/M/{year}", FormatHint.DMY, "/", _SLASH_ALIASES),
            others=(PatternSpec(f"M/d/{year}", FormatHint.MDY, "/", _SLASH_ALIASES),)
        ),
        AmbiguityGroupSpec(
            preferred=PatternSpec(f"ddMM{year}", FormatHint.DMY),
            others=(PatternSpec(f"MMdd{year}", FormatHint.MDY),)
        ),
        # not official anywhere but seen in the wild
        AmbiguityGroupSpec(
            preferred=PatternSpec(f"d\\M\\{year}", FormatHint.DMY, "\\", "_"),
            others=(PatternSpec(f"M\\d\\{year}", FormatHint.MDY, "\\", "_"),)
        ),
    )


AMBIGUOUS_GROUPS = _groups_for_year("uuuu")
AMBIGUOUS_2_DIGITS_YEAR_GROUPS = _groups_for_year("uu")


def compile_parser(spec: PatternSpec, base_year: Optional[int] = None) -> CompiledDateParser:
    """Compile one catalog entry, binding a trailing 2 digit year to ``base_year`` if given."""
    compiled = compile_pattern(spec.pattern, spec.separator, spec.alternative_separators, base_year)
    return CompiledDateParser(compiled, spec.hint)


def build_group(spec: AmbiguityGroupSpec, base_year: Optional[int] = None) -> AmbiguityGroup:
    preferred = compile_parser(spec.preferred, base_year) if spec.preferred else None
    return AmbiguityGroup(preferred, [compile_parser(other, base_year) for other in spec.others])
