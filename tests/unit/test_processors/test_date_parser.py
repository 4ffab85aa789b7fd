"""
Unit tests for CompiledDateParser.

Tests the minimum length fast path, separator normalization and the
granularities each format hint may resolve to.
"""

import dataclasses
from datetime import date, datetime
from unittest.mock import Mock

import pytest

from numdate.processors.core.date_parser import (
    CANDIDATE_GRANULARITIES,
    CompiledDateParser,
    FormatHint,
    candidate_granularities
)
from numdate.processors.core.pattern_compiler import StrictFormatter, compile_pattern
from numdate.processors.core.temporal_types import TemporalGranularity as G, Year, YearMonth


class TestCandidateGranularities:
    """Test suite for the hint to granularity table"""

    @pytest.mark.unit
    def test_every_hint_has_candidates(self):
        """Test that no hint is missing from the table"""
        assert set(CANDIDATE_GRANULARITIES) == set(FormatHint)

    @pytest.mark.unit
    def test_only_date_time_hint_allows_offsets(self):
        """Test that zoned values are only produced for YMDT"""
        for hint, granularities in CANDIDATE_GRANULARITIES.items():
            assert (G.ZONED_DATE_TIME in granularities) == (hint is FormatHint.YMDT)

    @pytest.mark.unit
    def test_missing_hint_uses_none(self):
        """Test that None behaves like FormatHint.NONE"""
        assert candidate_granularities(None) == CANDIDATE_GRANULARITIES[FormatHint.NONE]
        assert candidate_granularities(FormatHint.Y) == (G.YEAR,)


class TestCompiledDateParser:
    """Test suite for CompiledDateParser"""

    @pytest.mark.unit
    def test_short_input_skips_the_formatter(self):
        """Test that inputs shorter than the pattern never reach the formatter"""
        compiled = compile_pattern("d/M/uuuu")
        formatter = Mock(spec=StrictFormatter)
        parser = CompiledDateParser(dataclasses.replace(compiled, formatter=formatter), FormatHint.DMY)
        
        assert parser.parse("1/2/999") is None
        formatter.parse_best.assert_not_called()
        
        parser.parse("1/2/1999")
        formatter.parse_best.assert_called_once_with("1/2/1999", CANDIDATE_GRANULARITIES[FormatHint.DMY])

    @pytest.mark.unit
    def test_alternative_separators_are_normalized(self):
        """Test that alias separators are rewritten before parsing"""
        parser = CompiledDateParser(compile_pattern("d/M/uuuu", "/", "-−"), FormatHint.DMY)
        
        assert parser.parse("21-12-1978") == date(1978, 12, 21)
        assert parser.parse("21−12−1978") == date(1978, 12, 21)
        assert parser.parse("21.12.1978") is None

    @pytest.mark.unit
    def test_parse_failure_returns_none(self):
        """Test that a pattern mismatch is not raised"""
        parser = CompiledDateParser(compile_pattern("uuuu-M-d"), FormatHint.YMD)
        
        assert parser.parse("1999-02-30") is None
        assert parser.parse("1999/02/03") is None

    @pytest.mark.unit
    def test_hint_limits_granularity(self):
        """Test that a YMD parser never returns a date-time"""
        compiled = compile_pattern("uuuu-M-d[ HH:mm:ss]")
        ymd = CompiledDateParser(compiled, FormatHint.YMD)
        ymdt = CompiledDateParser(compiled, FormatHint.YMDT)
        
        assert ymd.parse("1999-1-2 10:11:12") == date(1999, 1, 2)
        assert ymdt.parse("1999-1-2 10:11:12") == datetime(1999, 1, 2, 10, 11, 12)

    @pytest.mark.unit
    def test_partial_values(self):
        """Test year-month and year results"""
        assert CompiledDateParser(compile_pattern("uuuu-M"), FormatHint.YM).parse("1999-12") == YearMonth(1999, 12)
        assert CompiledDateParser(compile_pattern("uuuu"), FormatHint.Y).parse("1999") == Year(1999)

    @pytest.mark.unit
    def test_pattern_and_repr(self):
        """Test parser introspection"""
        parser = CompiledDateParser(compile_pattern("uuuu"), FormatHint.Y)
        
        assert parser.pattern == "uuuu"
        assert repr(parser) == "CompiledDateParser('uuuu', Y)"
