"""
Unit tests for parse outcomes and temporal value types.
"""

from datetime import date

import pytest

from numdate.processors.core.parse_result import Confidence, ParseOutcome, ParseStatus
from numdate.processors.core.temporal_types import Year, YearMonth


class TestParseOutcome:
    """Test suite for ParseOutcome factories"""

    @pytest.mark.unit
    def test_success(self):
        """Test a successful outcome"""
        outcome = ParseOutcome.success(Confidence.PROBABLE, date(1999, 4, 3), [date(1999, 3, 4)])
        
        assert outcome.is_successful
        assert outcome.status is ParseStatus.SUCCESS
        assert outcome.confidence is Confidence.PROBABLE
        assert outcome.alternative_payloads == [date(1999, 3, 4)]
        assert outcome.error is None

    @pytest.mark.unit
    def test_fail(self):
        """Test a failed outcome"""
        outcome = ParseOutcome.fail()
        
        assert not outcome.is_successful
        assert outcome.confidence is None
        assert outcome.payload is None
        assert outcome.alternative_payloads == []

    @pytest.mark.unit
    def test_error_keeps_cause(self):
        """Test an error outcome"""
        cause = ValueError("boom")
        outcome = ParseOutcome.error_of(cause)
        
        assert outcome.status is ParseStatus.ERROR
        assert outcome.error is cause
        assert ParseOutcome.error_of().error is None

    @pytest.mark.unit
    def test_outcomes_are_immutable(self):
        """Test that outcomes can not be changed"""
        outcome = ParseOutcome.fail()
        
        with pytest.raises(AttributeError):
            outcome.status = ParseStatus.SUCCESS


class TestConfidence:
    """Test suite for Confidence ordering"""

    @pytest.mark.unit
    def test_lower_of(self):
        """Test picking the lower confidence"""
        assert Confidence.lower_of(Confidence.DEFINITE, Confidence.PROBABLE) is Confidence.PROBABLE
        assert Confidence.lower_of(Confidence.POSSIBLE, Confidence.DEFINITE) is Confidence.POSSIBLE
        assert Confidence.lower_of(None, Confidence.DEFINITE) is Confidence.DEFINITE
        assert Confidence.lower_of(Confidence.PROBABLE, None) is Confidence.PROBABLE


class TestPartialValues:
    """Test suite for YearMonth and Year"""

    @pytest.mark.unit
    def test_year_month(self):
        """Test YearMonth validation and helpers"""
        value = YearMonth(1996, 2)
        
        assert str(value) == "1996-02"
        assert value.at_day(10) == date(1996, 2, 10)
        assert value.at_end_of_month() == date(1996, 2, 29)
        assert YearMonth(1996, 2) < YearMonth(1996, 3)
        with pytest.raises(ValueError):
            YearMonth(1996, 13)

    @pytest.mark.unit
    def test_year(self):
        """Test Year helpers"""
        value = Year(1978)
        
        assert str(value) == "1978"
        assert value.at_day(32) == date(1978, 2, 1)
        assert value.at_month(12) == YearMonth(1978, 12)
