"""
Unit Tests for Numeric Utilities

These tests verify that:
- Locale-formatted numbers from quote pages are parsed correctly
- Non-numeric input is reported as NaN instead of raising
- Change percentages are computed and clamped to the configured bound

Run with:
    pytest tests/unit/test_numbers.py -v
"""

import math

import pytest

from core.utils.numbers import clamp, is_number, parse_locale_number, percent_change


# ============================================
# Tests for parse_locale_number
# ============================================

class TestParseLocaleNumber:
    """Tests for locale-aware number parsing"""

    def test_brazilian_thousands_and_decimal(self):
        """Verify '1.234,56' (pt-BR) parses to 1234.56"""
        assert parse_locale_number("1.234,56") == pytest.approx(1234.56)

    def test_english_thousands_and_decimal(self):
        """Verify '1,234.56' (en-US) parses to 1234.56"""
        assert parse_locale_number("1,234.56") == pytest.approx(1234.56)

    def test_currency_prefix_is_stripped(self):
        """Verify currency symbols and spaces are ignored"""
        assert parse_locale_number("R$ 12,30") == pytest.approx(12.30)
        assert parse_locale_number("US$ 512,07") == pytest.approx(512.07)

    def test_percent_sign_is_stripped(self):
        """Verify a trailing percent sign is ignored"""
        assert parse_locale_number("-1,25%") == pytest.approx(-1.25)

    def test_large_brazilian_number(self):
        """Verify multiple thousands separators are removed"""
        assert parse_locale_number("R$ 612.345,10") == pytest.approx(612345.10)

    def test_comma_only_is_decimal(self):
        """Verify a lone comma is treated as the decimal separator"""
        assert parse_locale_number("5,4321") == pytest.approx(5.4321)

    def test_plain_integer(self):
        """Verify text without separators parses as-is"""
        assert parse_locale_number("42") == 42.0

    def test_period_only_is_kept(self):
        """Verify text with only periods is passed through to float parsing"""
        assert parse_locale_number("5.10") == pytest.approx(5.10)

    def test_signed_values(self):
        """Verify explicit signs are preserved"""
        assert parse_locale_number("+3,5") == pytest.approx(3.5)
        assert parse_locale_number("-0,75") == pytest.approx(-0.75)

    @pytest.mark.parametrize("text", ["", None, "abc", "—", "R$", "+-", "1-2"])
    def test_non_numeric_returns_nan(self, text):
        """Verify empty or non-numeric text is reported as NaN"""
        assert math.isnan(parse_locale_number(text))


# ============================================
# Tests for clamp / is_number
# ============================================

class TestClamp:
    """Tests for clamp"""

    def test_clamp_upper_bound(self):
        assert clamp(1000, -50, 50) == 50

    def test_clamp_lower_bound(self):
        assert clamp(-1000, -50, 50) == -50

    def test_clamp_inside_range(self):
        assert clamp(12.5, -50, 50) == 12.5


class TestIsNumber:
    """Tests for is_number"""

    def test_finite_values(self):
        assert is_number(0.0)
        assert is_number(-3.2)

    def test_non_finite_values(self):
        assert not is_number(None)
        assert not is_number(math.nan)
        assert not is_number(math.inf)


# ============================================
# Tests for percent_change
# ============================================

class TestPercentChange:
    """Tests for percent_change"""

    def test_positive_change(self):
        """Verify 5.00 -> 5.10 is roughly +2%"""
        assert percent_change(5.10, 5.00) == pytest.approx(2.0)

    def test_negative_change(self):
        assert percent_change(9.0, 10.0) == pytest.approx(-10.0)

    def test_change_is_clamped_high(self):
        """Verify extreme moves are capped at +50%"""
        assert percent_change(1000.0, 1.0) == 50.0

    def test_change_is_clamped_low(self):
        """Verify extreme drops are capped at -50%"""
        assert percent_change(0.01, 100.0) == -50.0

    def test_custom_limit(self):
        assert percent_change(20.0, 10.0, limit=10.0) == 10.0

    def test_zero_reference_returns_none(self):
        assert percent_change(10.0, 0.0) is None

    def test_missing_values_return_none(self):
        assert percent_change(None, 10.0) is None
        assert percent_change(10.0, None) is None
        assert percent_change(math.nan, 10.0) is None
