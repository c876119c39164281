import math

import pytest

from inkloop.errors import NOT_COMPUTABLE
from inkloop.formatting import (
    display_value,
    format_currency,
    format_hours,
    format_percent,
    format_rate,
    group_en_in,
)


class TestFormatCurrency:
    def test_groups_and_prefixes_symbol(self):
        assert format_currency(45000) == "₹45,000"

    def test_uses_indian_grouping_above_a_lakh(self):
        assert format_currency(331000) == "₹3,31,000"
        assert format_currency(12345678) == "₹1,23,45,678"

    def test_small_amounts_are_not_grouped(self):
        assert format_currency(0) == "₹0"
        assert format_currency(999) == "₹999"

    def test_rounds_half_up_to_whole_units(self):
        assert format_currency(7880.5) == "₹7,881"
        assert format_currency(2.5) == "₹3"
        assert format_currency(1000.4) == "₹1,000"

    def test_negative_amounts(self):
        assert format_currency(-1500) == "-₹1,500"

    @pytest.mark.parametrize("value", ["n/a", None, True, [1, 2], NOT_COMPUTABLE])
    def test_non_numeric_passes_through(self, value):
        assert format_currency(value) is value

    def test_nan_passes_through(self):
        assert math.isnan(format_currency(float("nan")))


class TestGrouping:
    @pytest.mark.parametrize(
        "digits, expected",
        [("1", "1"), ("1234", "1,234"), ("12345", "12,345"), ("123456", "1,23,456"), ("1234567", "12,34,567")],
    )
    def test_en_in_grouping(self, digits, expected):
        assert group_en_in(digits) == expected


class TestOtherFormats:
    def test_percent(self):
        assert format_percent(44.7) == "44.7%"
        assert format_percent(85) == "85.0%"
        assert format_percent(16.666) == "16.7%"

    def test_percent_of_sentinel(self):
        assert format_percent(NOT_COMPUTABLE) == "N/A"

    def test_hours(self):
        assert format_hours(214) == "214h"
        assert format_hours(1250) == "1,250h"

    def test_rate(self):
        assert format_rate(416) == "₹416/h"
        assert format_rate(NOT_COMPUTABLE) == "N/A"

    def test_display_value(self):
        assert display_value(NOT_COMPUTABLE) == "N/A"
        assert display_value(float("nan")) == "N/A"
        assert display_value(12) == 12
