# tests/test_conversion.py
"""
Conversion Tests - Unit Tests for Conversion and Price Formatting

This module tests the pure conversion engine: the identity short-circuit,
cent rounding, missing rates, and symbol placement in formatted prices.

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- localprice.domain.conversion (convert, format_price, round_cents)
- localprice.domain.currencies (registry, SUFFIX_CURRENCIES)
- pytest (testing framework)
"""
import math
import re

import pytest  # Testing framework for writing and running tests

from localprice.domain.conversion import convert, format_price, round_cents
from localprice.domain.currencies import SUFFIX_CURRENCIES, CurrencyRegistry, registry
from localprice.domain.errors import RateNotFoundError
from localprice.domain.models import CurrencyDescriptor, Placement

RATES = {"USD": 1.0, "EUR": 0.8567, "GBP": 0.79, "JPY": 149.5}


class TestConvert:
    @pytest.mark.parametrize("amount", [0, 1, 12.345, 999999.999, -5.5])
    @pytest.mark.parametrize("round_result", [True, False])
    def test_identity(self, amount, round_result):
        assert convert(amount, "EUR", "EUR", None, round_result) == amount

    def test_rounded(self):
        assert convert(100, "USD", "EUR", RATES, True) == 85.67

    def test_rounded_one_decimal(self):
        assert convert(100, "USD", "EUR", {"EUR": 0.855}, True) == 85.5

    def test_unrounded_is_raw_product(self):
        assert convert(3, "USD", "GBP", RATES) == 3 * 0.79

    def test_missing_rate(self):
        with pytest.raises(RateNotFoundError, match="XYZ"):
            convert(100, "USD", "XYZ", RATES, False)

    def test_missing_table(self):
        with pytest.raises(RateNotFoundError):
            convert(100, "USD", "EUR", None)


class TestRoundCents:
    @pytest.mark.parametrize("value,expected", [
        (85.67, 85.67),
        (1.005, 1.01),
        (2.675, 2.68),
        (0.125, 0.13),
        (-0.125, -0.13),
        (85.66999999999999, 85.67),
        (10, 10.0),
    ])
    def test_half_away_from_zero(self, value, expected):
        assert round_cents(value) == expected

    @pytest.mark.parametrize("value", [1e15, 1.234e26, -5e300, float("inf"), float("-inf")])
    def test_values_without_cents_pass_through(self, value):
        assert round_cents(value) == value

    def test_nan_passes_through(self):
        assert math.isnan(round_cents(float("nan")))

    def test_convert_huge_amount_rounded(self):
        assert convert(1e26, "USD", "JPY", {"JPY": 149.5}, True) == 1e26 * 149.5

    def test_convert_infinite_amount_rounded(self):
        assert convert(float("inf"), "USD", "EUR", {"EUR": 0.9}, True) == float("inf")


class TestFormatPrice:
    def test_prefix_currency(self):
        assert format_price(12.5, "USD") == "$12.50"
        assert format_price(1234.5, "GBP") == "£1234.50"

    def test_suffix_currency(self):
        assert format_price(12.5, "EUR") == "12.50€"
        assert format_price(100, "SEK") == "100.00kr"
        assert format_price(100, "NOK") == "100.00kr"
        assert format_price(100, "DKK") == "100.00kr"

    def test_unknown_currency(self):
        assert format_price(7, "XYZ") == "7.00 XYZ"

    def test_rounds_to_two_places(self):
        assert format_price(0.999, "USD") == "$1.00"
        assert format_price(149.5 * 3, "JPY") == "¥448.50"

    @pytest.mark.parametrize("code", registry.supported_codes())
    @pytest.mark.parametrize("amount", [0, 0.1, 5, 1234567.891])
    def test_always_two_fraction_digits(self, code, amount):
        assert re.search(r"\d\.\d{2}(?!\d)", format_price(amount, code))

    @pytest.mark.parametrize("code", registry.supported_codes())
    def test_symbol_placement(self, code):
        symbol = registry.describe(code).symbol
        formatted = format_price(42, code)
        if code in SUFFIX_CURRENCIES:
            assert formatted.endswith(symbol)
        else:
            assert formatted.startswith(symbol)

    def test_custom_registry(self):
        currencies = CurrencyRegistry(
            descriptors={"BTC": CurrencyDescriptor("BTC", "₿", "Bitcoin", Placement.SUFFIX)},
            country_map={},
        )
        assert format_price(1, "BTC", currencies) == "1.00₿"
        assert format_price(1, "USD", currencies) == "1.00 USD"
