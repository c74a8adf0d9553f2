"""Tests for quantity extraction and unit price normalization."""

from __future__ import annotations

import math

import pytest

from src.optimizer.quantity import (
    UNIT_PRICE_UNAVAILABLE,
    calculate_unit_price,
    extract_quantity,
    is_unit_price_available,
)


class TestExtractQuantity:
    @pytest.mark.parametrize(
        "title, expected",
        [
            ("Vitamin C 500mg, 120 Capsules", 120),
            ("Wireless Mouse", 1),
            ("Pack of 6 Towels", 6),
            ("Paper Towels, 12 Rolls", 12),
            ("AA Batteries 24-Pack", 24),
            ("Coffee Pods 48 ct", 48),
            ("Granola Bars – 30 Count", 30),
            ("Trash Bags, 50 per box", 50),
            ("Set of 4 Wine Glasses", 4),
            ("Sparkling Water 24 x 500ml", 24),
        ],
    )
    def test_patterns(self, title, expected):
        assert extract_quantity(title) == expected

    def test_case_insensitive(self):
        assert extract_quantity("PACK OF 3 SOCKS") == 3
        assert extract_quantity("100 TABLETS") == 100

    def test_first_pattern_wins(self):
        # "10 pack" matches the count pattern before "set of 3" is tried
        assert extract_quantity("Set of 3 boxes, 10 pack") == 10

    def test_empty_and_missing_title(self):
        assert extract_quantity("") == 1
        assert extract_quantity(None) == 1

    def test_non_string_title(self):
        assert extract_quantity(12345) == 1

    def test_out_of_range_falls_through(self):
        assert extract_quantity("10000 count labels") == 1
        assert extract_quantity("0 pack") == 1

    def test_out_of_range_tries_next_pattern(self):
        assert extract_quantity("20000 sheets, pack of 5") == 5

    def test_upper_bound(self):
        assert extract_quantity("9999 pieces") == 9999


class TestCalculateUnitPrice:
    def test_divides_by_quantity(self):
        assert calculate_unit_price(24.00, 6) == pytest.approx(4.00)

    def test_zero_price_is_unavailable(self):
        assert calculate_unit_price(0, 3) == UNIT_PRICE_UNAVAILABLE

    def test_missing_price_is_unavailable(self):
        assert calculate_unit_price(None, 1) == UNIT_PRICE_UNAVAILABLE

    def test_negative_price_is_unavailable(self):
        assert calculate_unit_price(-5.0, 2) == UNIT_PRICE_UNAVAILABLE

    def test_nan_price_is_unavailable(self):
        assert calculate_unit_price(float("nan"), 2) == UNIT_PRICE_UNAVAILABLE

    def test_quantity_floored_at_one(self):
        assert calculate_unit_price(9.0, 0) == pytest.approx(9.0)
        assert calculate_unit_price(9.0, None) == pytest.approx(9.0)
        assert calculate_unit_price(9.0, -4) == pytest.approx(9.0)

    def test_sentinel_sorts_worst(self):
        prices = [calculate_unit_price(None, 1), calculate_unit_price(5.0, 1), 1000.0]
        assert sorted(prices)[-1] == UNIT_PRICE_UNAVAILABLE

    def test_sentinel_is_never_nan(self):
        assert not math.isnan(calculate_unit_price(None, 1))


class TestIsUnitPriceAvailable:
    def test_finite(self):
        assert is_unit_price_available(4.0)

    def test_sentinel(self):
        assert not is_unit_price_available(UNIT_PRICE_UNAVAILABLE)

    def test_none_and_nan(self):
        assert not is_unit_price_available(None)
        assert not is_unit_price_available(float("nan"))
