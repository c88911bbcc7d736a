"""Тесты для целочисленной арифметики цен."""

import pytest

from src.core.math import (
    MAX_DISCOUNT_PERCENT,
    apply_discount,
    clamp,
    clamp_discount,
    discount_amount,
    format_cents,
    line_total,
)


class TestClamp:
    def test_within_range(self):
        assert clamp(5, 0, 10) == 5

    def test_bounds(self):
        assert clamp(-1, 0, 10) == 0
        assert clamp(15, 0, 10) == 10

    def test_open_bounds(self):
        assert clamp(-100, max_value=3) == -100
        assert clamp(100, min_value=3) == 100


class TestDiscount:
    @pytest.mark.parametrize("percent,expected", [(-20, 0), (0, 0), (35, 35), (100, 100), (150, 100)])
    def test_clamp_discount(self, percent, expected):
        assert clamp_discount(percent) == expected

    def test_clamp_discount_custom_max(self):
        assert clamp_discount(80, max_percent=50) == 50
        assert clamp_discount(80, max_percent=500) == 80
        assert clamp_discount(150, max_percent=500) == MAX_DISCOUNT_PERCENT

    @pytest.mark.parametrize("percent", [12.5, "10", True, None])
    def test_non_integer_rejected(self, percent):
        with pytest.raises(ValueError):
            clamp_discount(percent)

    def test_discount_rounds_down(self):
        assert discount_amount(999, 50) == 499
        assert apply_discount(999, 50) == 500

    def test_total_never_negative(self):
        assert apply_discount(670, 250) == 0
        assert apply_discount(670, -10) == 670


class TestLineTotal:
    def test_multiplies(self):
        assert line_total(3110, 3) == 9330

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            line_total(-1, 1)
        with pytest.raises(ValueError):
            line_total(50, -1)


class TestFormatCents:
    @pytest.mark.parametrize(
        "cents,expected",
        [(0, "$0.00"), (5, "$0.05"), (12345, "$123.45"), (-250, "-$2.50")],
    )
    def test_format(self, cents, expected):
        assert format_cents(cents) == expected

    def test_currency_symbol(self):
        assert format_cents(5000, "€") == "€50.00"
