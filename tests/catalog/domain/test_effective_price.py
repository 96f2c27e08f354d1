"""Tests for the effective (discounted) price calculation."""

import pytest
from catalog.product.pricing import effective_price


class TestEffectivePrice:
    def test_no_discount_returns_price_unchanged(self):
        assert effective_price(1999.5, 0) == 1999.5

    def test_missing_discount_returns_price_unchanged(self):
        assert effective_price(250) == 250

    def test_negative_discount_is_ignored(self):
        assert effective_price(250, -5) == 250

    @pytest.mark.parametrize(
        ("price", "discount", "expected"),
        [
            (1000, 10, 900),
            (999, 15, 849),  # 849.15
            (54999, 10, 49499),  # 49499.1
            (100, 100, 0),
            (199, 33, 133),  # 133.33
        ],
    )
    def test_discount_is_percentage_off_price(self, price, discount, expected):
        assert effective_price(price, discount) == expected

    def test_halves_round_up(self):
        # 5 * 0.9 = 4.5
        assert effective_price(5, 10) == 5
        # 15 * 0.9 = 13.5
        assert effective_price(15, 10) == 14

    def test_result_is_whole_currency_unit(self):
        assert isinstance(effective_price(333, 7), int)
