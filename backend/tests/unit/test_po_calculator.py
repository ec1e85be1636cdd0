"""
Unit tests for purchase order arithmetic.
"""
from decimal import Decimal

import pytest

from kore.services.po_calculator import (
    compute_line,
    compute_totals,
    line_amounts,
    parse_or_default,
    parse_quantity,
    round2,
)


@pytest.mark.unit
class TestParsing:
    """Tests for lenient numeric coercion."""

    @pytest.mark.parametrize("value,expected", [
        ("12.5", Decimal("12.5")),
        (7, Decimal("7")),
        (" 3 ", Decimal("3")),
        ("", Decimal("0")),
        ("abc", Decimal("0")),
        (None, Decimal("0")),
        (True, Decimal("0")),
        ("NaN", Decimal("0")),
        ("Infinity", Decimal("0")),
    ])
    def test_parse_or_default(self, value, expected):
        assert parse_or_default(value) == expected

    def test_parse_or_default_custom_default(self):
        assert parse_or_default("oops", 5) == Decimal("5")

    def test_parse_quantity_truncates(self):
        assert parse_quantity("3.9") == 3
        assert parse_quantity("x") == 0

    def test_round2_half_up(self):
        assert round2(Decimal("2.675")) == Decimal("2.68")
        assert round2(Decimal("2.665")) == Decimal("2.67")
        assert round2(Decimal("10")) == Decimal("10.00")


@pytest.mark.unit
class TestLineAmounts:
    """Tests for per-line tax and total."""

    def test_line_with_gst(self):
        """1000 at 18% for 3 units -> 180 tax per item, 3540 line total."""
        amounts = line_amounts(3, 1000, 18)
        assert amounts.tax_per_item == Decimal("180.00")
        assert amounts.unit_total == Decimal("3540.00")

    def test_tax_per_item_is_rounded_before_multiplying(self):
        amounts = line_amounts(3, "99.99", 5)
        # 99.99 * 5% = 4.9995 -> 5.00
        assert amounts.tax_per_item == Decimal("5.00")
        assert amounts.unit_total == Decimal("314.97")

    def test_invalid_inputs_fall_back_to_zero(self):
        amounts = line_amounts("two", "abc", None)
        assert amounts.tax_per_item == Decimal("0.00")
        assert amounts.unit_total == Decimal("0.00")

    def test_compute_line_returns_copy(self):
        line = {"item_name": "Runner", "quantity": 2, "base_price": 100, "tax_rate": 12}
        result = compute_line(line)

        assert result["tax_per_item"] == Decimal("12.00")
        assert result["unit_total"] == Decimal("224.00")
        assert result["item_name"] == "Runner"
        assert "tax_per_item" not in line


@pytest.mark.unit
class TestOrderTotals:
    """Tests for folding lines into order totals."""

    def test_discount_applies_to_pre_tax_subtotal(self):
        """Sub total 5000, 10% discount, tax 400 -> discount 500, total 4900."""
        lines = [
            {"quantity": 4, "base_price": 1000, "tax_rate": 5},
            {"quantity": 1, "base_price": 1000, "tax_rate": 20},
        ]
        totals = compute_totals(lines, 10)

        assert totals.sub_total == Decimal("5000")
        assert totals.total_tax == Decimal("400")
        assert totals.discount_amount == Decimal("500.00")
        assert totals.total == Decimal("4900.00")

    def test_empty_order(self):
        totals = compute_totals([], 15)
        assert totals.sub_total == 0
        assert totals.discount_amount == 0
        assert totals.total_tax == 0
        assert totals.total == 0

    def test_totals_independent_of_line_order(self):
        lines = [
            {"quantity": 3, "base_price": "249.50", "tax_rate": 12},
            {"quantity": 7, "base_price": "89.99", "tax_rate": 5},
            {"quantity": 1, "base_price": "1999", "tax_rate": 18},
        ]
        forward = compute_totals(lines, "7.5")
        backward = compute_totals(list(reversed(lines)), "7.5")
        assert forward == backward

    def test_invalid_discount_is_zero(self):
        totals = compute_totals([{"quantity": 1, "base_price": 100, "tax_rate": 0}], "ten")
        assert totals.discount_amount == Decimal("0.00")
        assert totals.total == Decimal("100.00")

    def test_total_tax_uses_rounded_tax_per_item(self):
        totals = compute_totals([{"quantity": 3, "base_price": "99.99", "tax_rate": 5}])
        assert totals.total_tax == Decimal("15.00")
