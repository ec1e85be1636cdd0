"""
Purchase order arithmetic.

Pure functions, no database access. Line amounts are recomputed on every
change to quantity, base price or tax rate, and order totals are always a
fresh fold over the current line list.

    tax_per_item = round2(base_price * tax_rate / 100)
    unit_total   = round2((base_price + tax_per_item) * quantity)

    sub_total       = sum(base_price * quantity)      (pre-tax)
    discount_amount = round2(sub_total * discount_percent / 100)
    total_tax       = sum(tax_per_item * quantity)
    total           = round2(sub_total - discount_amount + total_tax)
"""
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_DOWN, ROUND_HALF_UP
from typing import Any, Iterable, Mapping

CENTS = Decimal("0.01")
ZERO = Decimal("0")


def parse_or_default(value: Any, default: Any = 0) -> Decimal:
    """
    Coerce form input to a Decimal, silently falling back to the default
    for anything that is not a finite number.
    """
    if value is None or isinstance(value, bool):
        return Decimal(default)
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return Decimal(default)
    if not number.is_finite():
        return Decimal(default)
    return number


def parse_quantity(value: Any) -> int:
    """Whole-unit quantity; fractions are truncated and bad input becomes 0"""
    return int(parse_or_default(value).to_integral_value(rounding=ROUND_DOWN))


def round2(value: Any) -> Decimal:
    """Round half-up on the cents boundary"""
    return Decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class LineAmounts:
    tax_per_item: Decimal
    unit_total: Decimal


@dataclass(frozen=True)
class OrderTotals:
    sub_total: Decimal
    discount_amount: Decimal
    total_tax: Decimal
    total: Decimal


def line_amounts(quantity: Any, base_price: Any, tax_rate: Any) -> LineAmounts:
    qty = parse_quantity(quantity)
    price = parse_or_default(base_price)
    rate = parse_or_default(tax_rate)
    tax_per_item = round2(price * rate / 100)
    unit_total = round2((price + tax_per_item) * qty)
    return LineAmounts(tax_per_item=tax_per_item, unit_total=unit_total)


def compute_line(line: Mapping[str, Any]) -> dict:
    """Return a copy of the line with tax_per_item and unit_total recomputed"""
    amounts = line_amounts(line.get("quantity"), line.get("base_price"), line.get("tax_rate"))
    updated = dict(line)
    updated["tax_per_item"] = amounts.tax_per_item
    updated["unit_total"] = amounts.unit_total
    return updated


def compute_totals(lines: Iterable[Mapping[str, Any]], discount_percent: Any = 0) -> OrderTotals:
    """Fold the full line list into order-level totals"""
    sub_total = ZERO
    total_tax = ZERO
    for line in lines:
        qty = parse_quantity(line.get("quantity"))
        price = parse_or_default(line.get("base_price"))
        tax_per_item = line_amounts(qty, price, line.get("tax_rate")).tax_per_item
        sub_total += price * qty
        total_tax += tax_per_item * qty

    discount_amount = round2(sub_total * parse_or_default(discount_percent) / 100)
    total = round2(sub_total - discount_amount + total_tax)
    return OrderTotals(
        sub_total=sub_total,
        discount_amount=discount_amount,
        total_tax=total_tax,
        total=total,
    )
