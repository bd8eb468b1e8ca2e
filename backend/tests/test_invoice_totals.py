# tests/test_invoice_totals.py
"""
Tests for the invoice totals calculator.
"""

from decimal import Decimal

import pytest

from invoicing.totals import calculate_line, compute_invoice_totals, parse_amount, resolve_unit_price


def test_discount_then_tax():
    totals = compute_invoice_totals([
        {"inventory_item_id": 1, "quantity": "2", "unit_price": "50", "discount": "10", "tax_rate": "18"},
    ])

    assert totals.subtotal == Decimal("90")
    assert totals.discount_total == Decimal("10")
    assert totals.tax_total == Decimal("16.2")
    assert totals.total == Decimal("106.2")
    assert totals.lines[0].line_total == Decimal("106.2")


def test_multiple_lines_accumulate():
    totals = compute_invoice_totals([
        {"quantity": 1, "unit_price": "100", "tax_rate": "5"},
        {"quantity": "3", "unit_price": "10.50"},
    ])

    assert totals.subtotal == Decimal("131.50")
    assert totals.tax_total == Decimal("5")
    assert totals.total == Decimal("136.50")


@pytest.mark.parametrize("quantity", ["", "0", "abc", None])
def test_lines_without_quantity_are_skipped(quantity):
    totals = compute_invoice_totals([
        {"quantity": quantity, "unit_price": "99"},
        {"quantity": "1", "unit_price": "10"},
    ])

    assert totals.subtotal == Decimal("10")
    assert [line.index for line in totals.lines] == [1]


def test_blank_discount_and_tax_count_as_zero():
    totals = compute_invoice_totals([{"quantity": "2", "unit_price": "5", "discount": "", "tax_rate": "x"}])
    assert totals.total == Decimal("10")


def test_unit_price_falls_back_to_item_price():
    lines = [{"inventory_item_id": 7, "quantity": "2", "unit_price": ""}]

    assert compute_invoice_totals(lines, {7: Decimal("12.50")}).subtotal == Decimal("25.00")
    assert compute_invoice_totals(lines, {}).subtotal == 0


def test_explicit_zero_price_is_kept():
    assert resolve_unit_price({"inventory_item_id": 7, "unit_price": "0"}, {7: Decimal("9")}) == 0


def test_calculate_line():
    line = calculate_line(Decimal("4"), Decimal("25"), Decimal("50"), Decimal("10"))

    assert line.base == Decimal("100")
    assert line.discount_amount == Decimal("50")
    assert line.taxable == Decimal("50")
    assert line.tax_amount == Decimal("5")
    assert line.line_total == Decimal("55")


def test_parse_amount():
    assert parse_amount(" 1.5 ") == Decimal("1.5")
    assert parse_amount("") is None
    assert parse_amount("NaN") is None
    assert parse_amount(3) == Decimal("3")


def test_empty_draft():
    totals = compute_invoice_totals([])
    assert totals.total == 0
    assert totals.lines == []
