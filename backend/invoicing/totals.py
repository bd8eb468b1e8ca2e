# invoicing/totals.py
"""
Invoice totals calculator.

Per line:
    base            = quantity x unit_price
    discount_amount = base x discount / 100
    taxable         = base - discount_amount
    tax_amount      = taxable x tax_rate / 100
    line_total      = taxable + tax_amount

Invoice:
    subtotal       = sum(taxable)
    discount_total = sum(discount_amount)
    tax_total      = sum(tax_amount)
    total          = subtotal + tax_total

Nothing is rounded here; values are quantized when persisted.
"""
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Dict, Iterable, List, Mapping, Optional


ZERO = Decimal("0")
HUNDRED = Decimal("100")


def parse_amount(value) -> Optional[Decimal]:
    """Decimal for numeric input; None for blank or unparsable values."""
    if value is None or value == "":
        return None
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    try:
        parsed = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    return parsed if parsed.is_finite() else None


@dataclass(frozen=True)
class LineAmounts:
    index: int
    quantity: Decimal
    unit_price: Decimal
    discount: Decimal
    tax_rate: Decimal
    base: Decimal
    discount_amount: Decimal
    taxable: Decimal
    tax_amount: Decimal

    @property
    def line_total(self) -> Decimal:
        return self.taxable + self.tax_amount


@dataclass(frozen=True)
class InvoiceTotals:
    subtotal: Decimal = ZERO
    discount_total: Decimal = ZERO
    tax_total: Decimal = ZERO
    lines: List[LineAmounts] = field(default_factory=list)

    @property
    def total(self) -> Decimal:
        return self.subtotal + self.tax_total


def calculate_line(quantity: Decimal, unit_price: Decimal, discount: Decimal, tax_rate: Decimal, index: int = 0) -> LineAmounts:
    base = quantity * unit_price
    discount_amount = base * discount / HUNDRED
    taxable = base - discount_amount
    tax_amount = taxable * tax_rate / HUNDRED
    return LineAmounts(
        index=index,
        quantity=quantity,
        unit_price=unit_price,
        discount=discount,
        tax_rate=tax_rate,
        base=base,
        discount_amount=discount_amount,
        taxable=taxable,
        tax_amount=tax_amount,
    )


def resolve_unit_price(line: Mapping, item_prices: Mapping) -> Decimal:
    """Line price, falling back to the inventory item's price, then 0."""
    price = parse_amount(line.get("unit_price"))
    if price is not None:
        return price
    fallback = item_prices.get(line.get("inventory_item_id"))
    return fallback if fallback is not None else ZERO


def compute_invoice_totals(lines: Iterable[Mapping], item_prices: Optional[Dict] = None) -> InvoiceTotals:
    """
    Aggregate totals for draft invoice lines.

    Args:
        lines: mappings with quantity, unit_price, discount, tax_rate and
            inventory_item_id; values may be strings, numbers or blank
        item_prices: {inventory_item_id: unit_price} used when a line has
            no price of its own

    Lines with a zero, blank or unparsable quantity contribute nothing.
    Blank or unparsable discount and tax rate count as 0.
    """
    item_prices = item_prices or {}

    subtotal = ZERO
    discount_total = ZERO
    tax_total = ZERO
    computed = []

    for index, line in enumerate(lines):
        quantity = parse_amount(line.get("quantity"))
        if not quantity:
            continue

        amounts = calculate_line(
            quantity=quantity,
            unit_price=resolve_unit_price(line, item_prices),
            discount=parse_amount(line.get("discount")) or ZERO,
            tax_rate=parse_amount(line.get("tax_rate")) or ZERO,
            index=index,
        )
        subtotal += amounts.taxable
        discount_total += amounts.discount_amount
        tax_total += amounts.tax_amount
        computed.append(amounts)

    return InvoiceTotals(
        subtotal=subtotal,
        discount_total=discount_total,
        tax_total=tax_total,
        lines=computed,
    )
