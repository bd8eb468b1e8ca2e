"""Stock read-side helpers: low-stock alerts, valuation and the movement ledger."""
from decimal import Decimal
from typing import Iterable, List


def low_stock_items(items: Iterable) -> List:
    """Items with a positive reorder point whose quantity has fallen to or below it."""
    return [item for item in items if item.is_low_stock]


def total_stock_value(items: Iterable) -> Decimal:
    """Sum of unit_price x quantity across items."""
    return sum((item.stock_value for item in items), Decimal("0.00"))


def stock_movements(entries: Iterable) -> List:
    """Ledger rows, most recent first."""
    return sorted(entries, key=lambda entry: (entry.date, entry.id), reverse=True)
