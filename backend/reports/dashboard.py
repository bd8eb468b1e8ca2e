# reports/dashboard.py
"""
Dashboard metrics.

Works on the full, unfiltered entry log:
- monthly revenue / expense / profit series for charting
- year-to-date style summary with margin
- most recent entries
- top customers by invoiced amount
"""
from collections import defaultdict
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List, Sequence

from .snapshots import (
    UNKNOWN_PARTY_LABEL,
    AccountSnapshot,
    InvoiceSnapshot,
    JournalEntrySnapshot,
    PartySnapshot,
)


ZERO = Decimal("0.00")
HUNDRED = Decimal("100")

RECENT_ENTRIES_LIMIT = 8
TOP_CUSTOMERS_LIMIT = 6


@dataclass
class MonthlyMetric:
    month: str  # "YYYY-MM"
    label: str  # "Jan 2026"
    revenue: Decimal = ZERO
    expense: Decimal = ZERO

    @property
    def profit(self) -> Decimal:
        return self.revenue - self.expense


@dataclass(frozen=True)
class DashboardSummary:
    revenue: Decimal
    expense: Decimal
    profit: Decimal
    margin: Decimal


@dataclass(frozen=True)
class CustomerContribution:
    customer_id: int
    name: str
    amount: Decimal


@dataclass(frozen=True)
class DashboardMetrics:
    summary: DashboardSummary
    monthly: List[MonthlyMetric]
    recent_entries: List[JournalEntrySnapshot]
    top_customers: List[CustomerContribution]
    top_customers_total: Decimal


def profit_margin(revenue: Decimal, profit: Decimal) -> Decimal:
    """Profit as a percentage of revenue; 0 when there is no revenue."""
    if revenue == 0:
        return ZERO
    return profit / revenue * HUNDRED


def build_top_customers(
    invoices: Iterable[InvoiceSnapshot],
    parties: Sequence[PartySnapshot],
    limit: int = TOP_CUSTOMERS_LIMIT,
) -> List[CustomerContribution]:
    totals: Dict[int, Decimal] = defaultdict(lambda: ZERO)
    for invoice in invoices:
        totals[invoice.customer_id] += invoice.total

    names = {party.id: party.name for party in parties}
    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)[:limit]
    return [
        CustomerContribution(
            customer_id=customer_id,
            name=names.get(customer_id, UNKNOWN_PARTY_LABEL),
            amount=amount,
        )
        for customer_id, amount in ranked
    ]


def build_dashboard_metrics(
    entries: Sequence[JournalEntrySnapshot],
    accounts: Sequence[AccountSnapshot],
    invoices: Iterable[InvoiceSnapshot] = (),
    parties: Sequence[PartySnapshot] = (),
    recent_limit: int = RECENT_ENTRIES_LIMIT,
    top_customers_limit: int = TOP_CUSTOMERS_LIMIT,
) -> DashboardMetrics:
    revenue_ids = {a.id for a in accounts if a.account_type == "REVENUE"}
    expense_ids = {a.id for a in accounts if a.account_type == "EXPENSE"}

    buckets: Dict[str, MonthlyMetric] = {}
    revenue = ZERO
    expense = ZERO

    for entry in entries:
        month_key = entry.date.isoformat()[:7]
        bucket = buckets.get(month_key)
        if bucket is None:
            bucket = MonthlyMetric(month=month_key, label=entry.date.strftime("%b %Y"))
            buckets[month_key] = bucket

        for line in entry.lines:
            if line.account_id in revenue_ids:
                amount = line.credit - line.debit
                bucket.revenue += amount
                revenue += amount
            elif line.account_id in expense_ids:
                amount = line.debit - line.credit
                bucket.expense += amount
                expense += amount

    monthly = [buckets[key] for key in sorted(buckets)]
    profit = revenue - expense

    recent = sorted(entries, key=lambda e: e.date, reverse=True)[:recent_limit]

    top_customers = build_top_customers(invoices, parties, top_customers_limit)

    return DashboardMetrics(
        summary=DashboardSummary(
            revenue=revenue,
            expense=expense,
            profit=profit,
            margin=profit_margin(revenue, profit),
        ),
        monthly=monthly,
        recent_entries=recent,
        top_customers=top_customers,
        top_customers_total=sum((c.amount for c in top_customers), ZERO),
    )
