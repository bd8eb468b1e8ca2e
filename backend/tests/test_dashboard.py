# tests/test_dashboard.py
"""
Tests for dashboard metrics: monthly buckets, margin, recent entries and
top customers.
"""

from datetime import date
from decimal import Decimal

from reports.dashboard import build_dashboard_metrics, build_top_customers, profit_margin
from reports.snapshots import UNKNOWN_PARTY_LABEL

from .conftest import CASH, SALES, entry


class TestProfitMargin:
    def test_zero_revenue_gives_zero_margin(self):
        assert profit_margin(Decimal("0"), Decimal("-250")) == 0

    def test_margin_is_percentage_of_revenue(self):
        assert profit_margin(Decimal("1000"), Decimal("300")) == Decimal("30")


class TestDashboardMetrics:
    def test_summary(self, entries, accounts):
        metrics = build_dashboard_metrics(entries, accounts)

        assert metrics.summary.revenue == Decimal("1000")
        assert metrics.summary.expense == Decimal("700")
        assert metrics.summary.profit == Decimal("300")
        assert metrics.summary.margin == Decimal("30")

    def test_monthly_buckets_sorted_by_month(self, entries, accounts):
        metrics = build_dashboard_metrics(entries, accounts)

        assert [m.month for m in metrics.monthly] == ["2024-01", "2024-02", "2024-03"]
        assert [m.label for m in metrics.monthly] == ["Jan 2024", "Feb 2024", "Mar 2024"]

        january, february, march = metrics.monthly
        assert (january.revenue, january.expense) == (0, 0)
        assert (february.revenue, february.expense, february.profit) == (
            Decimal("1000"), Decimal("400"), Decimal("600"),
        )
        assert march.profit == Decimal("-300")

    def test_bucket_totals_match_summary(self, entries, accounts):
        metrics = build_dashboard_metrics(entries, accounts)

        assert sum(m.revenue for m in metrics.monthly) == metrics.summary.revenue
        assert sum(m.expense for m in metrics.monthly) == metrics.summary.expense

    def test_same_month_in_different_years_stays_separate(self, accounts):
        entries = [
            entry(1, date(2023, 6, 1), "A", (CASH, 10, 0), (SALES, 0, 10)),
            entry(2, date(2024, 6, 1), "B", (CASH, 20, 0), (SALES, 0, 20)),
        ]

        metrics = build_dashboard_metrics(entries, accounts)

        assert [(m.month, m.revenue) for m in metrics.monthly] == [
            ("2023-06", Decimal("10")),
            ("2024-06", Decimal("20")),
        ]

    def test_recent_entries_newest_first_and_limited(self, entries, accounts):
        metrics = build_dashboard_metrics(entries, accounts, recent_limit=2)
        assert [e.id for e in metrics.recent_entries] == [4, 3]

    def test_empty_ledger(self, accounts):
        metrics = build_dashboard_metrics([], accounts)

        assert metrics.monthly == []
        assert metrics.summary.margin == 0
        assert metrics.top_customers == []
        assert metrics.top_customers_total == 0


class TestTopCustomers:
    def test_ranked_by_invoiced_total(self, invoices, parties):
        top = build_top_customers(invoices, parties)

        assert [(c.name, c.amount) for c in top] == [
            ("Acme Traders", Decimal("1200.00")),
            ("Bright Stores", Decimal("900.00")),
            (UNKNOWN_PARTY_LABEL, Decimal("50.00")),
        ]

    def test_limit_and_total(self, entries, accounts, invoices, parties):
        metrics = build_dashboard_metrics(
            entries, accounts, invoices=invoices, parties=parties, top_customers_limit=2,
        )

        assert [c.customer_id for c in metrics.top_customers] == [1, 2]
        assert metrics.top_customers_total == Decimal("2100.00")
