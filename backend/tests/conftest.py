# tests/conftest.py
"""
Pytest fixtures for Ledgerbook tests.

Two families of fixtures:
- snapshot fixtures (no database) feed the pure report builders
- model fixtures (need ``db``) go through the command layer
"""

import pytest
from datetime import date
from decimal import Decimal

from rest_framework.test import APIClient

from accounting.commands import create_journal_entry, seed_chart_of_accounts
from accounting.models import Account
from inventory.commands import create_inventory_item, create_warehouse
from parties.commands import create_party
from reports.snapshots import (
    AccountSnapshot,
    InvoiceSnapshot,
    JournalEntrySnapshot,
    JournalLineSnapshot,
    PartySnapshot,
)


def D(value) -> Decimal:
    return Decimal(str(value))


def entry(entry_id, on, reference, *lines, narration=""):
    """Build a JournalEntrySnapshot from (account_id, debit, credit) tuples."""
    return JournalEntrySnapshot(
        id=entry_id,
        date=on,
        reference=reference,
        narration=narration,
        lines=tuple(
            JournalLineSnapshot(account_id=account_id, debit=D(debit), credit=D(credit))
            for account_id, debit, credit in lines
        ),
    )


# =============================================================================
# Snapshot Fixtures (no database)
# =============================================================================

CASH = 1
BANK = 2
PAYABLE = 3
CAPITAL = 4
SALES = 5
RENT = 6


@pytest.fixture
def accounts():
    return (
        AccountSnapshot(id=CASH, name="Cash", account_type="ASSET", code="1000"),
        AccountSnapshot(id=BANK, name="Bank", account_type="ASSET", code="1010"),
        AccountSnapshot(id=PAYABLE, name="Accounts Payable", account_type="LIABILITY", code="2000"),
        AccountSnapshot(id=CAPITAL, name="Owner's Capital", account_type="EQUITY", code="3000"),
        AccountSnapshot(id=SALES, name="Sales Revenue", account_type="REVENUE", code="4000"),
        AccountSnapshot(id=RENT, name="Rent Expense", account_type="EXPENSE", code="5100"),
    )


@pytest.fixture
def entries():
    """
    Capital 10,000 in January, a 1,000 cash sale in February, rent 400
    paid from the bank in February and 300 on credit in March.
    """
    return (
        entry(1, date(2024, 1, 5), "JRN-1", (BANK, 10000, 0), (CAPITAL, 0, 10000), narration="Owner investment"),
        entry(2, date(2024, 2, 10), "JRN-2", (CASH, 1000, 0), (SALES, 0, 1000), narration="Counter sale"),
        entry(3, date(2024, 2, 28), "JRN-3", (RENT, 400, 0), (BANK, 0, 400), narration="February rent"),
        entry(4, date(2024, 3, 31), "JRN-4", (RENT, 300, 0), (PAYABLE, 0, 300), narration="March rent"),
    )


@pytest.fixture
def parties():
    return (
        PartySnapshot(id=1, name="Acme Traders", party_type="customer"),
        PartySnapshot(id=2, name="Bright Stores", party_type="customer"),
    )


@pytest.fixture
def invoices():
    return (
        InvoiceSnapshot(1, "INV-2024-0001", date(2024, 2, 1), 1, D("500.00"), "issued"),
        InvoiceSnapshot(2, "INV-2024-0002", date(2024, 2, 5), 2, D("900.00"), "paid"),
        InvoiceSnapshot(3, "INV-2024-0003", date(2024, 3, 1), 1, D("700.00"), "issued"),
        # customer removed after invoicing
        InvoiceSnapshot(4, "INV-2024-0004", date(2024, 3, 9), 99, D("50.00"), "issued"),
    )


# =============================================================================
# Model Fixtures
# =============================================================================

@pytest.fixture
def chart(db):
    """Seeded system chart of accounts keyed by code."""
    seed_chart_of_accounts()
    return {account.code: account for account in Account.objects.all()}


@pytest.fixture
def cash_sale(chart):
    result = create_journal_entry(
        date=date(2024, 2, 10),
        reference="SALE-1",
        narration="Counter sale",
        lines=[
            {"account_id": chart["1000"].id, "debit": "1000", "credit": ""},
            {"account_id": chart["4000"].id, "debit": "", "credit": "1000"},
        ],
    )
    assert result.success, result.error
    return result.data


@pytest.fixture
def warehouse(db):
    return create_warehouse(name="Main Store", location="Pune").data


@pytest.fixture
def second_warehouse(db):
    return create_warehouse(name="Overflow", location="Nashik").data


@pytest.fixture
def item(warehouse):
    result = create_inventory_item(
        sku="wid-1",
        name="Widget",
        unit_price="50",
        quantity="10",
        preferred_warehouse_id=warehouse.id,
        reorder_point="5",
    )
    assert result.success, result.error
    return result.data


@pytest.fixture
def customer(db):
    return create_party(
        name="Acme Traders",
        party_type="customer",
        address="12 Market Road",
        email="accounts@acme.example",
    ).data


@pytest.fixture
def api_client():
    return APIClient()
