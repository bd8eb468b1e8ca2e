# tests/test_invoicing.py
"""
Tests for invoice creation, numbering and status changes.
"""

from datetime import date
from decimal import Decimal

import pytest

from inventory.models import InventoryItem
from invoicing.commands import create_invoice, delete_invoice, next_invoice_number, update_invoice_status
from invoicing.models import Invoice, InvoiceLine
from parties.commands import delete_party
from reports.repository import OrmLedgerRepository
from reports.dashboard import build_top_customers
from reports.snapshots import UNKNOWN_PARTY_LABEL


@pytest.fixture
def invoice(customer, item, warehouse):
    result = create_invoice(
        customer_id=customer.id,
        date=date(2024, 4, 2),
        lines=[
            {
                "inventory_item_id": item.id,
                "warehouse_id": warehouse.id,
                "quantity": "2",
                "unit_price": "50",
                "discount": "10",
                "tax_rate": "18",
            },
        ],
    )
    assert result.success, result.error
    return result.data


@pytest.mark.django_db
class TestCreateInvoice:
    def test_totals_are_stored_rounded(self, invoice):
        assert invoice.subtotal == Decimal("90.00")
        assert invoice.discount_total == Decimal("10.00")
        assert invoice.tax_total == Decimal("16.20")
        assert invoice.total == Decimal("106.20")
        assert invoice.status == Invoice.Status.ISSUED

    def test_line_is_stored(self, invoice, item):
        line = invoice.lines.get()
        assert line.line_no == 1
        assert line.inventory_item_id == item.id
        assert line.line_total == Decimal("106.20")

    def test_number_and_addresses_default(self, invoice, customer):
        assert invoice.invoice_number == "INV-2024-0001"
        assert invoice.billing_address == customer.address
        assert invoice.shipping_address == customer.address

    def test_does_not_touch_stock(self, invoice, item):
        assert InventoryItem.objects.get(pk=item.id).quantity == Decimal("10.000")

    def test_unit_price_falls_back_to_item(self, customer, item):
        result = create_invoice(
            customer_id=customer.id,
            date=date(2024, 4, 2),
            lines=[{"inventory_item_id": item.id, "quantity": "3", "unit_price": ""}],
        )

        assert result.success
        assert result.data.total == Decimal("150.00")
        assert result.data.lines.get().unit_price == Decimal("50.00")

    def test_zero_quantity_lines_are_dropped(self, customer, item):
        result = create_invoice(
            customer_id=customer.id,
            date=date(2024, 4, 2),
            lines=[
                {"inventory_item_id": item.id, "quantity": "0", "unit_price": "10"},
                {"inventory_item_id": item.id, "quantity": "1", "unit_price": "10"},
            ],
        )

        assert result.success
        assert InvoiceLine.objects.filter(invoice=result.data).count() == 1

    def test_stored_values_add_up(self, customer, item):
        result = create_invoice(
            customer_id=customer.id,
            date=date(2024, 4, 2),
            lines=[{"inventory_item_id": item.id, "quantity": "3", "unit_price": "3.335", "tax_rate": "0.05"}],
        )

        assert result.success
        invoice = Invoice.objects.get(pk=result.data.id)
        line = invoice.lines.get()
        assert line.unit_price == Decimal("3.34")
        assert line.quantity * line.unit_price == invoice.subtotal == Decimal("10.02")
        assert invoice.tax_total == Decimal("0.01")
        assert invoice.total == invoice.subtotal + invoice.tax_total == Decimal("10.03")
        assert line.line_total == invoice.total

    @pytest.mark.parametrize(
        "overrides,error",
        [
            ({"customer_id": None}, "Select a customer for the invoice."),
            ({"date": None}, "Invoice date is required."),
            ({"lines": []}, "Invoice must contain at least one billable line."),
            ({"lines": [{"inventory_item_id": None, "quantity": "1"}]}, "Each line requires an inventory item."),
            ({"customer_id": 9999}, "Customer not found."),
        ],
    )
    def test_validation(self, customer, item, overrides, error):
        kwargs = {
            "customer_id": customer.id,
            "date": date(2024, 4, 2),
            "lines": [{"inventory_item_id": item.id, "quantity": "1", "unit_price": "10"}],
        }
        kwargs.update(overrides)

        result = create_invoice(**kwargs)

        assert not result.success
        assert result.error == error
        assert Invoice.objects.count() == 0

    def test_nothing_billable(self, customer, item):
        result = create_invoice(
            customer_id=customer.id,
            date=date(2024, 4, 2),
            lines=[{"inventory_item_id": item.id, "quantity": "", "unit_price": "10"}],
        )
        assert result.error == "Invoice must contain at least one billable line."


@pytest.mark.django_db
class TestInvoiceNumbering:
    def test_sequence_continues_from_highest(self, invoice, customer, item):
        second = create_invoice(
            customer_id=customer.id,
            date=date(2024, 5, 1),
            invoice_number="INV-2024-0007",
            lines=[{"inventory_item_id": item.id, "quantity": "1"}],
        ).data

        assert second.invoice_number == "INV-2024-0007"
        assert next_invoice_number(2024) == "INV-2024-0008"

    def test_new_year_restarts(self, invoice):
        assert next_invoice_number(2025) == "INV-2025-0001"

    def test_duplicate_number_rejected(self, invoice, customer, item):
        result = create_invoice(
            customer_id=customer.id,
            date=date(2024, 5, 1),
            invoice_number=invoice.invoice_number,
            lines=[{"inventory_item_id": item.id, "quantity": "1"}],
        )
        assert "already exists" in result.error


@pytest.mark.django_db
class TestInvoiceLifecycle:
    def test_status_change(self, invoice):
        result = update_invoice_status(invoice.id, "paid")
        assert result.success
        assert Invoice.objects.get(pk=invoice.id).status == "paid"

    def test_invalid_status(self, invoice):
        assert not update_invoice_status(invoice.id, "void").success

    def test_delete_removes_lines(self, invoice):
        assert delete_invoice(invoice.id).success
        assert InvoiceLine.objects.count() == 0

    def test_removed_customer_shows_as_unknown(self, invoice, customer):
        delete_party(customer.id)

        repository = OrmLedgerRepository()
        [contribution] = build_top_customers(repository.list_invoices(), repository.list_parties())

        assert contribution.name == UNKNOWN_PARTY_LABEL
        assert contribution.amount == Decimal("106.20")
