# tests/test_api.py
"""
API tests for parties, inventory, invoicing, reports and firm settings.
"""

from datetime import date

import pytest
from django.test import override_settings

from accounting.commands import create_journal_entry
from reports.views import default_period


pytestmark = pytest.mark.django_db


# =============================================================================
# Parties
# =============================================================================

class TestPartiesApi:
    def test_create_and_filter(self, api_client):
        r = api_client.post("/api/parties/", {"name": "Acme", "party_type": "customer"}, format="json")
        assert r.status_code == 201, r.data
        api_client.post("/api/parties/", {"name": "Steel Co", "party_type": "vendor"}, format="json")

        r = api_client.get("/api/parties/", {"type": "vendor"})
        assert [p["name"] for p in r.data] == ["Steel Co"]

        r = api_client.get("/api/parties/", {"q": "acm"})
        assert [p["name"] for p in r.data] == ["Acme"]

    def test_invalid_email(self, api_client):
        r = api_client.post("/api/parties/", {"name": "Acme", "email": "nope"}, format="json")
        assert r.status_code == 400
        assert r.data["detail"] == "Enter a valid email address."


# =============================================================================
# Inventory
# =============================================================================

class TestInventoryApi:
    def test_adjust_stock(self, api_client, item, warehouse):
        r = api_client.post(
            f"/api/inventory/items/{item.id}/adjust/",
            {"warehouse_id": warehouse.id, "delta": "-7"},
            format="json",
        )
        assert r.status_code == 201, r.data
        assert r.data["ledger_entry"]["reference"] == "Manual adjustment (Decrease)"
        assert r.data["item"]["is_low_stock"] is True

        r = api_client.get("/api/inventory/ledger/", {"item": item.id})
        assert len(r.data) == 1

        r = api_client.get("/api/inventory/summary/")
        assert r.data["item_count"] == 1
        assert r.data["stock_value"] == "150.00"
        assert r.data["low_stock_count"] == 1

    def test_zero_adjustment_rejected(self, api_client, item, warehouse):
        r = api_client.post(
            f"/api/inventory/items/{item.id}/adjust/",
            {"warehouse_id": warehouse.id, "delta": "0"},
            format="json",
        )
        assert r.status_code == 400

    def test_patch_quantity_rejected(self, api_client, item):
        r = api_client.patch(f"/api/inventory/items/{item.id}/", {"quantity": "3"}, format="json")
        assert r.status_code == 400

    def test_create_item(self, api_client, warehouse):
        r = api_client.post(
            "/api/inventory/items/",
            {"sku": "bolt-8", "name": "Bolt", "unit_price": "2.5", "quantity": "100",
             "preferred_warehouse_id": warehouse.id},
            format="json",
        )
        assert r.status_code == 201, r.data
        assert r.data["sku"] == "BOLT-8"


# =============================================================================
# Invoicing
# =============================================================================

class TestInvoicingApi:
    def test_preview_totals(self, api_client):
        r = api_client.post(
            "/api/invoicing/preview-totals/",
            {"lines": [{"quantity": "2", "unit_price": "50", "discount": "10", "tax_rate": "18"}]},
            format="json",
        )
        assert r.status_code == 200
        assert r.data["subtotal"] == "90.00"
        assert r.data["tax_total"] == "16.20"
        assert r.data["total"] == "106.20"

    def test_create_list_and_pay(self, api_client, customer, item):
        payload = {
            "customer_id": customer.id,
            "date": "2024-04-02",
            "lines": [{"inventory_item_id": item.id, "quantity": "2"}],
        }
        r = api_client.post("/api/invoicing/invoices/", payload, format="json")
        assert r.status_code == 201, r.data
        invoice_id = r.data["id"]
        assert r.data["total"] == "100.00"
        assert r.data["customer_name"] == "Acme Traders"

        r = api_client.get("/api/invoicing/invoices/")
        assert [i["id"] for i in r.data["results"]] == [invoice_id]
        assert r.data["next_invoice_number"].startswith("INV-")

        r = api_client.post(f"/api/invoicing/invoices/{invoice_id}/status/", {"status": "paid"}, format="json")
        assert r.status_code == 200
        assert r.data["status"] == "paid"

    def test_missing_customer(self, api_client, item):
        payload = {"date": "2024-04-02", "lines": [{"inventory_item_id": item.id, "quantity": "1"}]}
        r = api_client.post("/api/invoicing/invoices/", payload, format="json")
        assert r.status_code == 400
        assert r.data["detail"] == "Select a customer for the invoice."


# =============================================================================
# Reports
# =============================================================================

class TestReportsApi:
    def test_default_period_is_year_to_date(self):
        assert default_period(date(2024, 7, 15)) == (date(2024, 1, 1), date(2024, 7, 15))

    def test_profit_loss_json(self, api_client, cash_sale):
        r = api_client.get("/api/reports/profit-loss/", {"from_date": "2024-01-01", "to_date": "2024-12-31"})

        assert r.status_code == 200
        assert r.data["period_start"] == "2024-01-01"
        assert r.data["revenue_total"] == "1000.00"
        sales = next(a for a in r.data["revenue_accounts"] if a["name"] == "Sales Revenue")
        assert sales["amount"] == "1000.00"

    def test_bad_date(self, api_client, chart):
        r = api_client.get("/api/reports/trial-balance/", {"from_date": "01/01/2024"})
        assert r.status_code == 400

    def test_bad_export_format(self, api_client, chart):
        r = api_client.get("/api/reports/trial-balance/", {"export": "pdf"})
        assert r.status_code == 400

    @override_settings(DEFAULT_FIRM_NAME="Test Traders")
    def test_csv_export(self, api_client, cash_sale):
        r = api_client.get(
            "/api/reports/balance-sheet/",
            {"from_date": "2024-01-01", "to_date": "2024-12-31", "export": "csv"},
        )

        assert r.status_code == 200
        assert r["Content-Disposition"] == 'attachment; filename="balance-sheet.csv"'
        text = r.content.decode("utf-8-sig")
        assert text.splitlines()[:2] == ["Balance Sheet", "Firm,Test Traders"]
        assert "Total Assets,,1000.00" in text

    def test_xlsx_export(self, api_client, cash_sale):
        r = api_client.get("/api/reports/profit-loss/", {"export": "xlsx"})
        assert r.status_code == 200
        assert r.content[:2] == b"PK"

    def test_ledger(self, api_client, chart, cash_sale):
        r = api_client.get(
            f"/api/reports/ledger/{chart['1000'].id}/",
            {"from_date": "2024-01-01", "to_date": "2024-12-31"},
        )

        assert r.data["account_name"] == "Cash"
        assert [row["balance"] for row in r.data["rows"]] == ["1000.00"]

    def test_ledger_defaults_to_year_to_date(self, api_client, chart, cash_sale):
        # cash_sale is dated 2024, outside the current year
        r = api_client.get(f"/api/reports/ledger/{chart['1000'].id}/")

        assert r.status_code == 200
        assert r.data["rows"] == []

    def test_ledger_bad_date(self, api_client, chart):
        r = api_client.get(f"/api/reports/ledger/{chart['1000'].id}/", {"from_date": "2024/01/01"})
        assert r.status_code == 400

    def test_dashboard(self, api_client, chart, cash_sale):
        create_journal_entry(
            date=date(2024, 3, 1),
            reference="RENT-3",
            lines=[
                {"account_id": chart["5100"].id, "debit": "250"},
                {"account_id": chart["1000"].id, "credit": "250"},
            ],
        )

        r = api_client.get("/api/reports/dashboard/")

        assert r.status_code == 200
        assert r.data["summary"]["profit"] == "750.00"
        assert r.data["summary"]["margin"] == "75.00"
        assert [m["month"] for m in r.data["monthly"]] == ["2024-02", "2024-03"]
        assert r.data["recent_entries"][0]["reference"] == "RENT-3"


# =============================================================================
# Firm
# =============================================================================

class TestFirmApi:
    def test_settings_roundtrip(self, api_client):
        r = api_client.put("/api/firm/settings/", {"profile": {"firm_name": "Sharma & Sons"}}, format="json")
        assert r.status_code == 200, r.data

        r = api_client.get("/api/firm/settings/")
        assert r.data["profile"]["firm_name"] == "Sharma & Sons"

    def test_unknown_key(self, api_client):
        r = api_client.put("/api/firm/settings/", {"security": {"pin": "1234"}}, format="json")
        assert r.status_code == 400

    def test_reset_requires_confirmation(self, api_client, cash_sale):
        r = api_client.post("/api/firm/reset/", {"confirm": False}, format="json")
        assert r.status_code == 400

        r = api_client.post("/api/firm/reset/", {"confirm": True}, format="json")
        assert r.status_code == 200
        assert r.data["seeded_accounts"] == 14


def test_health(api_client):
    assert api_client.get("/_health/live").status_code == 200
