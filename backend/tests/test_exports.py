# tests/test_exports.py
"""
Tests for report exports (CSV, TXT, XLSX).
"""

import io
from decimal import Decimal

import pytest
from openpyxl import load_workbook

from reports.builders import build_balance_sheet, build_ledger, build_profit_and_loss, build_trial_balance
from reports.dashboard import build_dashboard_metrics
from reports.exports import (
    ExportFormat,
    create_export_response,
    export_to_csv,
    export_to_excel,
    export_to_txt,
    format_value,
    prepare_balance_sheet_export,
    prepare_dashboard_export,
    prepare_ledger_export,
    prepare_profit_and_loss_export,
    prepare_trial_balance_export,
)

from .conftest import BANK


@pytest.fixture
def pnl_document(entries, accounts):
    pnl = build_profit_and_loss(entries, accounts, "2024-01-01", "2024-12-31")
    return prepare_profit_and_loss_export(pnl, "Sharma & Sons")


class TestCsvExport:
    def test_title_block_then_table(self, pnl_document):
        lines = export_to_csv(pnl_document).splitlines()

        assert lines[0] == "Profit & Loss Statement"
        assert lines[1] == "Firm,Sharma & Sons"
        assert lines[2] == "Period,2024-01-01 - 2024-12-31"
        assert lines[3] == ""
        assert lines[4] == "Account,Amount"

    def test_amounts_and_footer(self, pnl_document):
        lines = export_to_csv(pnl_document).splitlines()

        assert "  Sales Revenue,1000.00" in lines
        assert "Total Expenses,700.00" in lines
        assert lines[-1] == "Net Profit,300.00"

    def test_balance_sheet_sections(self, entries, accounts):
        sheet = build_balance_sheet(entries, accounts, to_date="2024-12-31")
        csv_text = export_to_csv(prepare_balance_sheet_export(sheet, "Firm"))

        assert "As on,2024-12-31" in csv_text
        assert "Total Assets,,10600.00" in csv_text
        assert "Total Liabilities,,300.00" in csv_text
        assert csv_text.splitlines()[-1] == "Net Profit Carried,,300.00"

    def test_trial_balance_footer(self, entries, accounts):
        tb = build_trial_balance(entries, accounts)
        lines = export_to_csv(prepare_trial_balance_export(tb, "Firm")).splitlines()

        assert lines[-1] == "Total,11300.00,11300.00"


class TestTxtExport:
    def test_fixed_width_layout(self, entries, accounts):
        rows = build_ledger(entries, BANK, accounts)
        text = export_to_txt(prepare_ledger_export("Bank", rows, "Firm"))
        lines = text.splitlines()

        assert lines[0] == "Ledger"
        assert "Account: Bank" in lines
        assert any(line.startswith("Date") for line in lines)
        assert lines[-1].endswith("9600.00")


class TestExcelExport:
    def test_workbook_contains_title_and_rows(self, pnl_document):
        workbook = load_workbook(io.BytesIO(export_to_excel(pnl_document)))
        sheet = workbook.active
        values = [cell for row in sheet.iter_rows(values_only=True) for cell in row if cell is not None]

        assert "Profit & Loss Statement" in values
        assert "Net Profit" in values


class TestExportResponse:
    @pytest.mark.parametrize("export_format", ExportFormat.CHOICES)
    def test_headers(self, pnl_document, export_format):
        response = create_export_response(pnl_document, export_format)

        assert response["Content-Type"].startswith(ExportFormat.CONTENT_TYPES[export_format])
        assert response["Content-Disposition"] == (
            f'attachment; filename="profit-and-loss.{export_format}"'
        )

    def test_unknown_format(self, pnl_document):
        with pytest.raises(ValueError):
            create_export_response(pnl_document, "pdf")


def test_dashboard_export_lists_months(entries, accounts):
    document = prepare_dashboard_export(build_dashboard_metrics(entries, accounts), "Firm")

    assert [row["label"] for row in document.rows] == ["Jan 2024", "Feb 2024", "Mar 2024"]
    assert ("Margin", "30.00%") in document.preamble
    assert document.footer["profit"] == Decimal("300")


def test_format_value():
    assert format_value(Decimal("1.5")) == "1.50"
    assert format_value(None) == ""
    assert format_value(True) == "Yes"
