"""
Export utilities for financial reports.
Supports Excel (.xlsx), CSV (.csv), and Text (.txt) formats.

Every export is a title block (report title, firm, period), a header row,
data rows and an optional footer row, rendered from the same
column definitions in each format.
"""
import csv
import io
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

from django.http import HttpResponse
from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter


class ExportFormat:
    EXCEL = 'xlsx'
    CSV = 'csv'
    TXT = 'txt'

    CHOICES = [EXCEL, CSV, TXT]
    CONTENT_TYPES = {
        EXCEL: 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
        CSV: 'text/csv',
        TXT: 'text/plain',
    }


@dataclass
class ExportDocument:
    """A rendered-format-agnostic report table."""
    title: str
    columns: list[dict]
    rows: list[dict]
    preamble: list[tuple[str, str]] = field(default_factory=list)
    footer: Optional[dict] = None
    filename: str = 'export'


def money(value: Decimal) -> str:
    """Two-decimal string for an amount."""
    return f"{value:.2f}"


def format_value(value: Any) -> str:
    """Format a value for export."""
    if value is None:
        return ''
    if isinstance(value, datetime):
        return value.strftime('%Y-%m-%d %H:%M:%S')
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Decimal):
        return money(value)
    if isinstance(value, bool):
        return 'Yes' if value else 'No'
    return str(value)


def _body_rows(document: ExportDocument) -> list[dict]:
    rows = list(document.rows)
    if document.footer:
        rows.append(document.footer)
    return rows


def export_to_excel(document: ExportDocument, sheet_name: str = 'Report') -> bytes:
    """
    Export a document to Excel format.

    Returns:
        Bytes of the Excel file
    """
    columns = document.columns
    wb = Workbook()
    ws = wb.active
    ws.title = sheet_name

    # Styles
    header_font = Font(bold=True, color='FFFFFF')
    header_fill = PatternFill(start_color='4472C4', end_color='4472C4', fill_type='solid')
    header_alignment = Alignment(horizontal='center', vertical='center', wrap_text=True)
    thin_border = Border(
        left=Side(style='thin'),
        right=Side(style='thin'),
        top=Side(style='thin'),
        bottom=Side(style='thin')
    )

    # Title row
    ws.merge_cells(start_row=1, start_column=1, end_row=1, end_column=len(columns))
    title_cell = ws.cell(row=1, column=1, value=document.title)
    title_cell.font = Font(bold=True, size=14)
    title_cell.alignment = Alignment(horizontal='center')

    row_idx = 2
    for label, value in document.preamble:
        ws.cell(row=row_idx, column=1, value=label).font = Font(italic=True, size=10, color='666666')
        ws.cell(row=row_idx, column=2, value=value)
        row_idx += 1

    # Header row
    header_row = row_idx + 1
    for col_idx, col in enumerate(columns, 1):
        cell = ws.cell(row=header_row, column=col_idx, value=col['header'])
        cell.font = header_font
        cell.fill = header_fill
        cell.alignment = header_alignment
        cell.border = thin_border
        ws.column_dimensions[get_column_letter(col_idx)].width = col.get('width', 15)

    body = _body_rows(document)
    for offset, row_data in enumerate(body, header_row + 1):
        is_footer = document.footer is not None and offset == header_row + len(body)
        for col_idx, col in enumerate(columns, 1):
            value = row_data.get(col['key'], '')
            cell = ws.cell(row=offset, column=col_idx, value=format_value(value))
            cell.border = thin_border
            if col.get('numeric'):
                cell.alignment = Alignment(horizontal='right')
            if is_footer:
                cell.font = Font(bold=True)

    ws.freeze_panes = ws.cell(row=header_row + 1, column=1)

    output = io.BytesIO()
    wb.save(output)
    output.seek(0)
    return output.getvalue()


def export_to_csv(document: ExportDocument, delimiter: str = ',') -> str:
    """
    Export a document to CSV format.

    Layout:
        Title
        Firm,<firm name>
        Period,<start - end>
        <blank>
        header row
        data rows
        footer row
    """
    output = io.StringIO()
    writer = csv.writer(output, delimiter=delimiter, quoting=csv.QUOTE_MINIMAL, lineterminator='\n')

    writer.writerow([document.title])
    for label, value in document.preamble:
        writer.writerow([label, value])
    writer.writerow([])

    writer.writerow([col['header'] for col in document.columns])
    for row_data in _body_rows(document):
        writer.writerow([format_value(row_data.get(col['key'], '')) for col in document.columns])

    return output.getvalue()


def export_to_txt(document: ExportDocument, separator: str = '  ') -> str:
    """
    Export a document to fixed-width text.
    """
    columns = document.columns
    body = _body_rows(document)
    lines = [document.title]
    lines.extend(f"{label}: {value}" for label, value in document.preamble)
    lines.append('')

    col_widths = []
    for col in columns:
        width = len(col['header'])
        for row_data in body:
            width = max(width, len(format_value(row_data.get(col['key'], ''))))
        col_widths.append(min(width, 50))  # Cap at 50 chars

    def render(values: list[str]) -> str:
        parts = []
        for idx, col in enumerate(columns):
            value = values[idx]
            if len(value) > col_widths[idx]:
                value = value[:col_widths[idx] - 3] + '...'
            if col.get('numeric'):
                parts.append(value.rjust(col_widths[idx]))
            else:
                parts.append(value.ljust(col_widths[idx]))
        return separator.join(parts).rstrip()

    lines.append(render([col['header'] for col in columns]))
    lines.append(separator.join('-' * width for width in col_widths))
    for idx, row_data in enumerate(body):
        if document.footer is not None and idx == len(body) - 1:
            lines.append(separator.join('-' * width for width in col_widths))
        lines.append(render([format_value(row_data.get(col['key'], '')) for col in columns]))

    return '\n'.join(lines) + '\n'


def create_export_response(document: ExportDocument, format: str) -> HttpResponse:
    """
    Create an HTTP response with the exported file.

    Raises:
        ValueError: unknown format
    """
    if format not in ExportFormat.CHOICES:
        raise ValueError(f"Invalid format: {format}. Must be one of {ExportFormat.CHOICES}")

    content_type = ExportFormat.CONTENT_TYPES[format]
    full_filename = f"{document.filename}.{format}"

    if format == ExportFormat.EXCEL:
        response = HttpResponse(export_to_excel(document), content_type=content_type)
    elif format == ExportFormat.CSV:
        response = HttpResponse(export_to_csv(document), content_type=content_type)
        response.charset = 'utf-8-sig'  # BOM for Excel compatibility
    else:  # TXT
        response = HttpResponse(export_to_txt(document), content_type=content_type)

    response['Content-Disposition'] = f'attachment; filename="{full_filename}"'
    return response


# =============================================================================
# Report Export Configuration
# =============================================================================

AMOUNT_COLUMNS = [
    {'key': 'label', 'header': 'Account', 'width': 40},
    {'key': 'amount', 'header': 'Amount', 'width': 18, 'numeric': True},
]

BALANCE_SHEET_COLUMNS = [
    {'key': 'section', 'header': 'Section', 'width': 20},
    {'key': 'account', 'header': 'Account', 'width': 36},
    {'key': 'amount', 'header': 'Amount', 'width': 18, 'numeric': True},
]

TRIAL_BALANCE_COLUMNS = [
    {'key': 'account', 'header': 'Account', 'width': 36},
    {'key': 'debit', 'header': 'Debit', 'width': 18, 'numeric': True},
    {'key': 'credit', 'header': 'Credit', 'width': 18, 'numeric': True},
]

LEDGER_COLUMNS = [
    {'key': 'date', 'header': 'Date', 'width': 12},
    {'key': 'reference', 'header': 'Reference', 'width': 18},
    {'key': 'description', 'header': 'Description', 'width': 36},
    {'key': 'debit', 'header': 'Debit', 'width': 15, 'numeric': True},
    {'key': 'credit', 'header': 'Credit', 'width': 15, 'numeric': True},
    {'key': 'balance', 'header': 'Balance', 'width': 15, 'numeric': True},
]


def _period(start, end) -> str:
    return f"{format_value(start)} - {format_value(end)}"


def prepare_profit_and_loss_export(pnl, firm_name: str) -> ExportDocument:
    rows = [{'label': 'Revenue', 'amount': ''}]
    rows += [{'label': f"  {item.account.name}", 'amount': item.amount} for item in pnl.revenue_accounts]
    rows.append({'label': 'Total Revenue', 'amount': pnl.revenue_total})
    rows.append({'label': '', 'amount': ''})
    rows.append({'label': 'Expenses', 'amount': ''})
    rows += [{'label': f"  {item.account.name}", 'amount': item.amount} for item in pnl.expense_accounts]
    rows.append({'label': 'Total Expenses', 'amount': pnl.expense_total})

    return ExportDocument(
        title='Profit & Loss Statement',
        preamble=[('Firm', firm_name), ('Period', _period(pnl.period_start, pnl.period_end))],
        columns=AMOUNT_COLUMNS,
        rows=rows,
        footer={'label': 'Net Profit', 'amount': pnl.net_profit},
        filename='profit-and-loss',
    )


def prepare_balance_sheet_export(balance_sheet, firm_name: str) -> ExportDocument:
    rows = []
    sections = (
        ('Assets', balance_sheet.assets, balance_sheet.asset_total),
        ('Liabilities', balance_sheet.liabilities, balance_sheet.liability_total),
        ('Equity', balance_sheet.equity, balance_sheet.equity_total),
    )
    for idx, (section, items, total) in enumerate(sections):
        if idx:
            rows.append({'section': '', 'account': '', 'amount': ''})
        rows.append({'section': section, 'account': '', 'amount': ''})
        rows += [{'section': '', 'account': item.account.name, 'amount': item.amount} for item in items]
        rows.append({'section': f"Total {section}", 'account': '', 'amount': total})

    return ExportDocument(
        title='Balance Sheet',
        preamble=[('Firm', firm_name), ('As on', format_value(balance_sheet.period_end))],
        columns=BALANCE_SHEET_COLUMNS,
        rows=rows,
        footer={
            'section': 'Net Profit Carried',
            'account': '',
            'amount': balance_sheet.net_profit_carried,
        },
        filename='balance-sheet',
    )


def prepare_trial_balance_export(trial_balance, firm_name: str) -> ExportDocument:
    return ExportDocument(
        title='Trial Balance',
        preamble=[
            ('Firm', firm_name),
            ('Period', _period(trial_balance.period_start, trial_balance.period_end)),
        ],
        columns=TRIAL_BALANCE_COLUMNS,
        rows=[
            {'account': line.account.name, 'debit': line.debit, 'credit': line.credit}
            for line in trial_balance.lines
        ],
        footer={
            'account': 'Total',
            'debit': trial_balance.total_debit,
            'credit': trial_balance.total_credit,
        },
        filename='trial-balance',
    )


def prepare_ledger_export(account_name: str, rows, firm_name: str) -> ExportDocument:
    return ExportDocument(
        title='Ledger',
        preamble=[('Firm', firm_name), ('Account', account_name)],
        columns=LEDGER_COLUMNS,
        rows=[
            {
                'date': row.date,
                'reference': row.reference,
                'description': row.description,
                'debit': row.debit,
                'credit': row.credit,
                'balance': row.balance,
            }
            for row in rows
        ],
        filename=f"{account_name}-ledger",
    )


DASHBOARD_COLUMNS = [
    {'key': 'label', 'header': 'Month', 'width': 12},
    {'key': 'revenue', 'header': 'Revenue', 'width': 18, 'numeric': True},
    {'key': 'expense', 'header': 'Expense', 'width': 18, 'numeric': True},
    {'key': 'profit', 'header': 'Profit', 'width': 18, 'numeric': True},
]


def prepare_dashboard_export(metrics, firm_name: str) -> ExportDocument:
    summary = metrics.summary
    return ExportDocument(
        title='Monthly Performance',
        preamble=[('Firm', firm_name), ('Margin', f"{money(summary.margin)}%")],
        columns=DASHBOARD_COLUMNS,
        rows=[
            {'label': m.label, 'revenue': m.revenue, 'expense': m.expense, 'profit': m.profit}
            for m in metrics.monthly
        ],
        footer={
            'label': 'Total',
            'revenue': summary.revenue,
            'expense': summary.expense,
            'profit': summary.profit,
        },
        filename='dashboard',
    )
