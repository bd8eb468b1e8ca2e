# reports/views.py
"""
Report endpoints.

Each view reads immutable snapshots from a LedgerRepository and hands
them to the pure builders. Pass ?export=csv|xlsx|txt to download the
report instead of receiving JSON.
"""
import logging
from datetime import date

from django.conf import settings
from django.utils import timezone
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import APIView

from firm.commands import firm_display_name

from .builders import build_balance_sheet, build_ledger, build_profit_and_loss, build_trial_balance
from .dashboard import build_dashboard_metrics
from .exports import (
    ExportFormat,
    create_export_response,
    prepare_balance_sheet_export,
    prepare_dashboard_export,
    prepare_ledger_export,
    prepare_profit_and_loss_export,
    prepare_trial_balance_export,
)
from .filters import parse_date
from .repository import OrmLedgerRepository
from .serializers import (
    BalanceSheetSerializer,
    DashboardSerializer,
    LedgerRowSerializer,
    ProfitAndLossSerializer,
    TrialBalanceSerializer,
)
from .snapshots import ACCOUNT_REMOVED_LABEL


logger = logging.getLogger(__name__)


def default_period(today: date = None):
    """January 1 of the current year through today."""
    today = today or timezone.localdate()
    return today.replace(month=1, day=1), today


class ReportView(APIView):
    """Base class: repository access, period parsing and export dispatch."""

    repository_class = OrmLedgerRepository

    def get_repository(self):
        return self.repository_class()

    def get_period(self, request):
        default_start, default_end = default_period()
        try:
            start = parse_date(request.query_params.get("from_date")) or default_start
            end = parse_date(request.query_params.get("to_date")) or default_end
        except ValueError:
            raise ValidationError({"detail": "Dates must be in YYYY-MM-DD format."})
        return start, end

    def get_export_format(self, request):
        export = request.query_params.get("export")
        if export and export not in ExportFormat.CHOICES:
            raise ValidationError({"detail": f"Invalid export format. Must be one of {ExportFormat.CHOICES}"})
        return export

    def export(self, document, export_format):
        logger.info(
            f"Exporting {document.title} as {export_format}",
            extra={"rows": len(document.rows), "export_format": export_format},
        )
        return create_export_response(document, export_format)


class ProfitAndLossView(ReportView):
    """GET /api/reports/profit-loss/?from_date=&to_date=&export="""

    def get(self, request):
        start, end = self.get_period(request)
        export_format = self.get_export_format(request)
        repository = self.get_repository()

        pnl = build_profit_and_loss(repository.list_journal_entries(), repository.list_accounts(), start, end)

        if export_format:
            return self.export(prepare_profit_and_loss_export(pnl, firm_display_name()), export_format)
        return Response(ProfitAndLossSerializer(pnl).data)


class BalanceSheetView(ReportView):
    """GET /api/reports/balance-sheet/?from_date=&to_date=&export="""

    def get(self, request):
        start, end = self.get_period(request)
        export_format = self.get_export_format(request)
        repository = self.get_repository()

        balance_sheet = build_balance_sheet(
            repository.list_journal_entries(),
            repository.list_accounts(),
            start,
            end,
            tolerance=settings.LEDGER_BALANCE_TOLERANCE,
        )

        if export_format:
            return self.export(prepare_balance_sheet_export(balance_sheet, firm_display_name()), export_format)
        return Response(BalanceSheetSerializer(balance_sheet).data)


class TrialBalanceView(ReportView):
    """GET /api/reports/trial-balance/?from_date=&to_date=&export="""

    def get(self, request):
        start, end = self.get_period(request)
        export_format = self.get_export_format(request)
        repository = self.get_repository()

        trial_balance = build_trial_balance(
            repository.list_journal_entries(),
            repository.list_accounts(),
            start,
            end,
            tolerance=settings.LEDGER_BALANCE_TOLERANCE,
        )

        if export_format:
            return self.export(prepare_trial_balance_export(trial_balance, firm_display_name()), export_format)
        return Response(TrialBalanceSerializer(trial_balance).data)


class LedgerView(ReportView):
    """
    GET /api/reports/ledger/<account_id>/?from_date=&to_date=&export=

    Same default period as the other reports.
    Works for removed accounts too: their historical lines are listed
    under the placeholder name.
    """

    def get(self, request, account_id):
        export_format = self.get_export_format(request)
        start, end = self.get_period(request)

        repository = self.get_repository()
        accounts = repository.list_accounts()
        rows = build_ledger(repository.list_journal_entries(), account_id, accounts, start, end)

        account = repository.get_account(account_id)
        account_name = account.name if account else ACCOUNT_REMOVED_LABEL

        if export_format:
            return self.export(prepare_ledger_export(account_name, rows, firm_display_name()), export_format)
        return Response({
            "account_id": account_id,
            "account_name": account_name,
            "account_exists": account is not None,
            "rows": LedgerRowSerializer(rows, many=True).data,
        })


class DashboardView(ReportView):
    """GET /api/reports/dashboard/?export="""

    def get(self, request):
        export_format = self.get_export_format(request)
        repository = self.get_repository()

        metrics = build_dashboard_metrics(
            repository.list_journal_entries(),
            repository.list_accounts(),
            invoices=repository.list_invoices(),
            parties=repository.list_parties(),
            recent_limit=settings.DASHBOARD_RECENT_ENTRIES,
            top_customers_limit=settings.DASHBOARD_TOP_CUSTOMERS,
        )

        if export_format:
            return self.export(prepare_dashboard_export(metrics, firm_display_name()), export_format)
        return Response(DashboardSerializer(metrics).data, status=status.HTTP_200_OK)
