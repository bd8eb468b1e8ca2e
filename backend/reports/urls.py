# reports/urls.py
from django.urls import path

from .views import BalanceSheetView, DashboardView, LedgerView, ProfitAndLossView, TrialBalanceView

app_name = "reports"

urlpatterns = [
    path("profit-loss/", ProfitAndLossView.as_view(), name="profit-loss"),
    path("balance-sheet/", BalanceSheetView.as_view(), name="balance-sheet"),
    path("trial-balance/", TrialBalanceView.as_view(), name="trial-balance"),
    path("ledger/<int:account_id>/", LedgerView.as_view(), name="ledger"),
    path("dashboard/", DashboardView.as_view(), name="dashboard"),
]
