# reports/serializers.py
"""
Output serializers for the report view-models in builders.py and
dashboard.py. The view-models are plain dataclasses; these only shape
them for JSON.
"""
from decimal import ROUND_HALF_UP

from rest_framework import serializers


def money_field(**kwargs):
    return serializers.DecimalField(max_digits=18, decimal_places=2, rounding=ROUND_HALF_UP, **kwargs)


class AccountAmountSerializer(serializers.Serializer):
    account_id = serializers.IntegerField(source="account.id")
    code = serializers.CharField(source="account.code")
    name = serializers.CharField(source="account.name")
    amount = money_field()


class ProfitAndLossSerializer(serializers.Serializer):
    period_start = serializers.DateField()
    period_end = serializers.DateField()
    revenue_accounts = AccountAmountSerializer(many=True)
    expense_accounts = AccountAmountSerializer(many=True)
    revenue_total = money_field()
    expense_total = money_field()
    gross_profit = money_field()
    net_profit = money_field()


class BalanceSheetSerializer(serializers.Serializer):
    period_end = serializers.DateField()
    assets = AccountAmountSerializer(many=True)
    liabilities = AccountAmountSerializer(many=True)
    equity = AccountAmountSerializer(many=True)
    asset_total = money_field()
    liability_total = money_field()
    equity_total = money_field()
    net_profit_carried = money_field()
    difference = money_field()
    is_balanced = serializers.BooleanField()


class TrialBalanceLineSerializer(serializers.Serializer):
    account_id = serializers.IntegerField(source="account.id")
    code = serializers.CharField(source="account.code")
    name = serializers.CharField(source="account.name")
    account_type = serializers.CharField(source="account.account_type")
    debit = money_field()
    credit = money_field()


class TrialBalanceSerializer(serializers.Serializer):
    period_start = serializers.DateField()
    period_end = serializers.DateField()
    lines = TrialBalanceLineSerializer(many=True)
    total_debit = money_field()
    total_credit = money_field()
    is_balanced = serializers.BooleanField()


class LedgerRowSerializer(serializers.Serializer):
    entry_id = serializers.IntegerField()
    date = serializers.DateField()
    reference = serializers.CharField()
    description = serializers.CharField()
    debit = money_field()
    credit = money_field()
    balance = money_field()


class MonthlyMetricSerializer(serializers.Serializer):
    month = serializers.CharField()
    label = serializers.CharField()
    revenue = money_field()
    expense = money_field()
    profit = money_field()


class RecentEntrySerializer(serializers.Serializer):
    id = serializers.IntegerField()
    date = serializers.DateField()
    reference = serializers.CharField()
    narration = serializers.CharField()
    total_debit = money_field()


class CustomerContributionSerializer(serializers.Serializer):
    customer_id = serializers.IntegerField()
    name = serializers.CharField()
    amount = money_field()


class DashboardSummarySerializer(serializers.Serializer):
    revenue = money_field()
    expense = money_field()
    profit = money_field()
    margin = money_field()


class DashboardSerializer(serializers.Serializer):
    summary = DashboardSummarySerializer()
    monthly = MonthlyMetricSerializer(many=True)
    recent_entries = RecentEntrySerializer(many=True)
    top_customers = CustomerContributionSerializer(many=True)
    top_customers_total = money_field()
