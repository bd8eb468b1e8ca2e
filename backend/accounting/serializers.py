# accounting/serializers.py
"""
Serializers for accounting API.

These serializers are used for:
1. Input validation
2. Output formatting

The actual business logic happens in commands.py.
"""
from decimal import Decimal, InvalidOperation

from rest_framework import serializers

from reports.snapshots import ACCOUNT_REMOVED_LABEL

from .models import Account, JournalEntry, JournalLine


def _to_decimal(x) -> Decimal:
    """Convert input to Decimal, handling various input types."""
    if x is None or x == "":
        return Decimal("0.00")
    try:
        value = x if isinstance(x, Decimal) else Decimal(str(x))
    except (InvalidOperation, ValueError, TypeError):
        raise serializers.ValidationError("Invalid decimal amount.")
    if not value.is_finite():
        raise serializers.ValidationError("Invalid decimal amount.")
    return value


# =============================================================================
# Account Serializers
# =============================================================================

class AccountSerializer(serializers.ModelSerializer):
    has_transactions = serializers.SerializerMethodField()

    class Meta:
        model = Account
        fields = [
            "id", "code", "name", "account_type", "normal_balance",
            "description", "is_system", "has_transactions",
            "created_at", "updated_at",
        ]
        read_only_fields = fields

    def get_has_transactions(self, obj):
        return obj.journal_lines.exists()


class AccountCreateSerializer(serializers.Serializer):
    code = serializers.CharField(max_length=20, required=False, allow_blank=True, default="")
    name = serializers.CharField(max_length=255)
    account_type = serializers.ChoiceField(choices=Account.AccountType.choices)
    description = serializers.CharField(required=False, allow_blank=True, default="")


class AccountUpdateSerializer(serializers.Serializer):
    code = serializers.CharField(max_length=20, required=False, allow_blank=True)
    name = serializers.CharField(max_length=255, required=False)
    account_type = serializers.ChoiceField(choices=Account.AccountType.choices, required=False)
    description = serializers.CharField(required=False, allow_blank=True)


# =============================================================================
# Journal Entry Serializers
# =============================================================================

class JournalLineSerializer(serializers.ModelSerializer):
    account_name = serializers.SerializerMethodField()

    class Meta:
        model = JournalLine
        fields = ["id", "line_no", "account_id", "account_name", "description", "debit", "credit"]
        read_only_fields = fields

    def get_account_name(self, obj):
        names = self.context.get("account_names")
        if names is None:
            names = dict(Account.objects.values_list("id", "name"))
            self.context["account_names"] = names
        return names.get(obj.account_id, ACCOUNT_REMOVED_LABEL)


class JournalEntrySerializer(serializers.ModelSerializer):
    lines = JournalLineSerializer(many=True, read_only=True)
    total_debit = serializers.SerializerMethodField()
    total_credit = serializers.SerializerMethodField()

    class Meta:
        model = JournalEntry
        fields = [
            "id", "date", "reference", "narration",
            "total_debit", "total_credit", "lines", "created_at",
        ]
        read_only_fields = fields

    def get_total_debit(self, obj):
        return f"{obj.total_debit:.2f}"

    def get_total_credit(self, obj):
        return f"{obj.total_credit:.2f}"


class JournalLineInputSerializer(serializers.Serializer):
    account_id = serializers.IntegerField(required=False, allow_null=True)
    description = serializers.CharField(required=False, allow_blank=True, default="")
    debit = serializers.CharField(required=False, allow_blank=True, default="")
    credit = serializers.CharField(required=False, allow_blank=True, default="")

    def validate(self, attrs):
        debit = _to_decimal(attrs.get("debit"))
        credit = _to_decimal(attrs.get("credit"))
        if debit < 0 or credit < 0:
            raise serializers.ValidationError("Negative debit/credit is not allowed.")
        attrs["debit"] = debit
        attrs["credit"] = credit
        return attrs


class JournalEntryCreateSerializer(serializers.Serializer):
    date = serializers.DateField()
    reference = serializers.CharField(max_length=100, required=False, allow_blank=True, default="")
    narration = serializers.CharField(max_length=500, required=False, allow_blank=True, default="")
    lines = JournalLineInputSerializer(many=True)

    def validate_lines(self, value):
        if not value:
            raise serializers.ValidationError("At least one line is required.")
        return value
