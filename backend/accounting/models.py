# accounting/models.py
"""
Accounting models for Ledgerbook.

These tables are the Data Store for the ledger. All mutations go through
the command layer (accounting/commands.py); reports never read these
models directly, they read immutable snapshots produced by
reports/repository.py.

Models:
- Account: Chart of Accounts
- JournalEntry: Journal entry headers
- JournalLine: Journal entry lines (debit/credit)
"""

from decimal import Decimal

from django.db import models


MONEY_Q = Decimal("0.01")


class Account(models.Model):
    """
    Chart of Accounts entry.

    - account_type: determines report placement (Balance Sheet vs P&L)
    - normal_balance: derived from type, used to interpret sign in reports
    - is_system: seeded accounts that cannot be deleted
    """

    class AccountType(models.TextChoices):
        ASSET = "ASSET", "Asset"
        LIABILITY = "LIABILITY", "Liability"
        EQUITY = "EQUITY", "Equity"
        REVENUE = "REVENUE", "Revenue"
        EXPENSE = "EXPENSE", "Expense"

    class NormalBalance(models.TextChoices):
        DEBIT = "DEBIT", "Debit"
        CREDIT = "CREDIT", "Credit"

    NORMAL_BALANCE_MAP = {
        AccountType.ASSET: NormalBalance.DEBIT,
        AccountType.LIABILITY: NormalBalance.CREDIT,
        AccountType.EQUITY: NormalBalance.CREDIT,
        AccountType.REVENUE: NormalBalance.CREDIT,
        AccountType.EXPENSE: NormalBalance.DEBIT,
    }

    code = models.CharField(max_length=20, blank=True, default="")
    name = models.CharField(max_length=255)

    account_type = models.CharField(
        max_length=20,
        choices=AccountType.choices,
        db_column="type",
    )

    normal_balance = models.CharField(
        max_length=10,
        choices=NormalBalance.choices,
        editable=False,
    )

    description = models.TextField(blank=True, default="")

    is_system = models.BooleanField(
        default=False,
        help_text="System accounts are seeded with the chart and cannot be deleted",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["code", "name"]
        indexes = [
            models.Index(fields=["account_type"], name="accounting_acct_type_idx"),
        ]

    def __str__(self):
        if self.code:
            return f"{self.code} - {self.name}"
        return self.name

    def save(self, *args, **kwargs):
        # Auto-set normal balance from account type
        self.normal_balance = self.NORMAL_BALANCE_MAP.get(
            self.account_type,
            self.NormalBalance.DEBIT,
        )
        super().save(*args, **kwargs)

    @property
    def is_debit_normal(self) -> bool:
        return self.normal_balance == self.NormalBalance.DEBIT


class JournalEntry(models.Model):
    """
    Journal Entry header.

    Entries are balanced when created and never edited afterwards;
    the only lifecycle transition is deletion.
    """

    date = models.DateField()
    reference = models.CharField(max_length=100)
    narration = models.CharField(max_length=500, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-date", "-id"]
        indexes = [
            models.Index(fields=["date", "id"], name="accounting_entry_date_idx"),
        ]
        verbose_name_plural = "journal entries"

    def __str__(self):
        return f"JE {self.reference} ({self.date})"

    @property
    def total_debit(self) -> Decimal:
        return sum((line.debit for line in self.lines.all()), Decimal("0.00"))

    @property
    def total_credit(self) -> Decimal:
        return sum((line.credit for line in self.lines.all()), Decimal("0.00"))

    @property
    def is_balanced(self) -> bool:
        return abs(self.total_debit - self.total_credit) < MONEY_Q


class JournalLine(models.Model):
    """
    Journal entry line.

    The account reference is not constrained at the database
    level: deleting an account leaves historical lines pointing at the
    removed id so ledgers keep showing them.
    """

    entry = models.ForeignKey(
        JournalEntry,
        on_delete=models.CASCADE,
        related_name="lines",
    )

    line_no = models.PositiveIntegerField()

    account = models.ForeignKey(
        Account,
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name="journal_lines",
    )

    description = models.CharField(max_length=500, blank=True, default="")

    debit = models.DecimalField(max_digits=18, decimal_places=2, default=Decimal("0.00"))
    credit = models.DecimalField(max_digits=18, decimal_places=2, default=Decimal("0.00"))

    class Meta:
        ordering = ["entry_id", "line_no"]
        constraints = [
            models.UniqueConstraint(
                fields=["entry", "line_no"],
                name="uniq_line_no_per_entry",
            ),
            models.CheckConstraint(
                condition=models.Q(debit__gte=0) & models.Q(credit__gte=0),
                name="journal_line_amounts_non_negative",
            ),
        ]

    def __str__(self):
        return f"Line {self.line_no}: {self.account_id} Dr {self.debit} Cr {self.credit}"

    @property
    def amount(self) -> Decimal:
        return self.debit - self.credit
