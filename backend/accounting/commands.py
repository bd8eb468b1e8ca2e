# accounting/commands.py
"""
Command layer for accounting operations.

Commands are the single point where ledger mutations happen.
Views call commands; commands enforce rules and write the store.

Pattern:
1. Validate input
2. Apply business policies (can_*)
3. Perform the operation inside transaction.atomic()
4. Log the outcome
5. Return CommandResult

ALL state changes MUST go through commands.
"""
import logging
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from accounting.models import MONEY_Q, Account, JournalEntry, JournalLine
from accounting.policies import (
    can_change_account_type,
    can_delete_account,
    check_entry_balanced,
    check_line_amounts,
)


logger = logging.getLogger(__name__)


class CommandResult:
    """
    Wrapper for command results with success/failure info.

    Usage:
        result = create_account(name="Cash", account_type="ASSET")
        if result.success:
            account = result.data
        else:
            error_message = result.error
    """

    def __init__(self, success: bool, data=None, error: str = None):
        self.success = success
        self.data = data
        self.error = error

    @classmethod
    def ok(cls, data=None):
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str):
        return cls(success=False, error=error)

    def __repr__(self):
        if self.success:
            return f"<CommandResult ok data={self.data!r}>"
        return f"<CommandResult fail error={self.error!r}>"


def to_decimal(value, default: Decimal = Decimal("0")) -> Decimal:
    """
    Parse user input into a Decimal.

    Blank or unparsable values become ``default``.
    """
    if value is None or value == "":
        return default
    if isinstance(value, Decimal):
        return value if value.is_finite() else default
    try:
        parsed = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return default
    if not parsed.is_finite():
        return default
    return parsed


def quantize_money(value: Decimal) -> Decimal:
    return value.quantize(MONEY_Q, rounding=ROUND_HALF_UP)


def default_reference() -> str:
    """JRN-<epoch millis> for entries saved without a reference."""
    return f"JRN-{int(timezone.now().timestamp() * 1000)}"


# =============================================================================
# Account Commands
# =============================================================================

def create_account(
    name: str,
    account_type: str,
    code: str = "",
    description: str = "",
    is_system: bool = False,
) -> CommandResult:
    """
    Create a new account in the chart of accounts.

    Args:
        name: Account name (required)
        account_type: One of Account.AccountType choices
        code: Optional account code
        description: Free text
        is_system: Seeded accounts that cannot be deleted

    Returns:
        CommandResult with the created Account or error
    """
    name = (name or "").strip()
    if not name:
        return CommandResult.fail("Account name is required.")

    if account_type not in Account.AccountType.values:
        return CommandResult.fail(f"Invalid account type: {account_type}.")

    with transaction.atomic():
        account = Account.objects.create(
            name=name,
            code=(code or "").strip(),
            account_type=account_type,
            description=description or "",
            is_system=is_system,
        )

    logger.info(
        f"Account created: {account}",
        extra={"account_id": account.id, "account_type": account.account_type},
    )
    return CommandResult.ok(account)


UPDATABLE_ACCOUNT_FIELDS = ("name", "code", "account_type", "description")


def update_account(account_id: int, **changes) -> CommandResult:
    """
    Update an existing account.

    Only name, code, account_type and description may change. The type is
    frozen once the account carries journal lines.
    """
    try:
        account = Account.objects.get(pk=account_id)
    except Account.DoesNotExist:
        return CommandResult.fail("Account not found.")

    unknown = set(changes) - set(UPDATABLE_ACCOUNT_FIELDS)
    if unknown:
        return CommandResult.fail(f"Cannot update fields: {', '.join(sorted(unknown))}.")

    changes = {field: value for field, value in changes.items() if value is not None}

    if "name" in changes:
        changes["name"] = (changes["name"] or "").strip()
        if not changes["name"]:
            return CommandResult.fail("Account name is required.")

    new_type = changes.get("account_type")
    if new_type is not None and new_type != account.account_type:
        if new_type not in Account.AccountType.values:
            return CommandResult.fail(f"Invalid account type: {new_type}.")
        allowed, reason = can_change_account_type(account)
        if not allowed:
            return CommandResult.fail(reason)

    with transaction.atomic():
        for field, value in changes.items():
            setattr(account, field, value)
        account.save()

    logger.info(
        f"Account updated: {account}",
        extra={"account_id": account.id, "fields": sorted(changes)},
    )
    return CommandResult.ok(account)


def delete_account(account_id: int) -> CommandResult:
    """
    Delete an account.

    System accounts are protected. Accounts with postings may be deleted;
    their historical lines keep the removed id.
    """
    try:
        account = Account.objects.get(pk=account_id)
    except Account.DoesNotExist:
        return CommandResult.fail("Account not found.")

    allowed, reason = can_delete_account(account)
    if not allowed:
        logger.info(f"Account deletion rejected: {reason}", extra={"account_id": account_id})
        return CommandResult.fail(reason)

    line_count = account.journal_lines.count()

    with transaction.atomic():
        account.delete()

    if line_count:
        logger.warning(
            f"Deleted account {account_id} with {line_count} journal lines; "
            f"lines now reference a removed account",
            extra={"account_id": account_id, "orphaned_lines": line_count},
        )
    else:
        logger.info(f"Account deleted: {account_id}", extra={"account_id": account_id})

    return CommandResult.ok({"id": account_id, "orphaned_lines": line_count})


# =============================================================================
# Journal Entry Commands
# =============================================================================

def create_journal_entry(
    date,
    lines: list = None,
    reference: str = "",
    narration: str = "",
) -> CommandResult:
    """
    Create a balanced journal entry.

    Args:
        date: Entry date
        lines: List of dicts with account_id, description, debit, credit
        reference: Document reference; defaults to JRN-<epoch millis>
        narration: Entry description

    Returns:
        CommandResult with created JournalEntry or error
    """
    lines = lines or []
    if not lines:
        return CommandResult.fail("Journal entry requires at least one line.")

    if any(not line.get("account_id") for line in lines):
        return CommandResult.fail("Every line requires an account selection.")

    account_ids = {line["account_id"] for line in lines}
    existing = set(Account.objects.filter(id__in=account_ids).values_list("id", flat=True))
    missing = account_ids - existing
    if missing:
        return CommandResult.fail(f"Account {sorted(missing)[0]} not found.")

    parsed = []
    for line in lines:
        debit = quantize_money(to_decimal(line.get("debit")))
        credit = quantize_money(to_decimal(line.get("credit")))
        allowed, reason = check_line_amounts(debit, credit)
        if not allowed:
            return CommandResult.fail(reason)
        parsed.append((line, debit, credit))

    total_debit = sum((debit for _, debit, _ in parsed), Decimal("0"))
    total_credit = sum((credit for _, _, credit in parsed), Decimal("0"))
    allowed, reason = check_entry_balanced(
        total_debit, total_credit, settings.LEDGER_BALANCE_TOLERANCE
    )
    if not allowed:
        logger.info(f"Journal entry rejected: {reason}")
        return CommandResult.fail(reason)

    reference = (reference or "").strip() or default_reference()

    with transaction.atomic():
        entry = JournalEntry.objects.create(
            date=date,
            reference=reference,
            narration=narration or "",
        )
        JournalLine.objects.bulk_create([
            JournalLine(
                entry=entry,
                line_no=idx,
                account_id=line["account_id"],
                description=line.get("description") or "",
                debit=debit,
                credit=credit,
            )
            for idx, (line, debit, credit) in enumerate(parsed, start=1)
        ])

    logger.info(
        f"Journal entry created: {entry.reference}",
        extra={
            "entry_id": entry.id,
            "line_count": len(parsed),
            "total_debit": str(total_debit),
        },
    )
    return CommandResult.ok(entry)


def delete_journal_entry(entry_id: int) -> CommandResult:
    """Delete an entry and its lines."""
    try:
        entry = JournalEntry.objects.get(pk=entry_id)
    except JournalEntry.DoesNotExist:
        return CommandResult.fail("Journal entry not found.")

    reference = entry.reference
    with transaction.atomic():
        entry.delete()

    logger.info(f"Journal entry deleted: {reference}", extra={"entry_id": entry_id})
    return CommandResult.ok({"id": entry_id})


# =============================================================================
# Chart of Accounts Seeding
# =============================================================================

DEFAULT_CHART_OF_ACCOUNTS = [
    ("1000", "Cash", Account.AccountType.ASSET),
    ("1010", "Bank", Account.AccountType.ASSET),
    ("1100", "Accounts Receivable", Account.AccountType.ASSET),
    ("1200", "Inventory", Account.AccountType.ASSET),
    ("2000", "Accounts Payable", Account.AccountType.LIABILITY),
    ("2100", "GST Payable", Account.AccountType.LIABILITY),
    ("3000", "Owner's Capital", Account.AccountType.EQUITY),
    ("3100", "Retained Earnings", Account.AccountType.EQUITY),
    ("4000", "Sales Revenue", Account.AccountType.REVENUE),
    ("4100", "Other Income", Account.AccountType.REVENUE),
    ("5000", "Cost of Goods Sold", Account.AccountType.EXPENSE),
    ("5100", "Rent Expense", Account.AccountType.EXPENSE),
    ("5200", "Salaries Expense", Account.AccountType.EXPENSE),
    ("5300", "Utilities Expense", Account.AccountType.EXPENSE),
]


def seed_chart_of_accounts() -> CommandResult:
    """
    Install the default system chart of accounts.

    Idempotent: accounts whose code already exists are left untouched.
    Returns the list of accounts created by this call.
    """
    existing_codes = set(Account.objects.exclude(code="").values_list("code", flat=True))

    created = []
    with transaction.atomic():
        for code, name, account_type in DEFAULT_CHART_OF_ACCOUNTS:
            if code in existing_codes:
                continue
            created.append(
                Account.objects.create(
                    code=code,
                    name=name,
                    account_type=account_type,
                    is_system=True,
                )
            )

    logger.info(f"Seeded {len(created)} system accounts", extra={"created_count": len(created)})
    return CommandResult.ok(created)
