# reports/builders.py
"""
Financial report builders.

Every builder is a pure function of (entries, accounts, date range).
Entries are filtered by the inclusive range first, folded into balances
once, and each report normalizes the raw debit-positive balance by
account type:

    Revenue              amount = -balance   (credit normal)
    Expense              amount =  balance   (debit normal)
    Asset                amount =  balance
    Liability / Equity   amount = -balance

Only accounts that currently exist are iterated, so activity posted to
a removed account drops out of the P&L, Balance Sheet and Trial Balance.
It stays visible in the ledger, which walks entries directly.
"""
import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence

from .balances import balance_of, compute_account_balances
from .filters import DateLike, filter_entries_by_date, parse_date
from .snapshots import ACCOUNT_REMOVED_LABEL, AccountSnapshot, JournalEntrySnapshot


logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")
DEFAULT_TOLERANCE = Decimal("0.01")

ASSET = "ASSET"
LIABILITY = "LIABILITY"
EQUITY = "EQUITY"
REVENUE = "REVENUE"
EXPENSE = "EXPENSE"


@dataclass(frozen=True)
class AccountAmount:
    account: AccountSnapshot
    amount: Decimal


@dataclass(frozen=True)
class ProfitAndLoss:
    period_start: Optional[date]
    period_end: Optional[date]
    revenue_accounts: List[AccountAmount]
    expense_accounts: List[AccountAmount]
    revenue_total: Decimal
    expense_total: Decimal
    gross_profit: Decimal
    net_profit: Decimal


@dataclass(frozen=True)
class BalanceSheet:
    period_end: Optional[date]
    assets: List[AccountAmount]
    liabilities: List[AccountAmount]
    equity: List[AccountAmount]
    asset_total: Decimal
    liability_total: Decimal
    equity_total: Decimal
    net_profit_carried: Decimal
    difference: Decimal
    is_balanced: bool


@dataclass(frozen=True)
class TrialBalanceLine:
    account: AccountSnapshot
    debit: Decimal
    credit: Decimal


@dataclass(frozen=True)
class TrialBalance:
    period_start: Optional[date]
    period_end: Optional[date]
    lines: List[TrialBalanceLine]
    total_debit: Decimal
    total_credit: Decimal
    is_balanced: bool


@dataclass(frozen=True)
class LedgerRow:
    account_id: int
    account_name: str
    entry_id: int
    date: date
    reference: str
    description: str
    debit: Decimal
    credit: Decimal
    balance: Decimal


@dataclass(frozen=True)
class ReportBundle:
    pnl: ProfitAndLoss
    balance_sheet: BalanceSheet
    trial_balance: TrialBalance
    balances: Dict[int, Decimal] = field(default_factory=dict)


def _of_type(accounts: Iterable[AccountSnapshot], account_type: str) -> List[AccountSnapshot]:
    return [account for account in accounts if account.account_type == account_type]


def _total(items: Iterable[AccountAmount]) -> Decimal:
    return sum((item.amount for item in items), ZERO)


# =============================================================================
# Profit & Loss
# =============================================================================

def profit_and_loss_from_balances(
    balances: Dict[int, Decimal],
    accounts: Sequence[AccountSnapshot],
    period_start: DateLike = None,
    period_end: DateLike = None,
) -> ProfitAndLoss:
    revenues = [
        AccountAmount(account, -balance_of(balances, account.id))
        for account in _of_type(accounts, REVENUE)
    ]
    expenses = [
        AccountAmount(account, balance_of(balances, account.id))
        for account in _of_type(accounts, EXPENSE)
    ]
    revenue_total = _total(revenues)
    expense_total = _total(expenses)
    net_profit = revenue_total - expense_total

    # No COGS distinction in this chart: gross profit mirrors net profit.
    return ProfitAndLoss(
        period_start=parse_date(period_start),
        period_end=parse_date(period_end),
        revenue_accounts=revenues,
        expense_accounts=expenses,
        revenue_total=revenue_total,
        expense_total=expense_total,
        gross_profit=net_profit,
        net_profit=net_profit,
    )


def build_profit_and_loss(
    entries: Iterable[JournalEntrySnapshot],
    accounts: Sequence[AccountSnapshot],
    from_date: DateLike = None,
    to_date: DateLike = None,
) -> ProfitAndLoss:
    balances = compute_account_balances(filter_entries_by_date(entries, from_date, to_date))
    return profit_and_loss_from_balances(balances, accounts, from_date, to_date)


# =============================================================================
# Balance Sheet
# =============================================================================

def balance_sheet_from_balances(
    balances: Dict[int, Decimal],
    accounts: Sequence[AccountSnapshot],
    period_end: DateLike = None,
    tolerance: Decimal = DEFAULT_TOLERANCE,
) -> BalanceSheet:
    assets = [
        AccountAmount(account, balance_of(balances, account.id))
        for account in _of_type(accounts, ASSET)
    ]
    liabilities = [
        AccountAmount(account, -balance_of(balances, account.id))
        for account in _of_type(accounts, LIABILITY)
    ]
    equity = [
        AccountAmount(account, -balance_of(balances, account.id))
        for account in _of_type(accounts, EQUITY)
    ]

    asset_total = _total(assets)
    liability_total = _total(liabilities)
    equity_total = _total(equity)

    # Current-period earnings are not closed into equity, so carry them
    # explicitly when checking the accounting equation.
    net_profit_carried = profit_and_loss_from_balances(balances, accounts).net_profit
    difference = asset_total - (liability_total + equity_total + net_profit_carried)
    is_balanced = abs(difference) < tolerance

    if not is_balanced:
        logger.warning(
            "Balance sheet does not balance",
            extra={
                "period_end": str(period_end) if period_end else None,
                "asset_total": str(asset_total),
                "liability_total": str(liability_total),
                "equity_total": str(equity_total),
                "net_profit_carried": str(net_profit_carried),
                "difference": str(difference),
            },
        )

    return BalanceSheet(
        period_end=parse_date(period_end),
        assets=assets,
        liabilities=liabilities,
        equity=equity,
        asset_total=asset_total,
        liability_total=liability_total,
        equity_total=equity_total,
        net_profit_carried=net_profit_carried,
        difference=difference,
        is_balanced=is_balanced,
    )


def build_balance_sheet(
    entries: Iterable[JournalEntrySnapshot],
    accounts: Sequence[AccountSnapshot],
    from_date: DateLike = None,
    to_date: DateLike = None,
    tolerance: Decimal = DEFAULT_TOLERANCE,
) -> BalanceSheet:
    balances = compute_account_balances(filter_entries_by_date(entries, from_date, to_date))
    return balance_sheet_from_balances(balances, accounts, to_date, tolerance)


# =============================================================================
# Trial Balance
# =============================================================================

def trial_balance_from_balances(
    balances: Dict[int, Decimal],
    accounts: Sequence[AccountSnapshot],
    period_start: DateLike = None,
    period_end: DateLike = None,
    tolerance: Decimal = DEFAULT_TOLERANCE,
) -> TrialBalance:
    lines = []
    for account in accounts:
        balance = balance_of(balances, account.id)
        lines.append(
            TrialBalanceLine(
                account=account,
                debit=balance if balance > 0 else ZERO,
                credit=-balance if balance < 0 else ZERO,
            )
        )

    total_debit = sum((line.debit for line in lines), ZERO)
    total_credit = sum((line.credit for line in lines), ZERO)

    return TrialBalance(
        period_start=parse_date(period_start),
        period_end=parse_date(period_end),
        lines=lines,
        total_debit=total_debit,
        total_credit=total_credit,
        is_balanced=abs(total_debit - total_credit) < tolerance,
    )


def build_trial_balance(
    entries: Iterable[JournalEntrySnapshot],
    accounts: Sequence[AccountSnapshot],
    from_date: DateLike = None,
    to_date: DateLike = None,
    tolerance: Decimal = DEFAULT_TOLERANCE,
) -> TrialBalance:
    balances = compute_account_balances(filter_entries_by_date(entries, from_date, to_date))
    return trial_balance_from_balances(balances, accounts, from_date, to_date, tolerance)


# =============================================================================
# All period reports at once
# =============================================================================

def build_reports(
    entries: Iterable[JournalEntrySnapshot],
    accounts: Sequence[AccountSnapshot],
    from_date: DateLike = None,
    to_date: DateLike = None,
    tolerance: Decimal = DEFAULT_TOLERANCE,
) -> ReportBundle:
    """Filter once, aggregate once, and derive P&L, Balance Sheet and Trial Balance."""
    balances = compute_account_balances(filter_entries_by_date(entries, from_date, to_date))
    return ReportBundle(
        pnl=profit_and_loss_from_balances(balances, accounts, from_date, to_date),
        balance_sheet=balance_sheet_from_balances(balances, accounts, to_date, tolerance),
        trial_balance=trial_balance_from_balances(balances, accounts, from_date, to_date, tolerance),
        balances=balances,
    )


# =============================================================================
# Ledger
# =============================================================================

def build_ledger(
    entries: Iterable[JournalEntrySnapshot],
    account_id,
    accounts: Sequence[AccountSnapshot] = (),
    from_date: DateLike = None,
    to_date: DateLike = None,
) -> List[LedgerRow]:
    """
    Chronological postings to one account with a running balance.

    Entries are sorted ascending by date; ``sorted`` is stable so entries
    sharing a date keep their document order. The account need not exist
    any more: rows for a removed account carry a placeholder name.
    """
    account_name = ACCOUNT_REMOVED_LABEL
    for account in accounts:
        if account.id == account_id:
            account_name = account.name
            break

    relevant = sorted(filter_entries_by_date(entries, from_date, to_date), key=lambda e: e.date)

    rows: List[LedgerRow] = []
    running = ZERO
    for entry in relevant:
        for line in entry.lines:
            if line.account_id != account_id:
                continue
            running += line.debit - line.credit
            rows.append(
                LedgerRow(
                    account_id=account_id,
                    account_name=account_name,
                    entry_id=entry.id,
                    date=entry.date,
                    reference=entry.reference,
                    description=line.description or entry.narration,
                    debit=line.debit,
                    credit=line.credit,
                    balance=running,
                )
            )
    return rows
