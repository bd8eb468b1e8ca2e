# reports/balances.py
"""
Balance aggregation.

Folds journal lines into signed per-account balances:

    balance(account) = sum(debit - credit) over every line posted to it

The sign is raw (debit positive). Report builders flip it for
credit-normal account types.
"""
from collections import defaultdict
from decimal import Decimal
from typing import Dict, Iterable

from .snapshots import JournalEntrySnapshot


def compute_account_balances(entries: Iterable[JournalEntrySnapshot]) -> Dict[int, Decimal]:
    """
    Return ``{account_id: balance}`` across all supplied entries.

    No filtering happens here; callers pre-filter by date range.
    Accounts without lines are absent from the result. Lines that
    reference removed accounts are still aggregated under their
    original id.
    """
    balances: Dict[int, Decimal] = defaultdict(lambda: Decimal("0.00"))
    for entry in entries:
        for line in entry.lines:
            balances[line.account_id] += line.debit - line.credit
    return dict(balances)


def balance_of(balances: Dict[int, Decimal], account_id) -> Decimal:
    return balances.get(account_id, Decimal("0.00"))
