"""
Immutable snapshots of Data Store records.

Report builders never touch Django models. They receive these frozen
dataclasses (usually from a LedgerRepository) so every derivation is a
pure function of its inputs.
"""
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional, Tuple


ACCOUNT_REMOVED_LABEL = "Account removed"
UNKNOWN_PARTY_LABEL = "Unknown"


@dataclass(frozen=True)
class AccountSnapshot:
    id: int
    name: str
    account_type: str
    code: str = ""
    description: str = ""
    is_system: bool = False


@dataclass(frozen=True)
class JournalLineSnapshot:
    account_id: int
    debit: Decimal = Decimal("0.00")
    credit: Decimal = Decimal("0.00")
    description: str = ""
    id: Optional[int] = None


@dataclass(frozen=True)
class JournalEntrySnapshot:
    id: int
    date: date
    reference: str
    narration: str = ""
    lines: Tuple[JournalLineSnapshot, ...] = field(default_factory=tuple)

    @property
    def total_debit(self) -> Decimal:
        return sum((line.debit for line in self.lines), Decimal("0.00"))

    @property
    def total_credit(self) -> Decimal:
        return sum((line.credit for line in self.lines), Decimal("0.00"))


@dataclass(frozen=True)
class PartySnapshot:
    id: int
    name: str
    party_type: str


@dataclass(frozen=True)
class InvoiceSnapshot:
    id: int
    invoice_number: str
    date: date
    customer_id: int
    total: Decimal
    status: str


def account_label(account_id, accounts) -> str:
    """Display name for an account id, with a placeholder for removed accounts."""
    for account in accounts:
        if account.id == account_id:
            return account.name
    return ACCOUNT_REMOVED_LABEL
