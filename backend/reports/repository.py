"""
Ledger repository: the read side of the Data Store.

Report builders are handed a repository instead of reaching into global
state. Every read method returns a tuple of frozen snapshots, so callers
cannot mutate the store through what they read.

Implementations:
- OrmLedgerRepository: reads the Django models (the default store)
- InMemoryLedgerRepository: wraps snapshots already held in memory
"""
from abc import ABC, abstractmethod
from typing import Iterable, Tuple

from .snapshots import (
    AccountSnapshot,
    InvoiceSnapshot,
    JournalEntrySnapshot,
    JournalLineSnapshot,
    PartySnapshot,
)


class LedgerRepository(ABC):
    """Read contract consumed by report and dashboard builders."""

    @abstractmethod
    def list_accounts(self) -> Tuple[AccountSnapshot, ...]:
        ...

    @abstractmethod
    def list_journal_entries(self) -> Tuple[JournalEntrySnapshot, ...]:
        ...

    @abstractmethod
    def list_parties(self) -> Tuple[PartySnapshot, ...]:
        ...

    @abstractmethod
    def list_invoices(self) -> Tuple[InvoiceSnapshot, ...]:
        ...

    def get_account(self, account_id):
        """Return the account snapshot for ``account_id`` or None if it was removed."""
        for account in self.list_accounts():
            if account.id == account_id:
                return account
        return None


class InMemoryLedgerRepository(LedgerRepository):
    def __init__(
        self,
        accounts: Iterable[AccountSnapshot] = (),
        entries: Iterable[JournalEntrySnapshot] = (),
        parties: Iterable[PartySnapshot] = (),
        invoices: Iterable[InvoiceSnapshot] = (),
    ):
        self._accounts = tuple(accounts)
        self._entries = tuple(entries)
        self._parties = tuple(parties)
        self._invoices = tuple(invoices)

    def list_accounts(self):
        return self._accounts

    def list_journal_entries(self):
        return self._entries

    def list_parties(self):
        return self._parties

    def list_invoices(self):
        return self._invoices


def account_snapshot(account) -> AccountSnapshot:
    return AccountSnapshot(
        id=account.id,
        name=account.name,
        account_type=account.account_type,
        code=account.code,
        description=account.description,
        is_system=account.is_system,
    )


def journal_entry_snapshot(entry) -> JournalEntrySnapshot:
    # entry.lines must be prefetched by the caller for list reads
    return JournalEntrySnapshot(
        id=entry.id,
        date=entry.date,
        reference=entry.reference,
        narration=entry.narration,
        lines=tuple(
            JournalLineSnapshot(
                id=line.id,
                account_id=line.account_id,
                debit=line.debit,
                credit=line.credit,
                description=line.description,
            )
            for line in entry.lines.all()
        ),
    )


class OrmLedgerRepository(LedgerRepository):
    """
    Repository backed by the Django models.

    Each call issues fresh queries; snapshots reflect the store at the
    time of the call.
    """

    def list_accounts(self):
        from accounting.models import Account

        return tuple(account_snapshot(a) for a in Account.objects.order_by("code", "name", "id"))

    def list_journal_entries(self):
        from accounting.models import JournalEntry

        # Document order: creation order within the store.
        entries = JournalEntry.objects.order_by("id").prefetch_related("lines")
        return tuple(journal_entry_snapshot(e) for e in entries)

    def list_parties(self):
        from parties.models import Party

        return tuple(
            PartySnapshot(id=p.id, name=p.name, party_type=p.party_type)
            for p in Party.objects.order_by("name", "id")
        )

    def list_invoices(self):
        from invoicing.models import Invoice

        return tuple(
            InvoiceSnapshot(
                id=inv.id,
                invoice_number=inv.invoice_number,
                date=inv.date,
                customer_id=inv.customer_id,
                total=inv.total,
                status=inv.status,
            )
            for inv in Invoice.objects.order_by("id")
        )

    def get_account(self, account_id):
        from accounting.models import Account

        account = Account.objects.filter(pk=account_id).first()
        return account_snapshot(account) if account else None
