"""Entry filters shared by reports, the dashboard and the journal list."""
from datetime import date
from typing import Iterable, Optional, Tuple, Union

from .snapshots import AccountSnapshot, JournalEntrySnapshot


DateLike = Union[date, str, None]


def parse_date(value: DateLike) -> Optional[date]:
    """Accept a date, an ISO ``YYYY-MM-DD`` string, or a blank value."""
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def filter_entries_by_date(
    entries: Iterable[JournalEntrySnapshot],
    from_date: DateLike = None,
    to_date: DateLike = None,
) -> Tuple[JournalEntrySnapshot, ...]:
    """
    Keep entries whose date falls in the inclusive range [from_date, to_date].

    A missing bound leaves that side open. The input is not modified;
    applying the same bounds twice yields the same result.
    """
    start = parse_date(from_date)
    end = parse_date(to_date)
    return tuple(
        entry
        for entry in entries
        if (start is None or entry.date >= start) and (end is None or entry.date <= end)
    )


def search_entries(
    entries: Iterable[JournalEntrySnapshot],
    term: Optional[str],
    accounts: Iterable[AccountSnapshot] = (),
) -> Tuple[JournalEntrySnapshot, ...]:
    """
    Case-insensitive substring search over reference, narration and the
    names of the accounts on each entry's lines.
    """
    needle = (term or "").strip().lower()
    if not needle:
        return tuple(entries)

    names = {account.id: account.name.lower() for account in accounts}

    def matches(entry: JournalEntrySnapshot) -> bool:
        if needle in entry.reference.lower():
            return True
        if entry.narration and needle in entry.narration.lower():
            return True
        return any(needle in names.get(line.account_id, "") for line in entry.lines)

    return tuple(entry for entry in entries if matches(entry))
