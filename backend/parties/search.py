"""Party search shared by the list endpoint and the invoice customer picker."""
from typing import Iterable, List, Optional


SEARCH_FIELDS = ("name", "contact", "email", "gstin")


def search_parties(parties: Iterable, term: Optional[str] = None, party_type: Optional[str] = None) -> List:
    """
    Filter parties by type and a case-insensitive term, sorted by name.

    The term matches name, contact, email or GSTIN. A blank term keeps
    every party of the requested type.
    """
    needle = (term or "").strip().lower()

    def matches(party) -> bool:
        if party_type and party.party_type != party_type:
            return False
        if not needle:
            return True
        return any(needle in (getattr(party, field, "") or "").lower() for field in SEARCH_FIELDS)

    return sorted((p for p in parties if matches(p)), key=lambda p: p.name.lower())
