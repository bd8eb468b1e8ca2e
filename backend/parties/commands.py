# parties/commands.py
"""
Command layer for customers and vendors.
"""
import logging
import re

from django.db import transaction

from accounting.commands import CommandResult
from parties.models import Party


logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"\S+@\S+\.\S+")

PARTY_FIELDS = ("party_type", "name", "address", "contact", "email", "gstin", "credit_terms")


def _validate(fields: dict):
    """Return an error message, or None when the fields are acceptable."""
    if "name" in fields and not (fields["name"] or "").strip():
        return "Name is required."
    email = (fields.get("email") or "").strip()
    if email and not EMAIL_RE.fullmatch(email):
        return "Enter a valid email address."
    party_type = fields.get("party_type")
    if party_type is not None and party_type not in Party.PartyType.values:
        return f"Invalid party type: {party_type}."
    return None


def _clean(fields: dict) -> dict:
    cleaned = {}
    for key, value in fields.items():
        if key not in PARTY_FIELDS or value is None:
            continue
        cleaned[key] = value.strip() if isinstance(value, str) else value
    return cleaned


def create_party(name: str, party_type: str = Party.PartyType.CUSTOMER, **fields) -> CommandResult:
    """
    Create a customer or vendor.

    Name is required. Email is optional but must look like an address.
    """
    data = _clean({"name": name, "party_type": party_type, **fields})
    data.setdefault("name", "")
    error = _validate(data)
    if error:
        return CommandResult.fail(error)

    with transaction.atomic():
        party = Party.objects.create(**data)

    logger.info(f"Party created: {party}", extra={"party_id": party.id})
    return CommandResult.ok(party)


def update_party(party_id: int, **changes) -> CommandResult:
    try:
        party = Party.objects.get(pk=party_id)
    except Party.DoesNotExist:
        return CommandResult.fail("Party not found.")

    data = _clean(changes)
    error = _validate(data)
    if error:
        return CommandResult.fail(error)

    with transaction.atomic():
        for field, value in data.items():
            setattr(party, field, value)
        party.save()

    logger.info(f"Party updated: {party}", extra={"party_id": party.id, "fields": sorted(data)})
    return CommandResult.ok(party)


def delete_party(party_id: int) -> CommandResult:
    """
    Delete a party.

    Invoices that reference it keep the id and show the customer as "Unknown".
    """
    try:
        party = Party.objects.get(pk=party_id)
    except Party.DoesNotExist:
        return CommandResult.fail("Party not found.")

    from invoicing.models import Invoice

    invoice_count = Invoice.objects.filter(customer_id=party_id).count()

    with transaction.atomic():
        party.delete()

    if invoice_count:
        logger.warning(
            f"Deleted party {party_id} referenced by {invoice_count} invoices",
            extra={"party_id": party_id, "orphaned_invoices": invoice_count},
        )
    else:
        logger.info(f"Party deleted: {party_id}", extra={"party_id": party_id})

    return CommandResult.ok({"id": party_id})
