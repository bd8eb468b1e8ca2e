# firm/commands.py
"""
Command layer for firm settings and the application reset.
"""
import logging

from django.conf import settings
from django.db import transaction

from accounting.commands import CommandResult, seed_chart_of_accounts
from firm.models import SECTION_DEFAULTS, TWO_FACTOR_METHODS, FirmSettings


logger = logging.getLogger(__name__)


def get_firm_settings() -> CommandResult:
    """Settings with defaults filled in, as {profile, security, preferences}."""
    return CommandResult.ok(FirmSettings.load().as_dict())


def firm_display_name() -> str:
    """Firm name for report title blocks."""
    name = FirmSettings.load().section("profile").get("firm_name")
    return name or settings.DEFAULT_FIRM_NAME


def _merge_section(name: str, current: dict, changes: dict):
    defaults = SECTION_DEFAULTS[name]
    unknown = set(changes) - set(defaults)
    if unknown:
        return None, f"Unknown {name} settings: {', '.join(sorted(unknown))}."

    merged = dict(current)
    for key, value in changes.items():
        if isinstance(defaults[key], bool):
            if not isinstance(value, bool):
                return None, f"{name}.{key} must be true or false."
        elif value is None:
            value = ""
        else:
            value = str(value).strip()
        merged[key] = value
    return merged, None


def upsert_firm_settings(profile: dict = None, security: dict = None, preferences: dict = None) -> CommandResult:
    """
    Merge the given keys into the stored sections.

    Sections that are omitted are left untouched. Unknown keys are rejected.
    """
    firm = FirmSettings.load()

    updates = {}
    for name, changes in (("profile", profile), ("security", security), ("preferences", preferences)):
        if changes is None:
            continue
        merged, error = _merge_section(name, getattr(firm, name) or {}, changes)
        if error:
            return CommandResult.fail(error)
        updates[name] = merged

    method = updates.get("security", {}).get("two_factor_method")
    if method is not None and method not in TWO_FACTOR_METHODS:
        return CommandResult.fail(f"Two-factor method must be one of: {', '.join(TWO_FACTOR_METHODS)}.")

    email = updates.get("profile", {}).get("email")
    if email and "@" not in email:
        return CommandResult.fail("Enter a valid email address.")

    with transaction.atomic():
        for name, value in updates.items():
            setattr(firm, name, value)
        firm.save()

    logger.info("Firm settings updated", extra={"sections": sorted(updates)})
    return CommandResult.ok(firm.as_dict())


def reset_all_data() -> CommandResult:
    """
    Remove every record and restore a fresh installation.

    Invoices, journal entries, inventory, parties, accounts and settings are
    deleted in one transaction, then the system chart of accounts is seeded
    again.
    """
    from accounting.models import Account, JournalEntry, JournalLine
    from inventory.models import InventoryItem, InventoryLedgerEntry, Warehouse
    from invoicing.models import Invoice, InvoiceLine
    from parties.models import Party

    removed = {}
    with transaction.atomic():
        for model in (
            InvoiceLine, Invoice,
            JournalLine, JournalEntry,
            InventoryLedgerEntry, InventoryItem, Warehouse,
            Party, Account, FirmSettings,
        ):
            count, _ = model.objects.all().delete()
            removed[model._meta.label] = count

        seeded = seed_chart_of_accounts().data

    logger.warning(
        "All application data reset",
        extra={"removed": removed, "seeded_accounts": len(seeded)},
    )
    return CommandResult.ok({"removed": removed, "seeded_accounts": len(seeded)})
