# inventory/commands.py
"""
Command layer for inventory.

Stock only moves through adjust_stock, which updates the item's
per-warehouse map and total quantity and appends one ledger row in the
same transaction.
"""
import logging
from decimal import Decimal

from django.db import transaction
from django.utils import timezone

from accounting.commands import CommandResult, to_decimal
from inventory.models import QTY_Q, InventoryItem, InventoryLedgerEntry, Warehouse


logger = logging.getLogger(__name__)

WAREHOUSE_FIELDS = ("name", "location", "manager")
ITEM_FIELDS = ("sku", "name", "description", "unit_price", "preferred_warehouse_id", "reorder_point")


def adjustment_reference(delta: Decimal) -> str:
    return f"Manual adjustment ({'Increase' if delta > 0 else 'Decrease'})"


# =============================================================================
# Warehouse Commands
# =============================================================================

def create_warehouse(name: str, location: str = "", manager: str = "") -> CommandResult:
    name = (name or "").strip()
    if not name:
        return CommandResult.fail("Warehouse name is required.")

    with transaction.atomic():
        warehouse = Warehouse.objects.create(
            name=name,
            location=location or "",
            manager=manager or "",
        )

    logger.info(f"Warehouse created: {warehouse}", extra={"warehouse_id": warehouse.id})
    return CommandResult.ok(warehouse)


def update_warehouse(warehouse_id: int, **changes) -> CommandResult:
    try:
        warehouse = Warehouse.objects.get(pk=warehouse_id)
    except Warehouse.DoesNotExist:
        return CommandResult.fail("Warehouse not found.")

    data = {k: v for k, v in changes.items() if k in WAREHOUSE_FIELDS and v is not None}
    if "name" in data:
        data["name"] = data["name"].strip()
        if not data["name"]:
            return CommandResult.fail("Warehouse name is required.")

    with transaction.atomic():
        for field, value in data.items():
            setattr(warehouse, field, value)
        warehouse.save()

    return CommandResult.ok(warehouse)


def delete_warehouse(warehouse_id: int) -> CommandResult:
    """
    Delete a warehouse.

    Stock recorded against it stays on the items and in the ledger under
    the removed id.
    """
    try:
        warehouse = Warehouse.objects.get(pk=warehouse_id)
    except Warehouse.DoesNotExist:
        return CommandResult.fail("Warehouse not found.")

    key = str(warehouse_id)
    stocked = [
        item.sku
        for item in InventoryItem.objects.all()
        if item.stock_in(key) != 0
    ]

    with transaction.atomic():
        warehouse.delete()

    if stocked:
        logger.warning(
            f"Deleted warehouse {warehouse_id} still holding stock for {len(stocked)} items",
            extra={"warehouse_id": warehouse_id, "skus": stocked},
        )
    else:
        logger.info(f"Warehouse deleted: {warehouse_id}", extra={"warehouse_id": warehouse_id})

    return CommandResult.ok({"id": warehouse_id})


# =============================================================================
# Inventory Item Commands
# =============================================================================

def _validate_item(data: dict):
    if "sku" in data and not data["sku"]:
        return "SKU and Name are required."
    if "name" in data and not data["name"]:
        return "SKU and Name are required."
    if "unit_price" in data and (data["unit_price"] is None or data["unit_price"] < 0):
        return "Enter a valid unit price."
    return None


def _normalize_item_fields(fields: dict) -> dict:
    data = {}
    for key, value in fields.items():
        if key not in ITEM_FIELDS:
            continue
        if key == "sku":
            value = (value or "").strip().upper()
        elif key == "name":
            value = (value or "").strip()
        elif key == "description":
            value = value or ""
        elif key == "unit_price":
            value = Decimal("0") if value in (None, "") else to_decimal(value, default=None)
        elif key == "reorder_point":
            value = to_decimal(value, default=None)
        elif key == "preferred_warehouse_id":
            value = value or None
        data[key] = value
    return data


def create_inventory_item(
    sku: str,
    name: str,
    unit_price=Decimal("0"),
    quantity=Decimal("0"),
    description: str = "",
    preferred_warehouse_id: int = None,
    reorder_point=None,
) -> CommandResult:
    """
    Create a stocked item.

    The SKU is stored uppercased. Opening quantity is placed on the
    preferred warehouse when that warehouse exists; otherwise it is only
    reflected in the total.
    """
    data = _normalize_item_fields({
        "sku": sku,
        "name": name,
        "unit_price": unit_price,
        "description": description,
        "preferred_warehouse_id": preferred_warehouse_id,
        "reorder_point": reorder_point,
    })
    error = _validate_item(data)
    if error:
        return CommandResult.fail(error)

    opening = to_decimal(quantity, default=None)
    if opening is None or opening < 0:
        return CommandResult.fail("Quantity must be zero or greater.")

    if InventoryItem.objects.filter(sku=data["sku"]).exists():
        return CommandResult.fail(f"SKU '{data['sku']}' already exists.")

    item = InventoryItem(quantity=opening.quantize(QTY_Q), **data)
    preferred = data.get("preferred_warehouse_id")
    if preferred and Warehouse.objects.filter(pk=preferred).exists():
        item.set_stock(preferred, opening)

    with transaction.atomic():
        item.save()

    logger.info(f"Inventory item created: {item}", extra={"item_id": item.id})
    return CommandResult.ok(item)


def update_inventory_item(item_id: int, **changes) -> CommandResult:
    """
    Update descriptive fields, price, preferred warehouse or reorder point.

    Quantities are not editable here; use adjust_stock so every change
    lands in the ledger.
    """
    try:
        item = InventoryItem.objects.get(pk=item_id)
    except InventoryItem.DoesNotExist:
        return CommandResult.fail("Inventory item not found.")

    if "quantity" in changes:
        return CommandResult.fail("Quantity changes must go through stock adjustments.")

    data = _normalize_item_fields({k: v for k, v in changes.items() if v is not None or k == "reorder_point"})
    error = _validate_item(data)
    if error:
        return CommandResult.fail(error)

    if "sku" in data and InventoryItem.objects.filter(sku=data["sku"]).exclude(pk=item_id).exists():
        return CommandResult.fail(f"SKU '{data['sku']}' already exists.")

    with transaction.atomic():
        for field, value in data.items():
            setattr(item, field, value)
        item.save()

    logger.info(f"Inventory item updated: {item}", extra={"item_id": item.id, "fields": sorted(data)})
    return CommandResult.ok(item)


def delete_inventory_item(item_id: int) -> CommandResult:
    """Delete an item. Its ledger rows are kept."""
    try:
        item = InventoryItem.objects.get(pk=item_id)
    except InventoryItem.DoesNotExist:
        return CommandResult.fail("Inventory item not found.")

    sku = item.sku
    with transaction.atomic():
        item.delete()

    logger.info(f"Inventory item deleted: {sku}", extra={"item_id": item_id})
    return CommandResult.ok({"id": item_id})


# =============================================================================
# Stock Adjustment
# =============================================================================

def adjust_stock(
    item_id: int,
    warehouse_id: int,
    delta,
    reference: str = "",
    date=None,
) -> CommandResult:
    """
    Apply a signed quantity change to one item in one warehouse.

    Args:
        item_id: Inventory item
        warehouse_id: Warehouse receiving the change
        delta: Signed quantity; zero is rejected
        reference: Free text; defaults to "Manual adjustment (Increase|Decrease)"
        date: Movement timestamp; defaults to now

    Returns:
        CommandResult with the created InventoryLedgerEntry

    Negative resulting stock is allowed and logged as a warning.
    """
    delta = to_decimal(delta).quantize(QTY_Q)
    if delta == 0:
        return CommandResult.fail("Adjustment quantity must be non-zero.")

    if not Warehouse.objects.filter(pk=warehouse_id).exists():
        return CommandResult.fail("Warehouse not found.")

    reference = (reference or "").strip() or adjustment_reference(delta)

    with transaction.atomic():
        try:
            item = InventoryItem.objects.select_for_update().get(pk=item_id)
        except InventoryItem.DoesNotExist:
            return CommandResult.fail("Inventory item not found.")

        new_level = item.stock_in(warehouse_id) + delta
        item.set_stock(warehouse_id, new_level)
        item.quantity = item.quantity + delta
        item.save(update_fields=["stock_by_warehouse", "quantity", "updated_at"])

        ledger_entry = InventoryLedgerEntry.objects.create(
            inventory_item_id=item.id,
            warehouse_id=warehouse_id,
            date=date or timezone.now(),
            quantity_delta=delta,
            reference=reference,
        )

    extra = {
        "item_id": item.id,
        "warehouse_id": warehouse_id,
        "delta": str(delta),
        "level": str(new_level),
    }
    if new_level < 0:
        logger.warning(f"Stock for {item.sku} in warehouse {warehouse_id} is negative: {new_level}", extra=extra)
    else:
        logger.info(f"Stock adjusted for {item.sku}: {delta:+}", extra=extra)

    return CommandResult.ok(ledger_entry)
