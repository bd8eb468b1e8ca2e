# inventory/models.py
"""
Inventory models.

- Warehouse: a stock location
- InventoryItem: a stocked product with per-warehouse quantities
- InventoryLedgerEntry: append-only record of every stock movement

Per-warehouse stock is kept on the item as a JSON map of
{warehouse_id (str): quantity (str)}. Quantities are stored as strings so
they round-trip as exact Decimals.
"""
from decimal import Decimal

from django.db import models
from django.utils import timezone


QTY_Q = Decimal("0.001")


class Warehouse(models.Model):
    name = models.CharField(max_length=255)
    location = models.CharField(max_length=255, blank=True, default="")
    manager = models.CharField(max_length=255, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name", "id"]

    def __str__(self):
        return self.name


class InventoryItem(models.Model):
    sku = models.CharField(max_length=64, unique=True)
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")

    unit_price = models.DecimalField(max_digits=18, decimal_places=2, default=Decimal("0.00"))
    quantity = models.DecimalField(max_digits=18, decimal_places=3, default=Decimal("0.000"))

    stock_by_warehouse = models.JSONField(default=dict, blank=True)

    # Plain ids: warehouses may be removed while items still name them.
    preferred_warehouse_id = models.BigIntegerField(null=True, blank=True)
    reorder_point = models.DecimalField(max_digits=18, decimal_places=3, null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name", "id"]

    def __str__(self):
        return f"{self.sku} - {self.name}"

    def stock_in(self, warehouse_id) -> Decimal:
        return Decimal(str(self.stock_by_warehouse.get(str(warehouse_id), "0")))

    def set_stock(self, warehouse_id, quantity: Decimal) -> None:
        self.stock_by_warehouse = {
            **self.stock_by_warehouse,
            str(warehouse_id): str(quantity.quantize(QTY_Q)),
        }

    @property
    def is_low_stock(self) -> bool:
        return (
            self.reorder_point is not None
            and self.reorder_point > 0
            and self.quantity <= self.reorder_point
        )

    @property
    def stock_value(self) -> Decimal:
        return self.unit_price * self.quantity


class InventoryLedgerEntry(models.Model):
    """
    One stock movement.

    Rows are never updated or deleted; they keep the item and warehouse
    ids even after either is removed.
    """

    inventory_item = models.ForeignKey(
        InventoryItem,
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name="ledger_entries",
    )
    warehouse = models.ForeignKey(
        Warehouse,
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name="ledger_entries",
    )
    date = models.DateTimeField(default=timezone.now)
    quantity_delta = models.DecimalField(max_digits=18, decimal_places=3)
    reference = models.CharField(max_length=255)

    class Meta:
        ordering = ["-date", "-id"]
        verbose_name_plural = "inventory ledger entries"
        indexes = [
            models.Index(fields=["inventory_item", "date"], name="inventory_ledger_item_idx"),
        ]

    def __str__(self):
        return f"{self.inventory_item_id}@{self.warehouse_id} {self.quantity_delta:+} ({self.reference})"
