# tests/test_inventory.py
"""
Tests for warehouses, inventory items and stock adjustments.
"""

import logging
from decimal import Decimal

import pytest

from inventory.commands import (
    adjust_stock,
    create_inventory_item,
    delete_inventory_item,
    delete_warehouse,
    update_inventory_item,
    update_warehouse,
)
from inventory.models import InventoryItem, InventoryLedgerEntry
from inventory.stock import low_stock_items, stock_movements, total_stock_value


@pytest.mark.django_db
class TestInventoryItems:
    def test_opening_stock_lands_in_preferred_warehouse(self, item, warehouse):
        assert item.sku == "WID-1"
        assert item.quantity == Decimal("10.000")
        assert item.stock_in(warehouse.id) == Decimal("10.000")
        # opening stock is not a movement
        assert InventoryLedgerEntry.objects.count() == 0

    def test_sku_and_name_required(self, db):
        result = create_inventory_item(sku="", name="Thing")
        assert result.error == "SKU and Name are required."

    def test_duplicate_sku(self, item):
        result = create_inventory_item(sku="WID-1", name="Other")
        assert not result.success
        assert "already exists" in result.error

    def test_negative_opening_quantity(self, db):
        result = create_inventory_item(sku="N-1", name="Neg", quantity="-1")
        assert result.error == "Quantity must be zero or greater."

    def test_blank_price_means_zero(self, db):
        result = create_inventory_item(sku="free-1", name="Sample", unit_price="")
        assert result.success
        assert result.data.unit_price == 0

    def test_quantity_is_not_editable(self, item):
        result = update_inventory_item(item.id, quantity="99")
        assert not result.success

    def test_update_name(self, item):
        result = update_inventory_item(item.id, name="Blue Widget")
        assert result.success
        assert InventoryItem.objects.get(pk=item.id).name == "Blue Widget"

    def test_delete_keeps_ledger_history(self, item, warehouse):
        adjust_stock(item.id, warehouse.id, "2")

        assert delete_inventory_item(item.id).success
        assert InventoryLedgerEntry.objects.filter(inventory_item_id=item.id).count() == 1


@pytest.mark.django_db
class TestStockAdjustment:
    def test_increase(self, item, warehouse):
        result = adjust_stock(item.id, warehouse.id, "5")

        assert result.success
        movement = result.data
        assert movement.quantity_delta == Decimal("5.000")
        assert movement.reference == "Manual adjustment (Increase)"

        item.refresh_from_db()
        assert item.quantity == Decimal("15.000")
        assert item.stock_in(warehouse.id) == Decimal("15.000")

    def test_decrease_in_second_warehouse(self, item, warehouse, second_warehouse):
        result = adjust_stock(item.id, second_warehouse.id, "-3", reference="Damaged")

        assert result.success
        assert result.data.reference == "Damaged"
        item.refresh_from_db()
        assert item.quantity == Decimal("7.000")
        assert item.stock_in(warehouse.id) == Decimal("10.000")
        assert item.stock_in(second_warehouse.id) == Decimal("-3.000")

    def test_negative_stock_warns(self, item, second_warehouse, caplog):
        with caplog.at_level(logging.WARNING, logger="inventory.commands"):
            adjust_stock(item.id, second_warehouse.id, "-1")
        assert "negative" in caplog.text

    def test_zero_delta_rejected(self, item, warehouse):
        result = adjust_stock(item.id, warehouse.id, "0")
        assert result.error == "Adjustment quantity must be non-zero."
        assert InventoryLedgerEntry.objects.count() == 0

    def test_delta_rounding_to_zero_rejected(self, item, warehouse):
        result = adjust_stock(item.id, warehouse.id, "0.0004")

        assert result.error == "Adjustment quantity must be non-zero."
        assert InventoryLedgerEntry.objects.count() == 0
        item.refresh_from_db()
        assert item.quantity == Decimal("10.000")

    def test_unknown_warehouse(self, item):
        assert adjust_stock(item.id, 9999, "1").error == "Warehouse not found."

    def test_unknown_item(self, warehouse):
        assert adjust_stock(9999, warehouse.id, "1").error == "Inventory item not found."

    def test_quantity_matches_sum_of_warehouses(self, item, warehouse, second_warehouse):
        adjust_stock(item.id, warehouse.id, "-4")
        adjust_stock(item.id, second_warehouse.id, "6")

        item.refresh_from_db()
        per_warehouse = sum(Decimal(v) for v in item.stock_by_warehouse.values())
        assert item.quantity == per_warehouse == Decimal("12.000")


@pytest.mark.django_db
class TestWarehouses:
    def test_update(self, warehouse):
        result = update_warehouse(warehouse.id, manager="Ravi", location=None)

        assert result.success
        warehouse.refresh_from_db()
        assert warehouse.manager == "Ravi"
        assert warehouse.location == "Pune"

    def test_update_rejects_blank_name(self, warehouse):
        result = update_warehouse(warehouse.id, name="  ")
        assert result.error == "Warehouse name is required."

    def test_delete_with_stock_leaves_orphans(self, item, warehouse, caplog):
        with caplog.at_level(logging.WARNING, logger="inventory.commands"):
            result = delete_warehouse(warehouse.id)

        assert result.success
        item.refresh_from_db()
        assert item.stock_in(warehouse.id) == Decimal("10.000")
        assert "still holding stock" in caplog.text


@pytest.mark.django_db
class TestStockReads:
    def test_low_stock_and_value(self, item, warehouse):
        assert low_stock_items([item]) == []
        adjust_stock(item.id, warehouse.id, "-6")
        item.refresh_from_db()

        assert low_stock_items([item]) == [item]
        assert total_stock_value([item]) == Decimal("200.00")

    def test_movements_newest_first(self, item, warehouse):
        first = adjust_stock(item.id, warehouse.id, "1").data
        second = adjust_stock(item.id, warehouse.id, "2").data

        assert stock_movements([first, second]) == [second, first]
