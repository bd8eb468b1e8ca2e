from django.contrib import admin

from .models import InventoryItem, InventoryLedgerEntry, Warehouse


@admin.register(Warehouse)
class WarehouseAdmin(admin.ModelAdmin):
    list_display = ["name", "location", "manager"]
    search_fields = ["name", "location"]


@admin.register(InventoryItem)
class InventoryItemAdmin(admin.ModelAdmin):
    list_display = ["sku", "name", "unit_price", "quantity", "reorder_point"]
    search_fields = ["sku", "name"]
    # Stock moves only through adjust_stock
    readonly_fields = ["quantity", "stock_by_warehouse"]


@admin.register(InventoryLedgerEntry)
class InventoryLedgerEntryAdmin(admin.ModelAdmin):
    list_display = ["date", "inventory_item_id", "warehouse_id", "quantity_delta", "reference"]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
