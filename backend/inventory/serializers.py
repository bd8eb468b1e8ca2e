# inventory/serializers.py
from rest_framework import serializers

from .models import InventoryItem, InventoryLedgerEntry, Warehouse


class WarehouseSerializer(serializers.ModelSerializer):
    class Meta:
        model = Warehouse
        fields = ["id", "name", "location", "manager", "created_at", "updated_at"]
        read_only_fields = fields


class WarehouseInputSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    location = serializers.CharField(max_length=255, required=False, allow_blank=True)
    manager = serializers.CharField(max_length=255, required=False, allow_blank=True)


class InventoryItemSerializer(serializers.ModelSerializer):
    is_low_stock = serializers.BooleanField(read_only=True)

    class Meta:
        model = InventoryItem
        fields = [
            "id", "sku", "name", "description", "unit_price", "quantity",
            "stock_by_warehouse", "preferred_warehouse_id", "reorder_point",
            "is_low_stock", "created_at", "updated_at",
        ]
        read_only_fields = fields


class InventoryItemInputSerializer(serializers.Serializer):
    """
    Amounts arrive as strings and are parsed by the commands, which own
    the validation messages.
    """
    sku = serializers.CharField(max_length=64, required=False, allow_blank=True)
    name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    description = serializers.CharField(required=False, allow_blank=True)
    unit_price = serializers.CharField(required=False, allow_blank=True)
    quantity = serializers.CharField(required=False, allow_blank=True)
    preferred_warehouse_id = serializers.IntegerField(required=False, allow_null=True)
    reorder_point = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class StockAdjustmentSerializer(serializers.Serializer):
    warehouse_id = serializers.IntegerField()
    delta = serializers.DecimalField(max_digits=18, decimal_places=3)
    reference = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    date = serializers.DateTimeField(required=False, allow_null=True)


class InventoryLedgerEntrySerializer(serializers.ModelSerializer):
    class Meta:
        model = InventoryLedgerEntry
        fields = ["id", "inventory_item_id", "warehouse_id", "date", "quantity_delta", "reference"]
        read_only_fields = fields
