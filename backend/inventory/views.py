# inventory/views.py
"""
Thin views over the inventory commands.
"""
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from .commands import (
    adjust_stock,
    create_inventory_item,
    create_warehouse,
    delete_inventory_item,
    delete_warehouse,
    update_inventory_item,
    update_warehouse,
)
from .models import InventoryItem, InventoryLedgerEntry, Warehouse
from .serializers import (
    InventoryItemInputSerializer,
    InventoryItemSerializer,
    InventoryLedgerEntrySerializer,
    StockAdjustmentSerializer,
    WarehouseInputSerializer,
    WarehouseSerializer,
)
from .stock import low_stock_items, stock_movements, total_stock_value


def _fail(result):
    return Response({"detail": result.error}, status=status.HTTP_400_BAD_REQUEST)


# =============================================================================
# Warehouse Views
# =============================================================================

class WarehouseListCreateView(APIView):
    """
    GET /api/inventory/warehouses/
    POST /api/inventory/warehouses/
    """

    def get(self, request):
        return Response(WarehouseSerializer(Warehouse.objects.all(), many=True).data)

    def post(self, request):
        input_serializer = WarehouseInputSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        data = dict(input_serializer.validated_data)
        result = create_warehouse(name=data.pop("name", ""), **data)
        if not result.success:
            return _fail(result)

        return Response(WarehouseSerializer(result.data).data, status=status.HTTP_201_CREATED)


class WarehouseDetailView(APIView):
    """
    GET / PATCH / DELETE /api/inventory/warehouses/<id>/
    """

    def get(self, request, pk):
        return Response(WarehouseSerializer(get_object_or_404(Warehouse, pk=pk)).data)

    def patch(self, request, pk):
        get_object_or_404(Warehouse, pk=pk)
        input_serializer = WarehouseInputSerializer(data=request.data, partial=True)
        input_serializer.is_valid(raise_exception=True)

        result = update_warehouse(pk, **input_serializer.validated_data)
        if not result.success:
            return _fail(result)

        return Response(WarehouseSerializer(result.data).data)

    def delete(self, request, pk):
        get_object_or_404(Warehouse, pk=pk)
        result = delete_warehouse(pk)
        if not result.success:
            return _fail(result)
        return Response(status=status.HTTP_204_NO_CONTENT)


# =============================================================================
# Inventory Item Views
# =============================================================================

class InventoryItemListCreateView(APIView):
    """
    GET /api/inventory/items/
    POST /api/inventory/items/
    """

    def get(self, request):
        return Response(InventoryItemSerializer(InventoryItem.objects.all(), many=True).data)

    def post(self, request):
        input_serializer = InventoryItemInputSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        data = dict(input_serializer.validated_data)
        result = create_inventory_item(
            sku=data.pop("sku", ""),
            name=data.pop("name", ""),
            **data,
        )
        if not result.success:
            return _fail(result)

        return Response(InventoryItemSerializer(result.data).data, status=status.HTTP_201_CREATED)


class InventoryItemDetailView(APIView):
    """
    GET / PATCH / DELETE /api/inventory/items/<id>/
    """

    def get(self, request, pk):
        return Response(InventoryItemSerializer(get_object_or_404(InventoryItem, pk=pk)).data)

    def patch(self, request, pk):
        get_object_or_404(InventoryItem, pk=pk)
        input_serializer = InventoryItemInputSerializer(data=request.data, partial=True)
        input_serializer.is_valid(raise_exception=True)

        result = update_inventory_item(pk, **input_serializer.validated_data)
        if not result.success:
            return _fail(result)

        return Response(InventoryItemSerializer(result.data).data)

    def delete(self, request, pk):
        get_object_or_404(InventoryItem, pk=pk)
        result = delete_inventory_item(pk)
        if not result.success:
            return _fail(result)
        return Response(status=status.HTTP_204_NO_CONTENT)


class StockAdjustmentView(APIView):
    """
    POST /api/inventory/items/<id>/adjust/
        {"warehouse_id": 1, "delta": "-2", "reference": "", "date": null}
    """

    def post(self, request, pk):
        get_object_or_404(InventoryItem, pk=pk)
        input_serializer = StockAdjustmentSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        result = adjust_stock(pk, **input_serializer.validated_data)
        if not result.success:
            return _fail(result)

        item = InventoryItem.objects.get(pk=pk)
        return Response(
            {
                "ledger_entry": InventoryLedgerEntrySerializer(result.data).data,
                "item": InventoryItemSerializer(item).data,
            },
            status=status.HTTP_201_CREATED,
        )


# =============================================================================
# Ledger & Summary
# =============================================================================

class InventoryLedgerView(APIView):
    """
    GET /api/inventory/ledger/?item=<id> -> stock movements, newest first
    """

    def get(self, request):
        entries = InventoryLedgerEntry.objects.all()
        item_id = request.query_params.get("item")
        if item_id:
            entries = entries.filter(inventory_item_id=item_id)
        return Response(InventoryLedgerEntrySerializer(stock_movements(entries), many=True).data)


class InventorySummaryView(APIView):
    """
    GET /api/inventory/summary/ -> item count, stock value, low-stock alerts
    """

    def get(self, request):
        items = list(InventoryItem.objects.all())
        low = low_stock_items(items)
        return Response({
            "item_count": len(items),
            "stock_value": f"{total_stock_value(items):.2f}",
            "low_stock_count": len(low),
            "low_stock": InventoryItemSerializer(low, many=True).data,
        })
