# inventory/urls.py
from django.urls import path

from .views import (
    InventoryItemDetailView,
    InventoryItemListCreateView,
    InventoryLedgerView,
    InventorySummaryView,
    StockAdjustmentView,
    WarehouseDetailView,
    WarehouseListCreateView,
)

app_name = "inventory"

urlpatterns = [
    path("warehouses/", WarehouseListCreateView.as_view(), name="warehouse-list"),
    path("warehouses/<int:pk>/", WarehouseDetailView.as_view(), name="warehouse-detail"),
    path("items/", InventoryItemListCreateView.as_view(), name="item-list"),
    path("items/<int:pk>/", InventoryItemDetailView.as_view(), name="item-detail"),
    path("items/<int:pk>/adjust/", StockAdjustmentView.as_view(), name="item-adjust"),
    path("ledger/", InventoryLedgerView.as_view(), name="ledger"),
    path("summary/", InventorySummaryView.as_view(), name="summary"),
]
