# invoicing/urls.py
from django.urls import path

from .views import InvoiceDetailView, InvoiceListCreateView, InvoiceStatusView, TotalsPreviewView

app_name = "invoicing"

urlpatterns = [
    path("invoices/", InvoiceListCreateView.as_view(), name="invoice-list"),
    path("invoices/<int:pk>/", InvoiceDetailView.as_view(), name="invoice-detail"),
    path("invoices/<int:pk>/status/", InvoiceStatusView.as_view(), name="invoice-status"),
    path("preview-totals/", TotalsPreviewView.as_view(), name="preview-totals"),
]
