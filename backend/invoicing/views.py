# invoicing/views.py
"""
Thin views over the invoice commands.
"""
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from accounting.commands import quantize_money
from inventory.models import InventoryItem
from parties.models import Party

from .commands import (
    at_stored_precision,
    create_invoice,
    delete_invoice,
    next_invoice_number,
    update_invoice_status,
)
from .models import Invoice
from .serializers import (
    InvoiceCreateSerializer,
    InvoiceSerializer,
    InvoiceStatusSerializer,
    TotalsPreviewSerializer,
)
from .totals import compute_invoice_totals


def _money(value) -> str:
    return f"{quantize_money(value):.2f}"


class InvoiceListCreateView(APIView):
    """
    GET /api/invoicing/invoices/?status=<status>&customer=<id>
    POST /api/invoicing/invoices/
    """

    def get(self, request):
        invoices = Invoice.objects.prefetch_related("lines")
        if request.query_params.get("status"):
            invoices = invoices.filter(status=request.query_params["status"])
        if request.query_params.get("customer"):
            invoices = invoices.filter(customer_id=request.query_params["customer"])

        party_names = dict(Party.objects.values_list("id", "name"))
        serializer = InvoiceSerializer(invoices, many=True, context={"party_names": party_names})
        return Response({
            "next_invoice_number": next_invoice_number(),
            "results": serializer.data,
        })

    def post(self, request):
        input_serializer = InvoiceCreateSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        result = create_invoice(**input_serializer.validated_data)
        if not result.success:
            return Response({"detail": result.error}, status=status.HTTP_400_BAD_REQUEST)

        invoice = Invoice.objects.prefetch_related("lines").get(pk=result.data.pk)
        return Response(InvoiceSerializer(invoice).data, status=status.HTTP_201_CREATED)


class InvoiceDetailView(APIView):
    """
    GET /api/invoicing/invoices/<id>/
    DELETE /api/invoicing/invoices/<id>/
    """

    def get(self, request, pk):
        invoice = get_object_or_404(Invoice.objects.prefetch_related("lines"), pk=pk)
        return Response(InvoiceSerializer(invoice).data)

    def delete(self, request, pk):
        get_object_or_404(Invoice, pk=pk)
        result = delete_invoice(pk)
        if not result.success:
            return Response({"detail": result.error}, status=status.HTTP_400_BAD_REQUEST)
        return Response(status=status.HTTP_204_NO_CONTENT)


class InvoiceStatusView(APIView):
    """
    POST /api/invoicing/invoices/<id>/status/ {"status": "paid"}
    """

    def post(self, request, pk):
        get_object_or_404(Invoice, pk=pk)
        input_serializer = InvoiceStatusSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        result = update_invoice_status(pk, input_serializer.validated_data["status"])
        if not result.success:
            return Response({"detail": result.error}, status=status.HTTP_400_BAD_REQUEST)

        return Response(InvoiceSerializer(result.data).data)


class TotalsPreviewView(APIView):
    """
    POST /api/invoicing/preview-totals/ {"lines": [...]}

    Totals for a draft without saving anything.
    """

    def post(self, request):
        input_serializer = TotalsPreviewSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        lines = input_serializer.validated_data["lines"]
        item_ids = {line.get("inventory_item_id") for line in lines if line.get("inventory_item_id")}
        item_prices = dict(InventoryItem.objects.filter(id__in=item_ids).values_list("id", "unit_price"))

        totals = compute_invoice_totals(at_stored_precision(lines, item_prices), item_prices)
        subtotal = quantize_money(totals.subtotal)
        tax_total = quantize_money(totals.tax_total)
        return Response({
            "subtotal": _money(subtotal),
            "discount_total": _money(totals.discount_total),
            "tax_total": _money(tax_total),
            "total": _money(subtotal + tax_total),
            "lines": [
                {"index": line.index, "line_total": _money(line.line_total)}
                for line in totals.lines
            ],
        })
