# invoicing/serializers.py
from rest_framework import serializers

from reports.snapshots import UNKNOWN_PARTY_LABEL

from .models import Invoice, InvoiceLine


class InvoiceLineSerializer(serializers.ModelSerializer):
    class Meta:
        model = InvoiceLine
        fields = [
            "id", "line_no", "inventory_item_id", "warehouse_id", "description",
            "quantity", "unit_price", "discount", "tax_rate", "line_total",
        ]
        read_only_fields = fields


class InvoiceSerializer(serializers.ModelSerializer):
    lines = InvoiceLineSerializer(many=True, read_only=True)
    customer_name = serializers.SerializerMethodField()

    class Meta:
        model = Invoice
        fields = [
            "id", "invoice_number", "date", "due_date",
            "customer_id", "customer_name",
            "billing_address", "shipping_address", "notes",
            "subtotal", "discount_total", "tax_total", "total",
            "status", "lines", "created_at", "updated_at",
        ]
        read_only_fields = fields

    def get_customer_name(self, obj):
        names = self.context.get("party_names")
        if names is not None:
            return names.get(obj.customer_id, UNKNOWN_PARTY_LABEL)
        from parties.models import Party

        party = Party.objects.filter(pk=obj.customer_id).first()
        return party.name if party else UNKNOWN_PARTY_LABEL


class InvoiceLineInputSerializer(serializers.Serializer):
    """
    Amount fields stay strings: blank or unparsable values have defined
    meanings in the totals calculator.
    """
    inventory_item_id = serializers.IntegerField(required=False, allow_null=True)
    warehouse_id = serializers.IntegerField(required=False, allow_null=True)
    description = serializers.CharField(required=False, allow_blank=True, default="")
    quantity = serializers.CharField(required=False, allow_blank=True, default="")
    unit_price = serializers.CharField(required=False, allow_blank=True, default="")
    discount = serializers.CharField(required=False, allow_blank=True, default="")
    tax_rate = serializers.CharField(required=False, allow_blank=True, default="")


class InvoiceCreateSerializer(serializers.Serializer):
    customer_id = serializers.IntegerField(required=False, allow_null=True)
    date = serializers.DateField()
    due_date = serializers.DateField(required=False, allow_null=True)
    invoice_number = serializers.CharField(max_length=50, required=False, allow_blank=True, default="")
    billing_address = serializers.CharField(required=False, allow_blank=True)
    shipping_address = serializers.CharField(required=False, allow_blank=True)
    notes = serializers.CharField(required=False, allow_blank=True, default="")
    lines = InvoiceLineInputSerializer(many=True)


class InvoiceStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Invoice.Status.choices)


class TotalsPreviewSerializer(serializers.Serializer):
    lines = InvoiceLineInputSerializer(many=True)
