from django.contrib import admin

from .models import Invoice, InvoiceLine


class InvoiceLineInline(admin.TabularInline):
    model = InvoiceLine
    extra = 0
    readonly_fields = [
        "line_no", "inventory_item_id", "quantity", "unit_price",
        "discount", "tax_rate", "line_total",
    ]
    fields = readonly_fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Invoice)
class InvoiceAdmin(admin.ModelAdmin):
    list_display = ["invoice_number", "date", "customer_id", "total", "status"]
    list_filter = ["status"]
    search_fields = ["invoice_number"]
    readonly_fields = ["subtotal", "discount_total", "tax_total", "total"]
    inlines = [InvoiceLineInline]
