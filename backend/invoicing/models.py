# invoicing/models.py
"""
Invoice models.

Totals are computed by invoicing/totals.py at creation and stored on the
invoice; lines keep the inputs they were computed from.
"""
from decimal import Decimal

from django.db import models


class Invoice(models.Model):

    class Status(models.TextChoices):
        DRAFT = "draft", "Draft"
        ISSUED = "issued", "Issued"
        PAID = "paid", "Paid"
        OVERDUE = "overdue", "Overdue"

    invoice_number = models.CharField(max_length=50, unique=True)
    date = models.DateField()
    due_date = models.DateField(null=True, blank=True)

    # Not enforced: invoices outlive deleted customers.
    customer = models.ForeignKey(
        "parties.Party",
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name="invoices",
    )

    billing_address = models.TextField(blank=True, default="")
    shipping_address = models.TextField(blank=True, default="")
    notes = models.TextField(blank=True, default="")

    subtotal = models.DecimalField(max_digits=18, decimal_places=2, default=Decimal("0.00"))
    discount_total = models.DecimalField(max_digits=18, decimal_places=2, default=Decimal("0.00"))
    tax_total = models.DecimalField(max_digits=18, decimal_places=2, default=Decimal("0.00"))
    total = models.DecimalField(max_digits=18, decimal_places=2, default=Decimal("0.00"))

    status = models.CharField(max_length=10, choices=Status.choices, default=Status.ISSUED)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-date", "-id"]
        indexes = [
            models.Index(fields=["customer", "date"], name="invoicing_customer_date_idx"),
        ]

    def __str__(self):
        return self.invoice_number


class InvoiceLine(models.Model):
    invoice = models.ForeignKey(Invoice, on_delete=models.CASCADE, related_name="lines")
    line_no = models.PositiveIntegerField()

    inventory_item = models.ForeignKey(
        "inventory.InventoryItem",
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name="invoice_lines",
    )
    warehouse_id = models.BigIntegerField(null=True, blank=True)

    description = models.CharField(max_length=500, blank=True, default="")
    quantity = models.DecimalField(max_digits=18, decimal_places=3)
    unit_price = models.DecimalField(max_digits=18, decimal_places=2)
    discount = models.DecimalField(max_digits=7, decimal_places=3, default=Decimal("0"))
    tax_rate = models.DecimalField(max_digits=7, decimal_places=3, default=Decimal("0"))
    line_total = models.DecimalField(max_digits=18, decimal_places=2, default=Decimal("0.00"))

    class Meta:
        ordering = ["invoice_id", "line_no"]
        constraints = [
            models.UniqueConstraint(fields=["invoice", "line_no"], name="uniq_line_no_per_invoice"),
        ]

    def __str__(self):
        return f"{self.invoice_id} line {self.line_no}"
