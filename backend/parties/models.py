# parties/models.py
"""
Customer and vendor master records.
"""
from django.db import models


class Party(models.Model):
    """A customer or vendor."""

    class PartyType(models.TextChoices):
        CUSTOMER = "customer", "Customer"
        VENDOR = "vendor", "Vendor"

    party_type = models.CharField(
        max_length=10,
        choices=PartyType.choices,
        default=PartyType.CUSTOMER,
        db_column="type",
    )
    name = models.CharField(max_length=255)
    address = models.TextField(blank=True, default="")
    contact = models.CharField(max_length=100, blank=True, default="")
    email = models.CharField(max_length=254, blank=True, default="")
    gstin = models.CharField(max_length=20, blank=True, default="")
    credit_terms = models.CharField(max_length=100, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name", "id"]
        verbose_name_plural = "parties"
        indexes = [
            models.Index(fields=["party_type", "name"], name="parties_type_name_idx"),
        ]

    def __str__(self):
        return f"{self.name} ({self.party_type})"
