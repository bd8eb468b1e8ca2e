from decimal import Decimal

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("inventory", "0001_initial"),
        ("parties", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Invoice",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("invoice_number", models.CharField(max_length=50, unique=True)),
                ("date", models.DateField()),
                ("due_date", models.DateField(blank=True, null=True)),
                ("billing_address", models.TextField(blank=True, default="")),
                ("shipping_address", models.TextField(blank=True, default="")),
                ("notes", models.TextField(blank=True, default="")),
                ("subtotal", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=18)),
                ("discount_total", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=18)),
                ("tax_total", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=18)),
                ("total", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=18)),
                ("status", models.CharField(
                    choices=[
                        ("draft", "Draft"),
                        ("issued", "Issued"),
                        ("paid", "Paid"),
                        ("overdue", "Overdue"),
                    ],
                    default="issued",
                    max_length=10,
                )),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("customer", models.ForeignKey(
                    db_constraint=False,
                    on_delete=django.db.models.deletion.DO_NOTHING,
                    related_name="invoices",
                    to="parties.party",
                )),
            ],
            options={
                "ordering": ["-date", "-id"],
                "indexes": [
                    models.Index(fields=["customer", "date"], name="invoicing_customer_date_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="InvoiceLine",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("line_no", models.PositiveIntegerField()),
                ("warehouse_id", models.BigIntegerField(blank=True, null=True)),
                ("description", models.CharField(blank=True, default="", max_length=500)),
                ("quantity", models.DecimalField(decimal_places=3, max_digits=18)),
                ("unit_price", models.DecimalField(decimal_places=2, max_digits=18)),
                ("discount", models.DecimalField(decimal_places=3, default=Decimal("0"), max_digits=7)),
                ("tax_rate", models.DecimalField(decimal_places=3, default=Decimal("0"), max_digits=7)),
                ("line_total", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=18)),
                ("inventory_item", models.ForeignKey(
                    db_constraint=False,
                    on_delete=django.db.models.deletion.DO_NOTHING,
                    related_name="invoice_lines",
                    to="inventory.inventoryitem",
                )),
                ("invoice", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="lines",
                    to="invoicing.invoice",
                )),
            ],
            options={
                "ordering": ["invoice_id", "line_no"],
                "constraints": [
                    models.UniqueConstraint(fields=("invoice", "line_no"), name="uniq_line_no_per_invoice"),
                ],
            },
        ),
    ]
