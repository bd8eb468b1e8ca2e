from decimal import Decimal

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Warehouse",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("location", models.CharField(blank=True, default="", max_length=255)),
                ("manager", models.CharField(blank=True, default="", max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["name", "id"],
            },
        ),
        migrations.CreateModel(
            name="InventoryItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("sku", models.CharField(max_length=64, unique=True)),
                ("name", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True, default="")),
                ("unit_price", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=18)),
                ("quantity", models.DecimalField(decimal_places=3, default=Decimal("0.000"), max_digits=18)),
                ("stock_by_warehouse", models.JSONField(blank=True, default=dict)),
                ("preferred_warehouse_id", models.BigIntegerField(blank=True, null=True)),
                ("reorder_point", models.DecimalField(blank=True, decimal_places=3, max_digits=18, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["name", "id"],
            },
        ),
        migrations.CreateModel(
            name="InventoryLedgerEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date", models.DateTimeField(default=django.utils.timezone.now)),
                ("quantity_delta", models.DecimalField(decimal_places=3, max_digits=18)),
                ("reference", models.CharField(max_length=255)),
                ("inventory_item", models.ForeignKey(
                    db_constraint=False,
                    on_delete=django.db.models.deletion.DO_NOTHING,
                    related_name="ledger_entries",
                    to="inventory.inventoryitem",
                )),
                ("warehouse", models.ForeignKey(
                    db_constraint=False,
                    on_delete=django.db.models.deletion.DO_NOTHING,
                    related_name="ledger_entries",
                    to="inventory.warehouse",
                )),
            ],
            options={
                "verbose_name_plural": "inventory ledger entries",
                "ordering": ["-date", "-id"],
                "indexes": [
                    models.Index(fields=["inventory_item", "date"], name="inventory_ledger_item_idx"),
                ],
            },
        ),
    ]
