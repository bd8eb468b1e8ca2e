from decimal import Decimal

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Account",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("code", models.CharField(blank=True, default="", max_length=20)),
                ("name", models.CharField(max_length=255)),
                ("account_type", models.CharField(
                    choices=[
                        ("ASSET", "Asset"),
                        ("LIABILITY", "Liability"),
                        ("EQUITY", "Equity"),
                        ("REVENUE", "Revenue"),
                        ("EXPENSE", "Expense"),
                    ],
                    db_column="type",
                    max_length=20,
                )),
                ("normal_balance", models.CharField(
                    choices=[("DEBIT", "Debit"), ("CREDIT", "Credit")],
                    editable=False,
                    max_length=10,
                )),
                ("description", models.TextField(blank=True, default="")),
                ("is_system", models.BooleanField(
                    default=False,
                    help_text="System accounts are seeded with the chart and cannot be deleted",
                )),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["code", "name"],
                "indexes": [
                    models.Index(fields=["account_type"], name="accounting_acct_type_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="JournalEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date", models.DateField()),
                ("reference", models.CharField(max_length=100)),
                ("narration", models.CharField(blank=True, default="", max_length=500)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "verbose_name_plural": "journal entries",
                "ordering": ["-date", "-id"],
                "indexes": [
                    models.Index(fields=["date", "id"], name="accounting_entry_date_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="JournalLine",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("line_no", models.PositiveIntegerField()),
                ("description", models.CharField(blank=True, default="", max_length=500)),
                ("debit", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=18)),
                ("credit", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=18)),
                ("account", models.ForeignKey(
                    db_constraint=False,
                    on_delete=django.db.models.deletion.DO_NOTHING,
                    related_name="journal_lines",
                    to="accounting.account",
                )),
                ("entry", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="lines",
                    to="accounting.journalentry",
                )),
            ],
            options={
                "ordering": ["entry_id", "line_no"],
                "constraints": [
                    models.UniqueConstraint(fields=("entry", "line_no"), name="uniq_line_no_per_entry"),
                    models.CheckConstraint(
                        condition=models.Q(("debit__gte", 0), ("credit__gte", 0)),
                        name="journal_line_amounts_non_negative",
                    ),
                ],
            },
        ),
    ]
