from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Party",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("party_type", models.CharField(
                    choices=[("customer", "Customer"), ("vendor", "Vendor")],
                    db_column="type",
                    default="customer",
                    max_length=10,
                )),
                ("name", models.CharField(max_length=255)),
                ("address", models.TextField(blank=True, default="")),
                ("contact", models.CharField(blank=True, default="", max_length=100)),
                ("email", models.CharField(blank=True, default="", max_length=254)),
                ("gstin", models.CharField(blank=True, default="", max_length=20)),
                ("credit_terms", models.CharField(blank=True, default="", max_length=100)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name_plural": "parties",
                "ordering": ["name", "id"],
                "indexes": [
                    models.Index(fields=["party_type", "name"], name="parties_type_name_idx"),
                ],
            },
        ),
    ]
