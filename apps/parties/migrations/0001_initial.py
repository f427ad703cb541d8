import uuid
from decimal import Decimal

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Party",
            fields=[
                ("deleted_at", models.DateTimeField(blank=True, db_index=True, null=True)),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("kind", models.CharField(choices=[("client", "Client"), ("supplier", "Supplier")], db_index=True, default="client", max_length=20)),
                ("name", models.CharField(max_length=255, verbose_name="Name")),
                ("id_number", models.CharField(blank=True, max_length=50, verbose_name="ID / commercial register number")),
                ("phone", models.CharField(blank=True, max_length=30, verbose_name="Phone")),
                ("email", models.EmailField(blank=True, max_length=254)),
                ("address", models.CharField(blank=True, max_length=255)),
                ("contact_person", models.CharField(blank=True, max_length=255)),
                ("notes", models.TextField(blank=True)),
                ("status", models.CharField(choices=[("active", "Active"), ("inactive", "Inactive"), ("blacklisted", "Blacklisted")], default="active", max_length=20)),
                ("credit_limit", models.DecimalField(blank=True, decimal_places=2, help_text="Maximum balance the party may owe. Empty means no limit.", max_digits=12, null=True, verbose_name="Credit limit")),
                ("balance", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Party",
                "verbose_name_plural": "Parties",
                "ordering": ["name"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("credit_limit__isnull", True), ("credit_limit__gte", 0), _connector="OR"),
                        name="party_credit_limit_non_negative",
                    ),
                ],
            },
        ),
    ]
