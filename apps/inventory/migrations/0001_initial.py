import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("parties", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="InventoryItem",
            fields=[
                ("deleted_at", models.DateTimeField(blank=True, db_index=True, null=True)),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255, verbose_name="Name")),
                ("identifier", models.CharField(blank=True, help_text="Serial number, plate number, unit number...", max_length=100, verbose_name="Identifier")),
                ("category", models.CharField(blank=True, db_index=True, max_length=100, verbose_name="Category")),
                ("brand", models.CharField(blank=True, max_length=100)),
                ("model_name", models.CharField(blank=True, max_length=100, verbose_name="Model")),
                ("condition", models.CharField(choices=[("new", "New"), ("used", "Used"), ("excellent", "Excellent")], default="used", max_length=20)),
                ("ownership", models.CharField(choices=[("owned", "Owned"), ("external", "External (supplier)")], default="owned", max_length=20)),
                ("status", models.CharField(choices=[("available", "Available"), ("rented", "Rented"), ("maintenance", "Maintenance"), ("retired", "Retired")], db_index=True, default="available", max_length=20)),
                ("daily_rate", models.DecimalField(decimal_places=2, max_digits=12, verbose_name="Daily rate")),
                ("weekly_rate", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ("monthly_rate", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ("image_url", models.URLField(blank=True, max_length=500)),
                ("supplier_cost", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ("supplier_agreement", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("supplier", models.ForeignKey(blank=True, limit_choices_to={"kind": "supplier"}, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="supplied_items", to="parties.party")),
            ],
            options={
                "verbose_name": "Inventory item",
                "verbose_name_plural": "Inventory items",
                "ordering": ["name"],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("daily_rate__gte", 0)), name="inventory_daily_rate_non_negative"),
                ],
            },
        ),
    ]
