import uuid
from decimal import Decimal

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("inventory", "0001_initial"),
        ("parties", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Booking",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("reference", models.CharField(editable=False, max_length=32, unique=True)),
                ("start_date", models.DateField()),
                ("end_date", models.DateField()),
                ("total_amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), help_text="Sum of the line totals.", max_digits=14)),
                ("currency", models.CharField(max_length=10)),
                ("status", models.CharField(choices=[("pending", "Pending (quote / hold)"), ("active", "Active"), ("completed", "Completed"), ("cancelled", "Cancelled")], db_index=True, default="active", max_length=20)),
                ("notes", models.TextField(blank=True)),
                ("activated_at", models.DateTimeField(blank=True, null=True)),
                ("returned_at", models.DateTimeField(blank=True, null=True)),
                ("cancelled_at", models.DateTimeField(blank=True, null=True)),
                ("cancellation_reason", models.CharField(blank=True, max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="bookings", to=settings.AUTH_USER_MODEL)),
                ("party", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="bookings", to="parties.party")),
            ],
            options={
                "verbose_name": "Booking",
                "verbose_name_plural": "Bookings",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["party", "status"], name="booking_party_status_idx"),
                    models.Index(fields=["start_date", "end_date"], name="booking_period_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("end_date__gte", models.F("start_date"))), name="booking_valid_dates"),
                ],
            },
        ),
        migrations.CreateModel(
            name="BookingLine",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("item_name", models.CharField(max_length=255)),
                ("daily_rate", models.DecimalField(decimal_places=2, max_digits=12)),
                ("days", models.PositiveIntegerField()),
                ("line_total", models.DecimalField(decimal_places=2, max_digits=14)),
                ("position", models.PositiveSmallIntegerField(default=0)),
                ("booking", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="lines", to="bookings.booking")),
                ("item", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="booking_lines", to="inventory.inventoryitem")),
            ],
            options={
                "ordering": ["position"],
                "constraints": [
                    models.UniqueConstraint(fields=("booking", "item"), name="booking_line_unique_item"),
                ],
            },
        ),
    ]
