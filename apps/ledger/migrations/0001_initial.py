import uuid

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("bookings", "0001_initial"),
        ("parties", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="LedgerEntry",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("date", models.DateField(db_index=True, default=django.utils.timezone.localdate)),
                ("kind", models.CharField(choices=[("invoice", "Invoice"), ("payment", "Payment"), ("refund", "Refund")], max_length=20)),
                ("direction", models.CharField(choices=[("debit", "Debit"), ("credit", "Credit")], max_length=10)),
                ("amount", models.DecimalField(decimal_places=2, max_digits=14)),
                ("method", models.CharField(blank=True, choices=[("cash", "Cash"), ("transfer", "Bank transfer"), ("credit", "On credit")], max_length=20)),
                ("description", models.CharField(blank=True, max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("booking", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name="ledger_entries", to="bookings.booking")),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="ledger_entries", to=settings.AUTH_USER_MODEL)),
                ("party", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="ledger_entries", to="parties.party")),
            ],
            options={
                "verbose_name": "Ledger entry",
                "verbose_name_plural": "Ledger entries",
                "ordering": ["date", "created_at"],
                "indexes": [
                    models.Index(fields=["party", "date"], name="ledger_entry_party_date_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("amount__gte", 0)), name="ledger_entry_amount_non_negative"),
                ],
            },
        ),
    ]
