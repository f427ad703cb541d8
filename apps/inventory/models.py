"""Rentable inventory items."""

from __future__ import annotations

import uuid

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.infrastructure.db import SoftDeleteModel


class InventoryItem(SoftDeleteModel):
    """Equipment, a vehicle, a property unit... whatever the business rents out."""

    class Status(models.TextChoices):
        AVAILABLE = "available", _("Available")
        RENTED = "rented", _("Rented")
        MAINTENANCE = "maintenance", _("Maintenance")
        RETIRED = "retired", _("Retired")

    class Condition(models.TextChoices):
        NEW = "new", _("New")
        USED = "used", _("Used")
        EXCELLENT = "excellent", _("Excellent")

    class Ownership(models.TextChoices):
        OWNED = "owned", _("Owned")
        EXTERNAL = "external", _("External (supplier)")

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(_("Name"), max_length=255)
    identifier = models.CharField(
        _("Identifier"),
        max_length=100,
        blank=True,
        help_text=_("Serial number, plate number, unit number..."),
    )
    category = models.CharField(_("Category"), max_length=100, blank=True, db_index=True)
    brand = models.CharField(max_length=100, blank=True)
    model_name = models.CharField(_("Model"), max_length=100, blank=True)
    condition = models.CharField(max_length=20, choices=Condition.choices, default=Condition.USED)
    ownership = models.CharField(max_length=20, choices=Ownership.choices, default=Ownership.OWNED)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.AVAILABLE, db_index=True)

    daily_rate = models.DecimalField(_("Daily rate"), max_digits=12, decimal_places=2)
    weekly_rate = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    monthly_rate = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)

    image_url = models.URLField(max_length=500, blank=True)

    supplier = models.ForeignKey(
        "parties.Party",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="supplied_items",
        limit_choices_to={"kind": "supplier"},
    )
    supplier_cost = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    supplier_agreement = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Inventory item")
        verbose_name_plural = _("Inventory items")
        ordering = ["name"]
        constraints = [
            models.CheckConstraint(condition=models.Q(daily_rate__gte=0), name="inventory_daily_rate_non_negative"),
        ]

    def __str__(self) -> str:
        if self.identifier:
            return f"{self.name} [{self.identifier}]"
        return self.name

    @property
    def is_available(self) -> bool:
        return self.status == self.Status.AVAILABLE and not self.is_deleted
