"""System settings for the rental back office."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


def default_categories() -> list[str]:
    return []


class SystemSettings(models.Model):
    """Singleton (pk=1) describing the configured rental domain."""

    SINGLETON_PK = 1

    app_name = models.CharField(max_length=100, default="Ijar Pro")
    item_name = models.CharField(
        max_length=50,
        default="Equipment",
        help_text=_("Singular noun for an inventory item, e.g. 'Car'."),
    )
    items_name = models.CharField(max_length=50, default="Equipment")
    category_label = models.CharField(max_length=50, default="Category")
    identifier_label = models.CharField(
        max_length=50,
        default="Serial number",
        help_text=_("Label for the item identifier, e.g. 'Plate number'."),
    )
    currency = models.CharField(max_length=10, default=settings.RENTAL_DEFAULT_CURRENCY)
    categories = models.JSONField(default=default_categories, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("System settings")
        verbose_name_plural = _("System settings")

    def __str__(self) -> str:
        return f"{self.app_name} ({self.currency})"

    def save(self, *args, **kwargs):  # type: ignore
        self.pk = self.SINGLETON_PK
        super().save(*args, **kwargs)
