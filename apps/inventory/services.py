"""Inventory Registry.

Plain CRUD over inventory items plus status writes. The registry never
inspects bookings: keeping ``status == rented`` in line with active
bookings is the booking engine's job, which is why :meth:`set_status`
and :meth:`bulk_set_status` are unconditional.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable
from uuid import UUID

from django.db.models import Count, Q, QuerySet  # type: ignore
from django.utils import timezone  # type: ignore

from shared.domain.exceptions import NotFoundError, StateConflictError, ValidationError
from shared.domain.value_objects import to_decimal
from shared.infrastructure.db import lock_for_update

from .models import InventoryItem

logger = logging.getLogger(__name__)

Status = InventoryItem.Status

EDITABLE_FIELDS = {
    "name",
    "identifier",
    "category",
    "brand",
    "model_name",
    "condition",
    "ownership",
    "status",
    "daily_rate",
    "weekly_rate",
    "monthly_rate",
    "image_url",
    "supplier",
    "supplier_id",
    "supplier_cost",
    "supplier_agreement",
}
RATE_FIELDS = ("daily_rate", "weekly_rate", "monthly_rate", "supplier_cost")


class InventoryRegistry:
    def get(self, item_id: UUID, *, lock: bool = False) -> InventoryItem:
        queryset = InventoryItem.objects.filter(pk=item_id)
        if lock:
            queryset = lock_for_update(queryset)
        item = queryset.first()
        if item is None:
            raise NotFoundError("inventory_item", item_id)
        return item

    def list(self, category: str | None = None, status: str | None = None, search: str | None = None) -> QuerySet:
        queryset = InventoryItem.objects.select_related("supplier")
        if category:
            queryset = queryset.filter(category=category)
        if status:
            queryset = queryset.filter(status=status)
        if search:
            queryset = queryset.filter(Q(name__icontains=search) | Q(identifier__icontains=search))
        return queryset

    def create(self, **fields: Any) -> InventoryItem:
        self._check_fields(fields)
        if not fields.get("name"):
            raise ValidationError("Item name is required", field="name")
        if fields.get("daily_rate") is None:
            raise ValidationError("Daily rate is required", field="daily_rate")
        if fields.get("status") == Status.RENTED:
            raise StateConflictError("Items become rented only through a booking")
        item = InventoryItem.objects.create(**fields)
        logger.info(f"Inventory item {item.id} created ({item.name})")
        return item

    def update(self, item_id: UUID, **patch: Any) -> InventoryItem:
        self._check_fields(patch)
        item = self.get(item_id)
        new_status = patch.get("status")
        if new_status is not None and new_status != item.status:
            if item.status == Status.RENTED:
                raise StateConflictError(
                    "Status of a rented item is managed by its booking",
                    item_id=item.id,
                    status=item.status,
                )
            if new_status == Status.RENTED:
                raise StateConflictError("Items become rented only through a booking", item_id=item.id)
        for field, value in patch.items():
            setattr(item, field, value)
        item.save()
        return item

    def set_status(self, item_id: UUID, status: str) -> None:
        self.bulk_set_status([item_id], status)

    def bulk_set_status(self, item_ids: Iterable[UUID], status: str) -> int:
        """Write ``status`` on every item or on none of them."""
        if status not in Status.values:
            raise ValidationError("Unknown inventory status", status=status)
        ids = set(item_ids)
        if not ids:
            return 0
        queryset = InventoryItem.all_objects.filter(pk__in=ids)
        found = set(queryset.values_list("pk", flat=True))
        missing = sorted(str(pk) for pk in ids - found)
        if missing:
            raise NotFoundError("inventory_item", missing[0], missing=missing)
        updated = queryset.update(status=status, updated_at=timezone.now())
        logger.debug(f"Set {updated} inventory items to {status}")
        return updated

    def ids_with_status(self, item_ids: Iterable[UUID], status: str) -> set[UUID]:
        return set(
            InventoryItem.all_objects.filter(pk__in=list(item_ids), status=status).values_list("pk", flat=True)
        )

    def lock(self, item_ids: Iterable[UUID]) -> dict[UUID, InventoryItem]:
        """Lock the rows for the surrounding transaction, keyed by id."""
        ids = list(dict.fromkeys(item_ids))
        items = {item.pk: item for item in lock_for_update(InventoryItem.all_objects.filter(pk__in=ids))}
        for item_id in ids:
            if item_id not in items:
                raise NotFoundError("inventory_item", item_id)
        return items

    def delete(self, item_id: UUID) -> InventoryItem:
        item = self.get(item_id)
        if item.status == Status.RENTED:
            raise StateConflictError("A rented item cannot be deleted", item_id=item.id)
        item.soft_delete()
        logger.info(f"Inventory item {item_id} soft-deleted")
        return item

    def stats(self) -> dict[str, int]:
        counts = InventoryItem.objects.aggregate(
            total=Count("id"),
            available=Count("id", filter=Q(status=Status.AVAILABLE)),
            rented=Count("id", filter=Q(status=Status.RENTED)),
            maintenance=Count("id", filter=Q(status=Status.MAINTENANCE)),
            retired=Count("id", filter=Q(status=Status.RETIRED)),
        )
        return counts

    @staticmethod
    def _check_fields(fields: dict[str, Any]) -> None:
        unknown = set(fields) - EDITABLE_FIELDS
        if unknown:
            raise ValidationError("Unknown inventory fields", fields=sorted(unknown))
        status = fields.get("status")
        if status is not None and status not in Status.values:
            raise ValidationError("Unknown inventory status", status=status)
        for name in RATE_FIELDS:
            value = fields.get(name)
            if value is not None and to_decimal(value) < 0:
                raise ValidationError("Rates cannot be negative", field=name)


inventory_registry = InventoryRegistry()
