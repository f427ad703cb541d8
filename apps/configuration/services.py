"""Read and update the system settings, including domain presets."""

from __future__ import annotations

import logging
from typing import Any

from shared.domain.exceptions import ValidationError

from .models import SystemSettings

logger = logging.getLogger(__name__)

PRESETS: dict[str, dict[str, Any]] = {
    "equipment": {
        "app_name": "Ijar Pro",
        "item_name": "Equipment",
        "items_name": "Equipment",
        "category_label": "Category",
        "identifier_label": "Serial number",
        "currency": "SAR",
        "categories": ["Heavy machinery", "Generators", "Cranes", "Hand tools"],
    },
    "cars": {
        "app_name": "Car Rental",
        "item_name": "Car",
        "items_name": "Cars",
        "category_label": "Class",
        "identifier_label": "Plate number",
        "currency": "SAR",
        "categories": ["Sedan", "4x4", "Luxury", "Transport"],
    },
    "properties": {
        "app_name": "My Properties",
        "item_name": "Unit",
        "items_name": "Units",
        "category_label": "Property type",
        "identifier_label": "Deed / unit number",
        "currency": "SAR",
        "categories": ["Apartment", "Villa", "Office", "Warehouse"],
    },
    "events": {
        "app_name": "Event Master",
        "item_name": "Item",
        "items_name": "Items",
        "category_label": "Section",
        "identifier_label": "Item code",
        "currency": "SAR",
        "categories": ["Lighting", "Sound", "Chairs and tables", "Decoration"],
    },
    "photography": {
        "app_name": "Zoom Rental",
        "item_name": "Piece",
        "items_name": "Gear",
        "category_label": "Section",
        "identifier_label": "Serial",
        "currency": "EGP",
        "categories": ["Cameras", "Lenses", "Lighting", "Backdrops", "Sound", "Drones", "Accessories"],
    },
}

EDITABLE_FIELDS = (
    "app_name",
    "item_name",
    "items_name",
    "category_label",
    "identifier_label",
    "currency",
    "categories",
)


def get_settings() -> SystemSettings:
    settings_obj, created = SystemSettings.objects.get_or_create(pk=SystemSettings.SINGLETON_PK)
    if created:
        logger.info("Created default system settings")
    return settings_obj


def current_currency() -> str:
    return get_settings().currency


def update_settings(**changes: Any) -> SystemSettings:
    unknown = set(changes) - set(EDITABLE_FIELDS)
    if unknown:
        raise ValidationError("Unknown settings fields", fields=sorted(unknown))
    settings_obj = get_settings()
    for field, value in changes.items():
        setattr(settings_obj, field, value)
    settings_obj.save()
    return settings_obj


def update_categories(categories: list[str]) -> SystemSettings:
    cleaned = [c.strip() for c in categories if c and c.strip()]
    return update_settings(categories=list(dict.fromkeys(cleaned)))


def apply_preset(name: str) -> SystemSettings:
    preset = PRESETS.get(name)
    if preset is None:
        raise ValidationError("Unknown settings preset", preset=name, available=sorted(PRESETS))
    logger.info(f"Applying settings preset '{name}'")
    return update_settings(**preset)
