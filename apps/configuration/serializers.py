"""Serializers for system settings."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import SystemSettings
from .services import PRESETS


class SystemSettingsSerializer(serializers.ModelSerializer):
    categories = serializers.ListField(child=serializers.CharField(max_length=100), required=False)

    class Meta:
        model = SystemSettings
        fields = [
            "app_name",
            "item_name",
            "items_name",
            "category_label",
            "identifier_label",
            "currency",
            "categories",
            "updated_at",
        ]
        read_only_fields = ["updated_at"]


class PresetSerializer(serializers.Serializer):
    preset = serializers.ChoiceField(choices=sorted(PRESETS))
