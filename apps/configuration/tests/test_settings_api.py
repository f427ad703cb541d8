"""Integration tests for system settings and presets."""

from __future__ import annotations

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.configuration import services
from apps.configuration.models import SystemSettings
from apps.users.models import User
from shared.domain.exceptions import ValidationError


class SettingsServiceTests(TestCase):
    def test_settings_are_a_singleton(self) -> None:
        first = services.get_settings()
        second = services.get_settings()

        self.assertEqual(first.pk, SystemSettings.SINGLETON_PK)
        self.assertEqual(second.pk, first.pk)
        self.assertEqual(SystemSettings.objects.count(), 1)

    def test_default_currency(self) -> None:
        self.assertEqual(services.current_currency(), "SAR")

    def test_update_categories_strips_and_dedupes(self) -> None:
        settings_obj = services.update_categories([" Cameras ", "Lenses", "Cameras", ""])

        self.assertEqual(settings_obj.categories, ["Cameras", "Lenses"])

    def test_unknown_fields_are_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            services.update_settings(balance=1)

    def test_unknown_preset_is_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            services.apply_preset("boats")


class SettingsAPITests(APITestCase):
    def setUp(self) -> None:
        self.admin = User.objects.create_user("admin", password="AdminPass123", role=User.Role.ADMIN)
        self.employee = User.objects.create_user("omar", password="OmarPass123")
        self.url = reverse("system-settings")

    def test_employee_reads_settings(self) -> None:
        self.client.force_authenticate(self.employee)

        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["currency"], "SAR")

    def test_employee_cannot_change_settings(self) -> None:
        self.client.force_authenticate(self.employee)

        response = self.client.put(self.url, {"app_name": "Mine"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_changes_settings(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.patch(self.url, {"app_name": "Lens House", "categories": ["Cameras"]}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(services.get_settings().app_name, "Lens House")
        self.assertEqual(response.data["categories"], ["Cameras"])

    def test_admin_applies_preset(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.post(reverse("system-settings-preset"), {"preset": "photography"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["currency"], "EGP")
        self.assertEqual(services.current_currency(), "EGP")

    def test_unknown_preset_is_bad_request(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.post(reverse("system-settings-preset"), {"preset": "boats"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
