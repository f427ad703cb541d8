"""Integration tests for inventory endpoints."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.application.engine import booking_engine
from apps.inventory.models import InventoryItem
from apps.inventory.services import inventory_registry
from apps.parties.models import Party
from apps.users.models import User
from shared.domain.exceptions import NotFoundError, StateConflictError, ValidationError


class InventoryRegistryTests(TestCase):
    def setUp(self) -> None:
        self.drone = inventory_registry.create(name="Drone", daily_rate=Decimal("200"))
        self.tripod = inventory_registry.create(name="Tripod", daily_rate=Decimal("20"), category="Accessories")

    def test_create_requires_name_and_rate(self) -> None:
        with self.assertRaises(ValidationError):
            inventory_registry.create(name="", daily_rate=Decimal("1"))
        with self.assertRaises(ValidationError):
            inventory_registry.create(name="Light")

    def test_negative_rate_is_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            inventory_registry.create(name="Light", daily_rate=Decimal("-1"))

    def test_non_numeric_rate_is_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            inventory_registry.create(name="Light", daily_rate="abc")

    def test_items_cannot_be_created_rented(self) -> None:
        with self.assertRaises(StateConflictError):
            inventory_registry.create(name="Light", daily_rate=Decimal("1"), status=InventoryItem.Status.RENTED)

    def test_bulk_set_status_is_all_or_nothing(self) -> None:
        missing = Party.objects.create(name="Not an item").pk

        with self.assertRaises(NotFoundError) as ctx:
            inventory_registry.bulk_set_status([self.drone.pk, missing], InventoryItem.Status.MAINTENANCE)

        self.assertEqual(ctx.exception.context["missing"], [str(missing)])
        self.drone.refresh_from_db()
        self.assertEqual(self.drone.status, InventoryItem.Status.AVAILABLE)

    def test_list_filters(self) -> None:
        self.assertEqual(list(inventory_registry.list(category="Accessories")), [self.tripod])
        self.assertEqual(list(inventory_registry.list(search="dro")), [self.drone])

    def test_stats_count_by_status(self) -> None:
        inventory_registry.set_status(self.tripod.pk, InventoryItem.Status.MAINTENANCE)

        stats = inventory_registry.stats()

        self.assertEqual(stats["total"], 2)
        self.assertEqual(stats["available"], 1)
        self.assertEqual(stats["maintenance"], 1)
        self.assertEqual(stats["rented"], 0)


class InventoryAPITests(APITestCase):
    def setUp(self) -> None:
        self.admin = User.objects.create_user("admin", password="AdminPass123", role=User.Role.ADMIN)
        self.employee = User.objects.create_user("omar", password="OmarPass123")
        self.supplier = Party.objects.create(name="Gear Supplier", kind=Party.Kind.SUPPLIER)
        self.client_party = Party.objects.create(name="Acme Events")
        self.item = InventoryItem.objects.create(name="Camera", daily_rate=Decimal("300.00"))
        self.client.force_authenticate(self.employee)
        self.list_url = reverse("inventory-item-list")

    def _rent(self) -> None:
        booking_engine.create(
            party_id=self.client_party.pk,
            item_ids=[self.item.pk],
            start_date=date(2024, 1, 1),
            end_date=date(2024, 1, 2),
        )

    def test_create_item_with_supplier(self) -> None:
        response = self.client.post(
            self.list_url,
            {
                "name": "Generator",
                "daily_rate": "120.00",
                "ownership": InventoryItem.Ownership.EXTERNAL,
                "supplier": str(self.supplier.pk),
                "supplier_cost": "80.00",
            },
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["supplier_name"], "Gear Supplier")
        self.assertEqual(response.data["status"], InventoryItem.Status.AVAILABLE)

    def test_client_cannot_be_supplier(self) -> None:
        response = self.client.post(
            self.list_url,
            {"name": "Generator", "daily_rate": "120.00", "supplier": str(self.client_party.pk)},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)

    def test_update_item(self) -> None:
        response = self.client.patch(
            reverse("inventory-item-detail", args=[self.item.pk]),
            {"daily_rate": "350.00", "status": InventoryItem.Status.MAINTENANCE},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["daily_rate"], "350.00")
        self.assertEqual(response.data["status"], InventoryItem.Status.MAINTENANCE)

    def test_rented_item_status_is_managed_by_booking(self) -> None:
        self._rent()

        response = self.client.patch(
            reverse("inventory-item-detail", args=[self.item.pk]),
            {"status": InventoryItem.Status.AVAILABLE},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT, response.data)

    def test_employee_cannot_delete(self) -> None:
        response = self.client.delete(reverse("inventory-item-detail", args=[self.item.pk]))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_soft_deletes_item(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.delete(reverse("inventory-item-detail", args=[self.item.pk]))

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(InventoryItem.objects.filter(pk=self.item.pk).exists())
        self.assertTrue(InventoryItem.all_objects.filter(pk=self.item.pk).exists())

    def test_rented_item_cannot_be_deleted(self) -> None:
        self._rent()
        self.client.force_authenticate(self.admin)

        response = self.client.delete(reverse("inventory-item-detail", args=[self.item.pk]))

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT, response.data)

    def test_stats(self) -> None:
        self._rent()

        response = self.client.get(reverse("inventory-item-stats"))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["total"], 1)
        self.assertEqual(response.data["rented"], 1)

    def test_filter_by_status(self) -> None:
        InventoryItem.objects.create(name="Broken light", daily_rate=Decimal("10"), status=InventoryItem.Status.MAINTENANCE)

        response = self.client.get(self.list_url, {"status": InventoryItem.Status.MAINTENANCE})

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual([row["name"] for row in response.data], ["Broken light"])
