"""Integration tests for booking API endpoints."""

from __future__ import annotations

from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.inventory.models import InventoryItem
from apps.ledger.models import LedgerEntry
from apps.parties.models import Party
from apps.users.models import User


class BookingAPITests(APITestCase):
    """Covers creation, edits, lifecycle actions and deletion through the API."""

    def setUp(self) -> None:
        self.employee = User.objects.create_user("employee", password="EmployeePass123")
        self.admin = User.objects.create_user("admin", password="AdminPass123", role=User.Role.ADMIN)
        self.party = Party.objects.create(name="Acme Events", phone="+966500000001")
        self.camera = InventoryItem.objects.create(name="Camera E1", daily_rate=Decimal("300.00"))
        self.lens = InventoryItem.objects.create(name="Lens E2", daily_rate=Decimal("150.00"))
        self.client.force_authenticate(self.employee)
        self.list_url = reverse("booking-list")

    def _payload(self, *items: InventoryItem, **overrides) -> dict:
        payload = {
            "party": str(self.party.id),
            "items": [str(item.id) for item in items],
            "start_date": "2024-01-01",
            "end_date": "2024-01-03",
        }
        payload.update(overrides)
        return payload

    def _create(self, *items: InventoryItem, **overrides):
        response = self.client.post(self.list_url, self._payload(*items, **overrides), format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        return response

    def test_employee_can_create_booking(self) -> None:
        response = self._create(self.camera)

        self.assertEqual(response.data["status"], Booking.Status.ACTIVE)
        self.assertEqual(response.data["total_amount"], "600.00")
        self.assertEqual(response.data["days"], 2)
        self.assertEqual(response.data["created_by"], "employee")
        self.assertEqual(len(response.data["lines"]), 1)
        self.party.refresh_from_db()
        self.assertEqual(self.party.balance, Decimal("600.00"))

    def test_rented_item_conflict(self) -> None:
        self._create(self.camera)

        response = self.client.post(self.list_url, self._payload(self.camera), format="json")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT, response.data)
        self.assertEqual(response.data["code"], "state_conflict")

    def test_credit_limit_conflict(self) -> None:
        Party.objects.filter(pk=self.party.pk).update(credit_limit=Decimal("100.00"))

        response = self.client.post(self.list_url, self._payload(self.camera), format="json")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT, response.data)
        self.assertEqual(response.data["code"], "credit_limit_exceeded")
        self.assertEqual(Booking.objects.count(), 0)

    def test_invalid_period_is_bad_request(self) -> None:
        response = self.client.post(
            self.list_url,
            self._payload(self.camera, start_date="2024-01-05", end_date="2024-01-01"),
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(response.data["code"], "validation_error")

    def test_unknown_item_is_not_found(self) -> None:
        response = self.client.post(
            self.list_url,
            self._payload(self.camera, items=[str(self.party.id)]),
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND, response.data)

    def test_partial_update_changes_items(self) -> None:
        booking_id = self._create(self.camera).data["id"]
        url = reverse("booking-detail", args=[booking_id])

        response = self.client.patch(url, {"items": [str(self.lens.id)]}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["total_amount"], "300.00")
        self.camera.refresh_from_db()
        self.lens.refresh_from_db()
        self.assertEqual(self.camera.status, InventoryItem.Status.AVAILABLE)
        self.assertEqual(self.lens.status, InventoryItem.Status.RENTED)

    def test_partial_update_from_form_keeps_every_item(self) -> None:
        booking_id = self._create(self.camera).data["id"]
        url = reverse("booking-detail", args=[booking_id])

        response = self.client.patch(
            url,
            {"items": [str(self.camera.id), str(self.lens.id)]},
            format="multipart",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(len(response.data["lines"]), 2)
        self.assertEqual(response.data["total_amount"], "900.00")

    def test_hold_and_activate(self) -> None:
        booking_id = self._create(self.camera, hold=True).data["id"]

        response = self.client.post(reverse("booking-activate", args=[booking_id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["status"], Booking.Status.ACTIVE)
        self.assertIsNotNone(response.data["activated_at"])

    def test_return_and_ledger(self) -> None:
        booking_id = self._create(self.camera).data["id"]

        response = self.client.post(reverse("booking-return", args=[booking_id]))
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["status"], Booking.Status.COMPLETED)

        ledger = self.client.get(reverse("booking-ledger", args=[booking_id]))
        self.assertEqual(ledger.status_code, status.HTTP_200_OK, ledger.data)
        self.assertEqual(len(ledger.data), 1)
        self.assertEqual(ledger.data[0]["kind"], LedgerEntry.Kind.INVOICE)

    def test_cancel_with_reason(self) -> None:
        booking_id = self._create(self.camera).data["id"]

        response = self.client.post(
            reverse("booking-cancel", args=[booking_id]),
            {"reason": "Event postponed"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["status"], Booking.Status.CANCELLED)
        self.assertEqual(response.data["cancellation_reason"], "Event postponed")
        self.party.refresh_from_db()
        self.assertEqual(self.party.balance, Decimal("0.00"))

    def test_employee_cannot_delete_booking(self) -> None:
        booking_id = self._create(self.camera).data["id"]

        response = self.client.delete(reverse("booking-detail", args=[booking_id]))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertTrue(Booking.objects.filter(pk=booking_id).exists())

    def test_admin_delete_reverses_booking(self) -> None:
        booking_id = self._create(self.camera).data["id"]
        self.client.force_authenticate(self.admin)

        response = self.client.delete(reverse("booking-detail", args=[booking_id]))

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.party.refresh_from_db()
        self.camera.refresh_from_db()
        self.assertEqual(self.party.balance, Decimal("0.00"))
        self.assertEqual(self.camera.status, InventoryItem.Status.AVAILABLE)
        self.assertFalse(LedgerEntry.objects.exists())

    def test_list_filters_by_status(self) -> None:
        self._create(self.camera)
        self._create(self.lens, hold=True)

        response = self.client.get(self.list_url, {"status": Booking.Status.PENDING})

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(len(response.data), 1)

    def test_quote_prices_without_saving(self) -> None:
        response = self.client.post(
            reverse("booking-quote"),
            {
                "items": [str(self.camera.id), str(self.lens.id)],
                "start_date": "2024-01-01",
                "end_date": "2024-01-01",
            },
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["days"], 1)
        self.assertEqual(response.data["total"], "450.00")
        self.assertEqual(Booking.objects.count(), 0)

    def test_anonymous_requests_are_rejected(self) -> None:
        self.client.force_authenticate(None)

        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
