"""Integration tests for the dashboard overview."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.application.engine import booking_engine
from apps.inventory.models import InventoryItem
from apps.parties.models import Party
from apps.parties.services import party_ledger
from apps.users.models import User


class OverviewAPITests(APITestCase):
    def setUp(self) -> None:
        self.employee = User.objects.create_user("omar", password="OmarPass123")
        self.client_party = Party.objects.create(name="Acme Events")
        self.supplier = Party.objects.create(name="Gear Supplier", kind=Party.Kind.SUPPLIER)
        self.camera = InventoryItem.objects.create(name="Camera", daily_rate=Decimal("300.00"))
        self.lens = InventoryItem.objects.create(name="Lens", daily_rate=Decimal("100.00"))
        self.client.force_authenticate(self.employee)
        self.url = reverse("analytics-overview")

        booking_engine.create(
            party_id=self.client_party.pk,
            item_ids=[self.camera.pk],
            start_date=date(2024, 1, 1),
            end_date=date(2024, 1, 3),
        )
        held = booking_engine.create(
            party_id=self.client_party.pk,
            item_ids=[self.lens.pk],
            start_date=date(2024, 3, 1),
            end_date=date(2024, 3, 2),
            hold=True,
        )
        booking_engine.cancel(held.id)
        booking_engine.add_payment(party_id=self.client_party.pk, amount=Decimal("100"))
        party_ledger.adjust_balance(self.supplier.pk, Decimal("-250"))

    def test_overview_figures(self) -> None:
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        data = response.data
        self.assertEqual(data["currency"], "SAR")
        self.assertEqual(data["revenue"], Decimal("600.00"))
        self.assertEqual(data["collected"], Decimal("100.00"))
        self.assertEqual(data["receivables"], Decimal("500.00"))
        self.assertEqual(data["payables"], Decimal("250.00"))
        self.assertEqual(data["bookings"]["total"], 2)
        self.assertEqual(data["bookings"]["active"], 1)
        self.assertEqual(data["bookings"]["cancelled"], 1)
        self.assertEqual(data["inventory"]["rented"], 1)
        self.assertEqual(data["parties"], {"clients": 1, "suppliers": 1})

    def test_overview_narrowed_by_dates(self) -> None:
        response = self.client.get(self.url, {"start": "2024-02-01", "end": "2024-12-31"})

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["revenue"], Decimal("0.00"))
        self.assertEqual(response.data["bookings"]["total"], 1)
