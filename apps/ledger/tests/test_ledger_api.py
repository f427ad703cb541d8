"""Integration tests for ledger entries and payments."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.application.engine import booking_engine
from apps.inventory.models import InventoryItem
from apps.ledger.models import LedgerEntry
from apps.ledger.services import transaction_log
from apps.parties.models import Party
from apps.users.models import User
from shared.domain.exceptions import ValidationError


class TransactionLogTests(TestCase):
    def setUp(self) -> None:
        self.party = Party.objects.create(name="Acme Events")

    def test_direction_follows_kind(self) -> None:
        invoice = transaction_log.append(party_id=self.party.pk, kind=LedgerEntry.Kind.INVOICE, amount=100)
        refund = transaction_log.append(party_id=self.party.pk, kind=LedgerEntry.Kind.REFUND, amount=30)

        self.assertEqual(invoice.direction, LedgerEntry.Direction.DEBIT)
        self.assertEqual(invoice.balance_delta, Decimal("100.00"))
        self.assertEqual(refund.direction, LedgerEntry.Direction.CREDIT)
        self.assertEqual(refund.signed_amount, Decimal("30.00"))
        self.assertEqual(transaction_log.balance_of(self.party.pk), Decimal("70.00"))

    def test_amounts_are_unsigned(self) -> None:
        with self.assertRaises(ValidationError):
            transaction_log.append(party_id=self.party.pk, kind=LedgerEntry.Kind.PAYMENT, amount=-1)

    def test_unknown_kind_is_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            transaction_log.append(party_id=self.party.pk, kind="gift", amount=1)

    def test_statement_rejects_inverted_range(self) -> None:
        with self.assertRaises(ValidationError):
            transaction_log.statement(self.party.pk, start=date(2024, 2, 1), end=date(2024, 1, 1))

    def test_non_numeric_payment_is_a_validation_error(self) -> None:
        with self.assertRaises(ValidationError):
            booking_engine.add_payment(party_id=self.party.pk, amount="abc")

    def test_nan_payment_is_a_validation_error(self) -> None:
        with self.assertRaises(ValidationError):
            booking_engine.add_payment(party_id=self.party.pk, amount=Decimal("NaN"))

        self.assertFalse(LedgerEntry.objects.filter(party=self.party).exists())


class LedgerAPITests(APITestCase):
    def setUp(self) -> None:
        self.admin = User.objects.create_user("admin", password="AdminPass123", role=User.Role.ADMIN)
        self.employee = User.objects.create_user("omar", password="OmarPass123")
        self.party = Party.objects.create(name="Acme Events")
        self.camera = InventoryItem.objects.create(name="Camera", daily_rate=Decimal("300.00"))
        self.client.force_authenticate(self.employee)
        self.payments_url = reverse("ledger-entry-payments")

    def test_record_payment(self) -> None:
        response = self.client.post(
            self.payments_url,
            {"party": str(self.party.pk), "amount": "150.00", "method": LedgerEntry.Method.TRANSFER},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["kind"], LedgerEntry.Kind.PAYMENT)
        self.assertEqual(response.data["signed_amount"], "150.00")
        self.assertEqual(response.data["created_by"], "omar")
        self.party.refresh_from_db()
        self.assertEqual(self.party.balance, Decimal("-150.00"))

    def test_zero_payment_is_rejected(self) -> None:
        response = self.client.post(
            self.payments_url,
            {"party": str(self.party.pk), "amount": "0"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertFalse(LedgerEntry.objects.exists())

    def test_payment_for_unknown_party(self) -> None:
        response = self.client.post(
            self.payments_url,
            {"party": str(self.camera.pk), "amount": "10"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND, response.data)

    def test_list_entries_for_party(self) -> None:
        other = Party.objects.create(name="Desert Films")
        booking_engine.add_payment(party_id=self.party.pk, amount=Decimal("10"))
        booking_engine.add_payment(party_id=other.pk, amount=Decimal("20"))

        response = self.client.get(reverse("ledger-entry-list"), {"party": str(self.party.pk)})

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]["party_name"], "Acme Events")

    def test_employee_cannot_delete_entry(self) -> None:
        entry = booking_engine.add_payment(party_id=self.party.pk, amount=Decimal("10"))

        response = self.client.delete(reverse("ledger-entry-detail", args=[entry.pk]))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_removes_payment(self) -> None:
        entry = booking_engine.add_payment(party_id=self.party.pk, amount=Decimal("10"))
        self.client.force_authenticate(self.admin)

        response = self.client.delete(reverse("ledger-entry-detail", args=[entry.pk]))

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.party.refresh_from_db()
        self.assertEqual(self.party.balance, Decimal("0.00"))

    def test_booking_invoice_cannot_be_removed(self) -> None:
        booking = booking_engine.create(
            party_id=self.party.pk,
            item_ids=[self.camera.pk],
            start_date=date(2024, 1, 1),
            end_date=date(2024, 1, 2),
        )
        invoice = LedgerEntry.objects.get(booking_id=booking.id)
        self.client.force_authenticate(self.admin)

        response = self.client.delete(reverse("ledger-entry-detail", args=[invoice.pk]))

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT, response.data)
        self.assertTrue(LedgerEntry.objects.filter(pk=invoice.pk).exists())
