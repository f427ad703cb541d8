"""Unit tests for the booking domain objects (no database)."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from types import SimpleNamespace
from uuid import uuid4

from django.test import SimpleTestCase

from apps.bookings.domain.cart import BookingCart
from apps.bookings.domain.entities import Booking, BookingStatus, price_lines
from apps.bookings.domain.events import BookingCreated, BookingRevised
from shared.domain.exceptions import StateConflictError, ValidationError
from shared.domain.value_objects import DateRange, Money, compute_days


def make_item(name: str, rate: str) -> SimpleNamespace:
    return SimpleNamespace(id=uuid4(), name=name, daily_rate=Decimal(rate))


class ComputeDaysTests(SimpleTestCase):
    def test_same_day_counts_as_one(self) -> None:
        self.assertEqual(compute_days(date(2024, 1, 1), date(2024, 1, 1)), 1)

    def test_whole_days_between_dates(self) -> None:
        self.assertEqual(compute_days(date(2024, 1, 1), date(2024, 1, 3)), 2)

    def test_partial_day_rounds_up(self) -> None:
        start = datetime(2024, 1, 1, 9, 0)
        end = datetime(2024, 1, 2, 10, 0)
        self.assertEqual(compute_days(start, end), 2)

    def test_order_of_arguments_does_not_matter(self) -> None:
        self.assertEqual(compute_days(date(2024, 1, 5), date(2024, 1, 1)), 4)


class DateRangeTests(SimpleTestCase):
    def test_start_after_end_is_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            DateRange(date(2024, 1, 3), date(2024, 1, 1))

    def test_missing_date_is_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            DateRange(date(2024, 1, 3), None)


class MoneyTests(SimpleTestCase):
    def test_amounts_are_rounded_to_cents(self) -> None:
        self.assertEqual(Money("10.005", "SAR").amount, Decimal("10.01"))

    def test_negative_amount_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            Money(Decimal("-1"), "SAR")

    def test_currencies_do_not_mix(self) -> None:
        with self.assertRaises(ValueError):
            Money(Decimal("1"), "SAR") + Money(Decimal("1"), "EGP")


class BookingAggregateTests(SimpleTestCase):
    def setUp(self) -> None:
        self.camera = make_item("Camera", "300")
        self.lens = make_item("Lens", "150")
        self.period = DateRange(date(2024, 1, 1), date(2024, 1, 3))

    def _open(self, *items, hold: bool = False) -> Booking:
        return Booking.open(
            party_id=uuid4(),
            period=self.period,
            lines=price_lines(items, self.period, "SAR"),
            currency="SAR",
            hold=hold,
        )

    def test_total_is_sum_of_line_totals(self) -> None:
        booking = self._open(self.camera, self.lens)

        self.assertEqual(booking.total_amount, Money(Decimal("900"), "SAR"))
        self.assertTrue(booking.reference.startswith("BK"))
        self.assertIsInstance(booking.events[0], BookingCreated)

    def test_booking_needs_lines(self) -> None:
        with self.assertRaises(ValidationError):
            self._open()

    def test_hold_opens_pending(self) -> None:
        booking = self._open(self.camera, hold=True)

        self.assertEqual(booking.status, BookingStatus.PENDING)
        self.assertFalse(booking.holds_items)
        self.assertIsNone(booking.activated_at)

    def test_revise_reports_released_items(self) -> None:
        booking = self._open(self.camera, self.lens)
        booking.clear_events()

        diff = booking.revise(
            party_id=booking.party_id,
            period=self.period,
            lines=price_lines([self.lens], self.period, "SAR"),
        )

        self.assertEqual(diff.released, frozenset({self.camera.id}))
        self.assertEqual(diff.total_delta, Decimal("-600.00"))
        self.assertFalse(diff.party_changed)
        self.assertIsInstance(booking.events[0], BookingRevised)

    def test_completed_booking_cannot_be_revised(self) -> None:
        booking = self._open(self.camera)
        booking.mark_returned()

        with self.assertRaises(StateConflictError):
            booking.revise(party_id=booking.party_id, period=self.period, lines=booking.lines)

    def test_mark_returned_twice_reports_no_change(self) -> None:
        booking = self._open(self.camera)

        self.assertTrue(booking.mark_returned())
        self.assertFalse(booking.mark_returned())

    def test_only_pending_or_active_can_be_cancelled(self) -> None:
        booking = self._open(self.camera)
        booking.mark_returned()

        with self.assertRaises(StateConflictError):
            booking.cancel("too late")


class BookingCartTests(SimpleTestCase):
    def setUp(self) -> None:
        self.camera = make_item("Camera", "300")
        self.lens = make_item("Lens", "150")
        self.cart = BookingCart("SAR")

    def test_adding_twice_is_a_no_op(self) -> None:
        self.assertTrue(self.cart.add(self.camera))
        self.assertFalse(self.cart.add(self.camera))
        self.assertEqual(len(self.cart), 1)
        self.assertIn(self.camera.id, self.cart)

    def test_total_needs_a_period(self) -> None:
        self.cart.add(self.camera)
        self.assertEqual(self.cart.days, 0)
        self.assertEqual(self.cart.total.amount, Decimal("0.00"))

        self.cart.set_period(date(2024, 1, 1), date(2024, 1, 3))
        self.cart.add(self.lens)

        self.assertEqual(self.cart.days, 2)
        self.assertEqual(self.cart.total.amount, Decimal("900.00"))

    def test_remove_and_clear(self) -> None:
        self.cart.add(self.camera)
        self.cart.set_party(uuid4())

        self.assertTrue(self.cart.remove(self.camera.id))
        self.assertFalse(self.cart.remove(self.camera.id))
        self.cart.clear()
        self.assertIsNone(self.cart.party_id)

    def test_validate_requires_party_period_and_items(self) -> None:
        with self.assertRaises(ValidationError):
            self.cart.validate()
        self.cart.set_party(uuid4())
        with self.assertRaises(ValidationError):
            self.cart.validate()
        self.cart.set_period(date(2024, 1, 1), date(2024, 1, 1))
        with self.assertRaises(ValidationError):
            self.cart.validate()
        self.cart.add(self.camera)
        self.cart.validate()

    def test_completed_booking_cannot_be_loaded(self) -> None:
        period = DateRange(date(2024, 1, 1), date(2024, 1, 2))
        booking = Booking.open(
            party_id=uuid4(),
            period=period,
            lines=price_lines([self.camera], period, "SAR"),
            currency="SAR",
        )
        booking.mark_returned()

        with self.assertRaises(StateConflictError):
            self.cart.load_booking(booking)
