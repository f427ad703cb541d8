"""
Booking Repository

Maps the Booking aggregate to the ``Booking``/``BookingLine`` tables.
The command handlers only see aggregates; the ORM stays behind this
class.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Set
from uuid import UUID

from django.utils import timezone  # type: ignore

from shared.domain.exceptions import NotFoundError
from shared.domain.value_objects import DateRange, Money
from shared.infrastructure.db import lock_for_update

from apps.bookings.domain.entities import Booking, BookingLine, BookingStatus
from apps.bookings.models import Booking as BookingModel
from apps.bookings.models import BookingLine as BookingLineModel

logger = logging.getLogger(__name__)


class DjangoBookingRepository:
    def get_by_id(self, booking_id: UUID, *, lock: bool = False) -> Booking:
        queryset = BookingModel.objects.filter(pk=booking_id)
        if lock:
            queryset = lock_for_update(queryset)
        row = queryset.first()
        if row is None:
            raise NotFoundError("booking", booking_id)
        return self._to_domain(row)

    def list(self, status: str | None = None, party_id: UUID | None = None) -> List[Booking]:
        queryset = BookingModel.objects.prefetch_related("lines")
        if status:
            queryset = queryset.filter(status=status)
        if party_id:
            queryset = queryset.filter(party_id=party_id)
        return [self._to_domain(row) for row in queryset]

    def save(self, booking: Booking) -> None:
        """Upsert the booking row and replace its lines"""
        BookingModel.objects.update_or_create(
            pk=booking.id,
            defaults={
                "reference": booking.reference,
                "party_id": booking.party_id,
                "start_date": booking.period.start_date,
                "end_date": booking.period.end_date,
                "total_amount": booking.total_amount.amount,
                "currency": booking.currency,
                "status": booking.status.value,
                "notes": booking.notes,
                "created_by_id": booking.created_by_id,
                "activated_at": _aware(booking.activated_at),
                "returned_at": _aware(booking.returned_at),
                "cancelled_at": _aware(booking.cancelled_at),
                "cancellation_reason": booking.cancellation_reason,
            },
        )
        BookingLineModel.objects.filter(booking_id=booking.id).delete()
        BookingLineModel.objects.bulk_create([
            BookingLineModel(
                booking_id=booking.id,
                item_id=line.item_id,
                item_name=line.item_name,
                daily_rate=line.daily_rate.amount,
                days=line.days,
                line_total=line.total.amount,
                position=position,
            )
            for position, line in enumerate(booking.lines)
        ])
        logger.debug(f"Saved booking {booking.reference} with {len(booking.lines)} lines")

    def delete(self, booking_id: UUID) -> None:
        deleted, _ = BookingModel.objects.filter(pk=booking_id).delete()
        if not deleted:
            raise NotFoundError("booking", booking_id)

    def active_claims(self, item_ids: Iterable[UUID], *, exclude_booking_id: UUID | None = None) -> Set[UUID]:
        """Items among ``item_ids`` held by an Active booking other than the excluded one"""
        queryset = BookingLineModel.objects.filter(
            item_id__in=list(item_ids),
            booking__status=BookingModel.Status.ACTIVE,
        )
        if exclude_booking_id is not None:
            queryset = queryset.exclude(booking_id=exclude_booking_id)
        return set(queryset.values_list("item_id", flat=True))

    @staticmethod
    def _to_domain(row: BookingModel) -> Booking:
        lines = [
            BookingLine(
                item_id=line.item_id,
                item_name=line.item_name,
                daily_rate=Money(line.daily_rate, row.currency),
                days=line.days,
            )
            for line in row.lines.all()
        ]
        return Booking(
            id=row.id,
            created_at=row.created_at,
            reference=row.reference,
            party_id=row.party_id,
            period=DateRange(row.start_date, row.end_date),
            lines=lines,
            currency=row.currency,
            status=BookingStatus(row.status),
            notes=row.notes,
            created_by_id=row.created_by_id,
            activated_at=row.activated_at,
            returned_at=row.returned_at,
            cancelled_at=row.cancelled_at,
            cancellation_reason=row.cancellation_reason,
        )


def _aware(value):
    if value is not None and timezone.is_naive(value):
        return timezone.make_aware(value)
    return value
