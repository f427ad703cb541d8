"""API views for the booking domain.

Every write goes through the booking engine; the ORM is only read here.
"""

from __future__ import annotations

from rest_framework import status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.filters import OrderingFilter  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.configuration.services import current_currency
from apps.inventory.services import inventory_registry
from apps.ledger.serializers import LedgerEntrySerializer
from apps.ledger.services import transaction_log
from apps.users.permissions import AdminCanDelete

from .application.engine import booking_engine
from .domain.cart import BookingCart
from .filters import BookingFilterSet
from .models import Booking
from .serializers import (
    BookingSerializer,
    BookingWriteSerializer,
    CancelBookingSerializer,
    QuoteRequestSerializer,
    QuoteSerializer,
)


class BookingViewSet(viewsets.ModelViewSet):
    """Bookings. DELETE fully reverses a booking and needs an administrator."""

    queryset = Booking.objects.select_related("party", "created_by").prefetch_related("lines")
    permission_classes = [AdminCanDelete]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = BookingFilterSet
    ordering_fields = ["created_at", "start_date", "total_amount"]

    def get_serializer_class(self):  # type: ignore
        if self.action in {"create", "update", "partial_update"}:
            return BookingWriteSerializer
        return BookingSerializer

    def _respond(self, booking_id, http_status=status.HTTP_200_OK) -> Response:
        booking = self.get_queryset().get(pk=booking_id)
        return Response(BookingSerializer(booking, context=self.get_serializer_context()).data, status=http_status)

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        booking = booking_engine.create(
            party_id=data["party"],
            item_ids=data["items"],
            start_date=data["start_date"],
            end_date=data["end_date"],
            hold=data["hold"],
            notes=data.get("notes", ""),
            created_by=request.user,
        )
        return self._respond(booking.id, status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):  # type: ignore
        current = self.get_object()
        partial = kwargs.pop("partial", False)
        if partial:
            payload = {
                "party": current.party_id,
                "items": [line.item_id for line in current.lines.all()],
                "start_date": current.start_date,
                "end_date": current.end_date,
            }
            for key in request.data:
                if key == "items" and hasattr(request.data, "getlist"):
                    payload[key] = request.data.getlist(key)
                else:
                    payload[key] = request.data[key]
        else:
            payload = request.data
        serializer = self.get_serializer(data=payload)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        booking = booking_engine.edit(
            current.pk,
            party_id=data["party"],
            item_ids=data["items"],
            start_date=data["start_date"],
            end_date=data["end_date"],
            notes=data.get("notes"),
        )
        return self._respond(booking.id)

    def destroy(self, request, *args, **kwargs):  # type: ignore
        booking = self.get_object()
        booking_engine.delete(booking.pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=["post"])
    def activate(self, request, pk=None):  # type: ignore
        booking = self.get_object()
        booking_engine.activate(booking.pk, created_by=request.user)
        return self._respond(booking.pk)

    @action(detail=True, methods=["post"], url_path="return", url_name="return")
    def return_booking(self, request, pk=None):  # type: ignore
        booking = self.get_object()
        booking_engine.return_booking(booking.pk)
        return self._respond(booking.pk)

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):  # type: ignore
        booking = self.get_object()
        serializer = CancelBookingSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking_engine.cancel(booking.pk, serializer.validated_data["reason"], created_by=request.user)
        return self._respond(booking.pk)

    @action(detail=True, methods=["get"])
    def ledger(self, request, pk=None):  # type: ignore
        booking = self.get_object()
        entries = transaction_log.list_by_booking(booking.pk)
        return Response(LedgerEntrySerializer(entries, many=True).data)

    @action(detail=False, methods=["post"])
    def quote(self, request):  # type: ignore
        """Price a selection of items for a period without saving anything."""
        serializer = QuoteRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        cart = BookingCart(current_currency())
        for item_id in data["items"]:
            cart.add(inventory_registry.get(item_id))
        cart.set_period(data["start_date"], data["end_date"])
        return Response(QuoteSerializer(cart).data)
