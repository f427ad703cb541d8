"""Ledger API views.

Entries are read-only here. Payments are posted and entries removed
through the booking engine so the party balance moves with them.
"""

from __future__ import annotations

from rest_framework import mixins, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.bookings.application.engine import booking_engine
from apps.users.permissions import AdminCanDelete

from .filters import LedgerEntryFilterSet
from .models import LedgerEntry
from .serializers import LedgerEntrySerializer, PaymentSerializer


class LedgerEntryViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    queryset = LedgerEntry.objects.select_related("party", "created_by").order_by("date", "created_at")
    serializer_class = LedgerEntrySerializer
    permission_classes = [AdminCanDelete]
    filter_backends = [DjangoFilterBackend]
    filterset_class = LedgerEntryFilterSet

    def destroy(self, request, *args, **kwargs):  # type: ignore
        entry = self.get_object()
        booking_engine.remove_entry(entry.pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=["post"])
    def payments(self, request):  # type: ignore
        serializer = PaymentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        entry = booking_engine.add_payment(
            party_id=data["party"],
            amount=data["amount"],
            method=data["method"],
            entry_date=data.get("date"),
            description=data["description"],
            created_by=request.user,
        )
        return Response(LedgerEntrySerializer(entry).data, status=status.HTTP_201_CREATED)
