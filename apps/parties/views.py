"""Party API views."""

from __future__ import annotations

from rest_framework import viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.filters import OrderingFilter  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.ledger.services import transaction_log
from apps.users.permissions import AdminCanDelete

from .filters import PartyFilterSet
from .serializers import PartySerializer, StatementQuerySerializer, StatementSerializer
from .services import party_ledger


class PartyViewSet(viewsets.ModelViewSet):
    """Customers and suppliers. DELETE soft-deletes and needs an administrator."""

    serializer_class = PartySerializer
    permission_classes = [AdminCanDelete]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = PartyFilterSet
    ordering_fields = ["name", "balance", "created_at"]

    def get_queryset(self):  # type: ignore
        return party_ledger.list()

    def perform_create(self, serializer):  # type: ignore
        serializer.instance = party_ledger.create(**serializer.validated_data)

    def perform_update(self, serializer):  # type: ignore
        serializer.instance = party_ledger.update(serializer.instance.pk, **serializer.validated_data)

    def perform_destroy(self, instance):  # type: ignore
        party_ledger.soft_delete(instance.pk)

    @action(detail=True, methods=["get"])
    def statement(self, request, pk=None):  # type: ignore
        party = self.get_object()
        query = StatementQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        statement = transaction_log.statement(
            party.pk,
            start=query.validated_data.get("start"),
            end=query.validated_data.get("end"),
        )
        return Response(StatementSerializer(statement).data)
