"""API views for analytics."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore
from rest_framework.views import APIView  # type: ignore
from rest_framework.permissions import IsAuthenticated  # type: ignore
from rest_framework.response import Response  # type: ignore

from .services import overview


class OverviewQuerySerializer(serializers.Serializer):
    start = serializers.DateField(required=False)
    end = serializers.DateField(required=False)


class OverviewAnalyticsView(APIView):
    """Dashboard figures for the whole business."""

    permission_classes = [IsAuthenticated]

    def get(self, request, format=None):  # type: ignore
        query = OverviewQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        return Response(overview(**query.validated_data))
