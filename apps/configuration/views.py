"""System settings API: any operator reads, administrators write."""

from __future__ import annotations

from rest_framework import status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.users.permissions import IsAdminRole, IsAdminRoleOrReadOnly

from . import services
from .serializers import PresetSerializer, SystemSettingsSerializer


class SystemSettingsView(APIView):
    permission_classes = [IsAdminRoleOrReadOnly]

    def get(self, request):  # type: ignore
        return Response(SystemSettingsSerializer(services.get_settings()).data)

    def put(self, request):  # type: ignore
        serializer = SystemSettingsSerializer(services.get_settings(), data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        settings_obj = services.update_settings(**serializer.validated_data)
        return Response(SystemSettingsSerializer(settings_obj).data)

    patch = put


class ApplyPresetView(APIView):
    permission_classes = [IsAdminRole]

    def post(self, request):  # type: ignore
        serializer = PresetSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        settings_obj = services.apply_preset(serializer.validated_data["preset"])
        return Response(SystemSettingsSerializer(settings_obj).data, status=status.HTTP_200_OK)
