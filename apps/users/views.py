"""Operator management API (administrators only, except ``me``)."""

from __future__ import annotations

import logging

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.exceptions import ValidationError  # type: ignore
from rest_framework.response import Response  # type: ignore

from .permissions import IsAdminRole
from .serializers import ActiveToggleSerializer, UserSerializer, UserWriteSerializer

User = get_user_model()
logger = logging.getLogger(__name__)


class UserViewSet(viewsets.ModelViewSet):
    """Operator management.

    - `me` returns the current operator's profile
    - everything else requires an administrator
    - DELETE retires the account (soft delete)
    """

    queryset = User.objects.alive()

    def get_permissions(self):  # type: ignore
        if self.action == "me":
            return [permissions.IsAuthenticated()]
        return [IsAdminRole()]

    def get_serializer_class(self):  # type: ignore
        if self.action in {"create", "update", "partial_update"}:
            return UserWriteSerializer
        return UserSerializer

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)

    def perform_destroy(self, instance):  # type: ignore
        if instance.pk == self.request.user.pk:
            raise ValidationError("Administrators cannot delete their own account.")
        instance.soft_delete()
        logger.info(f"User {instance.username} soft-deleted by {self.request.user.username}")

    @action(detail=True, methods=["post"], url_path="set-active")
    def set_active(self, request, pk=None):  # type: ignore
        user = self.get_object()
        serializer = ActiveToggleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user.set_active(serializer.validated_data["active"])
        return Response(UserSerializer(user).data)

    @action(detail=False, methods=["get"])
    def me(self, request):  # type: ignore
        return Response(UserSerializer(request.user).data)
