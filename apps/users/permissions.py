"""Permission classes implementing the administrator boundary.

The booking/ledger core performs no authorization of its own; the API
layer must check the operator's role before dispatching delete-class
operations or touching users and settings.
"""

from __future__ import annotations

from rest_framework import permissions  # type: ignore


def is_admin(user) -> bool:  # type: ignore
    if not user or not user.is_authenticated:
        return False
    if getattr(user, "is_superuser", False):
        return True
    return hasattr(user, "is_admin") and user.is_admin()


class IsAdminRole(permissions.BasePermission):
    """Only administrators may access."""

    def has_permission(self, request, view) -> bool:  # type: ignore
        return is_admin(request.user)


class IsAdminRoleOrReadOnly(permissions.BasePermission):
    """Any authenticated operator may read, administrators may write."""

    def has_permission(self, request, view) -> bool:  # type: ignore
        user = request.user
        if not user.is_authenticated:
            return False
        if request.method in permissions.SAFE_METHODS:
            return True
        return is_admin(user)


class AdminCanDelete(permissions.BasePermission):
    """Authenticated operators may do anything except DELETE, which needs an administrator."""

    def has_permission(self, request, view) -> bool:  # type: ignore
        user = request.user
        if not user.is_authenticated:
            return False
        if request.method == "DELETE":
            return is_admin(user)
        return True
