"""Operator accounts for the rental back office."""

from __future__ import annotations

from typing import Any

from django.contrib.auth.models import AbstractUser, UserManager  # type: ignore
from django.core.validators import RegexValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


PHONE_VALIDATOR = RegexValidator(
    regex=r"^\+?\d{7,15}$",
    message=_("Invalid phone number. Use the international format without spaces."),
)


class OperatorManager(UserManager):
    """User manager that defaults new accounts to the employee role."""

    use_in_migrations = True

    def alive(self):
        return self.get_queryset().filter(deleted_at__isnull=True)

    def create_user(self, username: str, email: str | None = None, password: str | None = None, **extra_fields: Any):
        extra_fields.setdefault("role", User.Role.EMPLOYEE)
        phone = extra_fields.get("phone")
        if phone:
            extra_fields["phone"] = self.normalize_phone(phone)
        return super().create_user(username, email, password, **extra_fields)

    def create_superuser(self, username: str, email: str | None = None, password: str | None = None, **extra_fields: Any):
        extra_fields.setdefault("role", User.Role.ADMIN)
        return super().create_superuser(username, email, password, **extra_fields)

    @staticmethod
    def normalize_phone(phone: str) -> str:
        return phone.replace(" ", "").replace("-", "")


class User(AbstractUser):
    """Back-office operator (administrator or employee)."""

    class Role(models.TextChoices):
        ADMIN = "admin", _("Administrator")
        EMPLOYEE = "employee", _("Employee")

    role = models.CharField(
        _("Role"),
        max_length=20,
        choices=Role.choices,
        default=Role.EMPLOYEE,
    )
    phone = models.CharField(
        _("Phone"),
        max_length=20,
        blank=True,
        validators=[PHONE_VALIDATOR],
    )
    deleted_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = OperatorManager()

    class Meta:
        verbose_name = _("User")
        verbose_name_plural = _("Users")
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.username} ({self.get_role_display()})"

    def is_admin(self) -> bool:
        return self.role == self.Role.ADMIN or self.is_superuser

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def soft_delete(self) -> None:
        """Retire the account but keep it for bookings and entries it created."""
        self.deleted_at = timezone.now()
        self.is_active = False
        self.save(update_fields=["deleted_at", "is_active", "updated_at"])

    def set_active(self, active: bool) -> None:
        self.is_active = active
        self.save(update_fields=["is_active", "updated_at"])
