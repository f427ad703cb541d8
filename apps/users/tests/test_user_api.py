"""Integration tests for login and operator management."""

from __future__ import annotations

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.users.models import User


class AuthAPITests(APITestCase):
    def setUp(self) -> None:
        self.employee = User.objects.create_user("sara", password="SaraPass123")
        self.login_url = reverse("auth:login")

    def test_login_returns_tokens(self) -> None:
        response = self.client.post(
            self.login_url,
            {"username": "sara", "password": "SaraPass123"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertIn("access", response.data["tokens"])
        self.assertIn("refresh", response.data["tokens"])
        self.assertEqual(response.data["user"]["role"], User.Role.EMPLOYEE)

    def test_wrong_password_is_rejected(self) -> None:
        response = self.client.post(
            self.login_url,
            {"username": "sara", "password": "nope"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)

    def test_retired_operator_cannot_log_in(self) -> None:
        self.employee.soft_delete()

        response = self.client.post(
            self.login_url,
            {"username": "sara", "password": "SaraPass123"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)

    def test_access_token_authenticates(self) -> None:
        login = self.client.post(
            self.login_url,
            {"username": "sara", "password": "SaraPass123"},
            format="json",
        )
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.data['tokens']['access']}")

        response = self.client.get(reverse("user-me"))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["username"], "sara")


class UserAPITests(APITestCase):
    def setUp(self) -> None:
        self.admin = User.objects.create_user("admin", password="AdminPass123", role=User.Role.ADMIN)
        self.employee = User.objects.create_user("omar", password="OmarPass123")
        self.list_url = reverse("user-list")

    def test_employee_cannot_list_users(self) -> None:
        self.client.force_authenticate(self.employee)

        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_employee_sees_own_profile(self) -> None:
        self.client.force_authenticate(self.employee)

        response = self.client.get(reverse("user-me"))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["username"], "omar")

    def test_admin_creates_employee(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            self.list_url,
            {"username": "layla", "password": "LaylaPass123"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["role"], User.Role.EMPLOYEE)
        self.assertTrue(User.objects.get(username="layla").check_password("LaylaPass123"))

    def test_password_required_for_new_user(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.post(self.list_url, {"username": "layla"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)

    def test_admin_soft_deletes_user(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.delete(reverse("user-detail", args=[self.employee.pk]))

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.employee.refresh_from_db()
        self.assertTrue(self.employee.is_deleted)
        self.assertFalse(self.employee.is_active)
        listed = self.client.get(self.list_url)
        self.assertNotIn("omar", [user["username"] for user in listed.data])

    def test_admin_cannot_delete_self(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.delete(reverse("user-detail", args=[self.admin.pk]))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)

    def test_admin_deactivates_user(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            reverse("user-set-active", args=[self.employee.pk]),
            {"active": False},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertFalse(response.data["is_active"])
