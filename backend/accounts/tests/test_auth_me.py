"""
Integration tests — current profile (Me) endpoint.

Endpoint under test:  GET /api/accounts/me/   (named URL: accounts:me)
Access:               Authenticated only (IsAuthenticated permission class)
"""

from __future__ import annotations

import pytest
from django.urls import reverse
from rest_framework import status

from accounts.models import Role


@pytest.mark.django_db
class TestMeEndpoint:
    def test_anonymous_request_is_rejected(self, api_client):
        response = api_client.get(reverse("accounts:me"))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_profile_includes_role_and_permissions(self, api_client, auth_header):
        admin_role = Role.objects.get(name="Admin")
        header = auth_header(username="root", role=admin_role, first_name="Ada", last_name="Admin")
        api_client.credentials(HTTP_AUTHORIZATION=header["Authorization"])

        response = api_client.get(reverse("accounts:me"))

        assert response.status_code == status.HTTP_200_OK
        assert response.data["username"] == "root"
        assert response.data["role"] == "Admin"
        assert response.data["permissions"] == []

    def test_user_without_role(self, api_client, auth_header):
        header = auth_header(username="plain")
        api_client.credentials(HTTP_AUTHORIZATION=header["Authorization"])

        response = api_client.get(reverse("accounts:me"))

        assert response.data["role"] is None
