"""
Root conftest.py — shared fixtures for the entire test suite.

Provides:
  - ``api_client`` fixture returning a DRF ``APIClient``.
  - ``create_user`` factory fixture for creating test users.
  - ``auth_header`` fixture for authenticated requests (JWT).
  - ``create_complaint`` factory fixture, with optional back-dating.
"""

from __future__ import annotations

import datetime

import pytest
from rest_framework.test import APIClient


@pytest.fixture()
def api_client() -> APIClient:
    """Unauthenticated DRF test client."""
    return APIClient()


@pytest.fixture()
def create_user(db):
    """
    Factory fixture that creates a user with sensible defaults.

    Usage::

        def test_something(create_user):
            user = create_user(username="alice")
            admin = create_user(username="root", role=Role.objects.get(name="Admin"))
    """
    from accounts.models import User

    _counter = 0

    def _factory(
        *,
        username: str | None = None,
        password: str = "TestPass123!",
        email: str | None = None,
        role=None,
        is_active: bool = True,
        **kwargs,
    ) -> User:
        nonlocal _counter
        _counter += 1
        if username is None:
            username = f"testuser{_counter}"
        if email is None:
            email = f"{username}@test.local"

        return User.objects.create_user(
            username=username,
            password=password,
            email=email,
            is_active=is_active,
            role=role,
            **kwargs,
        )

    return _factory


@pytest.fixture()
def auth_header(create_user, api_client):
    """
    Returns a helper function that creates a user and returns an
    ``Authorization`` header dict with a valid JWT access token.

    Usage::

        def test_protected(auth_header, api_client):
            header = auth_header(username="alice")
            api_client.credentials(HTTP_AUTHORIZATION=header["Authorization"])
            resp = api_client.get("/api/core/notifications/")
            assert resp.status_code != 401
    """
    from rest_framework_simplejwt.tokens import AccessToken

    def _make(
        *,
        username: str | None = None,
        role=None,
        **user_kwargs,
    ) -> dict[str, str]:
        user = create_user(username=username, role=role, **user_kwargs)
        token = AccessToken.for_user(user)
        return {"Authorization": f"Bearer {token}"}

    return _make


@pytest.fixture()
def create_complaint(db):
    """
    Factory fixture for complaints in any status.

    ``age`` back-dates ``created_at`` (``auto_now_add`` ignores values
    passed to ``create``, so the row is updated afterwards).
    """
    from complaints.models import Complaint, ComplaintStatus, StatusCode

    def _factory(
        *,
        user=None,
        title: str = "Broken street light",
        status_code: str = StatusCode.NEW,
        is_anonymous: bool = False,
        age: datetime.timedelta | None = None,
        **kwargs,
    ) -> Complaint:
        complaint = Complaint.objects.create(
            title=title,
            description=kwargs.pop("description", "The light on 5th street is out."),
            user=None if is_anonymous else user,
            is_anonymous=is_anonymous,
            status=ComplaintStatus.objects.get(code=status_code),
            **kwargs,
        )
        if age is not None:
            from django.utils import timezone

            Complaint.objects.filter(pk=complaint.pk).update(created_at=timezone.now() - age)
            complaint.refresh_from_db()
        return complaint

    return _factory
