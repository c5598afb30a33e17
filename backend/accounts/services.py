"""
Accounts app Service Layer.

Architecture
------------
- ``UserDirectoryService`` — read-only user and role lookups (by id, email, role)
  used by the complaint and escalation services.

Registration and password flows are not part of this project; JWT
tokens are issued by SimpleJWT views wired in ``accounts.urls``.
"""

from __future__ import annotations

import logging

from django.db.models import QuerySet

from core.domain.exceptions import NotFound

from .models import Role, User

logger = logging.getLogger(__name__)


class UserDirectoryService:
    """
    Lookup helpers over the ``User`` table.

    Lookup by role name is reserved for routing (e.g. "notify every
    admin"); access control goes through ``require_permission``.
    """

    @staticmethod
    def get_user(user_id: int) -> User:
        """Return the user with ``user_id``. Raises ``NotFound``."""
        try:
            return User.objects.select_related("role").get(pk=user_id)
        except (User.DoesNotExist, ValueError, TypeError):
            raise NotFound(f"User with id {user_id} not found.")

    @staticmethod
    def get_by_email(email: str) -> User:
        """Return the user registered with ``email`` (case-insensitive)."""
        try:
            return User.objects.select_related("role").get(email__iexact=email)
        except User.DoesNotExist:
            raise NotFound(f"User with email {email} not found.")

    @staticmethod
    def users_with_role(role_name: str, *, active_only: bool = True) -> QuerySet[User]:
        """Return every user holding the role called ``role_name``."""
        qs = User.objects.filter(role__name=role_name)
        if active_only:
            qs = qs.filter(is_active=True)
        return qs.order_by("pk")

    @staticmethod
    def get_role_by_name(name: str) -> Role:
        """Return the role called ``name``. Raises ``NotFound``."""
        try:
            return Role.objects.get(name=name)
        except Role.DoesNotExist:
            raise NotFound(f"Role '{name}' not found.")
