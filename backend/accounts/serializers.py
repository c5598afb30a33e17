"""
Accounts app serializers.

- ``RoleClaimsTokenObtainPairSerializer`` — SimpleJWT login that adds
  role claims to the access token.
- ``UserSummarySerializer`` — compact nested representation used by the
  complaint and escalation payloads.
- ``MeSerializer`` — the authenticated user's profile.
"""

from __future__ import annotations

from typing import Any

from rest_framework import serializers
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

from .models import User


class RoleClaimsTokenObtainPairSerializer(TokenObtainPairSerializer):
    """
    SimpleJWT serializer that injects the user's ``role`` and
    permission list into the access token payload so the frontend can
    show or hide escalation controls without another round-trip.
    """

    @classmethod
    def get_token(cls, user) -> Any:
        token = super().get_token(user)
        token["role"] = user.role.name if user.role else None
        token["permissions"] = sorted(user.get_all_permissions())
        return token


class UserSummarySerializer(serializers.ModelSerializer):
    """Read-only ``{id, username, full_name, email}`` block."""

    full_name = serializers.CharField(source="display_name", read_only=True)

    class Meta:
        model = User
        fields = ["id", "username", "full_name", "email"]
        read_only_fields = fields


class MeSerializer(serializers.ModelSerializer):
    """Profile of the authenticated user, including role and permissions."""

    role = serializers.StringRelatedField(read_only=True)
    permissions = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ["id", "username", "email", "first_name", "last_name", "role", "permissions"]
        read_only_fields = fields

    def get_permissions(self, obj: User) -> list[str]:
        return sorted(obj.get_all_permissions())
