"""
Accounts app views.

View Map
--------
- ``LoginView`` — POST /token/   (SimpleJWT, role claims added)
- ``MeView``    — GET  /me/
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.views import TokenObtainPairView

from drf_spectacular.utils import extend_schema

from .serializers import MeSerializer, RoleClaimsTokenObtainPairSerializer


class LoginView(TokenObtainPairView):
    """
    POST /api/accounts/token/

    Exchange ``username`` + ``password`` for an access/refresh pair.
    """

    serializer_class = RoleClaimsTokenObtainPairSerializer


class MeView(APIView):
    """GET /api/accounts/me/ — the authenticated user's profile."""

    permission_classes = [IsAuthenticated]

    @extend_schema(responses={200: MeSerializer}, tags=["Accounts"])
    def get(self, request: Request) -> Response:
        return Response(MeSerializer(request.user).data, status=status.HTTP_200_OK)
