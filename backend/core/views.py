"""
Core app views — **Thin Views**.

Each view delegates all business logic to the corresponding service in
``core.services``.  Views are responsible only for:

1. Extracting the authenticated user and path parameters.
2. Calling the service.
3. Serialising the result and returning an HTTP ``Response``.
"""

from __future__ import annotations

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response

from drf_spectacular.utils import OpenApiResponse, extend_schema

from .serializers import (
    MarkAllReadSerializer,
    NotificationSerializer,
    UnreadCountSerializer,
)
from .services import NotificationService


class NotificationViewSet(viewsets.ViewSet):
    """
    **Notification API** — the authenticated user's in-app inbox.

    Endpoints
    ---------
    GET    /api/core/notifications/               → list all notifications
    GET    /api/core/notifications/unread/        → list unread notifications
    GET    /api/core/notifications/unread-count/  → number of unread notifications
    POST   /api/core/notifications/{id}/read/     → mark a notification as read
    POST   /api/core/notifications/read-all/      → mark every notification as read
    DELETE /api/core/notifications/{id}/          → delete a notification

    **Authentication**: Required (``IsAuthenticated``).
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="List notifications",
        description="Return all notifications for the authenticated user.",
        responses={200: OpenApiResponse(response=NotificationSerializer(many=True), description="Notification list.")},
        tags=["Notifications"],
    )
    def list(self, request: Request) -> Response:
        service = NotificationService(user=request.user)
        serializer = NotificationSerializer(service.list_notifications(), many=True)
        return Response(serializer.data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="Delete notification",
        responses={204: OpenApiResponse(description="Deleted.")},
        tags=["Notifications"],
    )
    def destroy(self, request: Request, pk: int = None) -> Response:
        NotificationService(user=request.user).delete(notification_id=pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=["get"], url_path="unread")
    @extend_schema(
        summary="List unread notifications",
        responses={200: OpenApiResponse(response=NotificationSerializer(many=True), description="Unread notifications.")},
        tags=["Notifications"],
    )
    def unread(self, request: Request) -> Response:
        service = NotificationService(user=request.user)
        serializer = NotificationSerializer(service.list_unread(), many=True)
        return Response(serializer.data, status=status.HTTP_200_OK)

    @action(detail=False, methods=["get"], url_path="unread-count")
    @extend_schema(
        summary="Count unread notifications",
        responses={200: UnreadCountSerializer},
        tags=["Notifications"],
    )
    def unread_count(self, request: Request) -> Response:
        count = NotificationService(user=request.user).count_unread()
        return Response(UnreadCountSerializer({"count": count}).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=["post"], url_path="read")
    @extend_schema(
        summary="Mark notification as read",
        description="Mark a single notification as read by ID.",
        request=None,
        responses={200: OpenApiResponse(response=NotificationSerializer, description="Updated notification.")},
        tags=["Notifications"],
    )
    def mark_as_read(self, request: Request, pk: int = None) -> Response:
        """
        **POST /api/core/notifications/{id}/read/**

        Responds 404 when the notification does not belong to the caller.
        """
        notification = NotificationService(user=request.user).mark_as_read(notification_id=pk)
        return Response(NotificationSerializer(notification).data, status=status.HTTP_200_OK)

    @action(detail=False, methods=["post"], url_path="read-all")
    @extend_schema(
        summary="Mark all notifications as read",
        request=None,
        responses={200: MarkAllReadSerializer},
        tags=["Notifications"],
    )
    def mark_all_as_read(self, request: Request) -> Response:
        updated = NotificationService(user=request.user).mark_all_as_read()
        return Response(MarkAllReadSerializer({"updated": updated}).data, status=status.HTTP_200_OK)
