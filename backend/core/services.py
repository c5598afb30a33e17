"""
Core app services — **Service Layer**.

Views delegate all business logic to the service classes defined here,
keeping views thin and ensuring testability.

Cross-app import rule: never import models from other apps at the
module level.  Import inside the method that needs them, or use
``TYPE_CHECKING`` for annotations.
"""

from __future__ import annotations

import logging
from typing import Any

from django.db.models import QuerySet

from core.domain.exceptions import NotFound

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════
#  Notification Service
# ═══════════════════════════════════════════════════════════════════

class NotificationService:
    """
    The in-app notification inbox of a single user.

    Creation is not handled here: every producer goes through
    ``core.domain.notifications.NotificationService.create``.
    """

    def __init__(self, user: Any) -> None:
        self.user = user

    def _queryset(self) -> QuerySet:
        from core.models import Notification

        return (
            Notification.objects
            .filter(recipient=self.user)
            .select_related("content_type")
        )

    def _get(self, notification_id: int) -> Any:
        from core.models import Notification

        try:
            return self._queryset().get(pk=notification_id)
        except (Notification.DoesNotExist, ValueError, TypeError):
            raise NotFound(f"Notification with id {notification_id} not found.")

    def list_notifications(self) -> QuerySet:
        """Return all notifications for ``self.user``, most recent first."""
        return self._queryset().order_by("-created_at", "-id")

    def list_unread(self) -> QuerySet:
        """Return unread notifications for ``self.user``, most recent first."""
        return self.list_notifications().filter(is_read=False)

    def count_unread(self) -> int:
        return self._queryset().filter(is_read=False).count()

    def mark_as_read(self, notification_id: int) -> Any:
        """Mark a single notification as read. Raises ``NotFound`` if absent."""
        notification = self._get(notification_id)
        if not notification.is_read:
            notification.is_read = True
            notification.save(update_fields=["is_read", "updated_at"])
        return notification

    def mark_all_as_read(self) -> int:
        """Mark every unread notification as read; returns how many changed."""
        updated = self._queryset().filter(is_read=False).update(is_read=True)
        logger.info("Marked %d notification(s) read for user=%s", updated, self.user)
        return updated

    def delete(self, notification_id: int) -> None:
        """Delete one notification. Raises ``NotFound`` if absent."""
        notification = self._get(notification_id)
        notification.delete()
