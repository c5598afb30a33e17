"""
core.domain.notifications — Synchronous notification creation helper.

Centralises notification creation so every app uses one consistent
entry-point rather than directly constructing ``Notification`` objects.

Design decisions
----------------
* **Synchronous** — all DB writes happen in the calling thread.  Callers
  that must not be affected by a failed write (the escalation fan-out)
  wrap each call in their own savepoint.
* **Supports multiple recipients** — pass a single ``User`` or an
  iterable of ``User`` instances.
* **Templated text** — titles and messages come from ``_EVENT_TEMPLATES``
  and are interpolated with ``payload`` via ``str.format``.
* **Generic relation** — ``related_object`` is optional; if provided
  its ``ContentType`` and PK are stored via the ``Notification`` model's
  ``GenericForeignKey``.

Usage::

    from core.domain.notifications import NotificationService

    NotificationService.create(
        actor=request.user,
        recipients=complaint.user,
        event_type="complaint_escalated",
        payload={"complaint_title": complaint.title, ...},
        related_object=complaint,
    )
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Iterable

from django.contrib.contenttypes.models import ContentType
from django.db import models

if TYPE_CHECKING:
    from accounts.models import User
    from core.models import Notification

logger = logging.getLogger(__name__)

# ── Event-type → (title_template, message_template) ─────────────────
_EVENT_TEMPLATES: dict[str, tuple[str, str]] = {
    "complaint_escalated": (
        "Complaint Escalated",
        "Your complaint '{complaint_title}' has been escalated by "
        "{escalated_by}. Reason: {reason}",
    ),
    "escalation_needs_review": (
        "New Escalated Complaint",
        "Complaint #{complaint_id} escalated by {escalated_by} "
        "requires your attention.",
    ),
    "complaint_assigned": (
        "Complaint Assigned",
        "Complaint #{complaint_id} '{complaint_title}' has been assigned to you.",
    ),
    "complaint_status_changed": (
        "Complaint Status Updated",
        "Your complaint '{complaint_title}' is now {status_display}.",
    ),
}


def render_event(event_type: str, payload: dict[str, Any] | None = None) -> tuple[str, str]:
    """
    Return ``(title, message)`` for ``event_type`` interpolated with
    ``payload``.

    Unknown event types fall back to a title-cased event name.  A payload
    missing a placeholder leaves the template un-interpolated rather than
    failing the notification.
    """
    title, message = _EVENT_TEMPLATES.get(
        event_type,
        (event_type.replace("_", " ").title(), f"Event: {event_type}"),
    )
    if payload:
        try:
            title = title.format(**payload)
            message = message.format(**payload)
        except (KeyError, IndexError):
            logger.warning(
                "Notification payload for %s is missing template keys: %s",
                event_type,
                sorted(payload),
            )
    return title, message


class NotificationService:
    """
    Stateless helper for creating ``Notification`` records.

    All methods are classmethods — no instance state is needed.
    """

    @classmethod
    def create(
        cls,
        *,
        actor: User | None,
        recipients: User | Iterable[User],
        event_type: str,
        payload: dict[str, Any] | None = None,
        related_object: models.Model | None = None,
    ) -> list[Notification]:
        """
        Create one unread ``Notification`` per recipient.

        Args:
            actor:          The user who performed the action, or ``None``
                            for system-initiated events.  Used for logging.
            recipients:     A single ``User`` or iterable of ``User``
                            instances.
            event_type:     Key into ``_EVENT_TEMPLATES``.
            payload:        Values interpolated into the templates.
            related_object: Optional model instance linked via
                            ``GenericForeignKey``.

        Returns:
            List of created ``Notification`` instances.
        """
        from core.models import Notification  # circular import

        if isinstance(recipients, models.Model):
            recipients = [recipients]
        else:
            recipients = list(recipients)

        if not recipients:
            logger.warning(
                "NotificationService.create called with empty recipients "
                "for event_type=%s by actor=%s",
                event_type,
                actor or "system",
            )
            return []

        title, message = render_event(event_type, payload)

        content_type = None
        object_id = None
        if related_object is not None:
            content_type = ContentType.objects.get_for_model(related_object)
            object_id = related_object.pk

        notifications: list[Notification] = []
        for recipient in recipients:
            notif = Notification.objects.create(
                recipient=recipient,
                title=title,
                message=message,
                content_type=content_type,
                object_id=object_id,
            )
            notifications.append(notif)

        logger.info(
            "Created %d notification(s) [%s] by actor=%s",
            len(notifications),
            event_type,
            actor or "system",
        )
        return notifications
