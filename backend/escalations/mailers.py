"""
Outbound escalation emails.

Plain-text messages handed to Django's configured mail backend.  Every
send either succeeds or raises ``DeliveryFailure``; callers decide
whether a failure matters (the fan-out logs it and moves on).
"""

from __future__ import annotations

import datetime
import logging

from django.conf import settings
from django.core.mail import send_mail
from django.utils import timezone

from core.constants import ESCALATION_DATE_FORMAT
from core.domain.exceptions import DeliveryFailure

logger = logging.getLogger(__name__)

OWNER_SUBJECT = "Your Complaint Has Been Escalated - ResolveIt"
ADMIN_SUBJECT = "Escalated Complaint Requires Attention - ResolveIt"

_OWNER_BODY = """Hello {user_name},

Your complaint has been escalated to senior management for priority attention.

Complaint: {complaint_title} (ID: #{complaint_id})
Escalated By: {escalated_by} ({escalated_by_email})
Date & Time: {escalated_at}
Reason:
{reason}

This escalation ensures that your concern receives immediate focus from higher authorities who can expedite the resolution process.

View complaint details: {complaint_url}

You will be notified of any updates. Thank you for your patience.
"""

_ADMIN_BODY = """Hello {admin_name},

A complaint has been escalated and requires your immediate attention:

Complaint: {complaint_title}
ID: #{complaint_id}
Reason: {reason}

Review complaint now: {complaint_url}

Please take appropriate action as soon as possible.
"""


def complaint_url(complaint_id: int) -> str:
    base = getattr(settings, "FRONTEND_URL", "").rstrip("/")
    return f"{base}/complaint/{complaint_id}"


class EscalationMailer:
    """Builds and sends the two escalation emails."""

    def __init__(self, from_email: str | None = None) -> None:
        self.from_email = from_email or settings.DEFAULT_FROM_EMAIL

    def _send(self, to_email: str, subject: str, body: str) -> None:
        if not to_email:
            raise DeliveryFailure("email", "<no address>")
        try:
            send_mail(
                subject,
                body,
                self.from_email,
                [to_email],
                fail_silently=False,
            )
        except Exception as exc:
            raise DeliveryFailure("email", to_email, exc) from exc
        logger.info("Escalation email '%s' sent to %s", subject, to_email)

    def send_escalation_to_owner(
        self,
        *,
        to_email: str,
        user_name: str,
        complaint_title: str,
        complaint_id: int,
        reason: str,
        escalated_by: str,
        escalated_by_email: str,
        escalated_at: datetime.datetime,
    ) -> None:
        body = _OWNER_BODY.format(
            user_name=user_name,
            complaint_title=complaint_title,
            complaint_id=complaint_id,
            escalated_by=escalated_by,
            escalated_by_email=escalated_by_email,
            escalated_at=timezone.localtime(escalated_at).strftime(ESCALATION_DATE_FORMAT),
            reason=reason,
            complaint_url=complaint_url(complaint_id),
        )
        self._send(to_email, OWNER_SUBJECT, body)

    def send_escalation_to_admin(
        self,
        *,
        to_email: str,
        admin_name: str,
        complaint_title: str,
        complaint_id: int,
        reason: str,
    ) -> None:
        body = _ADMIN_BODY.format(
            admin_name=admin_name,
            complaint_title=complaint_title,
            complaint_id=complaint_id,
            reason=reason,
            complaint_url=complaint_url(complaint_id),
        )
        self._send(to_email, ADMIN_SUBJECT, body)
