"""
Escalation notification fan-out.

Runs after the escalation transaction has committed.  One escalation
produces, for the owner (when the complaint is not anonymous) and for
every active admin, one email and one in-app ``Notification``.

Every delivery is its own fault boundary: a failed email does not stop
the matching in-app record, and a failure for one recipient does not
stop the next.  Nothing here raises; the outcome is summarised in a
``FanoutReport``.  There is no retry queue.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable

from accounts.services import UserDirectoryService
from core.constants import ADMIN_ROLE_NAME
from core.domain.notifications import NotificationService
from core.domain.transactions import run_in_atomic

from .mailers import EscalationMailer

if TYPE_CHECKING:
    from accounts.models import User
    from complaints.models import Complaint

    from .actors import Actor
    from .models import Escalation

logger = logging.getLogger(__name__)


@dataclass
class FanoutReport:
    emails_sent: int = 0
    emails_failed: int = 0
    notifications_created: int = 0
    notifications_failed: int = 0

    @property
    def has_failures(self) -> bool:
        return bool(self.emails_failed or self.notifications_failed)


class EscalationNotifier:
    """Delivers the escalation event to the complaint owner and the admins."""

    def __init__(self, mailer: EscalationMailer | None = None) -> None:
        self.mailer = mailer or EscalationMailer()

    def notify(
        self,
        escalation: Escalation,
        complaint: Complaint,
        actor: Actor,
        admins: Iterable[User] | None = None,
    ) -> FanoutReport:
        """
        Fan the escalation out to the owner and to ``admins`` (defaults to
        every active user holding the admin role).
        """
        report = FanoutReport()
        if admins is None:
            admins = UserDirectoryService.users_with_role(ADMIN_ROLE_NAME)

        owner = complaint.owner
        if owner is not None:
            self._deliver_email(
                report,
                owner,
                self.mailer.send_escalation_to_owner,
                to_email=owner.email,
                user_name=owner.display_name,
                complaint_title=complaint.title,
                complaint_id=complaint.pk,
                reason=escalation.reason,
                escalated_by=actor.display_name,
                escalated_by_email=actor.contact_email,
                escalated_at=escalation.escalated_at,
            )
            self._deliver_in_app(
                report,
                owner,
                actor,
                event_type="complaint_escalated",
                payload={
                    "complaint_title": complaint.title,
                    "escalated_by": actor.display_name,
                    "reason": escalation.reason,
                },
                complaint=complaint,
            )

        for admin in admins:
            self._deliver_email(
                report,
                admin,
                self.mailer.send_escalation_to_admin,
                to_email=admin.email,
                admin_name=admin.display_name,
                complaint_title=complaint.title,
                complaint_id=complaint.pk,
                reason=escalation.reason,
            )
            self._deliver_in_app(
                report,
                admin,
                actor,
                event_type="escalation_needs_review",
                payload={
                    "complaint_id": complaint.pk,
                    "escalated_by": actor.display_name,
                },
                complaint=complaint,
            )

        log = logger.warning if report.has_failures else logger.info
        log(
            "Escalation #%d fan-out: emails sent=%d failed=%d, "
            "notifications created=%d failed=%d",
            escalation.pk,
            report.emails_sent,
            report.emails_failed,
            report.notifications_created,
            report.notifications_failed,
        )
        return report

    # ── single deliveries ───────────────────────────────────────────

    @staticmethod
    def _deliver_email(report: FanoutReport, recipient: User, send, **kwargs) -> None:
        try:
            send(**kwargs)
        except Exception:
            report.emails_failed += 1
            logger.exception("Escalation email to user %s failed", recipient.pk)
        else:
            report.emails_sent += 1

    @staticmethod
    def _deliver_in_app(
        report: FanoutReport,
        recipient: User,
        actor: Actor,
        *,
        event_type: str,
        payload: dict,
        complaint: Complaint,
    ) -> None:
        try:
            # Savepoint: a failed insert must not break an enclosing transaction.
            created = run_in_atomic(
                NotificationService.create,
                actor=actor.user,
                recipients=recipient,
                event_type=event_type,
                payload=payload,
                related_object=complaint,
            )
        except Exception:
            report.notifications_failed += 1
            logger.exception("In-app escalation notification for user %s failed", recipient.pk)
        else:
            report.notifications_created += len(created)
