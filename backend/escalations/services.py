"""
Escalations app Service Layer.

Architecture
------------
- ``EscalationService`` — the escalation engine: manual and automatic
  escalation, resolution, listing, and the periodic staleness sweep.

Escalation protocol
-------------------
1. Validate the reason (blank → ``InvalidInput``, nothing written).
2. In one transaction: lock the complaint row, refuse a ``RESOLVED``
   complaint (``InvalidTransition``), resolve the admin role and the
   ``ESCALATED`` status, create the ``Escalation``, set the
   complaint status, append the public escalation comment.
3. After the transaction, fan the event out to the owner and
   the admins (``EscalationNotifier``).  Fan-out failures are logged
   and never undo step 2.

Concurrent escalations of the same complaint serialize on the row lock.
Each of them succeeds; duplicate ``Escalation`` rows are tolerated.
"""

from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from accounts.services import UserDirectoryService
from complaints.models import Complaint, StatusCode
from complaints.services import CommentService, ComplaintQueryService
from core.constants import (
    ADMIN_ROLE_NAME,
    AUTO_ESCALATION_REASON,
    ESCALATION_DATE_FORMAT,
    escalation_setting,
)
from core.domain.access import require_permission
from core.domain.exceptions import InvalidInput, InvalidTransition
from core.domain.transactions import lock_for_update
from core.permissions_constants import EscalationsPerms, perm

from .actors import SYSTEM, Actor, HumanActor
from .dispatch import EscalationNotifier
from .models import Escalation

logger = logging.getLogger(__name__)

ESCALATION_COMMENT_TEMPLATE = (
    "COMPLAINT ESCALATED\n"
    "\n"
    "This complaint has been escalated to senior management for priority attention.\n"
    "\n"
    "Escalated by: {escalated_by}\n"
    "Date: {escalated_at}\n"
    "Reason: {reason}\n"
    "\n"
    "The complaint status has been changed to ESCALATED and relevant "
    "administrators have been notified."
)


def build_escalation_comment(actor: Actor, escalated_at: datetime.datetime, reason: str) -> str:
    local_time = timezone.localtime(escalated_at) if timezone.is_aware(escalated_at) else escalated_at
    return ESCALATION_COMMENT_TEMPLATE.format(
        escalated_by=actor.comment_name,
        escalated_at=local_time.strftime(ESCALATION_DATE_FORMAT),
        reason=reason,
    )


@dataclass
class SweepResult:
    """Outcome of one sweep run."""

    run_at: datetime.datetime
    threshold: datetime.datetime
    scanned: int = 0
    escalated: list[int] = field(default_factory=list)
    skipped: list[int] = field(default_factory=list)
    failed: dict[int, str] = field(default_factory=dict)

    def summary(self) -> str:
        return (
            f"scanned={self.scanned} escalated={len(self.escalated)} "
            f"skipped={len(self.skipped)} failed={len(self.failed)}"
        )


def _still_stale(complaint: Complaint) -> bool:
    return complaint.status.code not in (StatusCode.RESOLVED, StatusCode.ESCALATED)


# ═══════════════════════════════════════════════════════════════════
#  Escalation Service
# ═══════════════════════════════════════════════════════════════════


class EscalationService:
    """
    Entry points of the escalation engine.

    ``notifier`` is a class attribute so tests (or a deployment) can swap
    the fan-out for one with a different mailer.
    """

    notifier: EscalationNotifier | None = None

    @classmethod
    def _get_notifier(cls) -> EscalationNotifier:
        return cls.notifier or EscalationNotifier()

    # ── escalation ──────────────────────────────────────────────────

    @classmethod
    def escalate_complaint(
        cls,
        complaint_id: int,
        reason: str,
        actor: Actor = SYSTEM,
    ) -> Escalation:
        """
        Escalate a complaint to the admin role.

        Raises:
            InvalidInput: ``reason`` is empty or whitespace.
            NotFound:     Unknown complaint, or the admin role / the
                          ``ESCALATED`` status is not configured.
            InvalidTransition: The complaint is ``RESOLVED``.
        """
        return cls._escalate(complaint_id, reason, actor)

    @classmethod
    def escalate_by_user(cls, complaint_id: int, reason: str, user: Any) -> Escalation:
        """Manual escalation requested through the API."""
        require_permission(
            user,
            perm("escalations", EscalationsPerms.CAN_ESCALATE_COMPLAINT),
            message="You do not have permission to escalate complaints.",
        )
        return cls.escalate_complaint(complaint_id, reason, HumanActor(user))

    @classmethod
    def _escalate(
        cls,
        complaint_id: int,
        reason: str,
        actor: Actor,
        guard: Callable[[Complaint], bool] | None = None,
    ) -> Escalation | None:
        """
        Shared escalation path.  When ``guard`` is given it is evaluated
        on the locked row and a ``False`` result aborts without writing
        (returns ``None``).
        """
        reason = (reason or "").strip()
        if not reason:
            raise InvalidInput("Escalation reason is required.")

        with transaction.atomic():
            complaint = lock_for_update(Complaint, complaint_id, select_related=("status",))
            if guard is not None and not guard(complaint):
                return None
            if complaint.status.code == StatusCode.RESOLVED:
                raise InvalidTransition(
                    current=StatusCode.RESOLVED,
                    target=StatusCode.ESCALATED,
                    reason="Resolved complaints cannot be escalated",
                )

            admin_role = UserDirectoryService.get_role_by_name(ADMIN_ROLE_NAME)
            escalated_status = ComplaintQueryService.get_status_by_code(StatusCode.ESCALATED)
            previous = complaint.status.code

            escalation = Escalation.objects.create(
                complaint=complaint,
                escalated_to_role=admin_role,
                escalated_by=actor.user,
                reason=reason,
                escalated_at=timezone.now(),
                resolved=False,
            )
            complaint.status = escalated_status
            complaint.save(update_fields=["status", "updated_at"])
            CommentService.append(
                complaint,
                build_escalation_comment(actor, escalation.escalated_at, reason),
                author=actor.user,
                is_private=False,
            )

        logger.info(
            "Complaint #%d escalated (%s → %s) by %s, escalation #%d",
            complaint.pk,
            previous,
            StatusCode.ESCALATED,
            actor,
            escalation.pk,
        )

        try:
            cls._get_notifier().notify(escalation, complaint, actor)
        except Exception:
            logger.exception("Notification fan-out for escalation #%d failed", escalation.pk)

        return escalation

    # ── resolution ──────────────────────────────────────────────────

    @staticmethod
    def resolve_escalation(escalation_id: int, requesting_user: Any = None) -> Escalation:
        """
        Mark an escalation resolved.  Repeating the call is a no-op success.
        The complaint's status is left untouched.
        """
        if requesting_user is not None:
            require_permission(
                requesting_user,
                perm("escalations", EscalationsPerms.CAN_RESOLVE_ESCALATION),
                message="You do not have permission to resolve escalations.",
            )
        with transaction.atomic():
            escalation = lock_for_update(Escalation, escalation_id)
            if not escalation.resolved:
                escalation.resolved = True
                escalation.save(update_fields=["resolved"])
                logger.info("Escalation #%d resolved by %s", escalation.pk, requesting_user or "system")
        return escalation

    # ── queries ─────────────────────────────────────────────────────

    @staticmethod
    def _base_queryset() -> QuerySet[Escalation]:
        return Escalation.objects.select_related("complaint", "escalated_by", "escalated_to_role")

    @staticmethod
    def list_escalations(complaint_id: int) -> QuerySet[Escalation]:
        """Escalations of one complaint, newest first."""
        return EscalationService._base_queryset().filter(
            complaint_id=complaint_id,
        ).order_by("-escalated_at", "-id")

    @staticmethod
    def list_escalations_for_user(complaint_id: int, user: Any) -> QuerySet[Escalation]:
        """
        Like ``list_escalations`` for API callers: users without
        ``view_escalation`` only see the history of complaints visible to
        them.
        """
        if not user.has_perm(perm("escalations", EscalationsPerms.VIEW_ESCALATION)):
            ComplaintQueryService.get_visible_complaint(complaint_id, user)
        return EscalationService.list_escalations(complaint_id)

    @staticmethod
    def list_unresolved_escalations(requesting_user: Any = None) -> QuerySet[Escalation]:
        """Every escalation not yet resolved, newest first."""
        if requesting_user is not None:
            require_permission(
                requesting_user,
                perm("escalations", EscalationsPerms.CAN_VIEW_UNRESOLVED_ESCALATIONS),
                message="You do not have permission to view unresolved escalations.",
            )
        return EscalationService._base_queryset().filter(resolved=False).order_by("-escalated_at", "-id")

    # ── sweep ───────────────────────────────────────────────────────

    @classmethod
    def sweep(cls, now: datetime.datetime | None = None) -> SweepResult:
        """
        Escalate every complaint older than the staleness threshold whose
        status is neither ``RESOLVED`` nor ``ESCALATED``.

        Each complaint is escalated in its own transaction; a failure is
        recorded and the sweep moves on.  The eligibility check is
        repeated on the locked row, so a complaint resolved or escalated
        since the query is skipped.
        """
        now = now or timezone.now()
        hours = escalation_setting("THRESHOLD_HOURS")
        threshold = now - datetime.timedelta(hours=hours)
        reason = AUTO_ESCALATION_REASON.format(hours=hours)
        result = SweepResult(run_at=now, threshold=threshold)

        candidates = list(
            ComplaintQueryService.find_stale(threshold, exclude_status_code=StatusCode.RESOLVED)
        )
        for complaint in candidates:
            result.scanned += 1
            if complaint.status.code == StatusCode.ESCALATED:
                result.skipped.append(complaint.pk)
                continue
            try:
                escalation = cls._escalate(complaint.pk, reason, SYSTEM, guard=_still_stale)
            except Exception as exc:
                result.failed[complaint.pk] = str(exc)
                logger.exception("Auto-escalation of complaint #%d failed", complaint.pk)
                continue
            if escalation is None:
                result.skipped.append(complaint.pk)
            else:
                result.escalated.append(complaint.pk)

        log = logger.warning if result.failed else logger.info
        log(
            "Escalation sweep at %s (threshold %s): %s",
            now.isoformat(),
            threshold.isoformat(),
            result.summary(),
        )
        return result
