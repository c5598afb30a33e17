"""
Complaints app Service Layer.

This module is the **single source of truth** for complaint business
logic.  Views validate input via serializers, call a service method,
and wrap the result in a DRF ``Response``.

Architecture
------------
- ``ComplaintQueryService``     — lookups, role-scoped listing, stale query.
- ``ComplaintLifecycleService`` — submission, officer assignment, status changes.
- ``CommentService``            — the comment thread of a complaint.

Status model
------------
Any ``StatusCode`` may be set by a user holding
``CAN_CHANGE_COMPLAINT_STATUS``; there is no transition table.  The
escalation engine (``escalations.services``) is the only writer of
``ESCALATED`` outside that permission.
"""

from __future__ import annotations

import datetime
import logging
from typing import Any

from django.db import transaction
from django.db.models import QuerySet

from accounts.services import UserDirectoryService
from core.domain.access import ScopeRule, apply_permission_scope, require_permission
from core.domain.exceptions import InvalidInput, NotFound
from core.domain.notifications import NotificationService
from core.domain.transactions import lock_for_update
from core.permissions_constants import ComplaintsPerms, perm

from .models import Comment, Complaint, ComplaintStatus, Priority, StatusCode

logger = logging.getLogger(__name__)

# First matching permission wins; everybody also sees their own complaints.
COMPLAINT_SCOPE_RULES: list[ScopeRule] = [
    (perm("complaints", ComplaintsPerms.CAN_SCOPE_ALL_COMPLAINTS),
     lambda qs, u: qs),
    (perm("complaints", ComplaintsPerms.CAN_SCOPE_ASSIGNED_COMPLAINTS),
     lambda qs, u: qs.filter(assigned_officer=u)),
]


# ═══════════════════════════════════════════════════════════════════
#  Complaint Query Service
# ═══════════════════════════════════════════════════════════════════


class ComplaintQueryService:
    """Read-side access to complaints and status reference data."""

    @staticmethod
    def _base_queryset() -> QuerySet[Complaint]:
        return Complaint.objects.select_related("status", "user", "assigned_officer")

    @staticmethod
    def get_complaint(pk: int) -> Complaint:
        """Return the complaint with ``pk``. Raises ``NotFound``."""
        try:
            return ComplaintQueryService._base_queryset().get(pk=pk)
        except (Complaint.DoesNotExist, ValueError, TypeError):
            raise NotFound(f"Complaint with id {pk} not found.")

    @staticmethod
    def get_status_by_code(code: str) -> ComplaintStatus:
        """Return the status reference row for ``code``. Raises ``NotFound``."""
        try:
            return ComplaintStatus.objects.get(code=code)
        except ComplaintStatus.DoesNotExist:
            raise NotFound(f"Complaint status '{code}' not found.")

    @staticmethod
    def find_stale(
        before: datetime.datetime,
        exclude_status_code: str = StatusCode.RESOLVED,
    ) -> QuerySet[Complaint]:
        """
        Complaints created strictly before ``before`` whose current status
        code is not ``exclude_status_code``, oldest first.
        """
        return (
            ComplaintQueryService._base_queryset()
            .filter(created_at__lt=before)
            .exclude(status__code=exclude_status_code)
            .order_by("created_at", "pk")
        )

    @staticmethod
    def get_filtered_queryset(user: Any) -> QuerySet[Complaint]:
        """Complaints visible to ``user``, newest first."""
        base = ComplaintQueryService._base_queryset()
        scoped = apply_permission_scope(base, user, scope_rules=COMPLAINT_SCOPE_RULES)
        return (scoped | base.filter(user=user)).distinct().order_by("-created_at", "-pk")

    @staticmethod
    def get_visible_complaint(pk: int, user: Any) -> Complaint:
        """
        Like ``get_complaint`` but raises ``NotFound`` when the complaint
        exists and is outside the user's scope, so its existence is not
        disclosed.
        """
        try:
            return ComplaintQueryService.get_filtered_queryset(user).get(pk=pk)
        except (Complaint.DoesNotExist, ValueError, TypeError):
            raise NotFound(f"Complaint with id {pk} not found.")


# ═══════════════════════════════════════════════════════════════════
#  Complaint Lifecycle Service
# ═══════════════════════════════════════════════════════════════════


class ComplaintLifecycleService:
    """Writes to a complaint's lifecycle fields."""

    @staticmethod
    @transaction.atomic
    def submit_complaint(validated_data: dict[str, Any], user: Any) -> Complaint:
        """
        File a new complaint in status ``NEW``.

        Anonymous complaints never keep a reference to the submitting user.
        """
        title = (validated_data.get("title") or "").strip()
        description = (validated_data.get("description") or "").strip()
        if not title or not description:
            raise InvalidInput("Title and description are required.")

        priority = validated_data.get("priority") or Priority.LOW
        if priority not in Priority.values:
            raise InvalidInput(f"Unknown priority '{priority}'.")

        is_anonymous = bool(validated_data.get("is_anonymous", False))
        complaint = Complaint.objects.create(
            title=title,
            description=description,
            category=validated_data.get("category", "") or "",
            priority=priority,
            is_anonymous=is_anonymous,
            user=None if is_anonymous else user,
            status=ComplaintQueryService.get_status_by_code(StatusCode.NEW),
        )
        logger.info(
            "Complaint #%d submitted (anonymous=%s, priority=%s)",
            complaint.pk,
            is_anonymous,
            priority,
        )
        return complaint

    @staticmethod
    @transaction.atomic
    def assign_officer(complaint_id: int, officer_id: int, requesting_user: Any) -> Complaint:
        """
        Assign ``officer_id`` to the complaint and move it to ``ASSIGNED``.

        The officer is notified in-app.
        """
        require_permission(
            requesting_user,
            perm("complaints", ComplaintsPerms.CAN_ASSIGN_OFFICER),
            message="You do not have permission to assign officers.",
        )
        officer = UserDirectoryService.get_user(officer_id)
        if not officer.is_officer:
            raise InvalidInput(f"User {officer.username} does not hold the Officer role.")

        complaint = lock_for_update(Complaint, complaint_id, select_related=("status",))
        complaint.assigned_officer = officer
        complaint.status = ComplaintQueryService.get_status_by_code(StatusCode.ASSIGNED)
        complaint.save(update_fields=["assigned_officer", "status", "updated_at"])

        NotificationService.create(
            actor=requesting_user,
            recipients=officer,
            event_type="complaint_assigned",
            payload={"complaint_id": complaint.pk, "complaint_title": complaint.title},
            related_object=complaint,
        )
        logger.info(
            "Complaint #%d assigned to officer %s by %s",
            complaint.pk,
            officer,
            requesting_user,
        )
        return complaint

    @staticmethod
    @transaction.atomic
    def update_status(complaint_id: int, status_code: str, requesting_user: Any) -> Complaint:
        """Set the complaint's status to ``status_code`` and notify its owner."""
        require_permission(
            requesting_user,
            perm("complaints", ComplaintsPerms.CAN_CHANGE_COMPLAINT_STATUS),
            message="You do not have permission to change complaint status.",
        )
        new_status = ComplaintQueryService.get_status_by_code(status_code)

        complaint = lock_for_update(Complaint, complaint_id, select_related=("status",))
        previous = complaint.status.code
        complaint.status = new_status
        complaint.save(update_fields=["status", "updated_at"])

        if complaint.owner is not None:
            NotificationService.create(
                actor=requesting_user,
                recipients=complaint.owner,
                event_type="complaint_status_changed",
                payload={
                    "complaint_title": complaint.title,
                    "status_display": new_status.display,
                },
                related_object=complaint,
            )
        logger.info(
            "Complaint #%d status %s → %s by %s",
            complaint.pk,
            previous,
            new_status.code,
            requesting_user,
        )
        return complaint


# ═══════════════════════════════════════════════════════════════════
#  Comment Service
# ═══════════════════════════════════════════════════════════════════


class CommentService:
    """The comment thread of a complaint."""

    @staticmethod
    def append(
        complaint: Complaint,
        message: str,
        *,
        author: Any = None,
        is_private: bool = False,
    ) -> Comment:
        """Low-level write used by other services; performs no checks."""
        return Comment.objects.create(
            complaint=complaint,
            author=author,
            message=message,
            is_private=is_private,
        )

    @staticmethod
    @transaction.atomic
    def add_comment(
        complaint_id: int,
        message: str,
        author: Any,
        is_private: bool = False,
    ) -> Comment:
        """
        Add a comment as ``author``.

        Only users allowed to read private comments may write them.
        """
        if not message or not message.strip():
            raise InvalidInput("Comment message is required.")
        complaint = ComplaintQueryService.get_visible_complaint(complaint_id, author)
        if is_private:
            require_permission(
                author,
                perm("complaints", ComplaintsPerms.CAN_VIEW_PRIVATE_COMMENTS),
                message="Only staff may post private comments.",
            )
        return CommentService.append(
            complaint,
            message.strip(),
            author=author,
            is_private=is_private,
        )

    @staticmethod
    def list_comments(complaint_id: int, user: Any) -> QuerySet[Comment]:
        """Comments on the complaint, oldest first; private ones only for staff."""
        complaint = ComplaintQueryService.get_visible_complaint(complaint_id, user)
        qs = complaint.comments.select_related("author").order_by("created_at", "id")
        if not user.has_perm(perm("complaints", ComplaintsPerms.CAN_VIEW_PRIVATE_COMMENTS)):
            qs = qs.filter(is_private=False)
        return qs
