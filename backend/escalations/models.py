"""
Escalations app models.

An ``Escalation`` records that a complaint was promoted to
administrative attention.  Rows are append-only history: after creation
only ``resolved`` ever changes, and that flag is independent of the
complaint's own status.
"""

from django.conf import settings
from django.db import models
from django.utils import timezone

from core.permissions_constants import EscalationsPerms


class Escalation(models.Model):
    """One escalation event for a complaint."""

    complaint = models.ForeignKey(
        "complaints.Complaint",
        on_delete=models.CASCADE,
        related_name="escalations",
        verbose_name="Complaint",
    )
    escalated_to_role = models.ForeignKey(
        "accounts.Role",
        on_delete=models.PROTECT,
        related_name="escalations",
        verbose_name="Escalated To",
    )
    escalated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="escalations_raised",
        verbose_name="Escalated By",
        help_text="Null when the escalation was raised by the automatic sweep.",
    )
    reason = models.TextField(verbose_name="Reason")
    escalated_at = models.DateTimeField(
        default=timezone.now,
        db_index=True,
        verbose_name="Escalated At",
    )
    resolved = models.BooleanField(
        default=False,
        db_index=True,
        verbose_name="Resolved",
    )

    class Meta:
        verbose_name = "Escalation"
        verbose_name_plural = "Escalations"
        ordering = ["-escalated_at", "-id"]
        permissions = [
            (EscalationsPerms.CAN_ESCALATE_COMPLAINT, "Can escalate a complaint"),
            (EscalationsPerms.CAN_RESOLVE_ESCALATION, "Can mark an escalation as resolved"),
            (EscalationsPerms.CAN_VIEW_UNRESOLVED_ESCALATIONS, "Can list unresolved escalations"),
        ]

    def __str__(self):
        state = "resolved" if self.resolved else "open"
        return f"Escalation #{self.pk} of Complaint #{self.complaint_id} ({state})"

    @property
    def is_automatic(self) -> bool:
        return self.escalated_by_id is None
