"""
Complaints app models.

Covers the citizen complaint record, its status reference data and the
comment thread attached to it.  The complaint is the system of record
for lifecycle state; escalation history lives in the ``escalations``
app.
"""

from django.conf import settings
from django.db import models

from core.models import TimeStampedModel
from core.permissions_constants import ComplaintsPerms


# ────────────────────────────────────────────────────────────────────
# Choice enumerations
# ────────────────────────────────────────────────────────────────────

class StatusCode(models.TextChoices):
    """
    Codes seeded into ``ComplaintStatus``.

    Not a linear state machine: an authorized actor may set any code.
    The escalation engine only writes ``ESCALATED`` and only compares
    against ``RESOLVED`` / ``ESCALATED``.
    """

    NEW = "NEW", "New"
    ASSIGNED = "ASSIGNED", "Assigned"
    IN_PROGRESS = "IN_PROGRESS", "In Progress"
    RESOLVED = "RESOLVED", "Resolved"
    ESCALATED = "ESCALATED", "Escalated"


class Priority(models.TextChoices):
    LOW = "LOW", "Low"
    MEDIUM = "MEDIUM", "Medium"
    HIGH = "HIGH", "High"


# ────────────────────────────────────────────────────────────────────
# Models
# ────────────────────────────────────────────────────────────────────

class ComplaintStatus(models.Model):
    """Status reference row: a unique ``code`` with its display label."""

    code = models.CharField(
        max_length=30,
        unique=True,
        verbose_name="Code",
    )
    display = models.CharField(
        max_length=100,
        verbose_name="Display Name",
    )

    class Meta:
        verbose_name = "Complaint Status"
        verbose_name_plural = "Complaint Statuses"
        ordering = ["id"]

    def __str__(self):
        return self.display


class Complaint(TimeStampedModel):
    """
    A citizen-submitted issue tracked through statuses until resolution.

    * ``user`` is null exactly when the complaint was filed anonymously.
    * ``status`` always references one ``ComplaintStatus`` row.
    * ``updated_at`` advances on status changes and officer reassignment.
    """

    title = models.CharField(
        max_length=255,
        verbose_name="Title",
    )
    description = models.TextField(
        verbose_name="Description",
    )
    category = models.CharField(
        max_length=100,
        blank=True,
        default="",
        verbose_name="Category",
    )
    priority = models.CharField(
        max_length=10,
        choices=Priority.choices,
        default=Priority.LOW,
        verbose_name="Priority",
    )
    is_anonymous = models.BooleanField(
        default=False,
        verbose_name="Anonymous",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="complaints",
        verbose_name="Submitted By",
    )
    assigned_officer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="assigned_complaints",
        verbose_name="Assigned Officer",
    )
    status = models.ForeignKey(
        ComplaintStatus,
        on_delete=models.PROTECT,
        related_name="complaints",
        verbose_name="Current Status",
    )

    class Meta:
        verbose_name = "Complaint"
        verbose_name_plural = "Complaints"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["created_at"], name="complaint_created_idx"),
        ]
        permissions = [
            (ComplaintsPerms.CAN_ASSIGN_OFFICER, "Can assign an officer to a complaint"),
            (ComplaintsPerms.CAN_CHANGE_COMPLAINT_STATUS, "Can change a complaint's status"),
            (ComplaintsPerms.CAN_VIEW_PRIVATE_COMMENTS, "Can read private complaint comments"),
            (ComplaintsPerms.CAN_SCOPE_ALL_COMPLAINTS, "Unrestricted complaint visibility"),
            (ComplaintsPerms.CAN_SCOPE_ASSIGNED_COMPLAINTS, "See complaints assigned to self"),
        ]

    def __str__(self):
        return f"Complaint #{self.pk} — {self.title}"

    @property
    def status_code(self) -> str:
        return self.status.code

    @property
    def owner(self):
        """The owning user, or ``None`` for anonymous complaints."""
        return None if self.is_anonymous else self.user


class Comment(TimeStampedModel):
    """
    Message on a complaint's thread.

    ``author`` is null for system-generated comments (e.g. the record
    written by an automatic escalation).  Private comments are only
    visible to staff.
    """

    complaint = models.ForeignKey(
        Complaint,
        on_delete=models.CASCADE,
        related_name="comments",
        verbose_name="Complaint",
    )
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="complaint_comments",
        verbose_name="Author",
    )
    message = models.TextField(verbose_name="Message")
    is_private = models.BooleanField(default=False, verbose_name="Private")

    class Meta:
        verbose_name = "Comment"
        verbose_name_plural = "Comments"
        ordering = ["created_at", "id"]

    def __str__(self):
        who = self.author or "System"
        return f"Comment by {who} on Complaint #{self.complaint_id}"
