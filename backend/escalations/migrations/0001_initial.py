from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("accounts", "0001_initial"),
        ("complaints", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Escalation",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("reason", models.TextField(verbose_name="Reason")),
                (
                    "escalated_at",
                    models.DateTimeField(db_index=True, default=django.utils.timezone.now, verbose_name="Escalated At"),
                ),
                ("resolved", models.BooleanField(db_index=True, default=False, verbose_name="Resolved")),
                (
                    "complaint",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="escalations",
                        to="complaints.complaint",
                        verbose_name="Complaint",
                    ),
                ),
                (
                    "escalated_by",
                    models.ForeignKey(
                        blank=True,
                        help_text="Null when the escalation was raised by the automatic sweep.",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="escalations_raised",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="Escalated By",
                    ),
                ),
                (
                    "escalated_to_role",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="escalations",
                        to="accounts.role",
                        verbose_name="Escalated To",
                    ),
                ),
            ],
            options={
                "verbose_name": "Escalation",
                "verbose_name_plural": "Escalations",
                "ordering": ["-escalated_at", "-id"],
                "permissions": [
                    ("can_escalate_complaint", "Can escalate a complaint"),
                    ("can_resolve_escalation", "Can mark an escalation as resolved"),
                    ("can_view_unresolved_escalations", "Can list unresolved escalations"),
                ],
            },
        ),
    ]
