from django.db import migrations

STATUSES = [
    ("NEW", "New"),
    ("ASSIGNED", "Assigned"),
    ("IN_PROGRESS", "In Progress"),
    ("RESOLVED", "Resolved"),
    ("ESCALATED", "Escalated"),
]


def seed_statuses(apps, schema_editor):
    ComplaintStatus = apps.get_model("complaints", "ComplaintStatus")
    for code, display in STATUSES:
        ComplaintStatus.objects.update_or_create(code=code, defaults={"display": display})


def unseed_statuses(apps, schema_editor):
    ComplaintStatus = apps.get_model("complaints", "ComplaintStatus")
    ComplaintStatus.objects.filter(
        code__in=[code for code, _ in STATUSES],
        complaints__isnull=True,
    ).delete()


class Migration(migrations.Migration):

    dependencies = [
        ("complaints", "0001_initial"),
    ]

    operations = [
        migrations.RunPython(seed_statuses, unseed_statuses),
    ]
