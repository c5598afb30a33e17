from django.db import migrations

# (name, description, hierarchy_level); permissions are linked by `setup_rbac`.
DEFAULT_ROLES = [
    ("Admin", "Reviews escalated complaints and manages the complaint workflow.", 100),
    ("Officer", "Works assigned complaints; may escalate them manually.", 50),
    ("Citizen", "Submits complaints and follows their progress.", 0),
]


def seed_roles(apps, schema_editor):
    Role = apps.get_model("accounts", "Role")
    for name, description, level in DEFAULT_ROLES:
        Role.objects.get_or_create(
            name=name,
            defaults={"description": description, "hierarchy_level": level},
        )


def unseed_roles(apps, schema_editor):
    Role = apps.get_model("accounts", "Role")
    Role.objects.filter(name__in=[name for name, _, _ in DEFAULT_ROLES], users__isnull=True).delete()


class Migration(migrations.Migration):

    dependencies = [
        ("accounts", "0001_initial"),
    ]

    operations = [
        migrations.RunPython(seed_roles, unseed_roles),
    ]
