"""
Management command: setup_rbac
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

Seeds the base **Roles** and links each role to its set of Django
permissions.

This command does NOT create Permission objects.  Standard CRUD
permissions are created by Django after ``migrate``; custom workflow
permissions come from each model's ``Meta.permissions``.

The command is **idempotent** — existing roles are updated and their
permissions replaced to match the mapping below.

Usage::

    python manage.py migrate
    python manage.py setup_rbac
"""

from django.contrib.auth.models import Permission
from django.core.management.base import BaseCommand

from accounts.models import Role
from core.constants import ADMIN_ROLE_NAME, CITIZEN_ROLE_NAME, OFFICER_ROLE_NAME
from core.permissions_constants import AccountsPerms, ComplaintsPerms, EscalationsPerms

# Key:   (role_name, description, hierarchy_level)
# Value: list of (app_label, codename)
ROLE_PERMISSIONS_MAP: dict[tuple[str, str, int], list[tuple[str, str]]] = {
    (
        ADMIN_ROLE_NAME,
        "Reviews escalated complaints and manages the complaint workflow.",
        100,
    ): [
        ("accounts", AccountsPerms.VIEW_ROLE),
        ("accounts", AccountsPerms.VIEW_USER),
        ("accounts", AccountsPerms.CHANGE_USER),
        ("complaints", ComplaintsPerms.VIEW_COMPLAINT),
        ("complaints", ComplaintsPerms.ADD_COMPLAINT),
        ("complaints", ComplaintsPerms.ADD_COMMENT),
        ("complaints", ComplaintsPerms.CAN_ASSIGN_OFFICER),
        ("complaints", ComplaintsPerms.CAN_CHANGE_COMPLAINT_STATUS),
        ("complaints", ComplaintsPerms.CAN_VIEW_PRIVATE_COMMENTS),
        ("complaints", ComplaintsPerms.CAN_SCOPE_ALL_COMPLAINTS),
        ("escalations", EscalationsPerms.VIEW_ESCALATION),
        ("escalations", EscalationsPerms.CAN_ESCALATE_COMPLAINT),
        ("escalations", EscalationsPerms.CAN_RESOLVE_ESCALATION),
        ("escalations", EscalationsPerms.CAN_VIEW_UNRESOLVED_ESCALATIONS),
    ],
    (
        OFFICER_ROLE_NAME,
        "Works assigned complaints; may escalate them manually.",
        50,
    ): [
        ("complaints", ComplaintsPerms.VIEW_COMPLAINT),
        ("complaints", ComplaintsPerms.ADD_COMMENT),
        ("complaints", ComplaintsPerms.CAN_CHANGE_COMPLAINT_STATUS),
        ("complaints", ComplaintsPerms.CAN_VIEW_PRIVATE_COMMENTS),
        ("complaints", ComplaintsPerms.CAN_SCOPE_ASSIGNED_COMPLAINTS),
        ("escalations", EscalationsPerms.VIEW_ESCALATION),
        ("escalations", EscalationsPerms.CAN_ESCALATE_COMPLAINT),
    ],
    (
        CITIZEN_ROLE_NAME,
        "Submits complaints and follows their progress.",
        0,
    ): [
        ("complaints", ComplaintsPerms.ADD_COMPLAINT),
        ("complaints", ComplaintsPerms.ADD_COMMENT),
    ],
}


class Command(BaseCommand):
    help = (
        "Seeds the base Roles and maps each role to its Django "
        "permissions.  Safe to run multiple times (idempotent).  "
        "Does NOT create permissions — run `migrate` first."
    )

    def handle(self, *args, **options):
        self.stdout.write(self.style.MIGRATE_HEADING("RBAC Setup — Seeding Roles & Permissions"))

        all_permissions: dict[tuple[str, str], Permission] = {
            (p.content_type.app_label, p.codename): p
            for p in Permission.objects.select_related("content_type").all()
        }

        roles_created = 0
        roles_updated = 0
        warnings = 0

        for (role_name, description, hierarchy_level), keys in ROLE_PERMISSIONS_MAP.items():
            role, created = Role.objects.get_or_create(
                name=role_name,
                defaults={
                    "description": description,
                    "hierarchy_level": hierarchy_level,
                },
            )

            if not created and (
                role.description != description or role.hierarchy_level != hierarchy_level
            ):
                role.description = description
                role.hierarchy_level = hierarchy_level
                role.save(update_fields=["description", "hierarchy_level"])

            resolved_permissions: list[Permission] = []
            for app_label, codename in keys:
                permission = all_permissions.get((app_label, codename))
                if permission is not None:
                    resolved_permissions.append(permission)
                else:
                    warnings += 1
                    self.stdout.write(self.style.WARNING(
                        f"  Permission '{app_label}.{codename}' not found — "
                        f"skipped for role '{role_name}'.  (Run migrate first?)"
                    ))

            role.permissions.set(resolved_permissions)

            if created:
                roles_created += 1
            else:
                roles_updated += 1

            self.stdout.write(self.style.SUCCESS(
                f"  {'Created' if created else 'Updated'} role: {role_name:<10s} "
                f"(hierarchy={hierarchy_level}, permissions={len(resolved_permissions)})"
            ))

        summary = (
            f"Done!  {roles_created} role(s) created, "
            f"{roles_updated} role(s) updated."
        )
        if warnings:
            summary += f"  ({warnings} permission warning(s) — see above.)"
        self.stdout.write(self.style.SUCCESS(summary))
