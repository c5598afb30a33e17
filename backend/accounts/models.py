"""
Accounts app models.

Defines the dynamic Role system and a custom User model that extends
Django's ``AbstractUser``.  Every user holds at most one role; the role
carries the Django permissions that gate complaint and escalation
workflows.
"""

from django.contrib.auth.models import AbstractUser, Permission
from django.db import models

from core.constants import ADMIN_ROLE_NAME, OFFICER_ROLE_NAME


class Role(models.Model):
    """
    Dynamic, admin-manageable role.

    Default roles seeded by data-migration: ``Admin``, ``Officer``,
    ``Citizen``.  ``hierarchy_level`` encodes relative authority;
    escalations are always addressed to the ``Admin`` role.

    Custom workflow permissions are declared in each model's
    ``Meta.permissions`` and linked to roles by the ``setup_rbac``
    management command.
    """

    name = models.CharField(
        max_length=100,
        unique=True,
        verbose_name="Role Name",
    )
    description = models.TextField(
        blank=True,
        default="",
        verbose_name="Description",
    )
    hierarchy_level = models.PositiveSmallIntegerField(
        default=0,
        verbose_name="Hierarchy Level",
        help_text="Higher value = more authority (e.g. Admin=100, Citizen=0).",
    )
    permissions = models.ManyToManyField(
        Permission,
        blank=True,
        verbose_name="Permissions",
        help_text="Specific permissions for this role.",
    )

    class Meta:
        verbose_name = "Role"
        verbose_name_plural = "Roles"
        ordering = ["-hierarchy_level"]

    def __str__(self):
        return self.name


class User(AbstractUser):
    """
    Custom user model for citizens, officers and administrators.

    Email addresses are unique because escalation emails are addressed
    by them.  Each user holds exactly **one** role at a time (FK to
    ``Role``).
    """

    email = models.EmailField(
        unique=True,
        verbose_name="Email Address",
    )
    role = models.ForeignKey(
        Role,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="users",
        verbose_name="Assigned Role",
    )

    REQUIRED_FIELDS = ["email"]

    class Meta:
        verbose_name = "User"
        verbose_name_plural = "Users"

    def __str__(self):
        role_name = self.role.name if self.role else "No Role"
        return f"{self.username} ({self.display_name}) - {role_name}"

    @property
    def display_name(self) -> str:
        """Full name, or the username when no name was given."""
        return self.get_full_name() or self.username

    # ── Helper predicates for role checks ────────────────────────────

    def has_role(self, role_name: str) -> bool:
        """Check if the user's current role matches the given name."""
        return self.role is not None and self.role.name == role_name

    @property
    def is_admin(self) -> bool:
        return self.has_role(ADMIN_ROLE_NAME)

    @property
    def is_officer(self) -> bool:
        return self.has_role(OFFICER_ROLE_NAME)

    # ── RBAC Permission Overrides ────────────────────────────────────

    def get_all_permissions(self, obj=None) -> set:
        """
        Return the set of ``app_label.codename`` strings granted by the
        user's role.  Superusers get every permission.
        """
        if not self.is_active:
            return set()

        if self.is_superuser:
            if not hasattr(self, "_superuser_perm_cache"):
                perms = Permission.objects.select_related("content_type").all()
                self._superuser_perm_cache = {f"{p.content_type.app_label}.{p.codename}" for p in perms}
            return self._superuser_perm_cache

        if not self.role:
            return set()

        if not hasattr(self, "_perm_cache"):
            perms = self.role.permissions.select_related("content_type")
            self._perm_cache = {f"{p.content_type.app_label}.{p.codename}" for p in perms}

        return self._perm_cache

    def has_perm(self, perm: str, obj=None) -> bool:
        if self.is_active and self.is_superuser:
            return True

        return perm in self.get_all_permissions(obj)

    def has_perms(self, perm_list, obj=None) -> bool:
        return all(self.has_perm(perm, obj) for perm in perm_list)

    def has_module_perms(self, app_label: str) -> bool:
        if self.is_active and self.is_superuser:
            return True

        return any(perm.startswith(f"{app_label}.") for perm in self.get_all_permissions())
