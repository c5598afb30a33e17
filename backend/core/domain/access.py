"""
core.domain.access — Permission-scoped queryset selectors (shared patterns).

Each app's service layer calls these helpers to obtain querysets filtered
by the requesting user's permissions, and to guard operations.

Per-app scoping rules do NOT live here: each app's ``services.py`` owns
its own scope-rules list.  This module provides:

1) ``apply_permission_scope`` — ordered permission dispatch.
2) ``require_permission`` — guard that checks ``has_perm``.

Usage in an app's service layer::

    from core.domain.access import apply_permission_scope

    COMPLAINT_SCOPE_RULES = [
        ("complaints.can_scope_all_complaints", lambda qs, u: qs),
        ("complaints.can_scope_assigned_complaints",
         lambda qs, u: qs.filter(assigned_officer=u)),
    ]

    qs = apply_permission_scope(
        Complaint.objects.all(), user, scope_rules=COMPLAINT_SCOPE_RULES,
    )
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from django.db.models import QuerySet

if TYPE_CHECKING:
    from accounts.models import User

# Takes (queryset, user) and returns a filtered queryset.
ScopeFilter = Callable[[QuerySet, "User"], QuerySet]

# (permission "app_label.codename", filter_fn)
ScopeRule = tuple[str, ScopeFilter]


def apply_permission_scope(
    queryset: QuerySet,
    user: User,
    *,
    scope_rules: list[ScopeRule],
    default: str = "none",
) -> QuerySet:
    """
    Apply the first matching permission-based scope rule.

    Rules are checked **in order** — first permission match wins, so
    order them from broadest to narrowest.

    Args:
        queryset:     Base (unfiltered) queryset.
        user:         The authenticated user.
        scope_rules:  Ordered list of ``(perm, filter_fn)`` tuples.
        default:      ``"none"`` → empty queryset when nothing matches;
                      ``"all"`` → return unfiltered.
    """
    for perm, filter_fn in scope_rules:
        if user.has_perm(perm):
            return filter_fn(queryset, user)

    if default == "none":
        return queryset.none()
    return queryset


def require_permission(user: User, *perms: str, message: str = "") -> None:
    """
    Guard that raises ``PermissionDenied`` unless the user holds at
    least one of the given permissions (OR-logic).

    Example::

        require_permission(user, "escalations.can_escalate_complaint")
    """
    from core.domain.exceptions import PermissionDenied as DomainPermissionDenied

    for perm in perms:
        if user.has_perm(perm):
            return
    raise DomainPermissionDenied(
        message or f"Missing required permission: {', '.join(perms)}."
    )
