"""
Permissions Constants — **Single Source of Truth**

Every permission referenced in code (services, ``setup_rbac``, tests)
MUST use one of the constants defined here.

Organisation
------------
- **Standard CRUD** permissions follow Django's auto-generated naming:
  ``<action>_<model_lowercase>``.  They are listed here so that the
  ``setup_rbac`` command can map them to roles without typos.

- **Custom workflow** permissions map to codenames registered via each
  model's ``Meta.permissions`` tuple.  Adding a new custom permission
  requires:
    1. Add the constant below.
    2. Add the ``(codename, description)`` to the related model's
       ``Meta.permissions`` and to its migration.
    3. Add the constant to the appropriate role lists in ``setup_rbac``.

All constants store the **codename only** (no ``app_label.`` prefix);
use ``perm()`` to build the ``app_label.codename`` string that
``User.has_perm`` expects.
"""


def perm(app_label: str, codename: str) -> str:
    """Return the ``app_label.codename`` string for ``has_perm``."""
    return f"{app_label}.{codename}"


# ════════════════════════════════════════════════════════════════════
#  ACCOUNTS APP
# ════════════════════════════════════════════════════════════════════

class AccountsPerms:
    """Standard CRUD permissions for accounts models."""

    VIEW_ROLE = "view_role"
    VIEW_USER = "view_user"
    CHANGE_USER = "change_user"


# ════════════════════════════════════════════════════════════════════
#  COMPLAINTS APP
# ════════════════════════════════════════════════════════════════════

class ComplaintsPerms:
    """Standard + custom permissions for the complaints app."""

    VIEW_COMPLAINT = "view_complaint"
    ADD_COMPLAINT = "add_complaint"
    ADD_COMMENT = "add_comment"

    # ── Custom workflow permissions ─────────────────────────────────
    CAN_ASSIGN_OFFICER = "can_assign_officer"
    CAN_CHANGE_COMPLAINT_STATUS = "can_change_complaint_status"
    CAN_VIEW_PRIVATE_COMMENTS = "can_view_private_comments"

    # ── Visibility scopes (first match wins) ───────────────────────
    CAN_SCOPE_ALL_COMPLAINTS = "can_scope_all_complaints"
    CAN_SCOPE_ASSIGNED_COMPLAINTS = "can_scope_assigned_complaints"


# ════════════════════════════════════════════════════════════════════
#  ESCALATIONS APP
# ════════════════════════════════════════════════════════════════════

class EscalationsPerms:
    """Custom permissions for the escalations app."""

    VIEW_ESCALATION = "view_escalation"

    CAN_ESCALATE_COMPLAINT = "can_escalate_complaint"
    CAN_RESOLVE_ESCALATION = "can_resolve_escalation"
    CAN_VIEW_UNRESOLVED_ESCALATIONS = "can_view_unresolved_escalations"
