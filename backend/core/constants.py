"""
Core constants — **Single Source of Truth** for project-wide magic values.

Any business rule that references one of these values should import it
from here instead of hardcoding.  Values that operators may tune
(threshold, cron) are read through ``escalation_setting`` so the
``ESCALATION`` settings dict can override them.
"""

from django.conf import settings

# ── Roles ───────────────────────────────────────────────────────────
ADMIN_ROLE_NAME: str = "Admin"
OFFICER_ROLE_NAME: str = "Officer"
CITIZEN_ROLE_NAME: str = "Citizen"

# ── Escalation ──────────────────────────────────────────────────────
# Complaints unresolved for longer than this become eligible for the
# automatic sweep.
ESCALATION_THRESHOLD_HOURS: int = 72

# Reason recorded on every automatic escalation; ``{hours}`` is the
# threshold in force for the sweep.
AUTO_ESCALATION_REASON: str = "Auto-escalated: Unresolved for more than {hours} hours"

# Display name and contact address used when no human initiated an escalation.
SYSTEM_ACTOR_NAME: str = "System (Auto-escalation)"
SYSTEM_COMMENT_NAME: str = "System"
SYSTEM_EMAIL: str = "system@resolveit.com"

# Fires at the top of every hour.
SWEEP_CRON: dict[str, object] = {"minute": 0}

# Timestamp layout used in escalation comments and emails, e.g. "Mar 04, 2025 14:00".
ESCALATION_DATE_FORMAT: str = "%b %d, %Y %H:%M"

_ESCALATION_DEFAULTS: dict[str, object] = {
    "THRESHOLD_HOURS": ESCALATION_THRESHOLD_HOURS,
    "SWEEP_CRON": SWEEP_CRON,
    "SYSTEM_EMAIL": SYSTEM_EMAIL,
}


def escalation_setting(key: str):
    """Return ``settings.ESCALATION[key]``, falling back to the defaults above."""
    overrides = getattr(settings, "ESCALATION", {}) or {}
    return overrides.get(key, _ESCALATION_DEFAULTS[key])