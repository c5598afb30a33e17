"""
Management command: run_escalation_sweep
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

Runs one escalation sweep immediately and prints its summary.  Useful
from cron or for operators who do not run the long-lived scheduler.

Usage::

    python manage.py run_escalation_sweep
"""

from django.core.management.base import BaseCommand

from escalations.services import EscalationService


class Command(BaseCommand):
    help = "Escalates every complaint unresolved past the staleness threshold, once."

    def handle(self, *args, **options):
        self.stdout.write(self.style.MIGRATE_HEADING("Escalation sweep"))
        result = EscalationService.sweep()

        self.stdout.write(f"  Threshold: created before {result.threshold.isoformat()}")
        for complaint_id in result.escalated:
            self.stdout.write(self.style.SUCCESS(f"  Escalated complaint #{complaint_id}"))
        for complaint_id, error in result.failed.items():
            self.stdout.write(self.style.ERROR(f"  Complaint #{complaint_id} failed: {error}"))

        style = self.style.WARNING if result.failed else self.style.SUCCESS
        self.stdout.write(style(f"Done!  {result.summary()}"))
