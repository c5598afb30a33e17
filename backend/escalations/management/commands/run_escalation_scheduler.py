"""
Management command: run_escalation_scheduler
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

Runs the hourly escalation sweep in a dedicated, long-lived process.
Run exactly one of these per deployment; the sweep is single-writer.

Usage::

    python manage.py run_escalation_scheduler
    python manage.py run_escalation_scheduler --run-now
"""

import time

from django.core.management.base import BaseCommand

from escalations.scheduler import EscalationScheduler


class Command(BaseCommand):
    help = "Starts the escalation scheduler and blocks until interrupted."

    def add_arguments(self, parser):
        parser.add_argument(
            "--run-now",
            action="store_true",
            help="Run one sweep immediately before waiting for the first tick.",
        )

    def handle(self, *args, **options):
        scheduler = EscalationScheduler()
        if options["run_now"]:
            result = scheduler.run_once()
            if result is not None:
                self.stdout.write(f"Initial sweep: {result.summary()}")

        scheduler.start()
        self.stdout.write(self.style.SUCCESS(
            f"Escalation scheduler running; next sweep at {scheduler.job.next_run_time}.  "
            "Press Ctrl+C to stop."
        ))
        try:
            while scheduler.running:
                time.sleep(1)
        except KeyboardInterrupt:
            pass
        finally:
            scheduler.shutdown(wait=True)
            self.stdout.write("Escalation scheduler stopped.")
