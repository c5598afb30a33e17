"""
APScheduler wrapper that runs the escalation sweep.

One ``EscalationScheduler`` owns one ``BackgroundScheduler`` with a
single cron job.  ``max_instances=1`` and ``coalesce=True`` keep firings
from overlapping: a tick that arrives while a sweep is still running is
folded into the next one.
"""

from __future__ import annotations

import logging
from typing import Callable

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger
from django.db import close_old_connections

from core.constants import escalation_setting

from .services import EscalationService, SweepResult

logger = logging.getLogger(__name__)

SWEEP_JOB_ID = "complaint-escalation-sweep"


class EscalationScheduler:
    """Start/stop lifecycle around the hourly escalation sweep."""

    def __init__(
        self,
        sweep: Callable[[], SweepResult] | None = None,
        cron: dict | None = None,
        timezone: str = "UTC",
    ) -> None:
        self._sweep = sweep or EscalationService.sweep
        self._cron = dict(cron if cron is not None else escalation_setting("SWEEP_CRON"))
        self._scheduler = BackgroundScheduler(timezone=timezone)
        self._scheduler.add_job(
            self.run_once,
            trigger=CronTrigger(timezone=timezone, **self._cron),
            id=SWEEP_JOB_ID,
            name="Escalate stale complaints",
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )

    @property
    def running(self) -> bool:
        return self._scheduler.running

    @property
    def job(self):
        return self._scheduler.get_job(SWEEP_JOB_ID)

    def start(self) -> None:
        if not self.running:
            self._scheduler.start()
            logger.info("Escalation scheduler started (cron=%s)", self._cron)

    def shutdown(self, wait: bool = False) -> None:
        if self.running:
            self._scheduler.shutdown(wait=wait)
            logger.info("Escalation scheduler stopped")

    def run_once(self) -> SweepResult | None:
        """
        Run one sweep.  A failure of the whole run is logged and swallowed;
        the next tick tries again.
        """
        close_old_connections()
        try:
            return self._sweep()
        except Exception:
            logger.exception("Escalation sweep failed; retrying on next tick")
            return None
        finally:
            close_old_connections()
