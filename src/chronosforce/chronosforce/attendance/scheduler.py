from __future__ import annotations

import atexit
import logging
from typing import Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger
from apscheduler.triggers.interval import IntervalTrigger

from ..core.exceptions import NotFoundError
from .service import AttendanceService

logger = logging.getLogger(__name__)

_ROLLOVER_JOB_ID = "attendance-day-rollover"


class ShiftBoundaryScheduler:
    """Runs the boundary tick for every watched employee session.

    One interval job per employee: ``watch`` at login, ``unwatch`` at logout.
    A cron job at organisational midnight resets the worked-minute counters.
    """

    def __init__(
        self,
        attendance: AttendanceService,
        *,
        interval_seconds: int = 60,
        scheduler: Optional[BackgroundScheduler] = None,
    ):
        self._attendance = attendance
        self._interval_seconds = int(interval_seconds)
        self._scheduler = scheduler or BackgroundScheduler(timezone=attendance.zone)

    @staticmethod
    def _job_id(employee_id: str) -> str:
        return f"shift-boundary:{employee_id}"

    @property
    def running(self) -> bool:
        return self._scheduler.running

    def start(self) -> None:
        if self._scheduler.running:
            return
        self._scheduler.add_job(
            self._attendance.roll_over,
            trigger=CronTrigger(hour=0, minute=0, timezone=self._attendance.zone),
            id=_ROLLOVER_JOB_ID,
            replace_existing=True,
        )
        self._scheduler.start()
        atexit.register(self.shutdown)
        logger.info("shift boundary scheduler started (interval=%ss)", self._interval_seconds)

    def shutdown(self) -> None:
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)
            logger.info("shift boundary scheduler stopped")

    def watch(self, employee_id: str) -> None:
        if self.is_watching(employee_id):
            return
        self._scheduler.add_job(
            self._tick,
            trigger=IntervalTrigger(seconds=self._interval_seconds),
            args=[employee_id],
            id=self._job_id(employee_id),
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        logger.debug("watching shift boundary for %s", employee_id)

    def unwatch(self, employee_id: str) -> bool:
        if not self.is_watching(employee_id):
            return False
        self._scheduler.remove_job(self._job_id(employee_id))
        logger.debug("stopped watching shift boundary for %s", employee_id)
        return True

    def is_watching(self, employee_id: str) -> bool:
        return self._scheduler.get_job(self._job_id(employee_id)) is not None

    def _tick(self, employee_id: str) -> None:
        try:
            result = self._attendance.tick_shift_boundary(employee_id)
        except NotFoundError:
            # Employee archived or removed mid-session.
            logger.warning("stopping boundary watch for unknown employee %s", employee_id)
            self.unwatch(employee_id)
            return
        if result.forced_clock_out:
            logger.info("forced clock-out for %s at shift end", employee_id)
