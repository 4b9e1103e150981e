"""Daily timer that fires the auto-safe transition at the cutoff hour."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from safety_dashboard.core.safety_calendar import AUTO_SAFE_HOUR, next_cutoff
from safety_dashboard.core.services import Clock, Scheduler
from safety_dashboard.core.time import delay_ms

logger = logging.getLogger(__name__)

# Never arm the timer for less than this, even if the cutoff is imminent.
MIN_DELAY_MS = 250


class AutoSafeTimer:
    """Calls *on_cutoff* once a day at *cutoff_hour*, rescheduling itself after each run."""

    def __init__(
        self,
        scheduler: Scheduler,
        clock: Clock,
        on_cutoff: Callable[[datetime], None],
        cutoff_hour: int = AUTO_SAFE_HOUR,
    ) -> None:
        self._scheduler = scheduler
        self._clock = clock
        self._on_cutoff = on_cutoff
        self._cutoff_hour = cutoff_hour
        self._handle: int | None = None
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._schedule_next()

    def stop(self) -> None:
        self._running = False
        if self._handle is not None:
            self._scheduler.cancel(self._handle)
            self._handle = None

    def _schedule_next(self) -> None:
        now = self._clock.now()
        target = next_cutoff(now, self._cutoff_hour)
        wait = delay_ms(now, target, MIN_DELAY_MS)
        logger.debug("Next auto-safe run at %s (in %d ms)", target.isoformat(), wait)
        self._handle = self._scheduler.call_later(wait, self._fire)

    def _fire(self) -> None:
        self._handle = None
        if not self._running:
            return
        self._on_cutoff(self._clock.now())
        if self._running:
            self._schedule_next()
