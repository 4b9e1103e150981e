"""Wall-clock access and timers outside the GUI main loop."""

from __future__ import annotations

import itertools
from datetime import datetime
from typing import Callable


class SystemClock:
    """Local wall-clock time.

    The cutoff hour and calendar days are local notions, so this returns a
    naive local datetime rather than UTC.
    """

    def now(self) -> datetime:
        return datetime.now()


def delay_ms(now: datetime, target: datetime, minimum: int = 0) -> int:
    """Milliseconds from *now* until *target*, never less than *minimum*."""
    return max(minimum, int((target - now).total_seconds() * 1000))


class ManualScheduler:
    """Scheduler for short-lived processes that flush explicitly.

    Timers never fire; callers save with ``flush()`` or ``close()`` before exiting.
    """

    def __init__(self) -> None:
        self._handles = itertools.count(1)

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> int:
        return next(self._handles)

    def cancel(self, handle: int) -> None:
        pass
