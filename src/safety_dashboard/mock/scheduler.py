"""Deterministic scheduler driven by explicit time advances."""

from __future__ import annotations

import itertools
from datetime import timedelta
from typing import Callable

from .clock import MockClock


class MockScheduler:
    """:class:`~safety_dashboard.core.services.Scheduler` that only fires on :meth:`advance`.

    When a :class:`MockClock` is attached it is moved forward together with the
    scheduler, so callbacks observe the time they were due at.
    """

    def __init__(self, clock: MockClock | None = None) -> None:
        self._clock = clock
        self._elapsed_ms = 0
        self._ids = itertools.count(1)
        # handle -> (due_ms, sequence, callback)
        self._pending: dict[int, tuple[int, int, Callable[[], None]]] = {}
        self._sequence = itertools.count()

    @property
    def elapsed_ms(self) -> int:
        return self._elapsed_ms

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> int:
        handle = next(self._ids)
        due = self._elapsed_ms + max(0, int(delay_ms))
        self._pending[handle] = (due, next(self._sequence), callback)
        return handle

    def cancel(self, handle: int) -> None:
        self._pending.pop(handle, None)

    def pending_count(self) -> int:
        return len(self._pending)

    def next_due_ms(self) -> int | None:
        """Milliseconds until the earliest pending callback, or None when idle."""
        if not self._pending:
            return None
        return min(due for due, _, _ in self._pending.values()) - self._elapsed_ms

    def advance(self, ms: int) -> int:
        """Move time forward by *ms*, firing due callbacks in order.  Returns how many ran."""
        target = self._elapsed_ms + ms
        fired = 0
        while True:
            due_items = [
                (due, seq, handle)
                for handle, (due, seq, _) in self._pending.items()
                if due <= target
            ]
            if not due_items:
                break
            due, _, handle = min(due_items)
            _, _, callback = self._pending.pop(handle)
            self._move_to(due)
            callback()
            fired += 1
        self._move_to(target)
        return fired

    def _move_to(self, elapsed_ms: int) -> None:
        if self._clock is not None and elapsed_ms > self._elapsed_ms:
            self._clock.advance(timedelta(milliseconds=elapsed_ms - self._elapsed_ms))
        self._elapsed_ms = max(self._elapsed_ms, elapsed_ms)
