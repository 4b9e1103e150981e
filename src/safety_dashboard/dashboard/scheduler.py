"""One-shot timers on the GLib main loop."""

from __future__ import annotations

import logging
from typing import Callable

from gi.repository import GLib

logger = logging.getLogger(__name__)


class GLibScheduler:
    """:class:`~safety_dashboard.core.services.Scheduler` backed by ``GLib.timeout_add``.

    Sources are tracked so that cancelling a handle whose callback already ran
    does not hit ``g_source_remove`` with a stale id.
    """

    def __init__(self) -> None:
        self._sources: set[int] = set()

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> int:
        handle = 0

        def _fire() -> bool:
            self._sources.discard(handle)
            try:
                callback()
            except Exception:  # noqa: BLE001
                logger.exception("Scheduled callback failed")
            return GLib.SOURCE_REMOVE

        handle = GLib.timeout_add(max(0, int(delay_ms)), _fire)
        self._sources.add(handle)
        return handle

    def cancel(self, handle: int) -> None:
        if handle in self._sources:
            self._sources.discard(handle)
            GLib.source_remove(handle)

    def cancel_all(self) -> None:
        for handle in list(self._sources):
            self.cancel(handle)
