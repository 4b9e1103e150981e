"""Debounced, validated persistence for one stored document.

Lifecycle::

    UNLOADED -> LOADING -> VALID | FALLEN_BACK
    VALID | FALLEN_BACK -> DIRTY          (set() with a changed value)
    DIRTY -> SAVING -> VALID               (debounce timer fires, or flush())

Every change re-arms the debounce timer, so a burst of changes (a drag, for
instance) ends in a single write of the latest value.  Nothing is retried:
a failed write is logged and the record is considered saved.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Generic, TypeVar

from safety_dashboard.core.enums import RecordState
from safety_dashboard.core.services import KeyValueStorage, Scheduler, StorageError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PersistedRecord(Generic[T]):
    def __init__(
        self,
        key: str,
        storage: KeyValueStorage,
        scheduler: Scheduler,
        *,
        decode: Callable[[Any], T | None],
        encode: Callable[[T], Any],
        default_factory: Callable[[], T],
        debounce_ms: int,
    ) -> None:
        self.key = key
        self._storage = storage
        self._scheduler = scheduler
        self._decode = decode
        self._encode = encode
        self._default_factory = default_factory
        self._debounce_ms = debounce_ms
        self._value: T | None = None
        self._state = RecordState.UNLOADED
        self._dirty = False
        self._timer: int | None = None

    @property
    def state(self) -> RecordState:
        return self._state

    @property
    def dirty(self) -> bool:
        return self._dirty

    @property
    def pending(self) -> bool:
        return self._timer is not None

    @property
    def value(self) -> T:
        if self._value is None:
            raise RuntimeError(f"record {self.key!r} read before load()")
        return self._value

    def load(self) -> T:
        """Read and validate the stored document, or fall back to the default."""
        self._cancel_timer()
        self._dirty = False
        self._state = RecordState.LOADING
        value = self._read()
        if value is None:
            self._value = self._default_factory()
            self._state = RecordState.FALLEN_BACK
        else:
            self._value = value
            self._state = RecordState.VALID
        return self._value

    def _read(self) -> T | None:
        try:
            raw = self._storage.read_key(self.key)
        except StorageError as exc:
            logger.warning("Could not read %s, using defaults: %s", self.key, exc)
            return None
        if raw is None:
            logger.debug("No stored %s, using defaults", self.key)
            return None
        try:
            data = json.loads(raw)
        except ValueError as exc:
            logger.warning("Stored %s is not valid JSON, using defaults: %s", self.key, exc)
            return None
        value = self._decode(data)
        if value is None:
            logger.warning("Stored %s failed validation, using defaults", self.key)
        return value

    def set(self, value: T) -> bool:
        """Replace the value and schedule a write.  Returns False when unchanged."""
        if self._value is value or self._value == value:
            return False
        self._value = value
        self._dirty = True
        self._state = RecordState.DIRTY
        self._cancel_timer()
        self._timer = self._scheduler.call_later(self._debounce_ms, self._on_timer)
        return True

    def _on_timer(self) -> None:
        self._timer = None
        self.flush()

    def flush(self) -> None:
        """Write the current value now if it has unsaved changes."""
        self._cancel_timer()
        if not self._dirty or self._value is None:
            return
        self._state = RecordState.SAVING
        try:
            payload = json.dumps(self._encode(self._value), ensure_ascii=False)
            self._storage.write_key(self.key, payload)
            logger.debug("Saved %s (%d bytes)", self.key, len(payload))
        except StorageError as exc:
            logger.warning("Could not save %s: %s", self.key, exc)
        self._dirty = False
        self._state = RecordState.VALID

    def clear(self) -> T:
        """Drop the stored document and any pending write; revert to the default."""
        self._cancel_timer()
        self._dirty = False
        try:
            self._storage.remove_key(self.key)
        except StorageError as exc:
            logger.warning("Could not remove %s: %s", self.key, exc)
        self._value = self._default_factory()
        self._state = RecordState.FALLEN_BACK
        return self._value

    def cancel(self) -> None:
        """Forget any pending write without saving it."""
        self._cancel_timer()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._scheduler.cancel(self._timer)
            self._timer = None
