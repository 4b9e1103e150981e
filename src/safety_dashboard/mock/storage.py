"""In-memory key/value storage for testing and development."""

from __future__ import annotations

from safety_dashboard.core.services import StorageError


class MemoryKeyValueStore:
    """Dict-backed :class:`~safety_dashboard.core.services.KeyValueStorage`.

    Set ``fail_reads`` / ``fail_writes`` to make the store raise
    :class:`StorageError` the way an unavailable backend would.
    """

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})
        self.fail_reads = False
        self.fail_writes = False
        self.writes: list[tuple[str, str]] = []

    def read_key(self, key: str) -> str | None:
        if self.fail_reads:
            raise StorageError(f"read of {key!r} refused")
        return self.data.get(key)

    def write_key(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise StorageError(f"write of {key!r} refused")
        self.data[key] = value
        self.writes.append((key, value))

    def remove_key(self, key: str) -> None:
        if self.fail_writes:
            raise StorageError(f"remove of {key!r} refused")
        self.data.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self.data)
