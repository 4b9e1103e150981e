from __future__ import annotations

import logging
import sqlite3
from datetime import UTC, datetime

from safety_dashboard.core.services import StorageError

logger = logging.getLogger(__name__)


class SqliteKeyValueStore:
    """Key → string storage backed by the ``records`` table.

    Backend failures surface as :class:`StorageError` so callers never need to
    know about sqlite.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def read_key(self, key: str) -> str | None:
        try:
            row = self._conn.execute("SELECT value FROM records WHERE key = ?", (key,)).fetchone()
        except sqlite3.Error as exc:
            raise StorageError(f"read {key!r}: {exc}") from exc
        return row[0] if row else None

    def write_key(self, key: str, value: str) -> None:
        try:
            self._conn.execute(
                "INSERT OR REPLACE INTO records (key, value, updated_at) VALUES (?, ?, ?)",
                (key, value, datetime.now(UTC).isoformat()),
            )
            self._conn.commit()
        except sqlite3.Error as exc:
            raise StorageError(f"write {key!r}: {exc}") from exc

    def remove_key(self, key: str) -> None:
        try:
            self._conn.execute("DELETE FROM records WHERE key = ?", (key,))
            self._conn.commit()
        except sqlite3.Error as exc:
            raise StorageError(f"remove {key!r}: {exc}") from exc

    def keys(self) -> list[str]:
        rows = self._conn.execute("SELECT key FROM records ORDER BY key").fetchall()
        return [row[0] for row in rows]
