"""Tests for the SQLite schema, migrations, and the key/value store on top of it."""

from __future__ import annotations

import sqlite3

import pytest

from safety_dashboard.core.services import StorageError
from safety_dashboard.dashboard.db import MIGRATIONS, _get_version, _migrate, open_db
from safety_dashboard.dashboard.kv_store import SqliteKeyValueStore


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def conn(tmp_path):
    """Fresh migrated database connection."""
    c = open_db(str(tmp_path / "test.db"))
    yield c
    c.close()


def _columns(conn: sqlite3.Connection, table: str) -> list[str]:
    return [row[1] for row in conn.execute(f"PRAGMA table_info({table})").fetchall()]


# ---------------------------------------------------------------------------
# Schema & migration tests
# ---------------------------------------------------------------------------


def test_schema_tables_and_columns(conn) -> None:
    tables = {
        row[0]
        for row in conn.execute("SELECT name FROM sqlite_master WHERE type='table'").fetchall()
    }
    assert {"schema_version", "records"} <= tables
    assert _columns(conn, "records") == ["key", "value", "updated_at"]


def test_version_matches_migrations(conn) -> None:
    assert _get_version(conn) == len(MIGRATIONS)


def test_migrate_is_idempotent(conn) -> None:
    _migrate(conn)
    _migrate(conn)
    assert _get_version(conn) == len(MIGRATIONS)


def test_reopen_keeps_data(tmp_path) -> None:
    path = tmp_path / "dash.db"
    first = open_db(path)
    SqliteKeyValueStore(first).write_key("k", "v")
    first.close()

    second = open_db(path)
    assert SqliteKeyValueStore(second).read_key("k") == "v"
    second.close()


def test_migrates_empty_database(tmp_path) -> None:
    conn = sqlite3.connect(str(tmp_path / "old.db"))
    assert _get_version(conn) == 0

    _migrate(conn)

    assert _get_version(conn) == len(MIGRATIONS) == 1
    assert _columns(conn, "records") == ["key", "value", "updated_at"]
    conn.close()


def test_open_db_creates_parent_dirs(tmp_path) -> None:
    path = tmp_path / "nested" / "state" / "dash.db"
    conn = open_db(path)
    assert path.exists()
    conn.close()


# ---------------------------------------------------------------------------
# Key/value store
# ---------------------------------------------------------------------------


def test_read_missing_key(conn) -> None:
    assert SqliteKeyValueStore(conn).read_key("nope") is None


def test_write_overwrite_remove(conn) -> None:
    store = SqliteKeyValueStore(conn)
    store.write_key("safety-dashboard-2026", '{"a": 1}')
    store.write_key("safety-dashboard-2026", '{"a": 2}')
    assert store.read_key("safety-dashboard-2026") == '{"a": 2}'

    updated_at = conn.execute(
        "SELECT updated_at FROM records WHERE key = ?", ("safety-dashboard-2026",)
    ).fetchone()[0]
    assert updated_at

    store.remove_key("safety-dashboard-2026")
    assert store.read_key("safety-dashboard-2026") is None
    store.remove_key("safety-dashboard-2026")


def test_unicode_values(conn) -> None:
    store = SqliteKeyValueStore(conn)
    store.write_key("slogan", '"ความปลอดภัย เริ่มที่ตัวเรา"')
    assert store.read_key("slogan") == '"ความปลอดภัย เริ่มที่ตัวเรา"'


def test_keys_sorted(conn) -> None:
    store = SqliteKeyValueStore(conn)
    for key in ("b", "a", "c"):
        store.write_key(key, "1")
    assert store.keys() == ["a", "b", "c"]


def test_closed_connection_raises_storage_error(tmp_path) -> None:
    conn = open_db(tmp_path / "closed.db")
    store = SqliteKeyValueStore(conn)
    conn.close()
    with pytest.raises(StorageError):
        store.read_key("k")
    with pytest.raises(StorageError):
        store.write_key("k", "v")
    with pytest.raises(StorageError):
        store.remove_key("k")
