from __future__ import annotations

import os
import sqlite3
from datetime import datetime, timezone
from typing import Dict, Optional

from .config import trace


def _ensure_db_dir(db_path: str) -> None:
    """Ensures the directory for the SQLite DB exists before connecting."""
    directory = os.path.dirname(db_path)
    if directory and not os.path.exists(directory):
        os.makedirs(directory, exist_ok=True)


def _resolve_db_path(db_path: str) -> str:
    """Resolves a potentially unwritable DB path to a writable one, creating the directory if needed."""
    try:
        _ensure_db_dir(db_path)
        return db_path
    except PermissionError:
        pass
    candidates = [
        os.getenv('APPLESUM_DB_DIR'),
        os.path.join(os.getcwd(), 'data'),
        '/tmp',
    ]
    base = os.path.basename(db_path) or 'applesum.db'
    for d in candidates:
        if not d:
            continue
        try:
            os.makedirs(d, exist_ok=True)
            return os.path.join(d, base)
        except OSError:
            continue
    # Last resort: current working directory
    return base


def _parse_int(text: Optional[str]) -> Optional[int]:
    """
    Decimal text to a non-negative int; anything else counts as absent.

    Stricter than a prefix parse: "7x" is absent, not 7.
    """
    if text is None:
        return None
    s = str(text).strip()
    if not (s.isascii() and s.isdigit()):
        return None
    return int(s)


class KeyValueStore:
    """String keys holding decimal-text integers."""

    def load(self, key: str) -> Optional[int]:
        raise NotImplementedError

    def store(self, key: str, value: int) -> None:
        raise NotImplementedError


class MemoryKeyValueStore(KeyValueStore):
    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self.data: Dict[str, str] = dict(initial or {})

    def load(self, key: str) -> Optional[int]:
        return _parse_int(self.data.get(key))

    def store(self, key: str, value: int) -> None:
        self.data[key] = str(int(value))


class SqliteKeyValueStore(KeyValueStore):
    """Persists values in a single SQLite table; opens a connection per call."""

    def __init__(self, db_path: str) -> None:
        self.db_path = _resolve_db_path(db_path)

    def _connect(self) -> sqlite3.Connection:
        _ensure_db_dir(self.db_path)
        conn = sqlite3.connect(self.db_path)
        _ensure_db(conn)
        return conn

    def load(self, key: str) -> Optional[int]:
        conn = self._connect()
        try:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        finally:
            conn.close()
        if not row:
            return None
        value = _parse_int(row[0])
        if value is None:
            trace("db", f"ignoring malformed value for {key!r}: {row[0]!r}")
        return value

    def store(self, key: str, value: int) -> None:
        self.store_raw(key, str(int(value)))
        trace("db", f"stored {key}={value} in {self.db_path}")

    def store_raw(self, key: str, text: str) -> None:
        """Writes text as-is; lets callers (and tests) reproduce hand-edited data."""
        conn = self._connect()
        try:
            conn.execute(
                "INSERT OR REPLACE INTO kv (key, value, updated_at) VALUES (?, ?, ?)",
                (key, text, datetime.now(timezone.utc).isoformat(timespec='seconds')),
            )
            conn.commit()
        finally:
            conn.close()


def _ensure_db(conn: sqlite3.Connection) -> None:
    """Ensures the key-value table exists."""
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS kv (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL,
            updated_at TEXT NOT NULL
        )
        """
    )
    conn.commit()
