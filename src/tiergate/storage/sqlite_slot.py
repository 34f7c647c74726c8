"""SQLite-backed role slot that survives process restarts."""

from __future__ import annotations

import logging
import sqlite3
import threading
from datetime import UTC, datetime
from pathlib import Path

from tiergate.storage.base import RoleSlot

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS kv (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL
)
"""


class SQLiteRoleSlot(RoleSlot):
    """One row in a ``kv`` table.

    Writes committed by other connections are picked up by ``poll()``, which
    compares SQLite's ``data_version`` counter and notifies watchers.
    """

    def __init__(self, db_path: Path, *, key: str = "userRole", wal_mode: bool = True) -> None:
        super().__init__()
        self.db_path = db_path
        self.key = key
        self.wal_mode = wal_mode
        self._db: sqlite3.Connection | None = None
        self._lock = threading.RLock()
        self._data_version: int | None = None

    def initialize(self) -> None:
        """Create the database file and schema."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._db = sqlite3.connect(str(self.db_path), check_same_thread=False)
        if self.wal_mode:
            self._db.execute("PRAGMA journal_mode=WAL")
        self._db.execute(_SCHEMA)
        self._db.commit()
        self._data_version = self._read_data_version()
        logger.debug("Initialized role slot at %s", self.db_path)

    def close(self) -> None:
        with self._lock:
            if self._db:
                self._db.close()
                self._db = None

    @property
    def db(self) -> sqlite3.Connection:
        if self._db is None:
            raise RuntimeError("Slot not initialized. Call initialize() first.")
        return self._db

    def _read_data_version(self) -> int:
        return self.db.execute("PRAGMA data_version").fetchall()[0][0]

    def read(self) -> str | None:
        with self._lock:
            rows = self.db.execute("SELECT value FROM kv WHERE key = ?", (self.key,)).fetchall()
        return rows[0][0] if rows else None

    def _store(self, value: str) -> None:
        with self._lock:
            try:
                self.db.execute(
                    """INSERT INTO kv (key, value, updated_at) VALUES (?, ?, ?)
                       ON CONFLICT(key) DO UPDATE SET
                       value = excluded.value, updated_at = excluded.updated_at""",
                    (self.key, value, datetime.now(UTC).isoformat()),
                )
                self.db.commit()
            except sqlite3.Error:
                self.db.rollback()
                raise

    def clear(self) -> None:
        with self._lock:
            self.db.execute("DELETE FROM kv WHERE key = ?", (self.key,))
            self.db.commit()

    def poll(self) -> bool:
        """Notify watchers if another connection changed the database. Returns True if so."""
        with self._lock:
            version = self._read_data_version()
            changed = version != self._data_version
            self._data_version = version
        if changed:
            self.notify(self.read())
        return changed
