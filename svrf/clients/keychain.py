"""SQLite-backed key-value storage for small secrets that must survive restarts."""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Optional


class SQLiteKeyChain:
    """Persist opaque byte values keyed by name in a single SQLite table."""

    def __init__(self, db_path: str | Path) -> None:
        self._db_path = Path(db_path)
        if self._db_path.parent and not self._db_path.parent.exists():
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS keychain_items (
                    key TEXT PRIMARY KEY,
                    data BLOB NOT NULL
                )
                """
            )

    def save(self, key: str, data: bytes) -> bool:
        if not key:
            raise ValueError("Keychain items require a non-empty key")

        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    INSERT INTO keychain_items (key, data)
                    VALUES (?, ?)
                    ON CONFLICT(key) DO UPDATE SET data = excluded.data
                    """,
                    (key, sqlite3.Binary(data)),
                )
        except sqlite3.Error:
            return False
        return True

    def load(self, key: str) -> Optional[bytes]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT data FROM keychain_items WHERE key = ?",
                (key,),
            ).fetchone()
        if not row:
            return None
        return bytes(row["data"])

    def delete(self, key: str) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM keychain_items WHERE key = ?", (key,))


__all__ = ["SQLiteKeyChain"]
