"""Key-value storage for the processed-set ledger, stats and sponsor details."""

from __future__ import annotations

import json
import sqlite3
from pathlib import Path
from typing import Any

from . import constants

_CREATE_TABLES_SQL = """
CREATE TABLE IF NOT EXISTS kv (
    key TEXT PRIMARY KEY,
    value_json TEXT NOT NULL,
    updated_at TEXT DEFAULT CURRENT_TIMESTAMP
);
"""


class StorageError(Exception):
    """A store read or write failed."""


class MemoryStore:
    """In-process store; contents are lost when the process exits."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str, default: Any = None) -> Any:
        if key not in self._data:
            return default
        return json.loads(self._data[key])

    def set(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value)

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self, prefix: str = "") -> list[str]:
        return sorted(k for k in self._data if k.startswith(prefix))

    def close(self) -> None:
        pass


class SqliteStore:
    """Persistent SQLite store with JSON-encoded values."""

    def __init__(self, db_path: Path | None = None) -> None:
        self.db_path = Path(db_path or constants.STORE_DB_PATH)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(str(self.db_path))
        self._conn.row_factory = sqlite3.Row
        self._create_tables()

    def _create_tables(self) -> None:
        self._conn.executescript(_CREATE_TABLES_SQL)

    # --- public API ---

    def get(self, key: str, default: Any = None) -> Any:
        try:
            row = self._conn.execute(
                "SELECT value_json FROM kv WHERE key = ?", (key,)
            ).fetchone()
        except sqlite3.Error as e:
            raise StorageError(f"Failed to read {key!r}: {e}") from e
        if row is None:
            return default
        return json.loads(row["value_json"])

    def set(self, key: str, value: Any) -> None:
        try:
            with self._conn:
                self._conn.execute(
                    "INSERT INTO kv (key, value_json, updated_at) VALUES (?, ?, CURRENT_TIMESTAMP) "
                    "ON CONFLICT(key) DO UPDATE SET value_json = excluded.value_json, "
                    "updated_at = excluded.updated_at",
                    (key, json.dumps(value)),
                )
        except sqlite3.Error as e:
            raise StorageError(f"Failed to write {key!r}: {e}") from e

    def remove(self, key: str) -> None:
        try:
            with self._conn:
                self._conn.execute("DELETE FROM kv WHERE key = ?", (key,))
        except sqlite3.Error as e:
            raise StorageError(f"Failed to remove {key!r}: {e}") from e

    def keys(self, prefix: str = "") -> list[str]:
        rows = self._conn.execute(
            "SELECT key FROM kv WHERE substr(key, 1, ?) = ? ORDER BY key",
            (len(prefix), prefix),
        ).fetchall()
        return [r["key"] for r in rows]

    def clear(self) -> None:
        """Drop and recreate all tables."""
        self._conn.executescript("DROP TABLE IF EXISTS kv;")
        self._create_tables()

    def get_info(self) -> dict:
        """Return store statistics."""
        file_size = self.db_path.stat().st_size if self.db_path.exists() else 0
        key_count = self._conn.execute("SELECT COUNT(*) AS c FROM kv").fetchone()["c"]
        last_row = self._conn.execute(
            "SELECT updated_at FROM kv ORDER BY updated_at DESC LIMIT 1"
        ).fetchone()
        session_count = len(self.keys(constants.PROCESSED_KEY_PREFIX))

        return {
            "db_file_size": file_size,
            "key_count": key_count,
            "session_count": session_count,
            "last_write": last_row["updated_at"] if last_row else None,
        }

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()

    # --- context manager ---

    def __enter__(self) -> SqliteStore:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        self.close()
