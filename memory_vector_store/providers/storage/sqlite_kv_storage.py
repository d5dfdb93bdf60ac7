"""SQLite-backed key-value storage.

:class:`SQLiteKeyValueStore` is a dict-like ``str -> str`` table on disk,
the local equivalent of a browser's ``localStorage``.  Uses sync ``sqlite3``
for dict-like interface compatibility; every operation touches one row, and
snapshots stored this way are capped at a few megabytes by the factory.

:class:`SQLiteKeyValueStorageProvider` plugs that table into the
:class:`IStorageProvider` contract via :class:`MappingStorageProvider`.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator, MutableMapping
from pathlib import Path

import structlog

from memory_vector_store.providers.storage.mapping_storage import MappingStorageProvider

logger = structlog.get_logger(logger_name=__name__)

_CREATE_TABLE_SQL = """\
CREATE TABLE IF NOT EXISTS {table} (
    key        TEXT PRIMARY KEY,
    value      TEXT NOT NULL,
    updated_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))
);
"""

_UPSERT_SQL = """\
INSERT INTO {table} (key, value)
VALUES (?, ?)
ON CONFLICT(key)
DO UPDATE SET value = excluded.value,
              updated_at = strftime('%Y-%m-%dT%H:%M:%fZ', 'now');
"""

_SELECT_SQL = "SELECT value FROM {table} WHERE key = ?;"

_DELETE_SQL = "DELETE FROM {table} WHERE key = ?;"

_EXISTS_SQL = "SELECT 1 FROM {table} WHERE key = ? LIMIT 1;"

_ALL_KEYS_SQL = "SELECT key FROM {table};"

_COUNT_SQL = "SELECT COUNT(*) FROM {table};"


class SQLiteKeyValueStore(MutableMapping[str, str]):
    """Dict-like string store backed by a SQLite table.

    Parameters
    ----------
    db_path:
        Path to the SQLite database file.  Parent directories are created
        by :meth:`initialize`.
    table_name:
        Table name to use, so several stores can share one database.
    """

    def __init__(self, db_path: str | Path, table_name: str = "kv_store") -> None:
        self._db_path = Path(db_path)
        self._table = table_name

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self) -> None:
        """Create the database file and table if missing.

        Must be called once before use; idempotent.
        """
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = self._connect()
        try:
            conn.execute(_CREATE_TABLE_SQL.format(table=self._table))
            conn.commit()
        finally:
            conn.close()

        logger.debug(
            "kv_store_initialized",
            db_path=str(self._db_path),
            table=self._table,
        )

    # ------------------------------------------------------------------
    # MutableMapping interface
    # ------------------------------------------------------------------

    def __setitem__(self, key: str, value: str) -> None:
        conn = self._connect()
        try:
            conn.execute(_UPSERT_SQL.format(table=self._table), (key, value))
            conn.commit()
        finally:
            conn.close()

    def __getitem__(self, key: str) -> str:
        conn = self._connect()
        try:
            row = conn.execute(_SELECT_SQL.format(table=self._table), (key,)).fetchone()
        finally:
            conn.close()
        if row is None:
            raise KeyError(key)
        return row[0]

    def __delitem__(self, key: str) -> None:
        if key not in self:
            raise KeyError(key)
        conn = self._connect()
        try:
            conn.execute(_DELETE_SQL.format(table=self._table), (key,))
            conn.commit()
        finally:
            conn.close()

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        conn = self._connect()
        try:
            cursor = conn.execute(_EXISTS_SQL.format(table=self._table), (key,))
            return cursor.fetchone() is not None
        finally:
            conn.close()

    def __iter__(self) -> Iterator[str]:
        conn = self._connect()
        try:
            cursor = conn.execute(_ALL_KEYS_SQL.format(table=self._table))
            return iter([row[0] for row in cursor.fetchall()])
        finally:
            conn.close()

    def __len__(self) -> int:
        conn = self._connect()
        try:
            row = conn.execute(_COUNT_SQL.format(table=self._table)).fetchone()
            return row[0] if row else 0
        finally:
            conn.close()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _connect(self) -> sqlite3.Connection:
        """Open a new SQLite connection with WAL mode for concurrency."""
        conn = sqlite3.connect(str(self._db_path))
        conn.execute("PRAGMA journal_mode=WAL")
        return conn


class SQLiteKeyValueStorageProvider(MappingStorageProvider):
    """Snapshot storage in a SQLite key-value table (one row per storage key)."""

    def __init__(self, db_path: str | Path, table_name: str = "kv_store") -> None:
        store = SQLiteKeyValueStore(db_path, table_name=table_name)
        store.initialize()
        super().__init__(store)

    def get_provider_name(self) -> str:
        return "sqlite_kv_storage"
