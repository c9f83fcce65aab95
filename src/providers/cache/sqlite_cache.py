"""SQLite-backed persistent key-value cache.

Keeps the playlist registry snapshot on disk so a restarted process can
search immediately without a network round-trip.  Uses sync ``sqlite3``:
each operation touches one small JSON blob, so event-loop blocking is
negligible.

Values are stored JSON-encoded alongside an optional absolute expiry time.
Expired rows are treated as absent on read and pruned on :meth:`initialize`.
"""

from __future__ import annotations

import json
import sqlite3
import time
from pathlib import Path
from typing import Any

import structlog

from src.interfaces.cache_provider import ICacheProvider
from src.utils.errors import CacheError
from src.utils.logging import get_logger

_CREATE_TABLE_SQL = """\
CREATE TABLE IF NOT EXISTS {table} (
    cache_key  TEXT PRIMARY KEY,
    value_json TEXT NOT NULL,
    expires_at REAL,
    updated_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))
);
"""

_UPSERT_SQL = """\
INSERT INTO {table} (cache_key, value_json, expires_at)
VALUES (?, ?, ?)
ON CONFLICT(cache_key)
DO UPDATE SET value_json = excluded.value_json,
              expires_at = excluded.expires_at,
              updated_at = strftime('%Y-%m-%dT%H:%M:%fZ', 'now');
"""

_SELECT_SQL = "SELECT value_json, expires_at FROM {table} WHERE cache_key = ?;"

_DELETE_SQL = "DELETE FROM {table} WHERE cache_key = ?;"

_PRUNE_SQL = "DELETE FROM {table} WHERE expires_at IS NOT NULL AND expires_at <= ?;"


class SQLiteCacheProvider(ICacheProvider):
    """Key-value cache persisted to a SQLite file.

    Parameters
    ----------
    db_path:
        Path to the SQLite database file.  Parent directories are created.
    table_name:
        Table to use, so several caches can share one database.
    default_ttl:
        TTL in seconds applied when :meth:`set` receives none.  ``None``
        stores entries without expiry.
    """

    def __init__(
        self,
        db_path: str | Path,
        table_name: str = "kv_cache",
        default_ttl: int | None = None,
    ) -> None:
        self._db_path = Path(db_path)
        self._table = table_name
        self._default_ttl = default_ttl
        self._initialized = False
        self._logger: structlog.BoundLogger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self) -> None:
        """Create the table and prune expired rows.

        Called lazily on first use; safe to call more than once.
        """
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = self._connect()
            try:
                conn.execute(_CREATE_TABLE_SQL.format(table=self._table))
                pruned = conn.execute(
                    _PRUNE_SQL.format(table=self._table), (time.time(),)
                ).rowcount
                conn.commit()
            finally:
                conn.close()
        except (sqlite3.Error, OSError) as exc:
            raise CacheError(
                message=f"Could not initialize cache at {self._db_path}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        self._initialized = True
        self._logger.info(
            "sqlite_cache_initialized",
            db_path=str(self._db_path),
            table=self._table,
            pruned=pruned,
        )

    # ------------------------------------------------------------------
    # ICacheProvider implementation
    # ------------------------------------------------------------------

    async def get(self, key: str) -> Any | None:
        """Return the decoded value for *key*, or ``None`` if missing/expired."""
        row = self._execute_fetchone(_SELECT_SQL, (key,))
        if row is None:
            self._logger.debug("cache_miss", key=key)
            return None

        value_json, expires_at = row
        if expires_at is not None and expires_at <= time.time():
            self._logger.debug("cache_expired", key=key)
            return None

        try:
            value = json.loads(value_json)
        except ValueError as exc:
            raise CacheError(
                message=f"Cached value for '{key}' is not valid JSON: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        self._logger.debug("cache_hit", key=key)
        return value

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        """JSON-encode and store *value* under *key*."""
        effective_ttl = ttl if ttl is not None else self._default_ttl
        expires_at = time.time() + effective_ttl if effective_ttl is not None else None
        self._execute(_UPSERT_SQL, (key, json.dumps(value), expires_at))
        self._logger.debug("cache_set", key=key, ttl=effective_ttl)

    async def delete(self, key: str) -> None:
        """Remove *key* (no-op if absent)."""
        self._execute(_DELETE_SQL, (key,))
        self._logger.debug("cache_delete", key=key)

    async def exists(self, key: str) -> bool:
        """Return ``True`` if *key* is present and not expired."""
        return await self.get(key) is not None

    def get_provider_name(self) -> str:
        return "sqlite"

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(str(self._db_path))

    def _execute(self, sql: str, params: tuple) -> None:
        if not self._initialized:
            self.initialize()
        try:
            conn = self._connect()
            try:
                conn.execute(sql.format(table=self._table), params)
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            raise CacheError(
                message=f"Cache write failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

    def _execute_fetchone(self, sql: str, params: tuple) -> tuple | None:
        if not self._initialized:
            self.initialize()
        try:
            conn = self._connect()
            try:
                return conn.execute(sql.format(table=self._table), params).fetchone()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            raise CacheError(
                message=f"Cache read failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
