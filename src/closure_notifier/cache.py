"""SQLite-backed status cache.

Holds the closed-status record as a single JSON row keyed by ``<prefix>_closed``
in a small ``transients`` table. Writes replace the whole row in one statement,
so readers see either the previous record or the new one, never a mix.

All cache operations catch ``aiosqlite.Error`` internally and degrade
gracefully: read failures return the default (empty) record, which callers
treat as "refresh due"; write failures are logged and ignored. Infrastructure
errors never cross the StatusCache boundary. They are still logged with
``exc_info=True`` so they remain observable via stderr.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import aiosqlite
import structlog
from pydantic import ValidationError

from closure_notifier.models.cache import StatusCacheRecord

log = structlog.get_logger()

_CREATE_TRANSIENTS_TABLE = """
CREATE TABLE IF NOT EXISTS transients (
    key         TEXT PRIMARY KEY,
    value       TEXT NOT NULL,
    updated_at  TEXT NOT NULL,
    expires_at  TEXT
)
"""


class StatusCache:
    """Process-wide store for the last-known closed set."""

    def __init__(
        self,
        db: aiosqlite.Connection,
        key: str = "pcn_closed",
        ttl_hours: int | None = None,
    ) -> None:
        self._db = db
        self._key = key
        self._ttl_hours = ttl_hours

    @property
    def key(self) -> str:
        return self._key

    async def init_db(self) -> None:
        """Create tables and set WAL mode. Called once at startup."""
        await self._db.execute("PRAGMA journal_mode = WAL")
        await self._db.execute(_CREATE_TRANSIENTS_TABLE)
        await self._db.commit()

    async def read(self) -> StatusCacheRecord:
        """Read the current record. Returns an empty record on miss, expiry or failure."""
        try:
            cursor = await self._db.execute(
                "SELECT value, expires_at FROM transients WHERE key = ?",
                (self._key,),
            )
            row = await cursor.fetchone()
        except aiosqlite.Error:
            log.warning("cache_read_error", key=self._key, exc_info=True)
            return StatusCacheRecord()

        if row is None:
            return StatusCacheRecord()

        value, expires_at = row
        if expires_at is not None and datetime.now(UTC) > datetime.fromisoformat(expires_at):
            log.debug("cache_record_expired", key=self._key, expires_at=expires_at)
            return StatusCacheRecord()

        try:
            return StatusCacheRecord.model_validate_json(value)
        except ValidationError:
            log.warning("cache_record_corrupt", key=self._key, exc_info=True)
            return StatusCacheRecord()

    async def write(self, record: StatusCacheRecord) -> None:
        """Replace the stored record. Non-fatal on failure."""
        try:
            now = datetime.now(UTC)
            expires_at = (
                (now + timedelta(hours=self._ttl_hours)).isoformat()
                if self._ttl_hours is not None
                else None
            )
            await self._db.execute(
                "INSERT OR REPLACE INTO transients (key, value, updated_at, expires_at) "
                "VALUES (?, ?, ?, ?)",
                (self._key, record.model_dump_json(), now.isoformat(), expires_at),
            )
            await self._db.commit()
        except aiosqlite.Error:
            log.warning("cache_write_error", key=self._key, exc_info=True)

    async def delete(self) -> None:
        """Drop the stored record so the next throttle check refreshes. Non-fatal on failure."""
        try:
            await self._db.execute("DELETE FROM transients WHERE key = ?", (self._key,))
            await self._db.commit()
        except aiosqlite.Error:
            log.warning("cache_delete_error", key=self._key, exc_info=True)
