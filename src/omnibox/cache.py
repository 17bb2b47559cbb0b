"""SQLite cache of organization repository lists.

All cache operations catch ``aiosqlite.Error`` internally and degrade
gracefully: read failures return ``None`` (treated as a cache miss by callers),
write failures are logged and ignored. Infrastructure errors never cross the
RepositoryCache class boundary.
"""

from __future__ import annotations

import json
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import aiosqlite
import structlog

if TYPE_CHECKING:
    from collections.abc import Sequence

    from omnibox.models.cache import RepositoryListEntry

log = structlog.get_logger()

_CREATE_REPOSITORY_TABLE = """
CREATE TABLE IF NOT EXISTS repository_cache (
    organization_url TEXT PRIMARY KEY,
    repositories     TEXT NOT NULL,
    fetched_at       TEXT NOT NULL,
    expires_at       TEXT NOT NULL
)
"""


class RepositoryCache:
    """SQLite-backed repository list cache implementing RepositoryCacheProtocol."""

    def __init__(self, db: aiosqlite.Connection) -> None:
        self._db = db

    async def init_db(self) -> None:
        """Create tables and set WAL mode. Called once at startup."""
        await self._db.execute("PRAGMA journal_mode = WAL")
        await self._db.execute(_CREATE_REPOSITORY_TABLE)
        await self._db.commit()

    async def get_repositories(self, organization_url: str) -> RepositoryListEntry | None:
        """Read the cached list. Returns ``None`` on cache miss or read failure."""
        try:
            cursor = await self._db.execute(
                "SELECT organization_url, repositories, fetched_at, expires_at "
                "FROM repository_cache WHERE organization_url = ?",
                (organization_url,),
            )
            row = await cursor.fetchone()
            if row is None:
                return None

            from omnibox.models.cache import RepositoryListEntry

            expires_at = datetime.fromisoformat(row[3])
            return RepositoryListEntry(
                organization_url=row[0],
                repositories=json.loads(row[1]),
                fetched_at=datetime.fromisoformat(row[2]),
                expires_at=expires_at,
                stale=datetime.now(UTC) >= expires_at,
            )
        except (aiosqlite.Error, ValueError):
            log.warning("cache_read_error", key=organization_url, exc_info=True)
            return None

    async def set_repositories(
        self,
        organization_url: str,
        repositories: Sequence[str],
        ttl_seconds: int,
    ) -> None:
        """Write the list with a fresh expiry. Non-fatal on failure."""
        try:
            now = datetime.now(UTC)
            expires_at = now + timedelta(seconds=ttl_seconds)
            await self._db.execute(
                "INSERT OR REPLACE INTO repository_cache "
                "(organization_url, repositories, fetched_at, expires_at) "
                "VALUES (?, ?, ?, ?)",
                (
                    organization_url,
                    json.dumps(list(repositories)),
                    now.isoformat(),
                    expires_at.isoformat(),
                ),
            )
            await self._db.commit()
        except aiosqlite.Error:
            log.warning("cache_write_error", key=organization_url, exc_info=True)
