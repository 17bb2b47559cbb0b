"""Candidate sources: where the resolver gets repository names from.

``RepositoryStore.load`` never raises. The lookup order is:

1. a fresh cached list for the organization
2. the organization page, scraped and written back to the cache
3. a stale cached list, whose expiry is pushed forward
4. the configured fallback list
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from omnibox.errors import ErrorCode, OmniboxError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from omnibox.config import Settings
    from omnibox.fetcher import Fetcher
    from omnibox.protocols import RepositoryCacheProtocol

log = structlog.get_logger()


class RepositoryStore:
    """Cached, fetch-backed CandidateSource for one organization."""

    def __init__(
        self,
        settings: Settings,
        cache: RepositoryCacheProtocol,
        fetcher: Fetcher,
    ) -> None:
        self._organization_url = settings.organization.base_url
        self._fallback = list(settings.organization.fallback_repositories)
        self._ttl_seconds = settings.store.ttl_seconds
        self._cache = cache
        self._fetcher = fetcher

    async def load(self) -> list[str]:
        entry = await self._cache.get_repositories(self._organization_url)
        if entry is not None and not entry.stale:
            return entry.repositories

        try:
            repositories = await self._fetch()
        except OmniboxError as exc:
            if entry is not None:
                log.info(
                    "serving_stale_repositories",
                    url=self._organization_url,
                    code=exc.code,
                    count=len(entry.repositories),
                )
                await self._cache.set_repositories(
                    self._organization_url, entry.repositories, self._ttl_seconds
                )
                return entry.repositories
            log.warning(
                "serving_fallback_repositories",
                url=self._organization_url,
                code=exc.code,
                count=len(self._fallback),
            )
            return list(self._fallback)

        await self._cache.set_repositories(
            self._organization_url, repositories, self._ttl_seconds
        )
        return repositories

    async def _fetch(self) -> list[str]:
        repositories = await self._fetcher.fetch_repository_names(self._organization_url)
        if not repositories:
            raise OmniboxError(
                ErrorCode.FETCH_FAILED,
                f"No repositories found on {self._organization_url}",
                recoverable=True,
            )
        return repositories


class StaticCandidateSource:
    """Serves a fixed list of names."""

    def __init__(self, names: Iterable[str]) -> None:
        self._names = list(names)

    async def load(self) -> list[str]:
        return list(self._names)
