"""Application wiring: one AppState per process run."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import aiosqlite
import structlog

from omnibox.cache import RepositoryCache
from omnibox.fetcher import Fetcher, build_http_client
from omnibox.resolver import Resolver, ResolverConfig
from omnibox.store import RepositoryStore, StaticCandidateSource

if TYPE_CHECKING:
    import httpx

    from omnibox.config import Settings
    from omnibox.protocols import CandidateSource, Navigator, SuggestionSink

log = structlog.get_logger()


@dataclass
class AppState:
    settings: Settings
    source: CandidateSource
    resolver: Resolver
    http_client: httpx.AsyncClient | None = None
    cache: RepositoryCache | None = None
    fetcher: Fetcher | None = None


@asynccontextmanager
async def open_app_state(
    settings: Settings,
    navigator: Navigator,
    sink: SuggestionSink,
    *,
    offline: bool = False,
) -> AsyncIterator[AppState]:
    """Build a fully wired AppState and release its resources on exit.

    With ``offline`` the fallback repository list is served and neither the
    cache database nor the network is touched.
    """
    config = ResolverConfig.from_settings(settings)

    if offline:
        source = StaticCandidateSource(settings.organization.fallback_repositories)
        yield AppState(
            settings=settings,
            source=source,
            resolver=Resolver(config, source, navigator, sink),
        )
        return

    db_path = Path(settings.store.db_path).expanduser()
    db_path.parent.mkdir(parents=True, exist_ok=True)

    async with aiosqlite.connect(db_path) as db:
        cache = RepositoryCache(db)
        await cache.init_db()
        log.debug("cache_ready", db_path=str(db_path))

        async with build_http_client(settings.fetcher) as client:
            fetcher = Fetcher(client)
            store = RepositoryStore(settings, cache, fetcher)
            yield AppState(
                settings=settings,
                source=store,
                resolver=Resolver(config, store, navigator, sink),
                http_client=client,
                cache=cache,
                fetcher=fetcher,
            )
