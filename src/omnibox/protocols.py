"""Contracts for the collaborators the resolver depends on."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from omnibox.models import RepositoryListEntry, Suggestion


class CandidateSource(Protocol):
    async def load(self) -> list[str]:
        """Return the current repository names. Must not raise."""
        ...


class Navigator(Protocol):
    def open(self, url: str) -> None: ...


class SuggestionSink(Protocol):
    def present(self, suggestions: Sequence[Suggestion]) -> None: ...

    def set_default(self, description: str) -> None: ...


class RepositoryCacheProtocol(Protocol):
    async def get_repositories(self, organization_url: str) -> RepositoryListEntry | None: ...

    async def set_repositories(
        self,
        organization_url: str,
        repositories: Sequence[str],
        ttl_seconds: int,
    ) -> None: ...
