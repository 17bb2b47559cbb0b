"""Shared fixtures: a resolver wired to in-memory collaborators."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
import structlog

from omnibox.commands import default_registry
from omnibox.resolver import Resolver, ResolverConfig
from omnibox.store import StaticCandidateSource

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from omnibox.models import Suggestion

BASE_URL = "https://github.com/bebanjo/"


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Undo any structlog configuration a test installed."""
    yield
    structlog.reset_defaults()


class RecordingNavigator:
    def __init__(self) -> None:
        self.opened: list[str] = []

    def open(self, url: str) -> None:
        self.opened.append(url)


class RecordingSink:
    def __init__(self) -> None:
        self.presented: list[list[Suggestion]] = []
        self.defaults: list[str] = []

    def present(self, suggestions: Sequence[Suggestion]) -> None:
        self.presented.append(list(suggestions))

    def set_default(self, description: str) -> None:
        self.defaults.append(description)


class CountingSource(StaticCandidateSource):
    def __init__(self, names: Sequence[str]) -> None:
        super().__init__(names)
        self.calls = 0

    async def load(self) -> list[str]:
        self.calls += 1
        return await super().load()


@pytest.fixture()
def sample_repositories() -> list[str]:
    return [
        "movida",
        "movida-account-setup-scripts",
        "movid",
        "sequence",
        "sheriff",
        "support",
        "tron",
    ]


@pytest.fixture()
def navigator() -> RecordingNavigator:
    return RecordingNavigator()


@pytest.fixture()
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture()
def resolver_config() -> ResolverConfig:
    return ResolverConfig(base_url=BASE_URL, commands=default_registry(BASE_URL))


@pytest.fixture()
def make_resolver(
    navigator: RecordingNavigator, sink: RecordingSink, resolver_config: ResolverConfig
) -> Callable[..., tuple[Resolver, CountingSource]]:
    """Factory for a resolver over a fixed candidate list."""

    def factory(
        names: Sequence[str], config: ResolverConfig | None = None
    ) -> tuple[Resolver, CountingSource]:
        source = CountingSource(names)
        return Resolver(config or resolver_config, source, navigator, sink), source

    return factory
