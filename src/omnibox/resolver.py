"""Suggestion and navigation state machine.

Each event is handled from scratch: the typed text is classified into an
``InputState`` and a single ``match`` over its kind decides what to suggest
and where ``enter`` navigates. No state survives between events.

Overlapping ``infer_suggestions`` calls are not serialized. Whichever call
finishes last sets the visible default suggestion.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, assert_never
from xml.sax.saxutils import escape

import structlog

from omnibox.classifier import SEPARATOR, InputClassifier, InputState, StateKind
from omnibox.commands import CommandRegistry, default_registry, repository_url
from omnibox.models import Suggestion
from omnibox.ranking import rank

if TYPE_CHECKING:
    from omnibox.config import Settings
    from omnibox.protocols import CandidateSource, Navigator, SuggestionSink

log = structlog.get_logger()

UNRECOGNIZED_HINT = (
    "No match, try typing the first letters of a repository (ex. <match>mov</match>)"
)
NO_REPOSITORIES_HINT = "No repositories available, check the organization URL or your connection"


@dataclass(frozen=True)
class ResolverConfig:
    base_url: str
    commands: CommandRegistry
    suggestion_limit: int = 5

    @classmethod
    def from_settings(cls, settings: Settings) -> ResolverConfig:
        base_url = settings.organization.base_url
        return cls(
            base_url=base_url,
            commands=default_registry(base_url),
            suggestion_limit=settings.suggestions.limit,
        )


def _match(text: str) -> str:
    return f"<match>{escape(text)}</match>"


class Resolver:
    def __init__(
        self,
        config: ResolverConfig,
        source: CandidateSource,
        navigator: Navigator,
        sink: SuggestionSink,
    ) -> None:
        self._config = config
        self._source = source
        self._navigator = navigator
        self._sink = sink
        self._classifier = InputClassifier(config.commands)

    def classify(self, text: str) -> InputState:
        return self._classifier.classify(text)

    async def infer_suggestions(self, text: str) -> list[Suggestion]:
        """Compute suggestions for ``text`` and publish them to the sink.

        ``sink.present`` and ``sink.set_default`` are each called exactly once.
        """
        state = self.classify(text)
        log.debug("input_classified", kind=state.kind, text=text)

        match state.kind:
            case StateKind.WRITING_NAME:
                suggestions, default = await self._suggest_repositories(state.text)
            case StateKind.NAME_CONFIRMED:
                suggestions, default = await self._suggest_commands(state.text)
            case StateKind.COMMAND_TYPED:
                url = await self._command_url(state)
                suggestions, default = [], url or NO_REPOSITORIES_HINT
            case StateKind.UNRECOGNIZED:
                suggestions, default = [], UNRECOGNIZED_HINT
            case _:
                assert_never(state.kind)

        self._sink.present(suggestions)
        self._sink.set_default(default)
        return suggestions

    async def enter(self, text: str) -> str | None:
        """Resolve ``text`` to one destination and open it.

        Returns the opened URL, or ``None`` when nothing was opened. The
        navigator is called at most once.
        """
        state = self.classify(text)

        match state.kind:
            case StateKind.WRITING_NAME | StateKind.NAME_CONFIRMED:
                top = await self._top_repository(state.text)
                url = repository_url(self._config.base_url, top) if top is not None else None
            case StateKind.COMMAND_TYPED:
                url = await self._command_url(state)
            case StateKind.UNRECOGNIZED:
                url = None
            case _:
                assert_never(state.kind)

        if url is None:
            log.debug("navigation_skipped", kind=state.kind, text=text)
            return None
        log.info("navigation_requested", kind=state.kind, url=url)
        self._navigator.open(url)
        return url

    # ------------------------------------------------------------------
    # Per-state helpers
    # ------------------------------------------------------------------

    async def _suggest_repositories(self, fragment: str) -> tuple[list[Suggestion], str]:
        candidates = await self._source.load()
        repositories = rank(fragment, candidates, self._config.suggestion_limit)
        if not repositories:
            return [], NO_REPOSITORIES_HINT

        suggestions = [
            Suggestion(
                destination=repository_url(self._config.base_url, name),
                description=escape(name),
            )
            for name in repositories
        ]
        top = repositories[0]
        default = (
            f"Type {_match(SEPARATOR)} to show commands for {_match(top)}, "
            f"or <match>&#9166;</match> to visit "
            f"{_match(repository_url(self._config.base_url, top))}"
        )
        return suggestions, default

    async def _suggest_commands(self, fragment: str) -> tuple[list[Suggestion], str]:
        tooltips = " | ".join(
            f"{_match(command.trigger)} ({escape(command.description)})"
            for command in self._config.commands
        )
        default = f"Type one of [{tooltips}]"

        top = await self._top_repository(fragment)
        if top is None:
            return [], default

        suggestions = [
            Suggestion(
                destination=command.build_url(top),
                description=escape(f"{top}{SEPARATOR}{command.trigger}"),
            )
            for command in self._config.commands
        ]
        return suggestions, default

    async def _command_url(self, state: InputState) -> str | None:
        name_fragment, command_fragment = state.split()
        command = self._config.commands.first_matching(command_fragment)
        if command is None:
            return None
        top = await self._top_repository(name_fragment)
        if top is None:
            return None
        return command.build_url(top, command_fragment)

    async def _top_repository(self, fragment: str) -> str | None:
        candidates = await self._source.load()
        best = rank(fragment, candidates, 1)
        return best[0] if best else None
