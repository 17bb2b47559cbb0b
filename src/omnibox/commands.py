"""Command table for the text typed after the ``#`` separator.

The registry is an ordered tuple. When more than one trigger matches a
fragment, the command registered first wins.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field

DEFAULT_ISSUE_NUMBER = 123

UrlBuilder = Callable[[str, str], str]


def repository_url(base_url: str, name: str) -> str:
    """Join the organization URL and a repository name with a single slash."""
    return f"{base_url.rstrip('/')}/{name}"


@dataclass(frozen=True)
class Command:
    """A trigger pattern, its human description, and its destination builder.

    ``url_builder`` receives the resolved repository name and the raw command
    fragment the user typed (empty when previewing every command).
    """

    trigger: str
    description: str
    url_builder: UrlBuilder
    _pattern: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_pattern", re.compile(self.trigger, re.IGNORECASE))

    def matches(self, fragment: str) -> bool:
        return self._pattern.fullmatch(fragment) is not None

    def build_url(self, name: str, fragment: str = "") -> str:
        return self.url_builder(name, fragment)


class CommandRegistry:
    """Ordered, immutable collection of commands."""

    def __init__(self, commands: Iterable[Command]) -> None:
        self._commands = tuple(commands)
        if not self._commands:
            raise ValueError("a command registry needs at least one command")

    def __iter__(self) -> Iterator[Command]:
        return iter(self._commands)

    def __len__(self) -> int:
        return len(self._commands)

    @property
    def triggers(self) -> tuple[str, ...]:
        return tuple(command.trigger for command in self._commands)

    def trigger_pattern(self) -> str:
        """Union of every trigger, in registration order."""
        return "|".join(f"(?:{trigger})" for trigger in self.triggers)

    def first_matching(self, fragment: str) -> Command | None:
        for command in self._commands:
            if command.matches(fragment):
                return command
        return None


def default_registry(base_url: str) -> CommandRegistry:
    """Build the standard command table for an organization URL."""

    def suffixed(suffix: str) -> UrlBuilder:
        def build(name: str, fragment: str) -> str:
            return f"{repository_url(base_url, name)}/{suffix}"

        return build

    def issue_detail(name: str, fragment: str) -> str:
        digits = re.search(r"\d+", fragment)
        number = digits.group() if digits else DEFAULT_ISSUE_NUMBER
        return f"{repository_url(base_url, name)}/issues/{number}"

    return CommandRegistry(
        [
            Command("p", "pull requests", suffixed("pulls")),
            Command("i", "issues", suffixed("issues")),
            Command("w", "wiki", suffixed("wiki/_pages")),
            Command(r"\d+", "issue detail", issue_detail),
        ]
    )
