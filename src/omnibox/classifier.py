"""Classification of typed text into one of four interaction states.

Rules are tried in order and the first match wins:

1. ``movida``     -> WRITING_NAME
2. ``movida#``    -> NAME_CONFIRMED (separator trimmed)
3. ``movida#i``   -> COMMAND_TYPED, when the fragment fully matches a trigger
4. anything else  -> UNRECOGNIZED
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from omnibox.commands import CommandRegistry

SEPARATOR = "#"
NAME_CHARS = r"[a-z0-9_-]+"


class StateKind(StrEnum):
    WRITING_NAME = "writing_name"
    NAME_CONFIRMED = "name_confirmed"
    COMMAND_TYPED = "command_typed"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class InputState:
    kind: StateKind
    text: str

    def split(self) -> tuple[str, str]:
        """Return (name fragment, command fragment)."""
        name, _, fragment = self.text.partition(SEPARATOR)
        return name, fragment


class InputClassifier:
    """Pure, total mapping from typed text to an ``InputState``.

    The command grammar is compiled from the registry at construction, so the
    registry must be complete before the classifier is built.
    """

    def __init__(self, registry: CommandRegistry) -> None:
        self._writing_name = re.compile(NAME_CHARS)
        self._name_confirmed = re.compile(f"({NAME_CHARS}){SEPARATOR}")
        self._command_typed = re.compile(
            f"{NAME_CHARS}{SEPARATOR}(?i:{registry.trigger_pattern()})"
        )

    def classify(self, text: str) -> InputState:
        if self._writing_name.fullmatch(text):
            return InputState(StateKind.WRITING_NAME, text)
        confirmed = self._name_confirmed.fullmatch(text)
        if confirmed:
            return InputState(StateKind.NAME_CONFIRMED, confirmed.group(1))
        if self._command_typed.fullmatch(text):
            return InputState(StateKind.COMMAND_TYPED, text)
        return InputState(StateKind.UNRECOGNIZED, text)
