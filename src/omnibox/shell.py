"""Terminal stand-ins for the browser: navigation and suggestion display."""

from __future__ import annotations

import html
import re
import webbrowser
from typing import TYPE_CHECKING

import structlog
from rich.console import Console
from rich.markup import escape

if TYPE_CHECKING:
    from collections.abc import Sequence

    from omnibox.models import Suggestion

log = structlog.get_logger()

_MATCH_TAG = re.compile(r"<match>(.*?)</match>", re.DOTALL)


def render_markup(description: str) -> str:
    """Translate ``<match>`` markup into rich markup.

    Text outside and inside the tags is XML-unescaped, then escaped for rich.
    """
    parts: list[str] = []
    position = 0
    for found in _MATCH_TAG.finditer(description):
        parts.append(escape(html.unescape(description[position : found.start()])))
        parts.append(f"[bold]{escape(html.unescape(found.group(1)))}[/bold]")
        position = found.end()
    parts.append(escape(html.unescape(description[position:])))
    return "".join(parts)


class BrowserNavigator:
    """Opens destinations in the user's web browser.

    ``webbrowser.open`` only hands the URL to a browser process and returns,
    and ``enter`` calls the navigator once as its last step, so the short
    blocking call does not hold up other work on the event loop.
    """

    def open(self, url: str) -> None:
        if not webbrowser.open(url):
            log.warning("browser_open_failed", url=url)


class PrintNavigator:
    """Writes destinations to the console instead of opening them."""

    def __init__(self, console: Console) -> None:
        self._console = console

    def open(self, url: str) -> None:
        self._console.print(url, markup=False, highlight=False)


class ConsoleSuggestionSink:
    def __init__(self, console: Console) -> None:
        self._console = console

    def present(self, suggestions: Sequence[Suggestion]) -> None:
        for suggestion in suggestions:
            self._console.print(
                f"  {render_markup(suggestion.description)}  [dim]{escape(suggestion.destination)}[/dim]",
                highlight=False,
            )

    def set_default(self, description: str) -> None:
        self._console.print(f"> {render_markup(description)}", highlight=False)
