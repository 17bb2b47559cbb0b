"""Command-line entry point.

    omnibox suggest "mov"        ranked suggestions for the typed text
    omnibox open "movida#p"      resolve and open the destination
    omnibox repos                current repository list
"""

from __future__ import annotations

import argparse
import asyncio
import sys

from pydantic import ValidationError
from rich.console import Console

from omnibox import __version__
from omnibox.config import Settings
from omnibox.logging_config import configure_logging
from omnibox.shell import BrowserNavigator, ConsoleSuggestionSink, PrintNavigator
from omnibox.state import open_app_state

EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="omnibox",
        description="Jump to an organization's repositories from a few typed characters.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Use the configured fallback repository list instead of fetching",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    suggest = subparsers.add_parser("suggest", help="Show suggestions for the typed text")
    suggest.add_argument("text", help='Typed text, e.g. "mov", "movida#" or "movida#p"')

    open_ = subparsers.add_parser("open", help="Resolve the typed text and open it")
    open_.add_argument("text", help="Typed text to resolve")
    open_.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the destination instead of opening a browser",
    )

    subparsers.add_parser("repos", help="List the repositories currently known")
    return parser


async def _run(args: argparse.Namespace, settings: Settings, console: Console) -> int:
    navigator = PrintNavigator(console) if getattr(args, "dry_run", False) else BrowserNavigator()
    sink = ConsoleSuggestionSink(console)

    async with open_app_state(settings, navigator, sink, offline=args.offline) as state:
        if args.command == "suggest":
            await state.resolver.infer_suggestions(args.text)
        elif args.command == "open":
            url = await state.resolver.enter(args.text)
            if url is None:
                console.print("Nothing to open", style="yellow", highlight=False)
                return 1
        else:
            for name in await state.source.load():
                console.print(name, markup=False, highlight=False)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = Settings()
    except ValidationError as exc:
        print(f"omnibox: invalid configuration\n{exc}", file=sys.stderr)
        return EXIT_USAGE

    configure_logging(settings.logging)
    console = Console(soft_wrap=True)
    return asyncio.run(_run(args, settings, console))
