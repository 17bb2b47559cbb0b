"""Unit tests for omnibox.resolver."""

from __future__ import annotations

import asyncio

from omnibox.commands import Command, CommandRegistry
from omnibox.models import Suggestion
from omnibox.resolver import NO_REPOSITORIES_HINT, UNRECOGNIZED_HINT, ResolverConfig

ORG = "https://github.com/bebanjo"

# ---------------------------------------------------------------------------
# infer_suggestions
# ---------------------------------------------------------------------------


class TestWritingNameSuggestions:
    async def test_ranked_repository_suggestions(
        self, make_resolver, sample_repositories, sink
    ) -> None:
        resolver, _ = make_resolver(sample_repositories)
        suggestions = await resolver.infer_suggestions("mov")

        assert [s.description for s in suggestions] == [
            "movid",
            "movida",
            "movida-account-setup-scripts",
            "tron",
            "support",
        ]
        assert suggestions[0] == Suggestion(destination=f"{ORG}/movid", description="movid")
        assert sink.presented == [suggestions]

    async def test_default_points_at_top_candidate(self, make_resolver, sink) -> None:
        resolver, _ = make_resolver(["movida", "sequence"])
        await resolver.infer_suggestions("mov")

        assert len(sink.defaults) == 1
        default = sink.defaults[0]
        assert "<match>#</match>" in default
        assert "<match>movida</match>" in default
        assert f"<match>{ORG}/movida</match>" in default

    async def test_fewer_candidates_than_limit(self, make_resolver, sink) -> None:
        resolver, _ = make_resolver(["movida", "tron"])
        suggestions = await resolver.infer_suggestions("tr")
        assert [s.description for s in suggestions] == ["tron", "movida"]

    async def test_limit_from_config(
        self, make_resolver, sample_repositories, resolver_config
    ) -> None:
        config = ResolverConfig(
            base_url=resolver_config.base_url,
            commands=resolver_config.commands,
            suggestion_limit=2,
        )
        resolver, _ = make_resolver(sample_repositories, config)
        assert len(await resolver.infer_suggestions("s")) == 2

    async def test_no_candidates(self, make_resolver, sink) -> None:
        resolver, _ = make_resolver([])
        suggestions = await resolver.infer_suggestions("anything")

        assert suggestions == []
        assert sink.presented == [[]]
        assert sink.defaults == [NO_REPOSITORIES_HINT]

    async def test_names_are_escaped_in_descriptions(self, make_resolver) -> None:
        resolver, _ = make_resolver(["a<b>&c"])
        suggestions = await resolver.infer_suggestions("a")
        assert suggestions[0].description == "a&lt;b&gt;&amp;c"


class TestNameConfirmedSuggestions:
    async def test_one_suggestion_per_command(self, make_resolver, sink) -> None:
        resolver, _ = make_resolver(["movida", "sequence"])
        suggestions = await resolver.infer_suggestions("movida#")

        assert suggestions == [
            Suggestion(destination=f"{ORG}/movida/pulls", description="movida#p"),
            Suggestion(destination=f"{ORG}/movida/issues", description="movida#i"),
            Suggestion(destination=f"{ORG}/movida/wiki/_pages", description="movida#w"),
            Suggestion(destination=f"{ORG}/movida/issues/123", description="movida#\\d+"),
        ]

    async def test_ranks_against_name_fragment(self, make_resolver) -> None:
        resolver, _ = make_resolver(["movida", "sequence"])
        suggestions = await resolver.infer_suggestions("seq#")
        assert suggestions[0].destination == f"{ORG}/sequence/pulls"

    async def test_default_lists_every_trigger(self, make_resolver, sink) -> None:
        resolver, _ = make_resolver(["movida"])
        await resolver.infer_suggestions("movida#")

        assert sink.defaults == [
            "Type one of [<match>p</match> (pull requests) | <match>i</match> (issues) | "
            "<match>w</match> (wiki) | <match>\\d+</match> (issue detail)]"
        ]

    async def test_no_candidates_still_lists_triggers(self, make_resolver, sink) -> None:
        resolver, _ = make_resolver([])
        assert await resolver.infer_suggestions("movida#") == []
        assert sink.defaults[0].startswith("Type one of [")


class TestCommandTypedSuggestions:
    async def test_default_is_destination(self, make_resolver, sink) -> None:
        resolver, _ = make_resolver(["movida", "sequence"])
        suggestions = await resolver.infer_suggestions("movida#p")

        assert suggestions == []
        assert sink.presented == [[]]
        assert sink.defaults == [f"{ORG}/movida/pulls"]

    async def test_issue_number_in_destination(self, make_resolver, sink) -> None:
        resolver, _ = make_resolver(["movida"])
        await resolver.infer_suggestions("movida#42")
        assert sink.defaults == [f"{ORG}/movida/issues/42"]

    async def test_no_candidates(self, make_resolver, sink) -> None:
        resolver, _ = make_resolver([])
        await resolver.infer_suggestions("movida#p")
        assert sink.defaults == [NO_REPOSITORIES_HINT]


class TestUnrecognizedSuggestions:
    async def test_static_hint_without_lookup(self, make_resolver, sink) -> None:
        resolver, source = make_resolver(["movida"])
        suggestions = await resolver.infer_suggestions("mov!")

        assert suggestions == []
        assert sink.presented == [[]]
        assert sink.defaults == [UNRECOGNIZED_HINT]
        assert source.calls == 0


class TestSinkContract:
    async def test_sink_called_once_per_inference(self, make_resolver, sink) -> None:
        resolver, _ = make_resolver(["movida"])
        for text in ["mov", "movida#", "movida#i", "a#b#c"]:
            await resolver.infer_suggestions(text)
        assert len(sink.presented) == 4
        assert len(sink.defaults) == 4

    async def test_overlapping_inferences_last_write_wins(self, make_resolver, sink) -> None:
        resolver, _ = make_resolver(["movida", "tron"])
        await asyncio.gather(
            resolver.infer_suggestions("movida#p"),
            resolver.infer_suggestions("tron#i"),
        )
        assert len(sink.defaults) == 2
        assert set(sink.defaults) == {f"{ORG}/movida/pulls", f"{ORG}/tron/issues"}


# ---------------------------------------------------------------------------
# enter
# ---------------------------------------------------------------------------


class TestEnter:
    async def test_writing_name_opens_top_repository(self, make_resolver, navigator) -> None:
        resolver, _ = make_resolver(["movida-account-setup-scripts", "movid"])
        assert await resolver.enter("mov") == f"{ORG}/movid"
        assert navigator.opened == [f"{ORG}/movid"]

    async def test_name_confirmed_opens_repository_page(self, make_resolver, navigator) -> None:
        resolver, _ = make_resolver(["movida", "sequence"])
        await resolver.enter("sequence#")
        assert navigator.opened == [f"{ORG}/sequence"]

    async def test_command_opens_pull_requests(self, make_resolver, navigator) -> None:
        resolver, _ = make_resolver(["movida", "sequence"])
        await resolver.enter("movida#p")
        assert navigator.opened == [f"{ORG}/movida/pulls"]

    async def test_numeric_command_opens_issue(self, make_resolver, navigator) -> None:
        resolver, _ = make_resolver(["movida"])
        await resolver.enter("movida#42")
        assert navigator.opened == [f"{ORG}/movida/issues/42"]

    async def test_command_ranks_against_name_fragment(self, make_resolver, navigator) -> None:
        resolver, _ = make_resolver(["movida", "sequence"])
        await resolver.enter("seq#w")
        assert navigator.opened == [f"{ORG}/sequence/wiki/_pages"]

    async def test_no_candidates_means_no_navigation(self, make_resolver, navigator) -> None:
        resolver, _ = make_resolver([])
        for text in ["anything", "anything#", "anything#p"]:
            assert await resolver.enter(text) is None
        assert navigator.opened == []

    async def test_unrecognized_is_noop(self, make_resolver, navigator) -> None:
        resolver, source = make_resolver(["movida"])
        assert await resolver.enter("movida#zz") is None
        assert await resolver.enter("a#b#c") is None
        assert navigator.opened == []
        assert source.calls == 0

    async def test_first_registered_command_wins(
        self, make_resolver, navigator, resolver_config
    ) -> None:
        commands = CommandRegistry(
            [
                Command(r"4\d", "forties", lambda name, fragment: f"first/{name}/{fragment}"),
                Command(r"\d+", "numbers", lambda name, fragment: f"second/{name}/{fragment}"),
            ]
        )
        config = ResolverConfig(base_url=resolver_config.base_url, commands=commands)
        resolver, _ = make_resolver(["movida"], config)

        await resolver.enter("movida#42")
        assert navigator.opened == ["first/movida/42"]

    async def test_navigates_exactly_once(self, make_resolver, navigator) -> None:
        resolver, _ = make_resolver(["movida", "movida", "sequence"])
        await resolver.enter("movida#i")
        assert navigator.opened == [f"{ORG}/movida/issues"]
