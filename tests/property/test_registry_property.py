from __future__ import annotations

import io

from hypothesis import given, settings
from hypothesis import strategies as st

from workflowkit.app.magic.service import MagicActions
from workflowkit.domain.magic import Executed, MagicActionRegistry, NotHandled, Shown

PREFIX = "workflow:"

_keyword = st.text(alphabet="abcdeflogt", min_size=1, max_size=6)
_keywords = st.lists(_keyword, min_size=0, max_size=8, unique=True)


class QuietAction:
    description = "quiet"
    run_text = "Running…"

    def __init__(self, keyword: str) -> None:
        self.keyword = keyword
        self.runs = 0

    def run(self) -> None:
        self.runs += 1


def _magic(keywords: list[str]) -> tuple[MagicActions, list[QuietAction]]:
    actions = [QuietAction(keyword) for keyword in keywords]
    registry = MagicActionRegistry()
    registry.register(*actions)
    exits: list[int] = []
    return MagicActions(registry, exit_func=exits.append, stream=io.StringIO()), actions


@settings(max_examples=100)
@given(keywords=_keywords, query=_keyword)
def test_filter_is_ordered_substring_match(keywords: list[str], query: str) -> None:
    magic, actions = _magic(keywords)

    matched = magic.registry.filter(query)

    assert matched == [action for action in actions if query in action.keyword]


@settings(max_examples=100)
@given(keywords=_keywords, query=st.text(alphabet="abcdeflogt", max_size=6))
def test_dispatch_outcome_matches_lookup(keywords: list[str], query: str) -> None:
    magic, actions = _magic(keywords)

    outcome = magic.dispatch([PREFIX + query], PREFIX)

    if query in keywords:
        assert isinstance(outcome, Executed)
        assert outcome.action.keyword == query
        assert sum(action.runs for action in actions) == 1
    else:
        assert isinstance(outcome, Shown)
        assert all(query in action.keyword for action in outcome.actions)
        assert sum(action.runs for action in actions) == 0


@settings(max_examples=50)
@given(keywords=_keywords, argv=st.lists(st.text(max_size=12), max_size=4))
def test_unprefixed_argv_is_untouched(keywords: list[str], argv: list[str]) -> None:
    magic, _ = _magic(keywords)
    if argv and argv[0].startswith(PREFIX):
        argv = ["plain", *argv]
    original = list(argv)

    result, handled = magic.handle_args(argv, PREFIX)

    assert handled is False
    assert result is argv
    assert argv == original
    assert isinstance(magic.dispatch(argv, PREFIX), NotHandled)


@settings(max_examples=50)
@given(keywords=_keywords, query=st.text(alphabet="abcdeflogt", max_size=6))
def test_repeated_listing_is_identical(keywords: list[str], query: str) -> None:
    magic, _ = _magic([keyword for keyword in keywords if keyword != query])

    first = magic.dispatch([PREFIX + query], PREFIX)
    second = magic.dispatch([PREFIX + query], PREFIX)

    assert first == second
