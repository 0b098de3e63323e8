"""Dispatch of reserved-prefix arguments to magic actions."""

from __future__ import annotations

import sys
import time
from typing import Any, Callable, Sequence, TextIO

import jsonschema

from workflowkit.domain.feed import ICON_BUSY, ICON_WORKFLOW, Feed, FeedError
from workflowkit.domain.magic import (
    DispatchOutcome,
    Executed,
    MagicAction,
    MagicActionError,
    MagicActionRegistry,
    NotHandled,
    Shown,
)
from workflowkit.settings import RuntimeSettings
from workflowkit.utils.telemetry import MAGIC_EVENT, record_event

ExitFunc = Callable[[int], Any]
FeedFactory = Callable[[], Feed]

EMPTY_TITLE = "No matching action"
EMPTY_SUBTITLE = "Try another query?"


class MagicActions:
    """Intercepts ``<prefix><query>`` as the first argument.

    An exact keyword match runs that action; anything else lists the actions
    whose keyword contains the query. Either way the invocation is consumed and
    :meth:`args` ends the process through the exit hook.
    """

    def __init__(
        self,
        registry: MagicActionRegistry | None = None,
        *,
        settings: RuntimeSettings | None = None,
        feed_factory: FeedFactory = Feed,
        exit_func: ExitFunc | None = None,
        stream: TextIO | None = None,
    ) -> None:
        self._registry = registry if registry is not None else MagicActionRegistry()
        self._settings = settings
        self._feed_factory = feed_factory
        self._exit_func = exit_func
        self._stream = stream
        self.last_feed: Feed | None = None

    @property
    def registry(self) -> MagicActionRegistry:
        return self._registry

    def register(self, *actions: MagicAction) -> None:
        self._registry.register(*actions)

    def args(self, argv: Sequence[str], prefix: str) -> Sequence[str]:
        """Handle magic arguments and exit, or return ``argv`` untouched."""

        argv, handled = self.handle_args(argv, prefix)
        if handled:
            exit_func = self._exit_func if self._exit_func is not None else sys.exit
            exit_func(0)
        return argv

    def handle_args(self, argv: Sequence[str], prefix: str) -> tuple[Sequence[str], bool]:
        outcome = self.dispatch(argv, prefix)
        if isinstance(outcome, NotHandled):
            return outcome.argv, False
        return argv, True

    def dispatch(self, argv: Sequence[str], prefix: str) -> DispatchOutcome:
        if not argv or not argv[0].startswith(prefix):
            return NotHandled(argv)
        query = argv[0][len(prefix):]
        self._registry.seal()
        action = self._registry.lookup(query)
        if action is None:
            return self._show(query, prefix)
        return self._execute(action, query)

    def _show(self, query: str, prefix: str) -> Shown:
        actions = tuple(self._registry.filter(query))
        feed = self._feed_factory()
        for action in actions:
            keyword = action.keyword
            feed.add_item(
                keyword,
                action.description,
                uid=f"workflowkit-magic-{keyword}",
                autocomplete=prefix + keyword,
                valid=False,
                icon=ICON_WORKFLOW,
            )
        feed.warn_empty(EMPTY_TITLE, EMPTY_SUBTITLE)
        self._send(feed)
        self._record(MAGIC_EVENT, {"query": query, "matches": len(actions)}, status="shown")
        return Shown(query=query, actions=actions)

    def _execute(self, action: MagicAction, keyword: str) -> Executed:
        run_text = action.run_text
        feed = self._feed_factory()
        feed.add_item(_title(run_text, keyword), icon=ICON_BUSY)
        self._send(feed)
        started = time.monotonic()
        try:
            action.run()
        except Exception as exc:
            error = MagicActionError(keyword, exc)
            error.__cause__ = exc
            print(f"wfkit: {error}", file=sys.stderr)
            self._record(
                MAGIC_EVENT,
                {"keyword": keyword, "error": str(exc), "error_type": type(exc).__name__},
                level="error",
                status="failed",
                duration_ms=(time.monotonic() - started) * 1000,
            )
            return Executed(action=action, error=error)
        self._record(
            MAGIC_EVENT,
            {"keyword": keyword},
            status="succeeded",
            duration_ms=(time.monotonic() - started) * 1000,
        )
        return Executed(action=action)

    def _send(self, feed: Feed) -> None:
        self.last_feed = feed
        try:
            feed.send(self._stream)
        except (OSError, FeedError) as exc:
            print(f"wfkit: could not send feed: {exc}", file=sys.stderr)

    def _record(self, event: str, payload: dict[str, Any], **extra: Any) -> None:
        if self._settings is None:
            return
        try:
            record_event(self._settings, event, payload, component="magic", **extra)
        except (OSError, ValueError, jsonschema.ValidationError) as exc:
            print(f"wfkit: could not record {event} event: {exc}", file=sys.stderr)


def _title(text: Any, fallback: str) -> str:
    if isinstance(text, str) and text.strip():
        return text
    return fallback


__all__ = ["MagicActions", "EMPTY_TITLE", "EMPTY_SUBTITLE"]
