"""Plugin discovery for third-party magic actions."""

from __future__ import annotations

from dataclasses import dataclass
from importlib import metadata
from typing import Iterable, Protocol

from workflowkit.app.magic.builtin import WorkflowFiles
from workflowkit.domain.magic import MagicAction
from workflowkit.settings import RuntimeSettings

ENTRY_POINT_GROUP = "workflowkit.magic_actions"


@dataclass(frozen=True)
class PluginContext:
    workflow: WorkflowFiles
    settings: RuntimeSettings


class MagicActionFactory(Protocol):  # pragma: no cover
    def __call__(self, context: PluginContext) -> MagicAction | Iterable[MagicAction]:
        ...


class PluginError(RuntimeError):
    """Raised when an entry point does not provide magic actions."""


def iter_entry_points() -> Iterable[metadata.EntryPoint]:
    return metadata.entry_points().select(group=ENTRY_POINT_GROUP)
