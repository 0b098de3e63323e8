"""Runtime plugin loading for magic actions."""

from __future__ import annotations

from typing import Any, List

from workflowkit.domain.magic import MagicAction
from workflowkit.plugins import PluginContext, PluginError, iter_entry_points


def _is_action(candidate: Any) -> bool:
    return not isinstance(candidate, type) and isinstance(candidate, MagicAction)


def _materialise(name: str, plugin: Any, context: PluginContext) -> List[MagicAction]:
    if _is_action(plugin):
        return [plugin]
    if not callable(plugin):
        raise PluginError(f"Plugin {name} is neither a magic action nor a factory")
    produced = plugin(context)
    if _is_action(produced):
        return [produced]
    try:
        actions = list(produced)
    except TypeError as exc:
        raise PluginError(f"Plugin {name} factory returned {type(produced).__name__}") from exc
    for action in actions:
        if not _is_action(action):
            raise PluginError(f"Plugin {name} returned a non-action: {action!r}")
    return actions


def load_plugin_actions(context: PluginContext) -> List[MagicAction]:
    actions: List[MagicAction] = []
    for entry_point in iter_entry_points():
        plugin = entry_point.load()
        actions.extend(_materialise(entry_point.name, plugin, context))
    return actions
