"""Workflow object: runtime directories, options and magic actions."""

from __future__ import annotations

import shutil
import sys
from pathlib import Path
from typing import Any, Dict, Sequence

from workflowkit.adapters.process import ExecFunc, run_command
from workflowkit.app.magic.builtin import HelpAction, UpdateAction, default_actions
from workflowkit.app.magic.commands import load_command_actions
from workflowkit.app.magic.service import ExitFunc, MagicActions
from workflowkit.domain.magic import MagicAction, MagicActionRegistry, RegistrySealedError
from workflowkit.plugins import PluginContext
from workflowkit.plugins.loader import load_plugin_actions
from workflowkit.ports.updater import Updater
from workflowkit.settings import SETTINGS, RuntimeSettings
from workflowkit.utils.telemetry import record_event

OPTIONS = ("help_url", "magic_prefix", "updater")


class Workflow:
    """Entry point for workflow scripts.

    Built-in magic actions are registered on construction; ``help_url`` and
    ``updater`` add the ``help`` and ``update`` actions. All registration
    happens before the first call to :meth:`args`, after which the registry
    is sealed.
    """

    def __init__(
        self,
        settings: RuntimeSettings | None = None,
        *,
        help_url: str | None = None,
        magic_prefix: str | None = None,
        updater: Updater | None = None,
        exec_func: ExecFunc | None = None,
        exit_func: ExitFunc | None = None,
        load_commands: bool = True,
        load_plugins: bool = False,
    ) -> None:
        self._settings = settings or SETTINGS
        self.exec_func: ExecFunc = exec_func or run_command
        self._help_url: str | None = None
        self._magic_prefix = self._settings.magic_prefix
        self._updater: Updater | None = None
        self.magic_actions = MagicActions(
            MagicActionRegistry(),
            settings=self._settings,
            exit_func=exit_func,
        )
        self.magic_actions.register(*default_actions(self))
        options = {"help_url": help_url, "magic_prefix": magic_prefix, "updater": updater}
        self.configure(**{name: value for name, value in options.items() if value is not None})
        descriptor = self._settings.command_descriptor
        if load_commands and descriptor.exists():
            self.register_magic_action(*load_command_actions(descriptor, self._exec))
        if load_plugins:
            self.register_magic_action(*load_plugin_actions(PluginContext(workflow=self, settings=self._settings)))

    @property
    def settings(self) -> RuntimeSettings:
        return self._settings

    @property
    def registry(self) -> MagicActionRegistry:
        return self.magic_actions.registry

    @property
    def help_url(self) -> str | None:
        return self._help_url

    @property
    def magic_prefix(self) -> str:
        return self._magic_prefix

    @property
    def updater(self) -> Updater | None:
        return self._updater

    def configure(self, **options: Any) -> Dict[str, Any]:
        """Apply options and return their previous values.

        Passing the returned mapping back to ``configure`` reverts the change.
        """

        unknown = sorted(set(options) - set(OPTIONS))
        if unknown:
            raise TypeError(f"Unknown workflow option(s): {', '.join(unknown)}")
        if self.registry.sealed and ({"help_url", "updater"} & set(options)):
            raise RegistrySealedError("Magic actions cannot change after dispatch")
        previous: Dict[str, Any] = {}
        if "magic_prefix" in options:
            previous["magic_prefix"] = self._magic_prefix
            self._set_magic_prefix(options["magic_prefix"])
        if "help_url" in options:
            previous["help_url"] = self._help_url
            self._set_help_url(options["help_url"])
        if "updater" in options:
            previous["updater"] = self._updater
            self._set_updater(options["updater"])
        return previous

    def register_magic_action(self, *actions: MagicAction) -> None:
        self.magic_actions.register(*actions)

    def args(self, argv: Sequence[str] | None = None) -> Sequence[str]:
        """Return command-line arguments, handling magic arguments first.

        A magic argument ends the process, so this only returns for normal
        invocations.
        """

        if argv is None:
            argv = sys.argv[1:]
        return self.magic_actions.args(argv, self._magic_prefix)

    def cache_dir(self) -> Path:
        path = self._settings.cache_dir
        path.mkdir(parents=True, exist_ok=True)
        return path

    def data_dir(self) -> Path:
        path = self._settings.data_dir
        path.mkdir(parents=True, exist_ok=True)
        return path

    def log_file(self) -> Path:
        path = self._settings.log_file
        path.parent.mkdir(parents=True, exist_ok=True)
        path.touch(exist_ok=True)
        return path

    def open(self, target: Path | str) -> None:
        self.exec_func([self._settings.open_command, str(target)])

    def clear_cache(self) -> None:
        removed = _clear_directory(self._settings.cache_dir)
        record_event(self._settings, "clear-cache", {"removed": removed})

    def clear_data(self) -> None:
        removed = _clear_directory(self._settings.data_dir)
        record_event(self._settings, "clear-data", {"removed": removed})

    def _exec(self, command: Sequence[str]) -> None:
        self.exec_func(command)

    def _set_magic_prefix(self, prefix: str | None) -> None:
        if prefix is None:
            prefix = self._settings.magic_prefix
        if not isinstance(prefix, str) or not prefix:
            raise ValueError("Magic prefix must be a non-empty string")
        self._magic_prefix = prefix

    def _set_help_url(self, url: str | None) -> None:
        self.registry.unregister(HelpAction.keyword)
        if url:
            self.registry.register(HelpAction(self, url))
        self._help_url = url or None

    def _set_updater(self, updater: Updater | None) -> None:
        self.registry.unregister(UpdateAction.keyword)
        if updater is not None:
            self.registry.register(UpdateAction(updater))
        self._updater = updater


def _clear_directory(path: Path) -> int:
    if not path.exists():
        return 0
    removed = 0
    for entry in path.iterdir():
        if entry.is_dir() and not entry.is_symlink():
            shutil.rmtree(entry)
        else:
            entry.unlink()
        removed += 1
    return removed


__all__ = ["OPTIONS", "Workflow"]
