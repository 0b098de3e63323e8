"""Magic actions every workflow gets for free."""

from __future__ import annotations

from pathlib import Path
from typing import List, Protocol

from workflowkit.domain.magic import MagicAction
from workflowkit.ports.updater import Updater


class WorkflowFiles(Protocol):  # pragma: no cover
    def cache_dir(self) -> Path:
        ...

    def data_dir(self) -> Path:
        ...

    def log_file(self) -> Path:
        ...

    def open(self, target: Path | str) -> None:
        ...

    def clear_cache(self) -> None:
        ...

    def clear_data(self) -> None:
        ...


class OpenLogAction:
    keyword = "log"
    description = "Open workflow's log file"
    run_text = "Opening log file…"

    def __init__(self, workflow: WorkflowFiles) -> None:
        self._workflow = workflow

    def run(self) -> None:
        self._workflow.open(self._workflow.log_file())


class OpenCacheAction:
    keyword = "cache"
    description = "Open workflow's cache directory"
    run_text = "Opening cache directory…"

    def __init__(self, workflow: WorkflowFiles) -> None:
        self._workflow = workflow

    def run(self) -> None:
        self._workflow.open(self._workflow.cache_dir())


class ClearCacheAction:
    keyword = "delcache"
    description = "Delete workflow's cached data"
    run_text = "Deleted workflow cache."

    def __init__(self, workflow: WorkflowFiles) -> None:
        self._workflow = workflow

    def run(self) -> None:
        self._workflow.clear_cache()


class OpenDataAction:
    keyword = "data"
    description = "Open workflow's data directory"
    run_text = "Opening data directory…"

    def __init__(self, workflow: WorkflowFiles) -> None:
        self._workflow = workflow

    def run(self) -> None:
        self._workflow.open(self._workflow.data_dir())


class ClearDataAction:
    keyword = "deldata"
    description = "Delete workflow's saved data"
    run_text = "Deleted workflow saved data."

    def __init__(self, workflow: WorkflowFiles) -> None:
        self._workflow = workflow

    def run(self) -> None:
        self._workflow.clear_data()


class HelpAction:
    keyword = "help"
    description = "Open workflow help URL in default browser"
    run_text = "Opening help in your browser…"

    def __init__(self, workflow: WorkflowFiles, url: str) -> None:
        self._workflow = workflow
        self.url = url

    def run(self) -> None:
        self._workflow.open(self.url)


class UpdateAction:
    """Checks for a newer release and installs it when there is one."""

    keyword = "update"
    description = "Check for updates, and install if one is available"
    run_text = "Fetching update…"

    def __init__(self, updater: Updater) -> None:
        self._updater = updater

    def run(self) -> None:
        self._updater.check_for_update()
        if self._updater.update_available():
            self._updater.install()


def default_actions(workflow: WorkflowFiles) -> List[MagicAction]:
    return [
        OpenLogAction(workflow),
        OpenCacheAction(workflow),
        ClearCacheAction(workflow),
        OpenDataAction(workflow),
        ClearDataAction(workflow),
    ]


__all__ = [
    "ClearCacheAction",
    "ClearDataAction",
    "HelpAction",
    "OpenCacheAction",
    "OpenDataAction",
    "OpenLogAction",
    "UpdateAction",
    "default_actions",
]
