"""Runtime settings for workflowkit workflows."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from workflowkit import __version__

DEFAULT_MAGIC_PREFIX = "workflow:"
DEFAULT_BUNDLE_ID = "net.workflowkit.workflow"
COMMAND_DESCRIPTOR = "magic_actions.yaml"


@dataclass(frozen=True)
class RuntimeSettings:
    bundle_id: str
    cache_dir: Path
    data_dir: Path
    magic_prefix: str = DEFAULT_MAGIC_PREFIX
    open_command: str = "open"
    update_package: str | None = None
    version: str = __version__

    @property
    def log_file(self) -> Path:
        return self.cache_dir / f"{self.bundle_id}.log"

    @property
    def command_descriptor(self) -> Path:
        return self.data_dir / COMMAND_DESCRIPTOR


def truthy(value: str | None) -> bool:
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


def falsy(value: str | None) -> bool:
    if value is None:
        return False
    return value.strip().lower() in {"0", "false", "no", "off"}


def _default_open_command() -> str:
    return "open" if sys.platform == "darwin" else "xdg-open"


def _default_home_dir(env: Mapping[str, str]) -> Path:
    override = env.get("WORKFLOWKIT_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".workflowkit"


def load_settings(environ: Mapping[str, str] | None = None) -> RuntimeSettings:
    """Build settings from Alfred's workflow environment, with local fallbacks."""

    env = os.environ if environ is None else environ
    bundle_id = env.get("alfred_workflow_bundleid") or DEFAULT_BUNDLE_ID
    base = _default_home_dir(env) / bundle_id
    cache_dir = Path(env["alfred_workflow_cache"]).expanduser() if env.get("alfred_workflow_cache") else base / "cache"
    data_dir = Path(env["alfred_workflow_data"]).expanduser() if env.get("alfred_workflow_data") else base / "data"
    return RuntimeSettings(
        bundle_id=bundle_id,
        cache_dir=cache_dir,
        data_dir=data_dir,
        magic_prefix=env.get("WORKFLOWKIT_MAGIC_PREFIX") or DEFAULT_MAGIC_PREFIX,
        open_command=env.get("WORKFLOWKIT_OPEN_COMMAND") or _default_open_command(),
        update_package=env.get("WORKFLOWKIT_UPDATE_PACKAGE") or None,
    )


SETTINGS = load_settings()
