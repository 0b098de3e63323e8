"""Magic actions declared in a YAML descriptor."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List

from workflowkit.adapters.process import ExecFunc


class CommandActionError(ValueError):
    """Raised when the magic action descriptor is malformed."""


@dataclass
class CommandAction:
    keyword: str
    description: str
    run_text: str
    exec: List[str]
    runner: ExecFunc

    def run(self) -> None:
        self.runner(list(self.exec))


def load_command_actions(path: Path, runner: ExecFunc) -> List[CommandAction]:
    import yaml  # lazy import to keep import cost low

    if not path.exists():
        raise FileNotFoundError(f"Magic action descriptor missing: {path}")
    data = yaml.safe_load(path.read_text("utf-8")) or {}
    if not isinstance(data, dict):
        raise CommandActionError(f"Invalid {path.name} structure: top level is not a mapping")
    entries = data.get("magic_actions", {}) or {}
    if not isinstance(entries, dict):
        raise CommandActionError(f"Invalid {path.name} structure: magic_actions is not a mapping")
    actions: list[CommandAction] = []
    for name, payload in entries.items():
        keyword = str(name)
        if not isinstance(payload, dict):
            raise CommandActionError(f"Magic action {keyword} must be a mapping")
        exec_cmd = payload.get("exec")
        if not isinstance(exec_cmd, list) or not exec_cmd or not all(isinstance(arg, str) for arg in exec_cmd):
            raise CommandActionError(f"Magic action {keyword} exec must be a non-empty list of strings")
        actions.append(
            CommandAction(
                keyword=keyword,
                description=str(payload.get("description", "")),
                run_text=str(payload.get("run_text") or f"Running {keyword}…"),
                exec=list(exec_cmd),
                runner=runner,
            )
        )
    return actions


__all__ = ["CommandAction", "CommandActionError", "load_command_actions"]
