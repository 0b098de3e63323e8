"""Subprocess adapter used by workflow actions."""

from __future__ import annotations

import subprocess
from typing import Callable, Sequence

ExecFunc = Callable[[Sequence[str]], None]


class ProcessError(RuntimeError):
    """Raised when a spawned command is missing or exits non-zero."""


def run_command(command: Sequence[str]) -> None:
    args = list(command)
    try:
        result = subprocess.run(args, capture_output=True)
    except FileNotFoundError as exc:
        missing = args[0] if args else "<unknown>"
        raise ProcessError(f"Executable not found: {missing}") from exc
    if result.returncode != 0:
        stderr = result.stderr.decode("utf-8", errors="replace").strip() if result.stderr else ""
        raise ProcessError(f"Command {args!r} exited with code {result.returncode}: {stderr}")


__all__ = ["ExecFunc", "ProcessError", "run_command"]
