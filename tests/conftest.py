from __future__ import annotations

import os
import sys
from collections import Counter
from pathlib import Path
from typing import Sequence

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
SANDBOX_HOME = ROOT / ".test_place" / "global-home"
os.environ.setdefault("WORKFLOWKIT_HOME", str(SANDBOX_HOME))
SANDBOX_HOME.mkdir(parents=True, exist_ok=True)
PYTEST_TEMP = Path(os.environ.get("PYTEST_DEBUG_TEMPROOT", "/tmp/workflowkit-pytest")).resolve()
os.environ.setdefault("PYTEST_DEBUG_TEMPROOT", str(PYTEST_TEMP))
PYTEST_TEMP.mkdir(parents=True, exist_ok=True)
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from workflowkit.app.workflow import Workflow  # noqa: E402
from workflowkit.ports.updater import UpdateError, Updater  # noqa: E402
from workflowkit.settings import RuntimeSettings  # noqa: E402


class RecordingAction:
    """Magic action double that counts accessor and effect calls."""

    def __init__(self, keyword: str = "test", *, fail: bool = False) -> None:
        self._keyword = keyword
        self._fail = fail
        self.calls: Counter[str] = Counter()

    @property
    def keyword(self) -> str:
        self.calls["keyword"] += 1
        return self._keyword

    @property
    def description(self) -> str:
        self.calls["description"] += 1
        return "Just a test"

    @property
    def run_text(self) -> str:
        self.calls["run_text"] += 1
        return "Performing test…"

    def run(self) -> None:
        self.calls["run"] += 1
        if self._fail:
            raise RuntimeError("requested error")

    def was_shown(self) -> bool:
        return (
            self.calls["keyword"] > 0
            and self.calls["description"] > 0
            and self.calls["run"] == 0
            and self.calls["run_text"] == 0
        )

    def was_run(self) -> bool:
        return (
            self.calls["keyword"] > 0
            and self.calls["description"] == 0
            and self.calls["run"] == 1
            and self.calls["run_text"] == 1
        )


class ExitRecorder:
    def __init__(self) -> None:
        self.codes: list[int] = []

    def __call__(self, code: int) -> None:
        self.codes.append(code)


class ExecRecorder:
    def __init__(self) -> None:
        self.commands: list[list[str]] = []

    def __call__(self, command: Sequence[str]) -> None:
        self.commands.append(list(command))

    @property
    def last(self) -> list[str]:
        return self.commands[-1]


class RecordingUpdater(Updater):
    def __init__(self, *, available: bool = True, check_error: bool = False) -> None:
        self.available = available
        self.check_error = check_error
        self.calls: list[str] = []

    def check_for_update(self) -> None:
        self.calls.append("check_for_update")
        if self.check_error:
            raise UpdateError("release feed unavailable")

    def update_available(self) -> bool:
        self.calls.append("update_available")
        return self.available

    def install(self) -> None:
        self.calls.append("install")


@pytest.fixture()
def runtime_settings(tmp_path: Path) -> RuntimeSettings:
    """Isolated workflow directories under the test's tmp_path."""
    return RuntimeSettings(
        bundle_id="net.workflowkit.test",
        cache_dir=tmp_path / "cache",
        data_dir=tmp_path / "data",
        open_command="open",
        version="0.4.0",
    )


@pytest.fixture()
def make_action():
    return RecordingAction


@pytest.fixture()
def exit_recorder() -> ExitRecorder:
    return ExitRecorder()


@pytest.fixture()
def exec_recorder() -> ExecRecorder:
    return ExecRecorder()


@pytest.fixture()
def make_updater():
    return RecordingUpdater


@pytest.fixture()
def workflow(runtime_settings: RuntimeSettings, exec_recorder: ExecRecorder, exit_recorder: ExitRecorder) -> Workflow:
    return Workflow(runtime_settings, exec_func=exec_recorder, exit_func=exit_recorder)
