"""Release updater for workflows distributed through PyPI."""

from __future__ import annotations

import json
import os
import subprocess
import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import requests
from packaging.version import InvalidVersion, Version

from workflowkit.ports.updater import UpdateError, Updater
from workflowkit.settings import RuntimeSettings
from workflowkit.utils.telemetry import record_event

PYPI_URL = "https://pypi.org/pypi/{package}/json"
STATE_FILENAME = "update.json"
REQUEST_TIMEOUT = 5


@dataclass
class UpdateState:
    last_checked: datetime | None = None
    latest_version: str | None = None
    status: str | None = None

    @classmethod
    def from_file(cls, path: Path) -> "UpdateState":
        if not path.exists():
            return cls()
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            return cls()
        last_checked = None
        if ts := data.get("last_checked"):
            try:
                last_checked = datetime.fromisoformat(ts)
            except ValueError:
                last_checked = None
        return cls(
            last_checked=last_checked,
            latest_version=data.get("latest_version"),
            status=data.get("status"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "last_checked": self.last_checked.isoformat() if self.last_checked else None,
            "latest_version": self.latest_version,
            "status": self.status,
        }


def _parse_version(value: str | None) -> Version | None:
    if value is None:
        return None
    try:
        return Version(value)
    except InvalidVersion:
        return None


def _determine_update_mode() -> str:
    env = os.environ.get("WORKFLOWKIT_UPDATE_MODE", "pip")
    return env if env in {"pip", "pipx"} else "pip"


def _perform_update(package: str, mode: str) -> subprocess.CompletedProcess[bytes]:
    if mode == "pipx":
        command = ["pipx", "install", package, "--force"]
    else:
        command = [sys.executable, "-m", "pip", "install", "--upgrade", package]
    return subprocess.run(command, capture_output=True)


class ReleaseUpdater(Updater):
    """Updater backed by the PyPI JSON API and pip/pipx."""

    def __init__(
        self,
        settings: RuntimeSettings,
        package: str,
        current_version: str | None = None,
        *,
        session: requests.Session | None = None,
    ) -> None:
        self._settings = settings
        self._package = package
        self._current_version = current_version or settings.version
        self._session = session or requests.Session()

    @property
    def state_path(self) -> Path:
        return self._settings.cache_dir / STATE_FILENAME

    def load_state(self) -> UpdateState:
        return UpdateState.from_file(self.state_path)

    def check_for_update(self) -> None:
        state = self.load_state()
        state.last_checked = datetime.now(timezone.utc)
        try:
            remote_version = self._fetch_remote_version()
        except UpdateError:
            state.status = "error"
            self._store_state(state)
            record_event(self._settings, "update-check", {"package": self._package}, level="error", status="fetch_failed")
            raise
        state.latest_version = remote_version
        state.status = "ok"
        self._store_state(state)
        record_event(
            self._settings,
            "update-check",
            {"package": self._package, "current": self._current_version, "remote": remote_version},
            status="ok",
        )

    def update_available(self) -> bool:
        state = self.load_state()
        current = _parse_version(self._current_version)
        remote = _parse_version(state.latest_version)
        if current is None or remote is None:
            return False
        return remote > current

    def install(self) -> None:
        state = self.load_state()
        if state.latest_version is None:
            raise UpdateError(f"No release information for {self._package}; check for updates first")
        mode = _determine_update_mode()
        result = _perform_update(self._package, mode)
        status = "succeeded" if result.returncode == 0 else "failed"
        record_event(
            self._settings,
            "update-install",
            {
                "package": self._package,
                "mode": mode,
                "exit_code": result.returncode,
                "current": self._current_version,
                "remote": state.latest_version,
            },
            level="info" if result.returncode == 0 else "error",
            status=status,
        )
        if result.returncode != 0:
            stderr = result.stderr.decode("utf-8", errors="replace").strip() if result.stderr else ""
            raise UpdateError(f"{mode} install of {self._package} failed with exit code {result.returncode}: {stderr}")

    def _fetch_remote_version(self) -> str:
        url = PYPI_URL.format(package=self._package)
        try:
            response = self._session.get(
                url,
                headers={"User-Agent": "workflowkit-updater"},
                timeout=REQUEST_TIMEOUT,
            )
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise UpdateError(f"Unable to fetch release data for {self._package}: {exc}") from exc
        releases = payload.get("releases", {}) if isinstance(payload, dict) else {}
        versions = [version for version in (_parse_version(v) for v, files in releases.items() if files) if version]
        if not versions:
            raise UpdateError(f"No releases published for {self._package}")
        return str(max(versions))

    def _store_state(self, state: UpdateState) -> None:
        path = self.state_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(state.to_dict(), indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


__all__ = ["ReleaseUpdater", "UpdateState", "PYPI_URL", "STATE_FILENAME"]
