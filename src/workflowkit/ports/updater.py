"""Port definition for workflow self-updaters."""

from __future__ import annotations

from abc import ABC, abstractmethod


class UpdateError(RuntimeError):
    """Raised when checking for or installing an update fails."""


class Updater(ABC):
    """Checks for and installs newer releases of a workflow."""

    @abstractmethod
    def check_for_update(self) -> None:
        """Fetch release information and remember the newest version."""

    @abstractmethod
    def update_available(self) -> bool:
        """Return True when the last check found a newer release."""

    @abstractmethod
    def install(self) -> None:
        """Install the newest release."""
