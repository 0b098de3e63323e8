"""Magic action capability and dispatch outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@runtime_checkable
class MagicAction(Protocol):
    """A debug/utility command reachable through the reserved argument prefix."""

    @property
    def keyword(self) -> str:
        ...

    @property
    def description(self) -> str:
        ...

    @property
    def run_text(self) -> str:
        ...

    def run(self) -> None:
        ...


class MagicActionError(RuntimeError):
    """Raised when a magic action's effect fails."""

    def __init__(self, keyword: str, cause: BaseException) -> None:
        super().__init__(f"magic action '{keyword}' failed: {cause}")
        self.keyword = keyword
        self.cause = cause


@dataclass(frozen=True)
class NotHandled:
    argv: list[str]


@dataclass(frozen=True)
class Shown:
    query: str
    actions: tuple[MagicAction, ...]


@dataclass(frozen=True)
class Executed:
    action: MagicAction
    error: MagicActionError | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


DispatchOutcome = NotHandled | Shown | Executed


__all__ = [
    "DispatchOutcome",
    "Executed",
    "MagicAction",
    "MagicActionError",
    "NotHandled",
    "Shown",
]
