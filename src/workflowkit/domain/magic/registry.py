"""Ordered registry of magic actions."""

from __future__ import annotations

from typing import Iterator, List

from .action import MagicAction


class DuplicateKeywordError(ValueError):
    """Raised when a keyword is registered twice."""


class RegistrySealedError(RuntimeError):
    """Raised when the registry is changed after dispatch has started."""


class MagicActionRegistry:
    """Keeps magic actions in registration order.

    Keywords are read once, when an action is registered, and are unique within
    a registry. After :meth:`seal` the registry is read-only.
    """

    def __init__(self) -> None:
        self._entries: List[tuple[str, MagicAction]] = []
        self._sealed = False

    @property
    def sealed(self) -> bool:
        return self._sealed

    def seal(self) -> None:
        self._sealed = True

    def register(self, *actions: MagicAction) -> None:
        self._ensure_mutable()
        for action in actions:
            keyword = action.keyword
            if not isinstance(keyword, str) or not keyword.strip():
                raise ValueError("Magic action keyword must be a non-empty string")
            if keyword in self:
                raise DuplicateKeywordError(f"Magic action {keyword!r} already registered")
            self._entries.append((keyword, action))

    def unregister(self, keyword: str) -> MagicAction | None:
        self._ensure_mutable()
        for index, (existing, action) in enumerate(self._entries):
            if existing == keyword:
                del self._entries[index]
                return action
        return None

    def lookup(self, keyword: str) -> MagicAction | None:
        for existing, action in self._entries:
            if existing == keyword:
                return action
        return None

    def filter(self, query: str) -> list[MagicAction]:
        return [action for keyword, action in self._entries if query in keyword]

    def keywords(self) -> list[str]:
        return [keyword for keyword, _ in self._entries]

    def items(self) -> list[tuple[str, MagicAction]]:
        return list(self._entries)

    def __contains__(self, keyword: object) -> bool:
        return any(existing == keyword for existing, _ in self._entries)

    def __iter__(self) -> Iterator[MagicAction]:
        return iter([action for _, action in self._entries])

    def __len__(self) -> int:
        return len(self._entries)

    def _ensure_mutable(self) -> None:
        if self._sealed:
            raise RegistrySealedError("Magic action registry is sealed; register actions during configuration")


__all__ = ["DuplicateKeywordError", "MagicActionRegistry", "RegistrySealedError"]
