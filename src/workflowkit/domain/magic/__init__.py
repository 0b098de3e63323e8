"""Magic action domain: capability protocol, outcomes and registry."""

from .action import DispatchOutcome, Executed, MagicAction, MagicActionError, NotHandled, Shown
from .registry import DuplicateKeywordError, MagicActionRegistry, RegistrySealedError

__all__ = [
    "DispatchOutcome",
    "DuplicateKeywordError",
    "Executed",
    "MagicAction",
    "MagicActionError",
    "MagicActionRegistry",
    "NotHandled",
    "RegistrySealedError",
    "Shown",
]
