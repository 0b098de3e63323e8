"""Magic action dispatch, built-ins and descriptor-declared actions."""

from .builtin import default_actions  # noqa: F401
from .commands import CommandAction, CommandActionError, load_command_actions  # noqa: F401
from .service import MagicActions  # noqa: F401

__all__ = ["CommandAction", "CommandActionError", "MagicActions", "default_actions", "load_command_actions"]
