"""
lere_control - Command and event glue

Bounded Context: Translating host commands/events into registry calls
Responsibilities:
  - Sub-command registration and dispatch (CommandRegistry)
  - ``/zone`` and ``/access`` handlers
  - Join gate (kick when not whitelisted)
"""

from .registry import CommandRegistry, CommandNotAvailableError
from .commands import ZoneCommand, AccessCommand, ADMIN_PERMISSION
from .listeners import JoinGate, DEFAULT_KICK_MESSAGE

__all__ = [
    "CommandRegistry",
    "CommandNotAvailableError",
    "ZoneCommand",
    "AccessCommand",
    "ADMIN_PERMISSION",
    "JoinGate",
    "DEFAULT_KICK_MESSAGE",
]
