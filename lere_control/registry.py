"""
CommandRegistry - Explicit sub-command registration

Bounded Context: Command registration and dispatch
Responsibilities:
  - Register sub-commands with handlers and help text
  - Reject unknown sub-commands with the list of available ones
  - Provide introspection (available_commands, get_help)

Threading: Host main thread only (no locking)
"""

from typing import Callable, Dict, List, Set

from lere_zone.host import CommandSender

Handler = Callable[[CommandSender, List[str]], bool]


class CommandNotAvailableError(Exception):
    """Raised when attempting to execute an unregistered command"""
    pass


class CommandRegistry:
    """
    Registry of sub-commands for one top-level command (``/zone``, ``/access``).

    Handlers receive the sender and the remaining arguments.

    Example:
        registry = CommandRegistry()
        registry.register('list', handler.list, "List zones")

        try:
            registry.execute('list', sender, [])
        except CommandNotAvailableError as e:
            sender.send_message(str(e))
    """

    def __init__(self):
        self._commands: Dict[str, Handler] = {}
        self._descriptions: Dict[str, str] = {}

    def register(self, command: str, handler: Handler, description: str) -> None:
        """
        Register a sub-command.

        Args:
            command: Sub-command name (lowercase, no spaces)
            handler: Callable(sender, args) -> bool
            description: Human-readable description for help text

        Raises:
            ValueError: If command already registered (double registration)
        """
        if command in self._commands:
            raise ValueError(f"Command '{command}' already registered")

        self._commands[command] = handler
        self._descriptions[command] = description

    def execute(self, command: str, sender: CommandSender, args: List[str]) -> bool:
        """
        Execute a registered sub-command.

        Raises:
            CommandNotAvailableError: If command not registered
        """
        if command not in self._commands:
            raise CommandNotAvailableError(
                f"Command '{command}' not available. "
                f"Available commands: {', '.join(sorted(self.available_commands))}"
            )

        return self._commands[command](sender, args)

    def is_available(self, command: str) -> bool:
        return command in self._commands

    @property
    def available_commands(self) -> Set[str]:
        """Snapshot of registered sub-command names."""
        return set(self._commands.keys())

    def get_help(self) -> Dict[str, str]:
        """Snapshot of ``{sub-command: description}`` in registration order."""
        return dict(self._descriptions)

    def count(self) -> int:
        return len(self._commands)
