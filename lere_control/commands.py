"""
Command Handlers - ``/zone`` and ``/access``

Bounded Context: Player/admin commands
Responsibilities:
  - Parse arguments and validate sender type / permission
  - Delegate to ZoneRegistry / AccessRegistry
  - Report outcomes to the sender as chat messages

Malformed input (missing arguments, bad UUID) is reported to the sender only;
registry state is never touched in that case.
"""

from typing import List, Optional
from uuid import UUID

from lere_access import AccessRegistry, parse_identity
from lere_logging import LogEvent, StructuredLogger, create_logger
from lere_zone import Player, ZoneRegistry
from lere_zone.host import CommandSender

from .registry import CommandNotAvailableError, CommandRegistry

ADMIN_PERMISSION = "lere.multiplayer.admin"


class ZoneCommand:
    """
    ``/zone join <name> | leave | list | reload``

    Only players may use it. ``reload`` additionally needs the admin
    permission.
    """

    USAGE = "Usage: /zone join <name> | /zone leave | /zone list"

    def __init__(
        self,
        zones: ZoneRegistry,
        hub_zone_id: str = "hub",
        admin_permission: str = ADMIN_PERMISSION,
        logger: Optional[StructuredLogger] = None,
    ):
        self.zones = zones
        self.hub_zone_id = hub_zone_id
        self.admin_permission = admin_permission
        self.logger = logger or create_logger("commands")

        self.subcommands = CommandRegistry()
        self.subcommands.register('join', self.join, "Teleport to a zone")
        self.subcommands.register('leave', self.leave, "Return to the hub zone")
        self.subcommands.register('list', self.list_zones, "List available zones")
        self.subcommands.register('reload', self.reload, "Reload zones from config")

    def on_command(self, sender: CommandSender, args: List[str]) -> bool:
        """
        Entry point for ``/zone``.

        Returns:
            False only when a join/leave teleport failed
        """
        if not isinstance(sender, Player):
            sender.send_message("Only players can use this command.")
            return True
        if not args:
            self._send_usage(sender)
            return True

        sub = args[0].lower()
        try:
            return self.subcommands.execute(sub, sender, args[1:])
        except CommandNotAvailableError:
            sender.send_message(f"Unknown subcommand: {sub}")
            return True

    def _send_usage(self, sender: CommandSender) -> None:
        sender.send_message(self.USAGE)
        for name, description in self.subcommands.get_help().items():
            sender.send_message(f"  {name}: {description}")

    def join(self, player: Player, args: List[str]) -> bool:
        if not args:
            player.send_message("Usage: /zone join <name>")
            return True
        result = self.zones.teleport_to_zone(player, args[0])
        player.send_message(result.message)
        return result.success

    def leave(self, player: Player, args: List[str]) -> bool:
        result = self.zones.teleport_to_zone(player, self.hub_zone_id)
        player.send_message("Left zone." if result.success else result.message)
        return result.success

    def list_zones(self, player: Player, args: List[str]) -> bool:
        ids = self.zones.list_zone_ids()
        if not ids:
            player.send_message("No zones are configured.")
        else:
            player.send_message(f"Available zones: {', '.join(ids)}")
        return True

    def reload(self, player: Player, args: List[str]) -> bool:
        if not player.has_permission(self.admin_permission):
            self.logger.info(
                event=LogEvent.COMMAND_REJECTED,
                message=f"{player.name} lacks permission for /zone reload",
                metadata={'player': player.name, 'permission': self.admin_permission}
            )
            player.send_message("You don't have permission to reload zones.")
            return True
        report = self.zones.load_from_config()
        player.send_message(
            f"Zones reloaded: {self.zones.count()} loaded, "
            f"{len(report.rejected)} skipped."
        )
        return True


class AccessCommand:
    """
    ``/access add|remove <uuid> | list | reload``

    Requires the admin permission for every action.
    """

    USAGE = "Usage: /access add|remove|list <uuid>"

    def __init__(
        self,
        access: AccessRegistry,
        admin_permission: str = ADMIN_PERMISSION,
        logger: Optional[StructuredLogger] = None,
    ):
        self.access = access
        self.admin_permission = admin_permission
        self.logger = logger or create_logger("commands")

        self.actions = CommandRegistry()
        self.actions.register('add', self.add, "Whitelist a player UUID")
        self.actions.register('remove', self.remove, "Remove a player UUID")
        self.actions.register('list', self.list_entries, "Show whitelisted UUIDs")
        self.actions.register('reload', self.reload, "Reload whitelist from config")

    def on_command(self, sender: CommandSender, args: List[str]) -> bool:
        """Entry point for ``/access``."""
        if not sender.has_permission(self.admin_permission):
            self.logger.info(
                event=LogEvent.COMMAND_REJECTED,
                message="Sender lacks permission for /access",
                metadata={'permission': self.admin_permission}
            )
            sender.send_message("You don't have permission to manage access.")
            return True
        if not args:
            self._send_usage(sender)
            return True

        action = args[0].lower()
        try:
            return self.actions.execute(action, sender, args[1:])
        except CommandNotAvailableError:
            sender.send_message(f"Unknown action: {action}")
            return True

    def _send_usage(self, sender: CommandSender) -> None:
        sender.send_message(self.USAGE)
        for name, description in self.actions.get_help().items():
            sender.send_message(f"  {name}: {description}")

    @staticmethod
    def _parse_identity(sender: CommandSender, raw: str) -> Optional[UUID]:
        try:
            return parse_identity(raw)
        except ValueError:
            sender.send_message(f"Invalid UUID format: {raw}")
            return None

    def add(self, sender: CommandSender, args: List[str]) -> bool:
        if not args:
            sender.send_message("Usage: /access add <uuid>")
            return True
        identity = self._parse_identity(sender, args[0])
        if identity is None:
            return True
        if self.access.add(identity):
            sender.send_message(f"Added to whitelist: {identity}")
        else:
            sender.send_message(f"UUID already present: {identity}")
        return True

    def remove(self, sender: CommandSender, args: List[str]) -> bool:
        if not args:
            sender.send_message("Usage: /access remove <uuid>")
            return True
        identity = self._parse_identity(sender, args[0])
        if identity is None:
            return True
        if self.access.remove(identity):
            sender.send_message(f"Removed from whitelist: {identity}")
        else:
            sender.send_message(f"UUID not found: {identity}")
        return True

    def list_entries(self, sender: CommandSender, args: List[str]) -> bool:
        entries = sorted(self.access.list(), key=str)
        sender.send_message(f"Whitelist entries: {len(entries)}")
        for identity in entries:
            sender.send_message(f" - {identity}")
        return True

    def reload(self, sender: CommandSender, args: List[str]) -> bool:
        self.access.load()
        sender.send_message("Whitelist reloaded.")
        return True
