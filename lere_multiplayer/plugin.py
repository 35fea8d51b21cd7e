"""
Plugin wiring.

Builds both registries once and hands references to every caller; there is
no global instance to look up.

Lifecycle:
    plugin = MultiplayerPlugin(store, worlds)
    plugin.enable()                       # load access, load zones, build glue
    plugin.dispatch(sender, "zone", ["join", "arena"])
    plugin.on_player_join(player)
    plugin.disable()                      # final whitelist persist
"""

from typing import List, Optional

from lere_access import AccessRegistry
from lere_control import AccessCommand, CommandNotAvailableError, JoinGate, ZoneCommand
from lere_logging import LogEvent, StructuredLogger, create_logger
from lere_store import ConfigStore, LoadReport
from lere_zone import Player, WorldLookup, ZoneRegistry
from lere_zone.host import CommandSender

from .config import PluginSettings


class MultiplayerPlugin:
    """
    Owns the registries and the command/event glue for one server.

    Attributes (available after enable()):
        zones: ZoneRegistry
        access: AccessRegistry
        zone_command, access_command: Command handlers
        join_gate: Player-join handler
    """

    def __init__(
        self,
        store: ConfigStore,
        worlds: WorldLookup,
        settings: Optional[PluginSettings] = None,
        logger: Optional[StructuredLogger] = None,
    ):
        self.store = store
        self.worlds = worlds
        self.settings = settings or PluginSettings()
        self.logger = logger or create_logger("plugin", level=self.settings.level)

        self.zones: Optional[ZoneRegistry] = None
        self.access: Optional[AccessRegistry] = None
        self.zone_command: Optional[ZoneCommand] = None
        self.access_command: Optional[AccessCommand] = None
        self.join_gate: Optional[JoinGate] = None

    @property
    def enabled(self) -> bool:
        return self.zones is not None

    def enable(self) -> None:
        level = self.settings.level
        self.access = AccessRegistry(
            self.store, logger=create_logger("access", level=level)
        )
        self.access.load()

        self.zones = ZoneRegistry(
            self.store,
            self.worlds,
            hub=self.settings.hub,
            logger=create_logger("zones", level=level),
        )
        self.zones.load_from_config()

        commands_logger = create_logger("commands", level=level)
        self.zone_command = ZoneCommand(
            self.zones,
            hub_zone_id=self.settings.hub.zone_id,
            admin_permission=self.settings.admin_permission,
            logger=commands_logger,
        )
        self.access_command = AccessCommand(
            self.access,
            admin_permission=self.settings.admin_permission,
            logger=commands_logger,
        )
        self.join_gate = JoinGate(
            self.access,
            kick_message=self.settings.kick_message,
            logger=self.access.logger,
        )

        self.logger.info(
            event=LogEvent.PLUGIN_ENABLED,
            message="LereMultiplayer enabled",
            metadata={
                'zones': self.zones.count(),
                'whitelist_enabled': self.access.enabled,
            }
        )

    def disable(self) -> None:
        """
        Final whitelist persist.

        Skipped when the whitelist was never read (disabled since startup):
        the empty in-memory set would overwrite the persisted list.
        """
        if self.access is not None and self.access.loaded:
            self.access.save()
        self.logger.info(
            event=LogEvent.PLUGIN_DISABLED,
            message="LereMultiplayer disabled",
        )

    def reload(self) -> LoadReport:
        """Reload the whitelist and the zones; returns the zone load report."""
        self._require_enabled()
        self.access.load()
        return self.zones.load_from_config()

    def dispatch(self, sender: CommandSender, label: str, args: List[str]) -> bool:
        """
        Route a top-level command to its handler.

        Raises:
            CommandNotAvailableError: If ``label`` is not one of zone/access
        """
        self._require_enabled()
        label = label.lower()
        if label == "zone":
            return self.zone_command.on_command(sender, args)
        if label == "access":
            return self.access_command.on_command(sender, args)
        raise CommandNotAvailableError(
            f"Command '{label}' not available. Available commands: access, zone"
        )

    def on_player_join(self, player: Player) -> bool:
        self._require_enabled()
        return self.join_gate.on_player_join(player)

    def _require_enabled(self) -> None:
        if not self.enabled:
            raise RuntimeError("Plugin is not enabled; call enable() first")
