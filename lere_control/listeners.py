"""
Join Gate - kicks players who are not on the whitelist.
"""

from typing import Optional

from lere_access import AccessRegistry
from lere_logging import LogEvent, StructuredLogger, create_logger
from lere_zone import Player

DEFAULT_KICK_MESSAGE = "Server is private. Contact an admin for access."


class JoinGate:
    """
    Player-join handler.

    The host calls ``on_player_join`` for every connection; with the whitelist
    disabled ``AccessRegistry.is_allowed`` is always true, so nobody is kicked.
    """

    def __init__(
        self,
        access: AccessRegistry,
        kick_message: str = DEFAULT_KICK_MESSAGE,
        logger: Optional[StructuredLogger] = None,
    ):
        self.access = access
        self.kick_message = kick_message
        self.logger = logger or create_logger("access")

    def on_player_join(self, player: Player) -> bool:
        """
        Returns:
            True if the player may stay, False if they were kicked
        """
        if self.access.is_allowed(player.unique_id):
            return True

        self.logger.info(
            event=LogEvent.ACCESS_DENIED,
            message=f"Kicking {player.name}: not whitelisted",
            metadata={'player': player.name, 'identity': str(player.unique_id)}
        )
        player.kick(self.kick_message)
        return False
