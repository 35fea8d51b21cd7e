"""
Host Server Interfaces
======================

Bounded Context: What the add-on needs from the game server.

The registries never hold live server objects. They talk to the host through
these protocols, so any server binding (or a test fake) can plug in.

Design:
- Protocols only describe what is called (structural typing)
- Location is the value handed to the teleport primitive
- StaticWorldLookup: dict-backed lookup for offline tools and tests
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Protocol, runtime_checkable
from uuid import UUID


class World(Protocol):
    """A loaded world on the host server."""

    @property
    def name(self) -> str:
        ...

    @property
    def max_height(self) -> int:
        ...


class WorldLookup(Protocol):
    """Resolves a world by name; None if it is not currently loaded."""

    def get_world(self, name: str) -> Optional[World]:
        ...


class CommandSender(Protocol):
    """Anything that can issue a command (console, player)."""

    def send_message(self, message: str) -> None:
        ...

    def has_permission(self, permission: str) -> bool:
        ...


@runtime_checkable
class Player(CommandSender, Protocol):
    """A connected player."""

    @property
    def name(self) -> str:
        ...

    @property
    def unique_id(self) -> UUID:
        ...

    def teleport(self, location: "Location") -> None:
        """Move the player. Raises on failure."""
        ...

    def kick(self, reason: str) -> None:
        ...


@dataclass(frozen=True)
class Location:
    """Resolved teleport target: a live world handle plus coordinates."""
    world: World
    x: float
    y: float
    z: float
    yaw: float = 0.0
    pitch: float = 0.0


@dataclass(frozen=True)
class SimpleWorld:
    """Plain World value (name + build height)."""
    name: str
    max_height: int = 256

    def __post_init__(self):
        if not self.name:
            raise ValueError("World name cannot be empty")
        if self.max_height < 0:
            raise ValueError(
                f"max_height must be >= 0, got {self.max_height}"
            )


class StaticWorldLookup:
    """
    WorldLookup over a fixed set of worlds.

    Worlds can be loaded/unloaded at runtime to mimic the host.

    Example:
        >>> worlds = StaticWorldLookup([SimpleWorld("world", 320)])
        >>> worlds.get_world("world").max_height
        320
        >>> worlds.get_world("nether") is None
        True
    """

    def __init__(self, worlds: Iterable[World] = ()):
        self._worlds: Dict[str, World] = {w.name: w for w in worlds}

    def get_world(self, name: str) -> Optional[World]:
        return self._worlds.get(name)

    def load(self, world: World) -> None:
        self._worlds[world.name] = world

    def unload(self, name: str) -> None:
        self._worlds.pop(name, None)
