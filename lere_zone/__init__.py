"""
Lere Zones
==========

Bounded Context: Named teleport destinations.

Architecture:

    lere_zone/
    ├── zone.py       # Zone, TeleportResult, HubDefaults (immutable values)
    ├── host.py       # World/Player protocols, Location, StaticWorldLookup
    └── registry.py   # ZoneRegistry (load, validate, repair, teleport)

Usage:

    from lere_zone import ZoneRegistry, StaticWorldLookup, SimpleWorld
    from lere_store import YamlConfigStore

    store = YamlConfigStore("config.yml")
    worlds = StaticWorldLookup([SimpleWorld("world", max_height=320)])

    registry = ZoneRegistry(store, worlds)
    report = registry.load_from_config()
    print(registry.list_zone_ids())
"""

from lere_zone.zone import Zone, TeleportResult, HubDefaults
from lere_zone.host import (
    World,
    WorldLookup,
    CommandSender,
    Player,
    Location,
    SimpleWorld,
    StaticWorldLookup,
)
from lere_zone.registry import ZoneRegistry, ZONES_SECTION

__all__ = [
    # Values
    "Zone",
    "TeleportResult",
    "HubDefaults",
    # Host
    "World",
    "WorldLookup",
    "CommandSender",
    "Player",
    "Location",
    "SimpleWorld",
    "StaticWorldLookup",
    # Registry
    "ZoneRegistry",
    "ZONES_SECTION",
]
