"""
Zone Registry - Named teleport destinations loaded from the config store.

This module provides the ZoneRegistry class which owns the mapping
``lower-cased id -> Zone`` and keeps it in sync with the ``zones.*`` section
of the backing store.

Load Strategy:
- Full replace: every load clears the mapping first
- Per-entry validation: a bad entry is skipped (or repaired), never fatal
- Self-healing: if nothing usable loads, the default hub is (re)written and
  the entry pass runs exactly once more

Threading:
- Single-threaded by contract (host main thread); no locking
"""

import math
from typing import Dict, Optional, Tuple

from lere_logging import LogEvent, StructuredLogger, create_logger
from lere_store import ConfigStore, EntryResult, EntryStatus, LoadReport
from lere_zone.host import Location, Player, WorldLookup
from lere_zone.zone import HubDefaults, TeleportResult, Zone

ZONES_SECTION = "zones"


class ZoneRegistry:
    """
    Registry of validated zones.

    The store is user-editable, so loading degrades per entry:

    - missing/blank ``world``          -> skipped
    - world not loaded on the server   -> skipped
    - non-finite or missing x, y, z    -> skipped
    - y outside [0, max_height]        -> clamped (entry kept)
    - unexpected error in one entry    -> logged, remaining entries continue

    Usage:
        registry = ZoneRegistry(store, worlds)
        report = registry.load_from_config()

        registry.list_zone_ids()          # ('hub', 'Arena')
        registry.get_zone("ARENA")        # Zone(id='Arena', ...)

        result = registry.teleport_to_zone(player, "arena")
        player.send_message(result.message)
    """

    def __init__(
        self,
        store: ConfigStore,
        worlds: WorldLookup,
        hub: Optional[HubDefaults] = None,
        logger: Optional[StructuredLogger] = None,
    ):
        """
        Args:
            store: Backing key-value store (owns the ``zones.*`` section)
            worlds: Host world lookup, consulted at load and at teleport time
            hub: Fallback hub definition (default: world "world" at y=64)
            logger: Structured logger (default: component "zones")
        """
        self._store = store
        self._worlds = worlds
        self._hub = hub or HubDefaults()
        self.logger = logger or create_logger("zones")
        self._zones: Dict[str, Zone] = {}

    # ===== Loading =====

    def load_from_config(self) -> LoadReport:
        """
        Rebuild the registry from the store.

        Phases:
        1. ensure_defaults(): write the hub if there is no ``zones`` section
        2. load_entries(): validate every entry
        3. If nothing loaded: complete the hub entry with defaults, persist,
           and run load_entries() once more

        Returns:
            LoadReport with one EntryResult per processed entry
            (entries of the retry pass are appended)
        """
        self._zones.clear()
        report = LoadReport()

        report.bootstrapped = self.ensure_defaults()
        self.load_entries(report)

        if not self._zones:
            self.logger.info(
                event=LogEvent.ZONES_BOOTSTRAPPED,
                message="No valid zones loaded; ensuring default hub exists.",
                metadata={'zone_id': self._hub.zone_id}
            )
            self._complete_hub()
            report.bootstrapped = True
            report.retried = True
            self.load_entries(report)

            if not self._zones:
                self.logger.error(
                    event=LogEvent.ZONES_EMPTY,
                    message=(
                        f"Default hub zone '{self._hub.zone_id}' could not be "
                        f"loaded either; no zones available."
                    ),
                    metadata={'zone_id': self._hub.zone_id}
                )

        return report

    def ensure_defaults(self) -> bool:
        """
        Write the default hub when the store has no ``zones`` section.

        Returns:
            True if the store was modified (and persisted)
        """
        if self._store.is_section(ZONES_SECTION):
            return False

        self.logger.info(
            event=LogEvent.ZONES_BOOTSTRAPPED,
            message="No zones defined; creating default hub zone",
            metadata={'zone_id': self._hub.zone_id, 'world': self._hub.world}
        )
        base = f"{ZONES_SECTION}.{self._hub.zone_id}"
        for name, value in self._hub.fields().items():
            self._store.set(f"{base}.{name}", value)
        self._store.save()
        return True

    def _complete_hub(self) -> None:
        # Existing hub values win; only missing or unusable ones are replaced.
        base = f"{ZONES_SECTION}.{self._hub.zone_id}"
        world = self._store.get_string(f"{base}.world")
        if world is None or not world.strip():
            world = self._hub.world
        self._store.set(f"{base}.world", world)

        for name, default in self._hub.fields().items():
            if name == "world":
                continue
            value = self._store.get_float(f"{base}.{name}", math.nan)
            self._store.set(
                f"{base}.{name}", value if math.isfinite(value) else default
            )
        self._store.save()

    def load_entries(self, report: Optional[LoadReport] = None) -> LoadReport:
        """
        Validate every ``zones.<id>`` entry and insert the usable ones.

        Never raises because of an entry; failures are recorded in the report.
        """
        if report is None:
            report = LoadReport()

        for key in self._store.keys(ZONES_SECTION):
            try:
                report.entries.append(self._load_entry(key))
            except Exception as e:
                self.logger.warning(
                    event=LogEvent.ZONE_LOAD_FAILED,
                    message=f"Failed to load zone '{key}': {e}",
                    metadata={'zone_id': key},
                    exc_info=e
                )
                report.record(key, EntryStatus.FAILED, str(e))

        return report

    def _skip(self, key: str, reason: str, **metadata) -> EntryResult:
        self.logger.warning(
            event=LogEvent.ZONE_SKIPPED,
            message=f"Zone '{key}' {reason}; skipping.",
            metadata={'zone_id': key, **metadata}
        )
        return EntryResult(key=key, status=EntryStatus.SKIPPED, reason=reason)

    def _load_entry(self, key: str) -> EntryResult:
        base = f"{ZONES_SECTION}.{key}"

        world_name = self._store.get_string(f"{base}.world")
        if world_name is None or not world_name.strip():
            return self._skip(key, "missing 'world' value")

        world = self._worlds.get_world(world_name)
        if world is None:
            return self._skip(
                key, f"references unknown world '{world_name}'", world=world_name
            )

        x = self._store.get_float(f"{base}.x", math.nan)
        y = self._store.get_float(f"{base}.y", math.nan)
        z = self._store.get_float(f"{base}.z", math.nan)
        if not (math.isfinite(x) and math.isfinite(y) and math.isfinite(z)):
            return self._skip(key, "has invalid coordinates", x=x, y=y, z=z)

        status = EntryStatus.ACCEPTED
        reason = None
        max_height = world.max_height
        if y < 0 or y > max_height:
            reason = (
                f"Y coordinate {y} out of world bounds (0-{max_height}); "
                f"clamping to safe range."
            )
            self.logger.warning(
                event=LogEvent.ZONE_REPAIRED,
                message=f"Zone '{key}' {reason}",
                metadata={'zone_id': key, 'y': y, 'max_height': max_height}
            )
            y = 1.0 if y < 0 else float(max(1.0, max_height - 2))
            status = EntryStatus.REPAIRED

        yaw = self._store.get_float(f"{base}.yaw", 0.0)
        pitch = self._store.get_float(f"{base}.pitch", 0.0)

        zone = Zone(key, world_name, x, y, z, yaw, pitch)
        self._zones[zone.key] = zone
        self.logger.info(
            event=LogEvent.ZONE_LOADED,
            message=f"Loaded zone: {key} -> world={world_name} @ ({x},{y},{z})",
            metadata={'zone_id': key, 'world': world_name}
        )
        return EntryResult(key=key, status=status, reason=reason)

    # ===== Queries =====

    def get_zone(self, zone_id: Optional[str]) -> Optional[Zone]:
        """Case-insensitive lookup; None for unknown or None ids."""
        if zone_id is None:
            return None
        return self._zones.get(zone_id.lower())

    def list_zone_ids(self) -> Tuple[str, ...]:
        """Configured display ids, in load order, case preserved."""
        return tuple(dict.fromkeys(zone.id for zone in self._zones.values()))

    def count(self) -> int:
        return len(self._zones)

    # ===== Teleport =====

    def teleport_to_zone(self, player: Player, zone_id: str) -> TeleportResult:
        """
        Teleport ``player`` to a zone.

        The zone's world is resolved again here, since worlds may be
        loaded/unloaded after the registry was built. Host failures are
        reported in the result, never raised.

        Returns:
            TeleportResult(success, message)
        """
        zone = self.get_zone(zone_id)
        if zone is None:
            return TeleportResult(False, f"Unknown zone: {zone_id}")

        world = self._worlds.get_world(zone.world)
        if world is None:
            return TeleportResult(False, f"Zone world not loaded: {zone.world}")

        location = Location(world, zone.x, zone.y, zone.z, zone.yaw, zone.pitch)
        try:
            player.teleport(location)
        except Exception as e:
            self.logger.warning(
                event=LogEvent.TELEPORT_FAILED,
                message=f"Teleport failed for {player.name} to zone {zone_id}: {e}",
                metadata={'player': player.name, 'zone_id': zone.id},
                exc_info=e
            )
            return TeleportResult(False, f"Teleport failed: {e}")

        self.logger.info(
            event=LogEvent.TELEPORT_SUCCESS,
            message=f"{player.name} teleported to zone {zone.id}",
            metadata={'player': player.name, 'zone_id': zone.id}
        )
        return TeleportResult(True, f"Teleported to zone: {zone_id}")
