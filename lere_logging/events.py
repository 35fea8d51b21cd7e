"""
Structured Log Event Types
==========================

Bounded Context: Observability Event Taxonomy

Typed event names for the add-on's structured logs.

Event Naming Convention:
    <component>.<action>

    component: zone, teleport, access, config, command, plugin
    action: loaded, skipped, repaired, failed, ...

Example Log Query:
    filter event = "zone.skipped"
    | stats count() by metadata.zone_id
"""

from enum import Enum


class LogEvent(str, Enum):
    """
    Typed log event names for structured logging.

    Categories:
    - zone.*: Zone registry load/repair/bootstrap
    - teleport.*: Zone teleport attempts
    - access.*: Whitelist load/persist/mutation
    - config.*: Backing store I/O
    - command.*, plugin.*: Glue layer
    """

    # ========== Zone Events ==========
    ZONE_LOADED = "zone.loaded"
    """Zone entry accepted into the registry."""

    ZONE_SKIPPED = "zone.skipped"
    """Zone entry rejected by validation and skipped."""

    ZONE_REPAIRED = "zone.repaired"
    """Zone Y coordinate clamped into world bounds."""

    ZONE_LOAD_FAILED = "zone.load_failed"
    """Unexpected failure while processing one zone entry."""

    ZONES_BOOTSTRAPPED = "zone.bootstrapped"
    """Default hub zone written to the store."""

    ZONES_EMPTY = "zone.empty"
    """No usable zone after the bounded retry."""

    # ========== Teleport Events ==========
    TELEPORT_SUCCESS = "teleport.success"
    """Player teleported to a zone."""

    TELEPORT_FAILED = "teleport.failed"
    """Host teleport primitive raised."""

    # ========== Access Events ==========
    ACCESS_LOADED = "access.loaded"
    """Whitelist loaded from the store."""

    ACCESS_ENTRY_INVALID = "access.entry_invalid"
    """Whitelist entry is not a valid UUID."""

    ACCESS_SAVED = "access.saved"
    """Whitelist written back to the store."""

    ACCESS_ADDED = "access.added"
    """Identity added to the whitelist."""

    ACCESS_REMOVED = "access.removed"
    """Identity removed from the whitelist."""

    ACCESS_DENIED = "access.denied"
    """Player kicked by the join gate."""

    # ========== Config Events ==========
    CONFIG_LOADED = "config.loaded"
    """Backing store read from disk."""

    CONFIG_SAVED = "config.saved"
    """Backing store written to disk."""

    # ========== Glue Events ==========
    COMMAND_REJECTED = "command.rejected"
    """Command refused (permission, sender type, unknown sub-command)."""

    PLUGIN_ENABLED = "plugin.enabled"
    """Plugin wiring completed."""

    PLUGIN_DISABLED = "plugin.disabled"
    """Plugin shut down after final persist."""
