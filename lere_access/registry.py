"""
Access Registry - Player whitelist backed by the config store.

Store layout:
    whitelist.enabled  bool          (default false, read fresh on every check)
    whitelist.players  list<string>  (UUID strings)

Policy:
- Fails open: with the whitelist disabled everyone is allowed
- Malformed entries are dropped with a warning, never fail the load
- Every effective mutation is persisted immediately (no batching)
"""

from typing import FrozenSet, Optional, Set
from uuid import UUID

from lere_logging import LogEvent, StructuredLogger, create_logger
from lere_store import ConfigStore, EntryStatus, LoadReport

ENABLED_KEY = "whitelist.enabled"
PLAYERS_KEY = "whitelist.players"


def parse_identity(raw: str) -> UUID:
    """
    Parse a canonical hyphenated UUID string (either case).

    Raises:
        ValueError: For anything else, including braced, urn and bare-hex forms
    """
    identity = UUID(raw)
    if str(identity) != raw.lower():
        raise ValueError(f"Not a canonical UUID: {raw}")
    return identity


class AccessRegistry:
    """
    Set of whitelisted player identities.

    Usage:
        access = AccessRegistry(store)
        access.load()

        if not access.is_allowed(player.unique_id):
            player.kick("Server is private.")

        access.add(UUID("0f8fad5b-d9cb-469f-a165-70867728950e"))  # persisted
    """

    def __init__(
        self,
        store: ConfigStore,
        logger: Optional[StructuredLogger] = None,
    ):
        self._store = store
        self.logger = logger or create_logger("access")
        self._whitelist: Set[UUID] = set()
        self._loaded = False

    @property
    def enabled(self) -> bool:
        """Current ``whitelist.enabled`` value from the store."""
        return self._store.get_bool(ENABLED_KEY, False)

    @property
    def loaded(self) -> bool:
        """True once a load has actually read the persisted list."""
        return self._loaded

    def load(self, force: bool = False) -> Optional[LoadReport]:
        """
        Replace the in-memory set with the persisted list.

        No-op while the whitelist is disabled: the in-memory set (if any) is
        kept as it is until a load runs with the whitelist enabled.

        Args:
            force: Read the list even if the whitelist is disabled
                (offline tools editing the list ahead of enabling it)

        Returns:
            LoadReport, or None if the whitelist is disabled
        """
        if not (force or self.enabled):
            return None

        report = LoadReport()
        players = self._store.get_string_list(PLAYERS_KEY)
        self._whitelist.clear()
        for raw in players:
            try:
                identity = parse_identity(raw.strip())
            except ValueError:
                self.logger.warning(
                    event=LogEvent.ACCESS_ENTRY_INVALID,
                    message=f"Invalid UUID in whitelist: {raw}",
                    metadata={'entry': raw}
                )
                report.record(raw, EntryStatus.SKIPPED, "invalid UUID")
                continue
            self._whitelist.add(identity)
            report.record(raw, EntryStatus.ACCEPTED)

        self._loaded = True

        self.logger.info(
            event=LogEvent.ACCESS_LOADED,
            message=f"Loaded whitelist: {len(self._whitelist)} entries",
            metadata={'count': len(self._whitelist)}
        )
        return report

    def save(self) -> None:
        """Write the whole set to ``whitelist.players`` and persist the store."""
        self._store.set(PLAYERS_KEY, sorted(str(u) for u in self._whitelist))
        self._store.save()
        self.logger.info(
            event=LogEvent.ACCESS_SAVED,
            message=f"Saved whitelist: {len(self._whitelist)} entries",
            metadata={'count': len(self._whitelist)}
        )

    def is_allowed(self, identity: UUID) -> bool:
        """True if the whitelist is disabled or ``identity`` is on it."""
        if not self.enabled:
            return True
        return identity in self._whitelist

    def add(self, identity: UUID) -> bool:
        """
        Add an identity.

        Reads the persisted list first if it was never loaded.

        Returns:
            True if it was not present (the store has been persisted),
            False if nothing changed
        """
        if not self._loaded:
            self.load(force=True)
        if identity in self._whitelist:
            return False
        self._whitelist.add(identity)
        self.logger.info(
            event=LogEvent.ACCESS_ADDED,
            message=f"Added to whitelist: {identity}",
            metadata={'identity': str(identity)}
        )
        self.save()
        return True

    def remove(self, identity: UUID) -> bool:
        """
        Remove an identity.

        Reads the persisted list first if it was never loaded.

        Returns:
            True if it was present (the store has been persisted),
            False if nothing changed
        """
        if not self._loaded:
            self.load(force=True)
        if identity not in self._whitelist:
            return False
        self._whitelist.discard(identity)
        self.logger.info(
            event=LogEvent.ACCESS_REMOVED,
            message=f"Removed from whitelist: {identity}",
            metadata={'identity': str(identity)}
        )
        self.save()
        return True

    def list(self) -> FrozenSet[UUID]:
        """Immutable snapshot of the current set."""
        return frozenset(self._whitelist)
