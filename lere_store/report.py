"""
Load Reports
============

Per-entry outcome of loading a section of the store.

Loads never throw because of one bad entry; each entry produces an
EntryResult and the load returns the accumulated LoadReport.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class EntryStatus(str, Enum):
    """Outcome of processing one entry."""

    ACCEPTED = "accepted"
    REPAIRED = "repaired"   # accepted after a value was clamped
    SKIPPED = "skipped"     # failed validation
    FAILED = "failed"       # unexpected error while processing


@dataclass(frozen=True)
class EntryResult:
    """
    Immutable outcome for a single entry.

    Attributes:
        key: Entry key as written in the store
        status: What happened to the entry
        reason: Human-readable explanation (None when accepted as-is)
    """
    key: str
    status: EntryStatus
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        """True if the entry made it into the registry."""
        return self.status in (EntryStatus.ACCEPTED, EntryStatus.REPAIRED)


@dataclass
class LoadReport:
    """
    Accumulated results of one load call.

    Attributes:
        entries: Results in processing order (a retry appends to the same list)
        bootstrapped: Default entries were written to the store
        retried: The entry pass ran a second time after an empty result
    """
    entries: List[EntryResult] = field(default_factory=list)
    bootstrapped: bool = False
    retried: bool = False

    def record(
        self,
        key: str,
        status: EntryStatus,
        reason: Optional[str] = None
    ) -> EntryResult:
        result = EntryResult(key=key, status=status, reason=reason)
        self.entries.append(result)
        return result

    @property
    def accepted(self) -> List[EntryResult]:
        return [e for e in self.entries if e.ok]

    @property
    def rejected(self) -> List[EntryResult]:
        return [e for e in self.entries if not e.ok]

    def count(self, status: EntryStatus) -> int:
        return sum(1 for e in self.entries if e.status is status)
