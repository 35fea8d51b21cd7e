"""Shared fakes for the host server and the backing store."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set
from uuid import UUID, uuid4

import pytest

from lere_store import ConfigStore
from lere_zone import Location, SimpleWorld, StaticWorldLookup


class CountingStore(ConfigStore):
    """In-memory store that records every save() as a snapshot."""

    def __init__(self, data: Optional[Dict[str, Any]] = None):
        super().__init__(data)
        self.snapshots: List[Dict[Any, Any]] = []

    def save(self) -> None:
        self.snapshots.append(self.to_dict())

    @property
    def saves(self) -> int:
        return len(self.snapshots)


@dataclass
class FakePlayer:
    name: str = "Steve"
    unique_id: UUID = field(default_factory=uuid4)
    permissions: Set[str] = field(default_factory=set)
    messages: List[str] = field(default_factory=list)
    teleports: List[Location] = field(default_factory=list)
    kicked: Optional[str] = None
    teleport_error: Optional[Exception] = None

    def send_message(self, message: str) -> None:
        self.messages.append(message)

    def has_permission(self, permission: str) -> bool:
        return permission in self.permissions

    def teleport(self, location: Location) -> None:
        if self.teleport_error is not None:
            raise self.teleport_error
        self.teleports.append(location)

    def kick(self, reason: str) -> None:
        self.kicked = reason


@dataclass
class FakeConsole:
    messages: List[str] = field(default_factory=list)
    permissions: Set[str] = field(default_factory=set)

    def send_message(self, message: str) -> None:
        self.messages.append(message)

    def has_permission(self, permission: str) -> bool:
        return permission in self.permissions


def zone_entry(world="world", x=0.0, y=64.0, z=0.0, **extra) -> Dict[str, Any]:
    entry = {"world": world, "x": x, "y": y, "z": z}
    entry.update(extra)
    return entry


@pytest.fixture
def worlds() -> StaticWorldLookup:
    return StaticWorldLookup([
        SimpleWorld("world", max_height=256),
        SimpleWorld("arena_world", max_height=128),
    ])


@pytest.fixture
def store() -> CountingStore:
    return CountingStore()


@pytest.fixture
def player() -> FakePlayer:
    return FakePlayer()
