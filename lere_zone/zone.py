"""
Zone Value Types
================

Pure data - NO server handles, NO side effects.

Design:
- Immutable (frozen dataclass)
- World stored by name, resolved lazily at use time
- yaw/pitch narrowed to single precision, the resolution the server keeps
"""

import math
import struct
from dataclasses import dataclass
from typing import Dict


_FLOAT32_MAX = 3.4028234663852886e38


def _single(value: float) -> float:
    """Round a float to the nearest 32-bit float; out of range becomes +-inf."""
    value = float(value)
    if abs(value) > _FLOAT32_MAX:
        return math.copysign(math.inf, value)
    return struct.unpack("f", struct.pack("f", value))[0]


@dataclass(frozen=True)
class Zone:
    """
    Named teleport destination.

    Attributes:
        id: Display id as written in the config (lookups are case-insensitive)
        world: Name of the world the zone lives in
        x, y, z: Finite coordinates
        yaw, pitch: Orientation, 0.0 if not configured

    Invariants:
        - id and world are non-blank
        - x, y, z are finite

    Example:
        >>> Zone("Hub", "world", 0.0, 64.0, 0.0).key
        'hub'
    """
    id: str
    world: str
    x: float
    y: float
    z: float
    yaw: float = 0.0
    pitch: float = 0.0

    def __post_init__(self):
        """Validate invariants and narrow orientation."""
        if not self.id or not self.id.strip():
            raise ValueError("Zone id cannot be blank")
        if not self.world or not self.world.strip():
            raise ValueError(f"Zone '{self.id}' world cannot be blank")
        for axis in ("x", "y", "z"):
            value = getattr(self, axis)
            if not math.isfinite(value):
                raise ValueError(
                    f"Zone '{self.id}' {axis} must be finite, got {value}"
                )

        object.__setattr__(self, "yaw", _single(self.yaw))
        object.__setattr__(self, "pitch", _single(self.pitch))

    @property
    def key(self) -> str:
        """Registry key (lower-cased id)."""
        return self.id.lower()


@dataclass(frozen=True)
class TeleportResult:
    """Outcome of a teleport request, reported back to the caller."""
    success: bool
    message: str


@dataclass(frozen=True)
class HubDefaults:
    """
    Fallback hub written to the store when no usable zone exists.

    Defaults match a vanilla server: overworld named "world", spawn height 64.
    """
    zone_id: str = "hub"
    world: str = "world"
    x: float = 0.0
    y: float = 64.0
    z: float = 0.0
    yaw: float = 0.0
    pitch: float = 0.0

    def __post_init__(self):
        if not self.zone_id or "." in self.zone_id:
            raise ValueError(
                f"Hub zone_id must be non-empty and contain no '.', got {self.zone_id!r}"
            )
        if not self.world:
            raise ValueError("Hub world cannot be empty")
        for name in ("x", "y", "z", "yaw", "pitch"):
            if not math.isfinite(getattr(self, name)):
                raise ValueError(f"Hub {name} must be finite")

    def fields(self) -> Dict[str, object]:
        """Store fields of the hub entry, in write order."""
        return {
            "world": self.world,
            "x": self.x,
            "y": self.y,
            "z": self.z,
            "yaw": self.yaw,
            "pitch": self.pitch,
        }
