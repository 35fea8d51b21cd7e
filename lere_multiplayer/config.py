"""
Plugin settings.

The add-on's own knobs (hub fallback, admin permission, kick message, log
level). Persisted plugin *state* lives in the config store instead; see
lere_store.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from lere_control import ADMIN_PERMISSION, DEFAULT_KICK_MESSAGE
from lere_zone import HubDefaults

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR"}


@dataclass(frozen=True)
class PluginSettings:
    """
    Immutable, validated add-on settings.

    Attributes:
        hub: Fallback hub written when no usable zone exists
        admin_permission: Permission gating /access and /zone reload
        kick_message: Message shown to players rejected by the whitelist
        log_level: Level for the add-on's structured loggers
    """

    hub: HubDefaults = field(default_factory=HubDefaults)
    admin_permission: str = ADMIN_PERMISSION
    kick_message: str = DEFAULT_KICK_MESSAGE
    log_level: str = "INFO"

    def __post_init__(self):
        if not self.admin_permission:
            raise ValueError("admin_permission cannot be empty")
        if not self.kick_message:
            raise ValueError("kick_message cannot be empty")
        if self.log_level not in _LOG_LEVELS:
            raise ValueError(
                f"Invalid log_level: {self.log_level}. "
                f"Must be one of {sorted(_LOG_LEVELS)}"
            )

    @property
    def level(self) -> int:
        """log_level as a logging module constant."""
        return getattr(logging, self.log_level)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PluginSettings":
        """
        Build settings from a plain mapping; missing keys keep their defaults.

        Raises:
            ValueError: On unknown or invalid values
        """
        try:
            hub = HubDefaults(**(data.get("hub") or {}))
        except TypeError as e:
            raise ValueError(f"Invalid hub settings: {e}") from e

        return cls(
            hub=hub,
            admin_permission=data.get("admin_permission", ADMIN_PERMISSION),
            kick_message=data.get("kick_message", DEFAULT_KICK_MESSAGE),
            log_level=str(data.get("log_level", "INFO")).upper(),
        )

    @classmethod
    def from_yaml(cls, yaml_path: Union[str, Path]) -> "PluginSettings":
        """
        Load settings from a YAML file.

        Example YAML:
            hub:
              world: "lobby"
              y: 100.0
            admin_permission: "lere.multiplayer.admin"
            kick_message: "Whitelist only."
            log_level: "WARNING"
        """
        with open(yaml_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Settings file {yaml_path} must contain a mapping")
        return cls.from_dict(data)
