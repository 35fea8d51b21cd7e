"""
Lere Multiplayer
================

Zones and access control for a multiplayer server.

Packages:
    lere_store      Persisted key-value state (YAML)
    lere_zone       Zone registry and host protocols
    lere_access     Whitelist registry
    lere_control    /zone, /access commands and the join gate
    lere_logging    Structured JSON logging
    lere_cli        Offline admin CLI

This package wires them together (MultiplayerPlugin) and holds the add-on
settings (PluginSettings).
"""

from .config import PluginSettings
from .plugin import MultiplayerPlugin

__all__ = [
    "PluginSettings",
    "MultiplayerPlugin",
]

__version__ = "1.0.0"
