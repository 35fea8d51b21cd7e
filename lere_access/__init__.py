"""
Lere Access
===========

Bounded Context: Who may stay connected.

Public API
----------
    AccessRegistry: Whitelist of player UUIDs persisted in the config store
    parse_identity: Strict parser for canonical UUID strings
"""

from lere_access.registry import AccessRegistry, ENABLED_KEY, PLAYERS_KEY, parse_identity

__all__ = [
    "AccessRegistry",
    "ENABLED_KEY",
    "PLAYERS_KEY",
    "parse_identity",
]
