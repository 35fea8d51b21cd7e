"""
lere_store - Persisted key-value state
======================================

Public API
----------
    ConfigStore: In-memory dotted-key store with typed getters
    YamlConfigStore: ConfigStore backed by a YAML file
    ConfigStoreError: Unreadable backing file
    EntryStatus, EntryResult, LoadReport: Per-entry load outcomes
"""

from lere_store.store import ConfigStore, YamlConfigStore, ConfigStoreError
from lere_store.report import EntryStatus, EntryResult, LoadReport

__all__ = [
    "ConfigStore",
    "YamlConfigStore",
    "ConfigStoreError",
    "EntryStatus",
    "EntryResult",
    "LoadReport",
]
