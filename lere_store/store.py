"""
Configuration Store
===================

Bounded Context: Persisted plugin state

A flat hierarchical key-value store addressed with dotted keys
(``zones.hub.world``, ``whitelist.players``), the shape a server plugin's
``config.yml`` has.

Design:
- ConfigStore: in-memory tree of dicts, typed getters with defaults
- YamlConfigStore: same tree, read from and written to a YAML file
- Typed getters never raise on a wrong type; they fall back to the default,
  so a hand-edited file degrades per value instead of failing wholesale

Getter semantics:
- get_string: scalars are stringified, sections/missing -> default
- get_float: int/float only (bool is not a number), anything else -> default
- get_bool: real booleans only
- get_string_list: scalar items stringified, non-list -> []
"""

import copy
import math
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from lere_logging import LogEvent, StructuredLogger, create_logger

_MISSING = object()
_SCALARS = (str, int, float, bool)


class ConfigStoreError(Exception):
    """Raised when the backing file cannot be parsed into a key-value tree."""
    pass


def _child(node: Dict[Any, Any], part: str) -> Any:
    if part in node:
        return node[part]
    # YAML keys such as `1:` load as ints; address them by their string form
    for key, value in node.items():
        if str(key) == part:
            return value
    return _MISSING


def _child_key(node: Dict[Any, Any], part: str) -> Any:
    if part in node:
        return part
    for key in node:
        if str(key) == part:
            return key
    return part


class ConfigStore:
    """
    In-memory hierarchical key-value store.

    ``save()`` is a no-op here; file-backed stores override it. Tests use this
    class directly (or a subclass counting saves) as the backing store.

    Example:
        >>> store = ConfigStore()
        >>> store.set("zones.hub.world", "world")
        >>> store.get_string("zones.hub.world")
        'world'
        >>> store.get_float("zones.hub.x", math.nan)
        nan
    """

    def __init__(self, data: Optional[Dict[str, Any]] = None):
        self._data: Dict[Any, Any] = copy.deepcopy(data) if data else {}

    def _node(self, key: str) -> Any:
        node: Any = self._data
        for part in key.split("."):
            if not isinstance(node, dict):
                return _MISSING
            node = _child(node, part)
            if node is _MISSING:
                return _MISSING
        return node

    # ===== Structure =====

    def contains(self, key: str) -> bool:
        """True if a value (or section) exists at ``key``."""
        return self._node(key) is not _MISSING

    def is_section(self, key: str) -> bool:
        """True if ``key`` holds a nested mapping (possibly empty)."""
        return isinstance(self._node(key), dict)

    def keys(self, key: str) -> List[str]:
        """Direct child keys of a section, in file order. ``[]`` if not a section."""
        node = self._node(key)
        if not isinstance(node, dict):
            return []
        return [str(k) for k in node]

    # ===== Typed getters =====

    def get(self, key: str, default: Any = None) -> Any:
        node = self._node(key)
        return default if node is _MISSING or node is None else node

    def get_string(self, key: str, default: Optional[str] = None) -> Optional[str]:
        value = self.get(key)
        if isinstance(value, _SCALARS):
            return str(value)
        return default

    def get_float(self, key: str, default: float = math.nan) -> float:
        value = self.get(key)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return default
        return float(value)

    def get_bool(self, key: str, default: bool = False) -> bool:
        value = self.get(key)
        return value if isinstance(value, bool) else default

    def get_string_list(self, key: str) -> List[str]:
        value = self.get(key)
        if not isinstance(value, list):
            return []
        return [str(item) for item in value if isinstance(item, _SCALARS)]

    # ===== Mutation =====

    def set(self, key: str, value: Any) -> None:
        """
        Set ``key`` to ``value``, creating intermediate sections.

        Setting ``None`` removes the key. A scalar standing where a section is
        needed is replaced by a section.
        """
        parts = key.split(".")
        node = self._data
        for part in parts[:-1]:
            child_key = _child_key(node, part)
            child = node.get(child_key)
            if not isinstance(child, dict):
                if value is None:
                    return
                child = {}
                node[child_key] = child
            node = child

        leaf = _child_key(node, parts[-1])
        if value is None:
            node.pop(leaf, None)
        elif isinstance(value, (list, tuple, set, frozenset)):
            node[leaf] = list(value)
        else:
            node[leaf] = value

    def save(self) -> None:
        """Persist the store. In-memory stores have nothing to do."""

    def to_dict(self) -> Dict[Any, Any]:
        """Deep copy of the whole tree."""
        return copy.deepcopy(self._data)


class YamlConfigStore(ConfigStore):
    """
    ConfigStore persisted as a YAML file.

    A missing file is an empty store (first run); it is created on the first
    ``save()``.

    Example YAML:
        zones:
          hub:
            world: world
            x: 0.0
            y: 64.0
            z: 0.0
        whitelist:
          enabled: true
          players:
            - 0f8fad5b-d9cb-469f-a165-70867728950e

    Raises:
        ConfigStoreError: On invalid YAML or a top level that is not a mapping
    """

    def __init__(
        self,
        path: Union[str, Path],
        logger: Optional[StructuredLogger] = None
    ):
        super().__init__()
        self.path = Path(path)
        self.logger = logger or create_logger("config")
        self.reload()

    def reload(self) -> None:
        """Discard in-memory state and re-read the file."""
        if not self.path.exists():
            self._data = {}
            return

        try:
            with open(self.path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigStoreError(f"Invalid YAML in {self.path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigStoreError(
                f"Top level of {self.path} must be a mapping, "
                f"got {type(data).__name__}"
            )

        self._data = data
        self.logger.info(
            event=LogEvent.CONFIG_LOADED,
            message=f"Loaded configuration from {self.path}",
            metadata={'path': str(self.path)}
        )

    def save(self) -> None:
        """Write the whole tree back to the file (full overwrite)."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            yaml.safe_dump(
                self._data,
                f,
                default_flow_style=False,
                sort_keys=False,
                allow_unicode=True,
            )
        self.logger.info(
            event=LogEvent.CONFIG_SAVED,
            message=f"Saved configuration to {self.path}",
            metadata={'path': str(self.path)}
        )
