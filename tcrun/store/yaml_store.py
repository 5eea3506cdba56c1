"""
YAML file backed configuration store.

Describes installation records on hosts without a registry. The file has a
``machine`` and a ``user`` mapping; each holds one mapping per record.
Nested mappings are child keys and scalars are string values:

    machine:
      "{6A1B3C2D}":
        DisplayName: Swift Developer Toolkit
        DisplayVersion: 6.0.1
        Publisher: Example Corp
        Variables:
          InstallRoot: /opt/swift
    user: {}
"""

import logging
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

import yaml

from ..core.exceptions import ConfigurationStoreError
from .base import ConfigurationStore, Scope, StoreKey, split_path

logger = logging.getLogger(__name__)


class MappingKey(StoreKey):
    """Key backed by an in-memory mapping."""

    def __init__(self, data: Dict[str, Any], path: str):
        super().__init__(path)
        self._data = data
        self._closed = False

    def _check_open(self) -> None:
        if self._closed:
            raise ConfigurationStoreError(self.path, "key is closed")

    def subkeys(self) -> Iterator[str]:
        self._check_open()
        for name, value in self._data.items():
            if isinstance(value, dict):
                yield str(name)

    def open_subkey(self, name: str) -> Optional["MappingKey"]:
        self._check_open()
        child = self._data.get(name)
        if not isinstance(child, dict):
            return None
        return MappingKey(child, f"{self.path}\\{name}")

    def _query(self, name: str) -> Optional[str]:
        self._check_open()
        value = self._data.get(name)
        if value is None or isinstance(value, (dict, list)):
            return None
        # YAML reads 6.0 as a float; registry values are always strings
        return str(value)

    def close(self) -> None:
        self._closed = True


class YamlConfigurationStore(ConfigurationStore):
    """Configuration store loaded from a mapping or a YAML file."""

    UNINSTALL_PATHS = {Scope.MACHINE: "", Scope.USER: ""}

    def __init__(self, data: Optional[Dict[str, Any]] = None):
        data = data or {}
        self._roots: Dict[Scope, Dict[str, Any]] = {}
        for scope in Scope:
            root = data.get(scope.value) or {}
            if not isinstance(root, dict):
                raise ConfigurationStoreError(scope.value, "expected a mapping")
            self._roots[scope] = root

    @classmethod
    def from_file(cls, path: Path) -> "YamlConfigurationStore":
        """
        Load a store from a YAML file.

        Args:
            path: YAML file

        Returns:
            Store holding the file's records

        Raises:
            ConfigurationStoreError: If the file cannot be read or parsed
        """
        logger.debug(f"Loading installation records from {path}")
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise ConfigurationStoreError(str(path), str(e))
        except yaml.YAMLError as e:
            raise ConfigurationStoreError(str(path), f"invalid YAML: {e}")

        if data is not None and not isinstance(data, dict):
            raise ConfigurationStoreError(str(path), "expected a mapping")
        return cls(data)

    def open_key(self, scope: Scope, path: str) -> Optional[MappingKey]:
        node: Any = self._roots[scope]
        for part in split_path(path):
            if not isinstance(node, dict):
                return None
            node = node.get(part)
        if not isinstance(node, dict):
            return None
        return MappingKey(node, "\\".join([scope.value] + split_path(path)))
