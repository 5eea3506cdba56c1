"""
Read-only configuration store interface.

Installation records live in a hierarchical key/value store (the Windows
registry uninstall database on Windows). The resolver only needs to list
child keys and read string values, so every backend implements the small
StoreKey/ConfigurationStore pair below and nothing else depends on where
the data actually comes from.

Keys are scoped resources: open them in a ``with`` block so the handle is
released even when the caller stops early or raises.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, Iterator, List, Optional

logger = logging.getLogger(__name__)


class Scope(Enum):
    """Configuration store root."""

    MACHINE = "machine"
    USER = "user"

    @property
    def system(self) -> bool:
        """True for the machine-wide root."""
        return self is Scope.MACHINE


# Machine-wide records are always enumerated before per-user ones.
SCOPES = (Scope.MACHINE, Scope.USER)


class StoreKey(ABC):
    """
    Open handle to one key of a configuration store.

    Attributes:
        path: Human-readable path of the key, used in log and error messages
    """

    def __init__(self, path: str):
        self.path = path

    @abstractmethod
    def subkeys(self) -> Iterator[str]:
        """
        Iterate over the names of the immediate child keys.

        Returns:
            Iterator of child key names, in store order
        """
        pass

    @abstractmethod
    def open_subkey(self, name: str) -> Optional["StoreKey"]:
        """
        Open an immediate child key.

        Args:
            name: Child key name

        Returns:
            Open StoreKey, or None if the child does not exist

        Raises:
            ConfigurationStoreError: If the child exists but cannot be opened
        """
        pass

    @abstractmethod
    def _query(self, name: str) -> Optional[str]:
        """Read a string value of this key, or None if absent."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Release the handle."""
        pass

    def value(self, name: str, subkey: Optional[str] = None) -> Optional[str]:
        """
        Read a string value.

        Args:
            name: Value name (e.g., 'DisplayName')
            subkey: Optional child key holding the value (e.g., 'Variables')

        Returns:
            Value, or None if the value (or the child key) is absent or is
            not a string
        """
        if subkey is None:
            return self._query(name)

        child = self.open_subkey(subkey)
        if child is None:
            return None
        with child:
            return child._query(name)

    def __enter__(self) -> "StoreKey":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.path!r})"


class ConfigurationStore(ABC):
    """
    Read-only hierarchical configuration store.

    Subclasses set ``UNINSTALL_PATHS`` to the location of the installation
    records under each scope.
    """

    UNINSTALL_PATHS: Dict[Scope, str] = {}

    @abstractmethod
    def open_key(self, scope: Scope, path: str) -> Optional[StoreKey]:
        """
        Open a key.

        Args:
            scope: Store root
            path: Backslash separated key path relative to the root

        Returns:
            Open StoreKey, or None if the key does not exist

        Raises:
            ConfigurationStoreError: If the key exists but cannot be opened
        """
        pass

    def open_uninstall_root(self, scope: Scope) -> Optional[StoreKey]:
        """Open the key holding installation records for ``scope``."""
        return self.open_key(scope, self.UNINSTALL_PATHS[scope])

    def list_child_keys(self, scope: Scope, path: str) -> List[str]:
        """
        List the child key names of ``path``.

        Returns:
            Child key names, or an empty list if ``path`` does not exist
        """
        key = self.open_key(scope, path)
        if key is None:
            return []
        with key:
            return list(key.subkeys())

    def read_string_value(self, scope: Scope, path: str, name: str) -> Optional[str]:
        """
        Read one string value.

        Returns:
            Value, or None if the key or value is absent
        """
        key = self.open_key(scope, path)
        if key is None:
            return None
        with key:
            return key.value(name)


def split_path(path: str) -> List[str]:
    """Split a backslash separated key path into its components."""
    return [part for part in path.replace("/", "\\").split("\\") if part]
