"""
Windows registry backed configuration store.

Reads the uninstall database that installers populate:

    HKEY_LOCAL_MACHINE\\SOFTWARE\\Microsoft\\Windows\\CurrentVersion\\Uninstall
    HKEY_CURRENT_USER\\Software\\Microsoft\\Windows\\CurrentVersion\\Uninstall

Windows only; ``winreg`` is imported when the store is created.
"""

import logging
from typing import Iterator, Optional

from ..core.exceptions import ConfigurationStoreError
from .base import ConfigurationStore, Scope, StoreKey

logger = logging.getLogger(__name__)

_ERROR_NO_MORE_ITEMS = 259


class RegistryKey(StoreKey):
    """Open registry key handle."""

    def __init__(self, winreg, handle, path: str):
        super().__init__(path)
        self._winreg = winreg
        self._handle = handle

    def subkeys(self) -> Iterator[str]:
        try:
            count = self._winreg.QueryInfoKey(self._handle)[0]
        except OSError as e:
            raise ConfigurationStoreError(self.path, str(e))

        for index in range(count):
            try:
                yield self._winreg.EnumKey(self._handle, index)
            except OSError as e:
                # Keys removed while enumerating shorten the list
                if getattr(e, "winerror", None) == _ERROR_NO_MORE_ITEMS:
                    return
                raise ConfigurationStoreError(self.path, str(e))

    def open_subkey(self, name: str) -> Optional["RegistryKey"]:
        path = f"{self.path}\\{name}"
        try:
            handle = self._winreg.OpenKey(self._handle, name, 0, self._winreg.KEY_READ)
        except FileNotFoundError:
            return None
        except OSError as e:
            raise ConfigurationStoreError(path, str(e))
        return RegistryKey(self._winreg, handle, path)

    def _query(self, name: str) -> Optional[str]:
        try:
            value, value_type = self._winreg.QueryValueEx(self._handle, name)
        except FileNotFoundError:
            return None
        except OSError as e:
            raise ConfigurationStoreError(self.path, str(e))

        if value_type == self._winreg.REG_EXPAND_SZ:
            return self._winreg.ExpandEnvironmentStrings(value)
        if value_type != self._winreg.REG_SZ:
            logger.debug(f"Ignoring non-string value {name} in {self.path}")
            return None
        return value

    def close(self) -> None:
        if self._handle is not None:
            self._handle.Close()
            self._handle = None


class WindowsRegistryStore(ConfigurationStore):
    """Configuration store reading HKEY_LOCAL_MACHINE and HKEY_CURRENT_USER."""

    UNINSTALL_PATHS = {
        Scope.MACHINE: r"SOFTWARE\Microsoft\Windows\CurrentVersion\Uninstall",
        Scope.USER: r"Software\Microsoft\Windows\CurrentVersion\Uninstall",
    }

    def __init__(self):
        import winreg

        self._winreg = winreg
        self._hives = {
            Scope.MACHINE: (winreg.HKEY_LOCAL_MACHINE, "HKEY_LOCAL_MACHINE"),
            Scope.USER: (winreg.HKEY_CURRENT_USER, "HKEY_CURRENT_USER"),
        }

    def open_key(self, scope: Scope, path: str) -> Optional[RegistryKey]:
        hive, hive_name = self._hives[scope]
        display = f"{hive_name}\\{path}"
        try:
            handle = self._winreg.OpenKey(hive, path, 0, self._winreg.KEY_READ)
        except FileNotFoundError:
            logger.debug(f"Registry key not found: {display}")
            return None
        except OSError as e:
            raise ConfigurationStoreError(display, str(e))
        return RegistryKey(self._winreg, handle, display)
