"""
Tests for tcrun.store.registry module.

winreg only exists on Windows, so these tests run against an in-memory
stand-in installed in sys.modules.
"""

import sys
from unittest.mock import patch

import pytest

from tcrun.core.exceptions import ConfigurationStoreError
from tcrun.store.base import Scope
from tcrun.store.registry import WindowsRegistryStore

REG_SZ = 1
REG_EXPAND_SZ = 2
REG_DWORD = 4

UNINSTALL = r"SOFTWARE\Microsoft\Windows\CurrentVersion\Uninstall"


class FakeHandle:
    def __init__(self, node):
        self.node = node
        self.closed = False

    def Close(self):
        self.closed = True


class FakeWinreg:
    """Minimal winreg replacement backed by nested dicts.

    Keys are dicts; values are (data, type) tuples.
    """

    HKEY_LOCAL_MACHINE = "HKLM"
    HKEY_CURRENT_USER = "HKCU"
    KEY_READ = 0x20019
    REG_SZ = REG_SZ
    REG_EXPAND_SZ = REG_EXPAND_SZ

    def __init__(self, hives):
        self.hives = hives
        self.handles = []
        self.denied = set()

    def OpenKey(self, key, sub_key, reserved=0, access=KEY_READ):
        node = self.hives[key] if isinstance(key, str) else key.node
        for part in [p for p in sub_key.split("\\") if p]:
            if part in self.denied:
                raise PermissionError(13, "Access is denied")
            child = node.get(part)
            if not isinstance(child, dict):
                raise FileNotFoundError(2, "The system cannot find the file specified")
            node = child
        handle = FakeHandle(node)
        self.handles.append(handle)
        return handle

    def QueryInfoKey(self, key):
        subkeys = [name for name, value in key.node.items() if isinstance(value, dict)]
        return (len(subkeys), 0, 0)

    def EnumKey(self, key, index):
        subkeys = [name for name, value in key.node.items() if isinstance(value, dict)]
        if index >= len(subkeys):
            error = OSError("No more data is available")
            error.winerror = 259
            raise error
        return subkeys[index]

    def QueryValueEx(self, key, name):
        value = key.node.get(name)
        if not isinstance(value, tuple):
            raise FileNotFoundError(2, "The system cannot find the file specified")
        return value

    def ExpandEnvironmentStrings(self, value):
        return value.replace("%ProgramFiles%", "C:\\Program Files")


def registry_tree(machine_records, user_records=None):
    def hive(records, software):
        uninstall = dict(records)
        return {software: {"Microsoft": {"Windows": {"CurrentVersion": {"Uninstall": uninstall}}}}}

    return {
        "HKLM": hive(machine_records, "SOFTWARE"),
        "HKCU": hive(user_records or {}, "Software"),
    }


@pytest.fixture
def fake_winreg():
    winreg = FakeWinreg(
        registry_tree(
            {
                "{A}": {
                    "DisplayName": ("Swift Developer Toolkit", REG_SZ),
                    "DisplayVersion": ("6.0.1", REG_SZ),
                    "EstimatedSize": (1024, REG_DWORD),
                    "Variables": {
                        "InstallRoot": ("%ProgramFiles%\\Swift", REG_EXPAND_SZ)
                    },
                },
                "{B}": {"DisplayName": ("Other Product", REG_SZ)},
            },
            {"{C}": {"DisplayName": ("Swift Developer Toolkit", REG_SZ)}},
        )
    )
    with patch.dict(sys.modules, {"winreg": winreg}):
        yield winreg


class TestWindowsRegistryStore:
    """Tests for WindowsRegistryStore."""

    def test_uninstall_roots(self, fake_winreg):
        """Test machine and user uninstall keys are read."""
        store = WindowsRegistryStore()

        with store.open_uninstall_root(Scope.MACHINE) as root:
            assert list(root.subkeys()) == ["{A}", "{B}"]
        with store.open_uninstall_root(Scope.USER) as root:
            assert list(root.subkeys()) == ["{C}"]

    def test_read_string_value(self, fake_winreg):
        store = WindowsRegistryStore()

        assert (
            store.read_string_value(Scope.MACHINE, UNINSTALL + "\\{A}", "DisplayVersion")
            == "6.0.1"
        )

    def test_expand_sz(self, fake_winreg):
        """Test REG_EXPAND_SZ values are expanded."""
        store = WindowsRegistryStore()

        with store.open_key(Scope.MACHINE, UNINSTALL + "\\{A}") as key:
            assert key.value("InstallRoot", subkey="Variables") == "C:\\Program Files\\Swift"

    def test_non_string_value(self, fake_winreg):
        """Test non-string values read as absent."""
        store = WindowsRegistryStore()

        assert (
            store.read_string_value(Scope.MACHINE, UNINSTALL + "\\{A}", "EstimatedSize")
            is None
        )

    def test_missing_value_and_key(self, fake_winreg):
        store = WindowsRegistryStore()

        assert store.read_string_value(Scope.MACHINE, UNINSTALL + "\\{A}", "Publisher") is None
        assert store.open_key(Scope.MACHINE, UNINSTALL + "\\{Z}") is None

        with store.open_key(Scope.MACHINE, UNINSTALL + "\\{B}") as key:
            assert key.open_subkey("Variables") is None
            assert key.value("InstallRoot", subkey="Variables") is None

    def test_handles_closed(self, fake_winreg):
        """Test every opened handle is closed again."""
        store = WindowsRegistryStore()

        store.list_child_keys(Scope.MACHINE, UNINSTALL)
        with store.open_key(Scope.MACHINE, UNINSTALL + "\\{A}") as key:
            key.value("InstallRoot", subkey="Variables")

        assert fake_winreg.handles
        assert all(handle.closed for handle in fake_winreg.handles)

    def test_handle_closed_on_error(self, fake_winreg):
        store = WindowsRegistryStore()

        with pytest.raises(RuntimeError):
            with store.open_key(Scope.MACHINE, UNINSTALL) as key:
                raise RuntimeError("stop")

        assert key._handle is None
        assert all(handle.closed for handle in fake_winreg.handles)

    def test_access_denied(self, fake_winreg):
        """Test errors other than 'not found' are reported."""
        fake_winreg.denied.add("Uninstall")
        store = WindowsRegistryStore()

        with pytest.raises(ConfigurationStoreError, match="HKEY_LOCAL_MACHINE"):
            store.open_uninstall_root(Scope.MACHINE)

    def test_missing_uninstall_root(self):
        winreg = FakeWinreg({"HKLM": {}, "HKCU": {}})

        with patch.dict(sys.modules, {"winreg": winreg}):
            store = WindowsRegistryStore()
            assert store.open_uninstall_root(Scope.MACHINE) is None
            assert store.open_uninstall_root(Scope.USER) is None

    def test_key_removed_while_enumerating(self, fake_winreg):
        """Test enumeration stops cleanly when keys disappear mid-scan."""
        store = WindowsRegistryStore()

        with store.open_uninstall_root(Scope.MACHINE) as root:
            names = root.subkeys()
            assert next(names) == "{A}"
            del root._handle.node["{B}"]
            assert list(names) == []


def test_scope_system_flag():
    assert Scope.MACHINE.system is True
    assert Scope.USER.system is False
