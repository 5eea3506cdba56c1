"""
Pytest configuration and shared fixtures for tcrun tests.
"""

import logging

import pytest
from pathlib import Path

# Import test fixtures to make them available to all tests
# These imports register the fixtures with pytest's fixture discovery system
# ruff: noqa: F401
from tests.fixtures.installations import (
    swift_installation,
    swift_store,
)


@pytest.fixture
def isolated_home(tmp_path: Path, monkeypatch) -> Path:
    """Create isolated home directory so ~/.tcrun.yaml is never picked up."""
    fake_home = tmp_path / "home"
    fake_home.mkdir()

    monkeypatch.setenv("HOME", str(fake_home))
    monkeypatch.setenv("USERPROFILE", str(fake_home))

    return fake_home


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Drop handlers the CLI installs on the root logger during a test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)
