"""
Configuration store backends for tcrun.

This module provides:
- The read-only ConfigurationStore/StoreKey interface
- A Windows registry backend
- A YAML file backend
"""

import logging
import sys

from tcrun.core.config import TcrunConfig
from tcrun.core.exceptions import ConfigError
from tcrun.store.base import (
    SCOPES,
    ConfigurationStore,
    Scope,
    StoreKey,
)
from tcrun.store.registry import WindowsRegistryStore
from tcrun.store.yaml_store import YamlConfigurationStore

logger = logging.getLogger(__name__)


def create_store(config: TcrunConfig) -> ConfigurationStore:
    """
    Create the configuration store selected by ``config``.

    Args:
        config: tcrun configuration

    Returns:
        ConfigurationStore instance

    Raises:
        ConfigError: If the registry store is requested off Windows
    """
    if config.store.type == "yaml":
        return YamlConfigurationStore.from_file(config.store.path)

    if sys.platform != "win32":
        raise ConfigError(
            "The registry store is only available on Windows; "
            "configure 'store: {type: yaml, path: ...}' instead"
        )
    return WindowsRegistryStore()


__all__ = [
    "SCOPES",
    "ConfigurationStore",
    "Scope",
    "StoreKey",
    "WindowsRegistryStore",
    "YamlConfigurationStore",
    "create_store",
]
