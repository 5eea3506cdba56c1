"""
Core functionality for tcrun.

This package contains the foundational modules that other components depend on.
"""

from .config import (
    StoreConfig,
    TcrunConfig,
    find_config_file,
    load_config,
)

from .environment import (
    DEFAULT_SDK,
    default_sdk_name,
    default_toolchain_id,
    executable_extensions,
)

from .exceptions import (
    TcrunError,
    ConfigError,
    ConfigurationStoreError,
    MalformedRecordError,
    ToolchainMetadataError,
    DispatchError,
)

from .sequence import MemoizedSequence
from .version import Version

__all__ = [
    # Config
    "StoreConfig",
    "TcrunConfig",
    "find_config_file",
    "load_config",
    # Environment
    "DEFAULT_SDK",
    "default_sdk_name",
    "default_toolchain_id",
    "executable_extensions",
    # Exceptions
    "TcrunError",
    "ConfigError",
    "ConfigurationStoreError",
    "MalformedRecordError",
    "ToolchainMetadataError",
    "DispatchError",
    # Values
    "MemoizedSequence",
    "Version",
]
