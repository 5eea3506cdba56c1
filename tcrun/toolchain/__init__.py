"""
Toolchain discovery and dispatch for tcrun.

This module provides functionality for:
- Lazy enumeration of toolchains, platforms and SDKs
- Installation discovery from the configuration store
- Selector resolution
- Executable search and launching
"""

from tcrun.toolchain.dispatcher import (
    Dispatcher,
    DispatchResult,
    build_environment,
)
from tcrun.toolchain.enumerators import (
    enumerate_platforms,
    enumerate_sdks,
    enumerate_toolchains,
    read_toolchain_identifier,
)
from tcrun.toolchain.installation import (
    Installation,
    InstallationRecordBuilder,
    enumerate_installations,
)
from tcrun.toolchain.models import SDK, Platform, Toolchain
from tcrun.toolchain.resolver import Resolution, Resolver
from tcrun.toolchain.search import candidate_names, find_executable

__all__ = [
    # Dispatch
    "Dispatcher",
    "DispatchResult",
    "build_environment",
    # Enumeration
    "enumerate_platforms",
    "enumerate_sdks",
    "enumerate_toolchains",
    "read_toolchain_identifier",
    # Installations
    "Installation",
    "InstallationRecordBuilder",
    "enumerate_installations",
    # Records
    "SDK",
    "Platform",
    "Toolchain",
    # Resolution
    "Resolution",
    "Resolver",
    "candidate_names",
    "find_executable",
]
