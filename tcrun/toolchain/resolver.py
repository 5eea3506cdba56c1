"""
Selection of an installation, toolchain and SDK.

Selectors are optional. When both a toolchain identifier and an SDK name
are given, an installation must provide both to be chosen. Installations
are tried newest first, so without selectors the newest one wins.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from .installation import Installation
from .models import SDK, Platform, Toolchain

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resolution:
    """
    Result of resolving selectors against the installed toolchains.

    Attributes:
        installation: Selected installation
        toolchain: Selected toolchain, None if the installation has none
        platform: Platform owning the selected SDK, None without an SDK selector
        sdk: Selected SDK, None without an SDK selector
    """

    installation: Installation
    toolchain: Optional[Toolchain]
    platform: Optional[Platform] = None
    sdk: Optional[SDK] = None

    def find_tool(self, tool: str, extensions: Optional[List[str]] = None) -> Optional[Path]:
        """
        Find ``tool`` in the selected toolchain.

        Args:
            tool: Tool name (e.g., 'swiftc')
            extensions: Extension search list (defaults to PATHEXT)

        Returns:
            Path to the executable, or None if there is no toolchain or the
            toolchain lacks the tool
        """
        if self.toolchain is None:
            logger.debug(f"No toolchain in {self.installation}")
            return None
        return self.toolchain.find(tool, extensions)


class Resolver:
    """Resolve selectors against a version-sorted installation list."""

    def __init__(self, installations: Sequence[Installation]):
        """
        Initialize resolver.

        Args:
            installations: Installations, newest first
        """
        self.installations = installations

    def select_installation(
        self, toolchain_id: Optional[str] = None, sdk_name: Optional[str] = None
    ) -> Optional[Installation]:
        """
        Select the first installation matching every given selector.

        Args:
            toolchain_id: Required toolchain identifier
            sdk_name: Required SDK name

        Returns:
            Installation, or None if none matches
        """
        for installation in self.installations:
            if toolchain_id is not None and not installation.has_toolchain(toolchain_id):
                logger.debug(f"{installation}: no toolchain {toolchain_id}")
                continue
            if sdk_name is not None and not installation.has_sdk(sdk_name):
                logger.debug(f"{installation}: no SDK {sdk_name}")
                continue
            return installation
        return None

    def resolve(
        self, toolchain_id: Optional[str] = None, sdk_name: Optional[str] = None
    ) -> Optional[Resolution]:
        """
        Resolve selectors to an installation, toolchain, platform and SDK.

        Args:
            toolchain_id: Toolchain identifier, or None for the first toolchain
            sdk_name: SDK name (e.g., 'Windows.sdk'), or None for no SDK

        Returns:
            Resolution, or None if no installation satisfies the selectors
        """
        installation = self.select_installation(toolchain_id, sdk_name)
        if installation is None:
            logger.debug(
                f"No installation matches toolchain={toolchain_id} sdk={sdk_name}"
            )
            return None

        logger.debug(f"Selected {installation}")

        platform = None
        sdk = None
        if sdk_name is not None:
            platform = installation.platforms.first(
                lambda candidate: candidate.contains(sdk_name)
            )
            if platform is None:
                return None
            sdk = platform.sdk(sdk_name)

        return Resolution(
            installation=installation,
            toolchain=installation.toolchain(toolchain_id),
            platform=platform,
            sdk=sdk,
        )
