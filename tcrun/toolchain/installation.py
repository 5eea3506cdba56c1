"""
Installation discovery.

Installers register each toolchain bundle in the configuration store's
uninstall database. Every record whose DisplayName starts with the
product prefix becomes an Installation; its toolchains and platforms are
scanned lazily from the install root the record points at.

Usage:
    from tcrun.store import WindowsRegistryStore
    from tcrun.toolchain.installation import enumerate_installations

    for installation in enumerate_installations(WindowsRegistryStore()):
        print(installation.describe())
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from ..core.config import PRODUCT_PREFIX
from ..core.exceptions import MalformedRecordError
from ..core.sequence import MemoizedSequence
from ..core.version import Version
from ..store.base import SCOPES, ConfigurationStore, StoreKey
from .enumerators import enumerate_platforms, enumerate_toolchains
from .models import Platform, Toolchain

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Installation:
    """
    One installed copy of the toolchain product.

    Attributes:
        system: True for a machine-wide record, False for a per-user one
        vendor: Publisher from the installation record
        version: Installation version
        root: Install root directory
        toolchains: Toolchains under ``root/Toolchains``
        platforms: Platforms under ``root/Platforms/<version>``
    """

    system: bool
    vendor: str
    version: Version
    root: Path
    toolchains: MemoizedSequence = field(compare=False, repr=False)
    platforms: MemoizedSequence = field(compare=False, repr=False)

    @classmethod
    def at(cls, root: Path, version: Version, vendor: str, system: bool) -> "Installation":
        """
        Create an installation whose contents are scanned from ``root``.

        Args:
            root: Install root directory
            version: Installation version
            vendor: Publisher name
            system: True for a machine-wide installation

        Returns:
            Installation with lazy toolchain and platform sequences
        """
        return cls(
            system=system,
            vendor=vendor,
            version=version,
            root=root,
            toolchains=MemoizedSequence(enumerate_toolchains(root / "Toolchains")),
            platforms=MemoizedSequence(
                enumerate_platforms(root / "Platforms" / str(version))
            ),
        )

    @property
    def platforms_root(self) -> Path:
        """Directory holding this installation's platforms."""
        return self.root / "Platforms" / str(self.version)

    def has_toolchain(self, identifier: str) -> bool:
        return self.toolchains.contains(lambda tc: tc.identifier == identifier)

    def has_sdk(self, sdk: str) -> bool:
        return self.platforms.contains(lambda platform: platform.contains(sdk))

    def toolchain(self, identifier: Optional[str] = None) -> Optional[Toolchain]:
        """
        Get a toolchain.

        Args:
            identifier: Toolchain identifier, or None for the first toolchain

        Returns:
            Matching toolchain, or None
        """
        if identifier is None:
            return self.toolchains.first()
        return self.toolchains.first(lambda tc: tc.identifier == identifier)

    def platforms_containing(self, sdk: str) -> List[Platform]:
        """Get every platform owning an SDK named ``sdk``, in scan order."""
        return [platform for platform in self.platforms if platform.contains(sdk)]

    def describe(self) -> str:
        """
        Human-readable description, as printed by ``tcrun --toolchains``.

        Scans every toolchain, platform and SDK of the installation.
        """
        lines = [
            "SwiftInstallation {",
            f"  System: {str(self.system).lower()}",
            f"  Vendor: {self.vendor}",
            f"  Version: {self.version}",
            "  Toolchains:",
        ]
        for toolchain in self.toolchains:
            lines.append(f"    - {toolchain.identifier} [{toolchain.location}]")
        lines.append("  Platforms:")
        for platform in self.platforms:
            lines.append(f"    - {platform.identifier}")
            lines.append("        SDKs:")
            for sdk in platform.sdks:
                lines.append(f"          - {sdk.identifier} [{sdk.location}]")
        lines.append("}")
        return "\n".join(lines)

    def __str__(self) -> str:
        scope = "system" if self.system else "user"
        return f"{self.vendor} {self.version} ({scope}) at {self.root}"


class InstallationRecordBuilder:
    """
    Turns configuration store records into Installations.

    Records for other products, and records missing a required value, are
    skipped. A record for the product whose DisplayVersion cannot be parsed
    is corrupt and raises MalformedRecordError.
    """

    def __init__(self, product_prefix: str = PRODUCT_PREFIX):
        """
        Initialize builder.

        Args:
            product_prefix: Required DisplayName prefix
        """
        self.product_prefix = product_prefix

    def build(self, key: StoreKey, system: bool) -> Optional[Installation]:
        """
        Build an installation from one record.

        Args:
            key: Open store key of the record
            system: True if the record comes from the machine-wide root

        Returns:
            Installation, or None if the record is not a usable match

        Raises:
            MalformedRecordError: If DisplayVersion is not a valid version
        """
        display_name = key.value("DisplayName")
        if display_name is None or not display_name.startswith(self.product_prefix):
            return None

        display_version = key.value("DisplayVersion")
        publisher = key.value("Publisher")
        if display_version is None or publisher is None:
            logger.debug(f"Skipping {key.path}: missing DisplayVersion or Publisher")
            return None

        version = Version.parse(display_version)
        if version is None:
            raise MalformedRecordError(key.path, display_version)

        install_root = key.value("InstallRoot", subkey="Variables")
        if install_root is None:
            logger.debug(f"Skipping {key.path}: missing Variables\\InstallRoot")
            return None

        logger.debug(f"Found {display_name} {version} at {install_root}")
        return Installation.at(
            Path(install_root), version=version, vendor=publisher, system=system
        )


def enumerate_installations(
    store: ConfigurationStore, product_prefix: str = PRODUCT_PREFIX
) -> List[Installation]:
    """
    Discover every installation recorded in ``store``.

    Machine-wide records are read before per-user records; the result is
    sorted by version, newest first, keeping discovery order for equal
    versions.

    Args:
        store: Configuration store to read
        product_prefix: Required DisplayName prefix

    Returns:
        Installations, newest first

    Raises:
        MalformedRecordError: If a matching record has an invalid version
        ConfigurationStoreError: If the store cannot be read
    """
    builder = InstallationRecordBuilder(product_prefix)
    installations: List[Installation] = []

    for scope in SCOPES:
        root = store.open_uninstall_root(scope)
        if root is None:
            continue

        with root:
            for name in root.subkeys():
                record = root.open_subkey(name)
                if record is None:
                    continue
                with record:
                    installation = builder.build(record, scope.system)
                if installation is not None:
                    installations.append(installation)

    installations.sort(key=lambda installation: installation.version, reverse=True)
    logger.debug(f"Found {len(installations)} installation(s)")
    return installations
