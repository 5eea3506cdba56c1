"""
Toolchain, platform and SDK records.

Identifiers always come from the filesystem: SDK and platform identifiers
are directory names, toolchain identifiers come from ToolchainInfo.plist.
Records are immutable; SDK lists are lazy, memoized directory scans.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from ..core.sequence import MemoizedSequence
from .search import find_executable


@dataclass(frozen=True)
class SDK:
    """
    SDK bundle (a ``*.sdk`` directory).

    Attributes:
        identifier: Directory name (e.g., 'Windows.sdk')
        location: Path to the SDK directory
    """

    identifier: str
    location: Path

    @classmethod
    def from_path(cls, location: Path) -> "SDK":
        return cls(identifier=location.name, location=location)

    def __str__(self) -> str:
        return f"{self.identifier} [{self.location}]"


@dataclass(frozen=True)
class Platform:
    """
    Platform bundle (a ``*.platform`` directory) and the SDKs it owns.

    Attributes:
        identifier: Directory name (e.g., 'Windows.platform')
        location: Path to the platform directory
        sdks: SDKs under ``Developer/SDKs``, scanned on first use
    """

    identifier: str
    location: Path
    sdks: MemoizedSequence = field(compare=False, repr=False)

    @property
    def sdk_root(self) -> Path:
        return self.location / "Developer" / "SDKs"

    def contains(self, sdk: str) -> bool:
        """Check whether this platform owns an SDK named ``sdk``."""
        return self.sdks.contains(lambda candidate: candidate.identifier == sdk)

    def sdk(self, name: str) -> Optional[SDK]:
        """Get the SDK named ``name``, or None."""
        return self.sdks.first(lambda candidate: candidate.identifier == name)

    def __str__(self) -> str:
        return f"{self.identifier} [{self.location}]"


@dataclass(frozen=True)
class Toolchain:
    """
    Toolchain bundle under an installation's ``Toolchains`` directory.

    Attributes:
        identifier: Identifier from ToolchainInfo.plist (e.g., '6.0.1-RELEASE')
        location: Path to the toolchain directory
    """

    identifier: str
    location: Path

    @property
    def bindir(self) -> Path:
        """Directory holding the toolchain's executables."""
        return self.location / "usr" / "bin"

    def find(self, tool: str, extensions: Optional[List[str]] = None) -> Optional[Path]:
        """
        Find an executable in this toolchain.

        Args:
            tool: Tool name, with or without an extension (e.g., 'swiftc')
            extensions: Extensions to try for extensionless names
                (defaults to PATHEXT)

        Returns:
            Path to the executable, or None if not found
        """
        return find_executable(tool, self.bindir, extensions)

    def __str__(self) -> str:
        return f"{self.identifier} [{self.location}]"
