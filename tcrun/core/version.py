"""
Version value type for toolchain installations.

Installation records advertise versions such as ``6.0.1`` or ``6.0.1-rc1``.
Only the numeric ``major.minor.patch`` triple takes part in ordering, so a
pre-release suffix never changes how installations sort.

Usage:
    from tcrun.core.version import Version

    version = Version.parse("6.0.1-rc1")
    assert version == Version(6, 0, 1)
    assert str(version) == "6.0.1"
"""

import functools
from dataclasses import dataclass
from typing import Optional


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class Version:
    """
    Three component version number.

    Attributes:
        major: Major version component
        minor: Minor version component
        patch: Patch version component
    """

    major: int
    minor: int
    patch: int

    @classmethod
    def parse(cls, text: str) -> Optional["Version"]:
        """
        Parse a version string.

        Everything from the first ``-`` on is discarded, and the rest must be
        exactly three dot separated non-negative integers.

        Args:
            text: Version string (e.g., '6.0.1', '6.0.1-rc1')

        Returns:
            Parsed Version, or None if the string has any other shape

        Example:
            >>> Version.parse("6.0.1-rc1")
            Version(major=6, minor=0, patch=1)
            >>> Version.parse("6.0") is None
            True
        """
        if text is None:
            return None

        components = text.split("-", 1)[0].split(".")
        if len(components) != 3:
            return None

        numbers = []
        for component in components:
            # int() would also accept '+1', ' 1' and '1_0'
            if not component.isascii() or not component.isdigit():
                return None
            numbers.append(int(component))

        return cls(*numbers)

    def as_tuple(self):
        return (self.major, self.minor, self.patch)

    def __eq__(self, other):
        if not isinstance(other, Version):
            return NotImplemented
        return self.as_tuple() == other.as_tuple()

    def __lt__(self, other):
        if not isinstance(other, Version):
            return NotImplemented
        return self.as_tuple() < other.as_tuple()

    def __hash__(self):
        return hash(self.as_tuple())

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"
