"""
Lazy directory enumerators for installation contents.

Each enumerator is a generator over the immediate children of one
directory. Nothing is read until the first element is requested, a
missing directory yields nothing, and entries come back in directory
listing order. Wrap the result in MemoizedSequence to walk it more than
once.

Layout under an installation root:

    Toolchains/<toolchain>/ToolchainInfo.plist
    Toolchains/<toolchain>/usr/bin/<tool>
    Platforms/<version>/<name>.platform/Developer/SDKs/<name>.sdk
"""

import logging
import os
import plistlib
from pathlib import Path
from typing import Iterator

from ..core.exceptions import ToolchainMetadataError
from ..core.sequence import MemoizedSequence
from .models import SDK, Platform, Toolchain

logger = logging.getLogger(__name__)

TOOLCHAIN_INFO = "ToolchainInfo.plist"
SDK_SUFFIX = ".sdk"
PLATFORM_SUFFIX = ".platform"


def scan_directories(root: Path) -> Iterator[os.DirEntry]:
    """
    Iterate over the subdirectories of ``root``.

    Args:
        root: Directory to scan

    Yields:
        Directory entries for each immediate subdirectory

    Raises:
        OSError: For failures other than ``root`` being absent
    """
    try:
        listing = os.scandir(root)
    except (FileNotFoundError, NotADirectoryError):
        logger.debug(f"Directory not found, nothing to enumerate: {root}")
        return

    with listing as entries:
        for entry in entries:
            if entry.is_dir():
                yield entry


def enumerate_sdks(root: Path) -> Iterator[SDK]:
    """
    Enumerate ``*.sdk`` directories under ``root``.

    Args:
        root: A platform's ``Developer/SDKs`` directory

    Yields:
        SDK records
    """
    for entry in scan_directories(root):
        if entry.name.endswith(SDK_SUFFIX):
            yield SDK.from_path(Path(entry.path))


def enumerate_platforms(root: Path) -> Iterator[Platform]:
    """
    Enumerate ``*.platform`` directories under ``root``.

    Each platform's SDKs are enumerated lazily from its
    ``Developer/SDKs`` directory.

    Args:
        root: An installation's ``Platforms/<version>`` directory

    Yields:
        Platform records
    """
    for entry in scan_directories(root):
        if not entry.name.endswith(PLATFORM_SUFFIX):
            continue
        location = Path(entry.path)
        yield Platform(
            identifier=entry.name,
            location=location,
            sdks=MemoizedSequence(
                enumerate_sdks(location / "Developer" / "SDKs")
            ),
        )


def read_toolchain_identifier(location: Path) -> str:
    """
    Read a toolchain's identifier from its ToolchainInfo.plist.

    Args:
        location: Toolchain directory

    Returns:
        Value of the ``Identifier`` key

    Raises:
        ToolchainMetadataError: If the file is missing, is not a property
            list, or has no string ``Identifier``
        OSError: If the file exists but cannot be read
    """
    info_path = location / TOOLCHAIN_INFO
    try:
        with open(info_path, "rb") as f:
            info = plistlib.load(f)
    except FileNotFoundError:
        raise ToolchainMetadataError(f"{TOOLCHAIN_INFO} not found in {location}")
    except OSError:
        raise
    except Exception as e:
        # plistlib surfaces some malformed XML values as arbitrary errors
        raise ToolchainMetadataError(f"Invalid {info_path}: {e}")

    if not isinstance(info, dict):
        raise ToolchainMetadataError(f"Invalid {info_path}: expected a dictionary")

    identifier = info.get("Identifier")
    if not isinstance(identifier, str) or not identifier:
        raise ToolchainMetadataError(f"No Identifier in {info_path}")

    return identifier


def enumerate_toolchains(root: Path) -> Iterator[Toolchain]:
    """
    Enumerate toolchain directories under ``root``.

    A directory without a valid ToolchainInfo.plist is skipped with a
    warning; its siblings are still enumerated.

    Args:
        root: An installation's ``Toolchains`` directory

    Yields:
        Toolchain records
    """
    for entry in scan_directories(root):
        location = Path(entry.path)
        try:
            identifier = read_toolchain_identifier(location)
        except ToolchainMetadataError as e:
            logger.warning(f"Skipping toolchain: {e}")
            continue
        yield Toolchain(identifier=identifier, location=location)
