"""
Environment variables consumed by tcrun.

- SDKROOT: default SDK selector (its last path component)
- TOOLCHAINS: default toolchain selector
- PATHEXT: executable extensions tried for extensionless tool names
"""

import logging
import ntpath
import os
from typing import List, Mapping, Optional

logger = logging.getLogger(__name__)

SDKROOT = "SDKROOT"
TOOLCHAINS = "TOOLCHAINS"
PATHEXT = "PATHEXT"

DEFAULT_SDK = "Windows.sdk"


def get_environment_variable(
    name: str, environ: Optional[Mapping[str, str]] = None
) -> Optional[str]:
    """
    Read an environment variable, treating an empty value as unset.

    Args:
        name: Variable name
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Variable value, or None if unset or empty
    """
    environ = os.environ if environ is None else environ
    value = environ.get(name)
    if not value:
        return None
    return value


def sdk_name_from_path(path: str) -> str:
    """
    Get the SDK name from an SDK path.

    Both separators are accepted so that Windows style SDKROOT values
    resolve the same way on every host. Trailing separators are ignored.

    Example:
        >>> sdk_name_from_path("C:/Platforms/Windows.platform/Developer/SDKs/Windows.sdk/")
        'Windows.sdk'
    """
    return ntpath.basename(path.rstrip("\\/"))


def default_sdk_name(
    environ: Optional[Mapping[str, str]] = None, fallback: str = DEFAULT_SDK
) -> str:
    """
    Get the SDK selector implied by the environment.

    Args:
        environ: Environment mapping (defaults to os.environ)
        fallback: SDK name used when SDKROOT is unset

    Returns:
        Last path component of SDKROOT, or ``fallback``
    """
    sdkroot = get_environment_variable(SDKROOT, environ)
    if sdkroot is None:
        return fallback

    name = sdk_name_from_path(sdkroot)
    logger.debug(f"Using SDK {name} from {SDKROOT}={sdkroot}")
    return name or fallback


def default_toolchain_id(environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """Get the toolchain selector from TOOLCHAINS, if set."""
    toolchain = get_environment_variable(TOOLCHAINS, environ)
    if toolchain is not None:
        logger.debug(f"Using toolchain {toolchain} from {TOOLCHAINS}")
    return toolchain


def executable_extensions(environ: Optional[Mapping[str, str]] = None) -> List[str]:
    """
    Get the executable extension search list from PATHEXT.

    Args:
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Extensions in PATHEXT order (e.g., ['.COM', '.EXE', '.BAT']), or an
        empty list when PATHEXT is unset
    """
    pathext = get_environment_variable(PATHEXT, environ)
    if pathext is None:
        return []
    return [extension for extension in pathext.split(";") if extension]
