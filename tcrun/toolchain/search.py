"""
Executable lookup inside a toolchain's binary directory.

Follows the Windows search rules for a single directory: a name that
already has an extension is looked up as is; an extensionless name is
tried verbatim first and then with each extension from the search list
(PATHEXT by default) in order.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from ..core.environment import executable_extensions

logger = logging.getLogger(__name__)


def candidate_names(name: str, extensions: Optional[List[str]] = None) -> List[str]:
    """
    Get the file names tried for ``name``, in search order.

    Args:
        name: Tool name (e.g., 'swiftc', 'swiftc.exe')
        extensions: Extension search list (defaults to PATHEXT)

    Returns:
        Candidate file names

    Example:
        >>> candidate_names("swiftc", [".COM", ".EXE"])
        ['swiftc', 'swiftc.COM', 'swiftc.EXE']
        >>> candidate_names("swiftc.exe", [".COM", ".EXE"])
        ['swiftc.exe']
    """
    if Path(name).suffix:
        return [name]

    if extensions is None:
        extensions = executable_extensions()

    candidates = [name]
    for extension in extensions:
        if not extension.startswith("."):
            extension = "." + extension
        candidates.append(name + extension)
    return candidates


def find_executable(
    name: str,
    directory: Union[str, Path],
    extensions: Optional[List[str]] = None,
) -> Optional[Path]:
    """
    Find an executable in ``directory``.

    Args:
        name: Tool name, with or without an extension
        directory: Directory to search (not searched recursively)
        extensions: Extension search list (defaults to PATHEXT)

    Returns:
        Absolute path to the first candidate that exists as a file, or None
    """
    if not name:
        return None

    directory = Path(directory).absolute()
    for candidate in candidate_names(name, extensions):
        path = directory / candidate
        if path.is_file():
            logger.debug(f"Found {name} at {path}")
            return path

    logger.debug(f"{name} not found in {directory}")
    return None
