"""
Launching a resolved tool.

The child inherits this process's environment and standard streams with
two changes: SDKROOT points at the resolved SDK (or is removed when there
is none) and TOOLCHAINS is removed, since the toolchain has already been
selected.
"""

import logging
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from ..core.environment import SDKROOT, TOOLCHAINS
from ..core.exceptions import DispatchError
from .models import SDK

logger = logging.getLogger(__name__)


def build_environment(
    base: Optional[Mapping[str, str]] = None, sdk: Optional[SDK] = None
) -> Dict[str, str]:
    """
    Build the child process environment.

    Args:
        base: Environment to start from (defaults to os.environ)
        sdk: Resolved SDK, or None

    Returns:
        New environment mapping; ``base`` is not modified
    """
    environment = dict(os.environ if base is None else base)

    if sdk is not None:
        environment[SDKROOT] = str(sdk.location)
    else:
        environment.pop(SDKROOT, None)

    environment.pop(TOOLCHAINS, None)
    return environment


@dataclass(frozen=True)
class DispatchResult:
    """
    Outcome of running a tool.

    Attributes:
        executable: Path of the launched tool
        returncode: Child exit status
    """

    executable: Path
    returncode: int

    @property
    def exit_code(self) -> int:
        """
        Status to report as our own exit code.

        A child killed by signal N has a negative returncode; it is
        reported as 128 + N the way POSIX shells do.
        """
        if self.returncode < 0:
            return 128 - self.returncode
        return self.returncode


class Dispatcher:
    """Runs resolved tools and reports their exit status."""

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        """
        Initialize dispatcher.

        Args:
            environ: Environment inherited by children (defaults to os.environ)
        """
        self.environ = environ

    def run(
        self,
        executable: Path,
        arguments: Optional[List[str]] = None,
        sdk: Optional[SDK] = None,
    ) -> DispatchResult:
        """
        Run ``executable`` and wait for it to finish.

        Args:
            executable: Tool to launch
            arguments: Arguments passed through verbatim
            sdk: Resolved SDK exported as SDKROOT

        Returns:
            DispatchResult carrying the child's exit status

        Raises:
            DispatchError: If the tool cannot be launched
        """
        command = [str(executable)] + list(arguments or [])
        environment = build_environment(self.environ, sdk)

        logger.debug(f"Running: {' '.join(command)}")
        try:
            result = subprocess.run(command, env=environment, check=False)
        except OSError as e:
            raise DispatchError(str(executable), e.strerror or str(e))

        logger.debug(f"{executable} exited with {result.returncode}")
        return DispatchResult(executable=Path(executable), returncode=result.returncode)
