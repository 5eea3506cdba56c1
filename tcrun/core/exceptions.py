"""
Centralized exception hierarchy for tcrun.

Resolution that simply finds nothing is not an error and is reported as
``None`` by the library. The exceptions below cover the hard failures:
corrupt installation records, configuration store and filesystem access
errors, invalid configuration files and child process launch failures.
"""


# ============================================================================
# Base Exceptions
# ============================================================================


class TcrunError(Exception):
    """Base exception for all tcrun errors."""

    pass


class ConfigError(TcrunError):
    """Configuration file parsing or validation error."""

    pass


# ============================================================================
# Configuration Store Exceptions
# ============================================================================


class ConfigurationStoreError(TcrunError):
    """Raised when the configuration store cannot be read."""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        self.reason = reason
        msg = f"Failed to read configuration store key: {path}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class MalformedRecordError(TcrunError):
    """Raised when an installation record carries an unparsable version."""

    def __init__(self, key: str, version: str):
        self.key = key
        self.version = version
        super().__init__(
            f"Installation record {key} has an invalid DisplayVersion: {version!r}"
        )


# ============================================================================
# Toolchain Exceptions
# ============================================================================


class ToolchainMetadataError(TcrunError):
    """Raised when a toolchain's ToolchainInfo.plist is missing or malformed."""

    pass


class DispatchError(TcrunError):
    """Raised when the resolved tool cannot be launched."""

    def __init__(self, executable: str, reason: str):
        self.executable = executable
        self.reason = reason
        super().__init__(f"Failed to execute {executable}: {reason}")
