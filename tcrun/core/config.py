"""
YAML configuration for tcrun.

tcrun works without any configuration file. A file can override the
product name filter, the fallback SDK, the executable extension list and
where installation records are read from.

Lookup order:
    1. --config PATH
    2. TCRUN_CONFIG environment variable
    3. ~/.tcrun.yaml

Example file:

    version: 1
    product_prefix: Swift Developer Toolkit
    default_sdk: Windows.sdk
    executable_extensions: [.exe, .bat]
    store:
      type: yaml
      path: ~/installations.yaml
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Optional

import yaml

from .environment import DEFAULT_SDK
from .exceptions import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "TCRUN_CONFIG"
DEFAULT_CONFIG_NAME = ".tcrun.yaml"

PRODUCT_PREFIX = "Swift Developer Toolkit"

STORE_TYPES = ("registry", "yaml")


@dataclass
class StoreConfig:
    """Where installation records come from."""

    type: str = "registry"  # 'registry', 'yaml'
    path: Optional[Path] = None  # YAML store file, required for 'yaml'


@dataclass
class TcrunConfig:
    """Complete tcrun configuration."""

    version: int = 1
    product_prefix: str = PRODUCT_PREFIX
    default_sdk: str = DEFAULT_SDK
    # None means "read PATHEXT at resolution time"
    executable_extensions: Optional[List[str]] = None
    store: StoreConfig = field(default_factory=StoreConfig)


def find_config_file(
    explicit: Optional[Path] = None, environ: Optional[Mapping[str, str]] = None
) -> Optional[Path]:
    """
    Locate the configuration file.

    Args:
        explicit: Path given on the command line
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Path to the configuration file, or None if none applies
    """
    environ = os.environ if environ is None else environ

    if explicit is not None:
        return Path(explicit)

    from_env = environ.get(CONFIG_ENV_VAR)
    if from_env:
        return Path(from_env)

    default = Path.home() / DEFAULT_CONFIG_NAME
    if default.is_file():
        return default

    return None


def load_config(config_path: Optional[Path] = None) -> TcrunConfig:
    """
    Load tcrun configuration.

    Args:
        config_path: Configuration file, or None for built-in defaults

    Returns:
        Parsed configuration

    Raises:
        ConfigError: If the file is missing, not valid YAML, or invalid
    """
    if config_path is None:
        logger.debug("No configuration file, using defaults")
        return TcrunConfig()

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    logger.debug(f"Loading configuration from {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}")

    if data is None:
        return TcrunConfig()

    if not isinstance(data, dict):
        raise ConfigError(f"Configuration must be a mapping: {config_path}")

    return _parse_and_validate(data, config_path.parent)


def _parse_and_validate(data: dict, base_dir: Path) -> TcrunConfig:
    """Parse and validate configuration data."""
    version = data.get("version", 1)
    if version != 1:
        raise ConfigError(f"Unsupported version: {version} (expected 1)")

    config = TcrunConfig()

    if "product_prefix" in data:
        config.product_prefix = _require_string(data, "product_prefix")

    if "default_sdk" in data:
        config.default_sdk = _require_string(data, "default_sdk")

    if "executable_extensions" in data:
        extensions = data["executable_extensions"]
        if not isinstance(extensions, list) or not all(
            isinstance(extension, str) for extension in extensions
        ):
            raise ConfigError("executable_extensions must be a list of strings")
        config.executable_extensions = extensions

    if "store" in data:
        config.store = _parse_store(data["store"], base_dir)

    return config


def _parse_store(data, base_dir: Path) -> StoreConfig:
    """Parse the store section."""
    if not isinstance(data, dict):
        raise ConfigError("store must be a mapping")

    store_type = data.get("type", "registry")
    if store_type not in STORE_TYPES:
        raise ConfigError(
            f"Invalid store type: {store_type} (expected one of {', '.join(STORE_TYPES)})"
        )

    path = data.get("path")
    if store_type == "yaml":
        if not isinstance(path, str) or not path:
            raise ConfigError("store.path is required for the yaml store")
        path = Path(path).expanduser()
        if not path.is_absolute():
            path = base_dir / path
    elif path is not None:
        logger.warning("store.path is ignored for the registry store")
        path = None

    return StoreConfig(type=store_type, path=path)


def _require_string(data: dict, key: str) -> str:
    value = data[key]
    if not isinstance(value, str) or not value:
        raise ConfigError(f"{key} must be a non-empty string")
    return value
