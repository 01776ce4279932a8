"""Configuration file loader for flakekeeper.

Handles discovery, loading, parsing, and validation of configuration files.
Supports two formats:

- ``flakekeeper.toml``: settings under ``[flakekeeper]`` table
- ``pyproject.toml``: settings under ``[tool.flakekeeper]`` table

Discovery order:

1. Explicit path from ``--config`` or ``FLAKEKEEPER_CONFIG``
2. ``flakekeeper.toml`` in current directory
3. ``pyproject.toml`` with ``[tool.flakekeeper]`` section

Configuration precedence: defaults < config file < CLI args.

Typical usage::

    config = load_config()  # Auto-discover
    config = load_config(Path("custom.toml"))  # Explicit path

Example (``flakekeeper.toml``)::

    [flakekeeper]
    allow_custom_host = true
    check_root_inputs = false
"""

from __future__ import annotations

from pathlib import Path
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import tomli as tomllib

from flakekeeper.exceptions import ConfigError
from flakekeeper.utils.logger import get_logger
from flakekeeper.constants import (
    DEFAULT_CHECK_ROOT_INPUTS,
    DEFAULT_ENFORCE_LOCK_VERSION,
)

logger = get_logger("config")

#: Boolean options accepted in the configuration section.
BOOLEAN_OPTIONS = (
    "allow_custom_host",
    "check_root_inputs",
    "enforce_lock_version",
)


@dataclass
class FlakeKeeperConfig:
    """Parsed and validated flakekeeper configuration.

    All fields have defaults, so empty config files are valid.

    Attributes:
        allow_custom_host: Honor ``host`` overrides on original inputs and
            recognize tarball inputs. ``None`` keeps the default of the
            input mode (on for package files, off for inline lock content).
        check_root_inputs: Skip lock nodes that root does not declare as
            inputs.
        enforce_lock_version: Reject lock files of any format version other
            than the supported one.
        source_path: Path to loaded config file, or ``None`` if using defaults.
    """

    allow_custom_host: Optional[bool] = None
    check_root_inputs: bool = DEFAULT_CHECK_ROOT_INPUTS
    enforce_lock_version: bool = DEFAULT_ENFORCE_LOCK_VERSION

    # Metadata (not a user-facing option)
    source_path: Optional[Path] = field(default=None, repr=False)

    def to_log_dict(self) -> Dict[str, Any]:
        """Return configuration options as a dictionary for debug logging."""
        return {name: getattr(self, name) for name in BOOLEAN_OPTIONS}


def discover_config_file(explicit_path: Optional[Path] = None) -> Optional[Path]:
    """Find the configuration file to load.

    Args:
        explicit_path: Explicit config path. If provided, must exist.

    Returns:
        Resolved path to config file, or ``None`` if not found.

    Raises:
        ConfigError: Explicit path provided but does not exist.
    """
    if explicit_path is not None:
        resolved = explicit_path.resolve()
        if not resolved.is_file():
            raise ConfigError(
                f"Configuration file not found: {explicit_path}",
                config_path=str(explicit_path),
            )
        logger.debug("Using explicit config: %s", resolved)
        return resolved

    cwd = Path.cwd()

    flakekeeper_toml = cwd / "flakekeeper.toml"
    if flakekeeper_toml.is_file():
        logger.debug("Found flakekeeper.toml: %s", flakekeeper_toml)
        return flakekeeper_toml

    pyproject_toml = cwd / "pyproject.toml"
    if pyproject_toml.is_file() and _pyproject_has_flakekeeper_section(pyproject_toml):
        logger.debug("Found [tool.flakekeeper] in pyproject.toml: %s", pyproject_toml)
        return pyproject_toml

    logger.debug("No configuration file found")
    return None


def _pyproject_has_flakekeeper_section(path: Path) -> bool:
    """Check if pyproject.toml contains a [tool.flakekeeper] section.

    Parse errors count as "no section" so that a broken pyproject.toml
    belonging to another tool does not stop discovery.
    """
    try:
        raw = _read_toml(path)
    except ConfigError:
        return False
    return "flakekeeper" in raw.get("tool", {})


def load_config(config_path: Optional[Path] = None) -> FlakeKeeperConfig:
    """Load and validate flakekeeper configuration.

    Args:
        config_path: Explicit path to config file. If ``None``, uses
            auto-discovery (see :func:`discover_config_file`).

    Returns:
        Validated :class:`FlakeKeeperConfig` with values from file or defaults.

    Raises:
        ConfigError: File cannot be parsed, has unknown keys, or invalid values.
    """
    resolved = discover_config_file(config_path)

    if resolved is None:
        logger.debug("No config file found, using defaults")
        return FlakeKeeperConfig()

    logger.info("Loading configuration from %s", resolved)
    raw = _read_toml(resolved)

    if resolved.name == "pyproject.toml":
        section = raw.get("tool", {}).get("flakekeeper", {})
    else:
        section = raw.get("flakekeeper", {})

    if not section:
        logger.debug("Config file found but no flakekeeper section, using defaults")
        return FlakeKeeperConfig(source_path=resolved)

    config = _parse_section(section, config_path=str(resolved))
    config.source_path = resolved

    logger.debug("Loaded configuration: %s", config.to_log_dict())
    return config


def _read_toml(path: Path) -> Dict[str, Any]:
    """Read and parse a TOML file.

    Raises:
        ConfigError: File cannot be read or is not valid TOML.
    """
    try:
        with open(path, "rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(
            f"Invalid TOML in {path.name}: {exc}",
            config_path=str(path),
        ) from exc
    except OSError as exc:
        raise ConfigError(
            f"Cannot read configuration file {path}: {exc}",
            config_path=str(path),
        ) from exc


def _parse_section(
    section: Dict[str, Any],
    *,
    config_path: str,
) -> FlakeKeeperConfig:
    """Parse and validate the flakekeeper configuration section.

    Raises:
        ConfigError: Unknown keys or non-boolean values.
    """
    config = FlakeKeeperConfig()

    unknown = set(section.keys()) - set(BOOLEAN_OPTIONS)
    if unknown:
        raise ConfigError(
            f"Unknown configuration keys: {', '.join(sorted(unknown))}",
            config_path=config_path,
        )

    for option in BOOLEAN_OPTIONS:
        if option not in section:
            continue
        val = section[option]
        if not isinstance(val, bool):
            raise ConfigError(
                f"{option} must be a boolean, got {type(val).__name__}",
                config_path=config_path,
                option=option,
            )
        setattr(config, option, val)

    return config
