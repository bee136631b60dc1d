"""Configuration loading for ticketboard."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

CONFIG_FILENAME = "ticketboard.yaml"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""


@dataclass
class LoggingConfig:
    """Logging settings. Unset values fall back to environment and defaults."""

    dir: str | None = None
    level: str | None = None
    file: str = "ticketboard.log"
    console: bool = True


@dataclass
class BoardSettings:
    """Board behaviour settings.

    revert_on_failure makes the session undo an optimistic move whose remote
    update failed; the engine itself never does.
    """

    revert_on_failure: bool = False
    label_suggestion_limit: int = 10


@dataclass
class TicketboardConfig:
    """Top-level configuration."""

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    board: BoardSettings = field(default_factory=BoardSettings)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TicketboardConfig:
        """Create config from dictionary.

        Args:
            data: Configuration dictionary from YAML.

        Returns:
            Parsed configuration object.

        Raises:
            ConfigError: If a section or value is invalid.
        """
        logging_data = data.get("logging") or {}
        board_data = data.get("board") or {}
        for name, section in (("logging", logging_data), ("board", board_data)):
            if not isinstance(section, dict):
                raise ConfigError(f"Section '{name}' must be a mapping")

        level = logging_data.get("level")
        if level is not None and str(level).upper() not in _LOG_LEVELS:
            raise ConfigError(f"Invalid log level: {level}")

        limit = board_data.get("label_suggestion_limit", 10)
        if not isinstance(limit, int) or isinstance(limit, bool) or limit < 1:
            raise ConfigError(f"label_suggestion_limit must be a positive integer, got {limit!r}")

        return cls(
            logging=LoggingConfig(
                dir=logging_data.get("dir"),
                level=str(level).upper() if level is not None else None,
                file=logging_data.get("file", "ticketboard.log"),
                console=_require_bool(logging_data, "console", True),
            ),
            board=BoardSettings(
                revert_on_failure=_require_bool(board_data, "revert_on_failure", False),
                label_suggestion_limit=limit,
            ),
        )


def _require_bool(section: dict[str, Any], key: str, default: bool) -> bool:
    """Read a flag that must be a YAML boolean, not a string like "false"."""
    value = section.get(key, default)
    if not isinstance(value, bool):
        raise ConfigError(f"{key} must be true or false, got {value!r}")
    return value


def load_config(config_path: Path | str) -> TicketboardConfig:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to ticketboard.yaml.

    Returns:
        Parsed configuration object. An empty file yields the defaults.

    Raises:
        ConfigError: If file doesn't exist or is invalid.
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if data is None:
        return TicketboardConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration must be a YAML mapping, got {type(data).__name__}")

    return TicketboardConfig.from_dict(data)


def find_config(start_path: Path | str | None = None) -> Path:
    """Find ticketboard.yaml by walking up the directory tree.

    Args:
        start_path: Starting directory. Defaults to current directory.

    Returns:
        Path to the config file.

    Raises:
        ConfigError: If no config file is found.
    """
    start_path = Path.cwd() if start_path is None else Path(start_path)
    current = start_path.resolve()

    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.exists():
            return candidate
        if current.parent == current:
            break
        current = current.parent

    raise ConfigError(f"No {CONFIG_FILENAME} found in {start_path} or any parent directory")
