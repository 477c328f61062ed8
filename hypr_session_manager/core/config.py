"""Configuration management for the session manager.

This module provides:
- Settings loaded from ~/.config/hyprland-session-manager/config.json
- Hyprland config patching so generated window rules get sourced
"""

import json
import logging
from pathlib import Path
from typing import Dict, Optional

from pydantic import BaseModel, Field, ValidationError

from .errors import ConfigError
from .persistence import DEFAULT_SESSIONS_DIR
from .restore import DEFAULT_SETTLE_DELAY


logger = logging.getLogger(__name__)


DEFAULT_CONFIG_FILE = Path.home() / ".config/hyprland-session-manager/config.json"
DEFAULT_HYPRLAND_CONFIG = Path.home() / ".config/hypr/hyprland.conf"


class SessionManagerConfig(BaseModel):
    """User settings.

    Example config.json:
        {
          "settle_delay": 5,
          "class_overrides": {"code-url-handler": "code"},
          "resolve_missing_commands": true
        }
    """
    settle_delay: float = Field(default=DEFAULT_SETTLE_DELAY, ge=0)
    sessions_dir: Path = DEFAULT_SESSIONS_DIR
    hyprland_config: Path = DEFAULT_HYPRLAND_CONFIG
    class_overrides: Dict[str, str] = Field(default_factory=dict)
    resolve_missing_commands: bool = False

    model_config = {"extra": "ignore"}


def load_config(config_file: Optional[Path] = None) -> SessionManagerConfig:
    """Load settings from disk.

    A missing file means defaults.

    Args:
        config_file: Path to config.json (default: ~/.config/hyprland-session-manager/config.json)

    Returns:
        SessionManagerConfig

    Raises:
        ConfigError: If the file is unreadable, not JSON, or has invalid values
    """
    if config_file is None:
        config_file = DEFAULT_CONFIG_FILE

    if not config_file.exists():
        logger.debug(f"No config file at {config_file}, using defaults")
        return SessionManagerConfig()

    try:
        with config_file.open("r") as f:
            data = json.load(f)
        config = SessionManagerConfig.model_validate(data)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        raise ConfigError(f"Failed to load config {config_file}: {e}") from e

    # Allow "~" in configured paths
    config = config.model_copy(update={
        "sessions_dir": config.sessions_dir.expanduser(),
        "hyprland_config": config.hyprland_config.expanduser(),
    })

    logger.debug(f"Loaded config from {config_file}")
    return config


def source_line(rules_path: Path) -> str:
    return f"source = {rules_path}"


def ensure_source_line(config_path: Path, rules_path: Path) -> bool:
    """Make sure the Hyprland config sources the generated rules file.

    The line is appended only if no config line already equals it, so
    repeated calls leave exactly one copy.

    Args:
        config_path: Hyprland main config (hyprland.conf)
        rules_path: Generated rules file to source

    Returns:
        True if the line was added, False if it was already there

    Raises:
        ConfigError: If the config cannot be read or written
    """
    line = source_line(rules_path)

    try:
        config = config_path.read_text()
        # commented-out copies do not count
        if line in (existing.strip() for existing in config.splitlines()):
            logger.debug(f"{config_path} already sources {rules_path}")
            return False

        with config_path.open("a") as f:
            f.write(f"\n{line}\n")
    except OSError as e:
        raise ConfigError(f"Failed to update Hyprland config {config_path}: {e}") from e

    logger.info(f"Added '{line}' to {config_path}")
    return True
