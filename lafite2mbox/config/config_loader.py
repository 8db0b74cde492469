"""Locate and read the lafite2mbox JSON config file.

An explicit path wins. Otherwise the first existing file among
~/.lafite2mbox/config.json and config/lafite2mbox.json is used, and with
neither present every setting keeps its default.
"""

import json
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from .app_config import AppConfig


class ConfigError(Exception):
    """Raised when a configuration file cannot be read or is invalid."""

    pass


class ConfigLoader:
    """Find, parse and cache the AppConfig for one run."""

    DEFAULT_CONFIG_PATHS = [
        Path("~/.lafite2mbox/config.json"),
        Path("config/lafite2mbox.json"),
    ]

    def __init__(self, config_path: Optional[Path] = None):
        """
        Args:
            config_path: Config file given with --config (skips the search paths)
        """
        self.config_path = config_path
        self._config: Optional[AppConfig] = None

    def load_app_config(self) -> AppConfig:
        """
        Return the AppConfig, reading it on the first call only.

        Returns:
            Parsed AppConfig, or the defaults when no config file exists

        Raises:
            FileNotFoundError: If an explicit config_path does not exist
            ConfigError: If the config file is not valid JSON or fails validation
        """
        if self._config is not None:
            return self._config

        if self.config_path and not self.config_path.expanduser().exists():
            raise FileNotFoundError(f"Config file not found: {self.config_path}")

        config_paths = [self.config_path] if self.config_path else self.DEFAULT_CONFIG_PATHS

        for config_path in config_paths:
            if config_path and config_path.expanduser().exists():
                try:
                    with open(config_path.expanduser(), "r", encoding="utf-8") as f:
                        config_data = json.load(f)
                    self._config = AppConfig(**config_data)
                    return self._config
                except (json.JSONDecodeError, ValidationError, TypeError) as e:
                    raise ConfigError(f"Invalid config in {config_path}: {e}") from e

        self._config = AppConfig()
        return self._config

    def reload(self) -> AppConfig:
        """Drop the cached AppConfig and read the file again."""
        self._config = None
        return self.load_app_config()
