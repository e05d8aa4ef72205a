"""Configuration manager for nlgit."""

from typing import Dict, Any, Optional
from pathlib import Path
import sys

import yaml

from ..constants import (
    CONFIG_DIR, DEFAULT_REQUEST_TIMEOUT, DEFAULT_HISTORY_LIMIT,
    DEFAULT_MAX_DIFF_CHARS, DEFAULT_ENABLE_DEBUG
)
from ..utils.logging import logger
from ..utils.helpers import safe_file_write
from .templates import CONFIG_TEMPLATE, PAYLOAD_TEMPLATE, RESPONSE_PATH_TEMPLATE


class ConfigManager:
    """Manages configuration loading, validation, and setup for nlgit."""

    REQUIRED_FIELDS = ["endpoint", "model", "intent_prompt", "commit_message_prompt"]

    def __init__(self, config_dir: Optional[Path] = None):
        """Initialize the configuration manager.

        Args:
            config_dir: Custom configuration directory path
        """
        self.config_dir = config_dir or CONFIG_DIR
        self.config_file = self.config_dir / "config.yaml"
        self.payload_file = self.config_dir / "payload.json"
        self.response_path_file = self.config_dir / "response_path_template.txt"
        self.history_file = self.config_dir / "history.json"

        self._config: Optional[Dict[str, Any]] = None

    def initialize(self) -> bool:
        """Initialize configuration by setting up files and loading config.

        Returns:
            True if initialization successful, False if setup files were created
        """
        if not self._perform_initial_setup():
            return False

        self._config = self._load_config()
        return True

    def _perform_initial_setup(self) -> bool:
        """Creates config directory and default files if they don't exist.

        Returns:
            True if no setup was needed, False if files were created
        """
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Failed to create config directory {self.config_dir}: {e}")
            return False

        templates = [
            (self.config_file, CONFIG_TEMPLATE, "config template"),
            (self.payload_file, PAYLOAD_TEMPLATE, "payload template"),
            (self.response_path_file, RESPONSE_PATH_TEMPLATE, "response path template"),
        ]

        missing_setup_file = False
        for path, content, description in templates:
            if path.exists():
                continue
            if not safe_file_write(path, content, description):
                return False
            missing_setup_file = True

        if missing_setup_file:
            logger.system(f"Configuration templates generated in: {self.config_dir}")
            logger.system("Required files:")
            logger.system(f"  • {self.config_file}")
            logger.system(f"  • {self.payload_file}")
            logger.system(f"  • {self.response_path_file}")
            logger.system("Please review and configure them before running nlgit again.")
            return False

        return True

    def _load_config(self) -> Dict[str, Any]:
        """Load and validate the configuration file."""
        try:
            with open(self.config_file, 'r') as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"Error parsing YAML file {self.config_file}: {e}")
            sys.exit(1)
        except IOError as e:
            logger.error(f"Could not read {self.config_file}: {e}")
            sys.exit(1)

        if not isinstance(config_data, dict):
            logger.error(f"{self.config_file} is not a valid YAML dictionary.")
            sys.exit(1)

        for field in self.REQUIRED_FIELDS:
            if field not in config_data:
                logger.error(f"Required key '.{field}' missing in {self.config_file}.")
                sys.exit(1)
            if not config_data[field]:
                logger.error(f"Required key '.{field}' is null/empty in {self.config_file}.")
                sys.exit(1)

        enable_debug = config_data.get("enable_debug", DEFAULT_ENABLE_DEBUG)
        if not isinstance(enable_debug, bool):
            logger.warning(f"enable_debug in {self.config_file} must be true/false. Defaulting to false.")
            enable_debug = DEFAULT_ENABLE_DEBUG
        config_data["enable_debug"] = enable_debug

        for key, default in [("request_timeout", DEFAULT_REQUEST_TIMEOUT),
                             ("history_limit", DEFAULT_HISTORY_LIMIT)]:
            value = config_data.get(key, default)
            if isinstance(value, bool) or not (isinstance(value, int) and value > 0):
                logger.error(f"{key} ('{value}') in {self.config_file} must be a positive integer.")
                sys.exit(1)
            config_data[key] = value

        max_diff = config_data.get("max_diff_chars", DEFAULT_MAX_DIFF_CHARS)
        if isinstance(max_diff, bool) or not (isinstance(max_diff, int) and max_diff >= 0):
            logger.error(f"max_diff_chars ('{max_diff}') in {self.config_file} must be a non-negative integer.")
            sys.exit(1)
        config_data["max_diff_chars"] = max_diff

        config_data.setdefault("api_key", None)

        logger.debug(f"Configuration loaded successfully from {self.config_file}")
        return config_data

    @property
    def config(self) -> Dict[str, Any]:
        """Get the current configuration."""
        if self._config is None:
            raise RuntimeError("Configuration not loaded. Call initialize() first.")
        return self._config.copy()

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        if self._config is None:
            raise RuntimeError("Configuration not loaded. Call initialize() first.")
        return self._config.get(key, default)

    def is_initialized(self) -> bool:
        """Check if the configuration has been initialized."""
        return self._config is not None


def create_config_manager(config_dir: Optional[Path] = None) -> ConfigManager:
    """Create and initialize a configuration manager.

    Args:
        config_dir: Custom configuration directory path

    Returns:
        Initialized ConfigManager instance
    """
    manager = ConfigManager(config_dir)
    if not manager.initialize():
        logger.system("Configuration setup required. Please configure the generated files and run again.")
        sys.exit(0)
    return manager
