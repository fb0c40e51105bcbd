"""
Configuration management for Pageweave.

This module handles loading and accessing configuration values from config.yaml.
Storage location, logging and editor defaults all live here so they can be
changed without touching code.
"""

import yaml
import sys
from pathlib import Path
from typing import Any, Dict
import logging


class ConfigManager:
    """
    Manages configuration loading and access for Pageweave.
    """

    def __init__(self, config_path: str = "config.yaml"):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to the configuration file
        """
        self.config_path = Path(config_path)
        self._config: Dict[str, Any] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        try:
            if not self.config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

            with open(self.config_path, 'r', encoding='utf-8') as f:
                self._config = yaml.safe_load(f) or {}

            logging.info(f"Configuration loaded from {self.config_path}")

        except (OSError, yaml.YAMLError) as e:
            logging.warning(f"Failed to load configuration: {e}")
            # Fall back to default configuration
            self._config = self._get_default_config()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration values as fallback."""
        return {
            "storage": {
                "db_path": "pageweave.db",
                "workspace_key": "pageweave-workspace"
            },
            "paths": {
                "log_file": "pageweave.log"
            },
            "logging": {
                "level": "INFO",
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            },
            "editor": {
                "new_page_title": "Untitled",
                "default_code_language": "javascript",
                "default_callout_color": "blue",
                "default_callout_emoji": "💡",
                "move_modifier": "auto"
            },
            "seed": {
                "workspace_id": "default",
                "workspace_name": "My Workspace",
                "page_title": "Welcome to Your Workspace"
            }
        }

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Args:
            key_path: Dot-separated path to the configuration value (e.g., "storage.db_path")
            default: Default value if key is not found

        Returns:
            The configuration value

        Examples:
            config.get("storage.workspace_key")  # Returns "pageweave-workspace"
            config.get("editor.default_code_language")  # Returns "javascript"
        """
        keys = key_path.split('.')
        value = self._config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def get_section(self, section: str) -> Dict[str, Any]:
        """
        Get an entire configuration section.

        Args:
            section: Name of the configuration section

        Returns:
            Dictionary containing the section configuration
        """
        return self._config.get(section, {})

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()

    # Convenience properties for commonly used values

    @property
    def database_path(self) -> str:
        """Get the DuckDB file holding workspace snapshots."""
        return self.get("storage.db_path", "pageweave.db")

    @property
    def workspace_key(self) -> str:
        """Get the storage slot key of the workspace snapshot."""
        return self.get("storage.workspace_key", "pageweave-workspace")

    @property
    def log_filename(self) -> str:
        """Get log file name."""
        return self.get("paths.log_file", "pageweave.log")

    @property
    def new_page_title(self) -> str:
        return self.get("editor.new_page_title", "Untitled")

    @property
    def default_code_language(self) -> str:
        return self.get("editor.default_code_language", "javascript")

    @property
    def default_callout_color(self) -> str:
        return self.get("editor.default_callout_color", "blue")

    @property
    def default_callout_emoji(self) -> str:
        return self.get("editor.default_callout_emoji", "💡")

    @property
    def move_modifier(self) -> str:
        """
        Get the key modifier used to move blocks up and down.

        "auto" resolves to "meta" on macOS and "ctrl" everywhere else.
        """
        modifier = self.get("editor.move_modifier", "auto")
        if modifier == "auto":
            return "meta" if sys.platform == "darwin" else "ctrl"
        return modifier

    @property
    def seed_settings(self) -> Dict[str, str]:
        """Get the identifiers and titles used for the default workspace."""
        return {
            "workspace_id": self.get("seed.workspace_id", "default"),
            "workspace_name": self.get("seed.workspace_name", "My Workspace"),
            "page_title": self.get("seed.page_title", "Welcome to Your Workspace"),
        }


# Global configuration instance
config = ConfigManager()


def get_config() -> ConfigManager:
    """
    Get the global configuration instance.

    Returns:
        The global ConfigManager instance
    """
    return config
