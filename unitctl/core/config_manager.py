"""Configuration manager for loading and saving manager scope and settings."""

import logging
import os
import shutil
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from ..exceptions import ConfigError
from ..models.unit import Scope
from ..utils.constants import (
    CONFIG_ENV,
    CONFIG_FILE,
    DEFAULT_JOURNAL_LINES,
    DEFAULT_TIMEOUT,
    JOURNALCTL_EXEC,
    SYSTEMCTL_EXEC,
)

logger = logging.getLogger(__name__)


def default_config_file() -> Path:
    """Return $UNITCTL_CONFIG or ~/.config/unitctl/config.yaml, resolved now.

    An unknown home directory leaves a literal '~' in the path.
    """
    return Path(os.path.expanduser(os.getenv(CONFIG_ENV) or CONFIG_FILE))


class ConfigManager:
    """Manages the YAML configuration shared by unit managers and journal readers."""

    CONFIG_VERSION = "1.0"

    def __init__(self, config_file: Optional[Union[str, Path]] = None):
        """Initialize the config manager.

        Args:
            config_file: Path of the YAML file, defaults to default_config_file()
        """
        self.config_file = Path(config_file) if config_file else default_config_file()
        self.scope = Scope.system()
        self.settings: Dict[str, Any] = {}
        self._ensure_default_settings()

    def load_config(self, strict: bool = False) -> bool:
        """Load configuration from file.

        Args:
            strict: Raise ConfigError instead of falling back to defaults

        Returns:
            True if config loaded successfully, False otherwise
        """
        if not self.config_file.exists():
            logger.info("Config file not found, using defaults")
            return self._fail(f"{self.config_file} does not exist", strict)

        try:
            with open(self.config_file, 'r') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"YAML parsing error: {e}")
            return self._fail(f"YAML parsing error: {e}", strict)
        except OSError as e:
            logger.error(f"Failed to read config: {e}")
            return self._fail(str(e), strict)

        if not data:
            logger.warning("Empty config file, using defaults")
            return self._fail(f"{self.config_file} is empty", strict)

        if not self._validate_config(data):
            logger.error("Invalid config file, using defaults")
            return self._fail(f"{self.config_file} has an invalid structure", strict)

        self.scope = Scope.from_dict(data.get("scope") or {})
        self.settings = data.get("settings") or {}
        self._ensure_default_settings()

        logger.info(f"Loaded config from {self.config_file} (user scope: {self.scope.as_user})")
        return True

    def save_config(self) -> bool:
        """Save configuration to file.

        Returns:
            True if saved successfully, False otherwise
        """
        try:
            self.config_file.parent.mkdir(parents=True, exist_ok=True)

            if self.config_file.exists():
                backup_file = self.config_file.with_suffix('.yaml.bak')
                shutil.copy2(self.config_file, backup_file)
                logger.debug(f"Created backup at {backup_file}")

            data = {
                "version": self.CONFIG_VERSION,
                "scope": self.scope.to_dict(),
                "settings": self.settings,
            }

            # Atomic write through a temp file
            temp_file = self.config_file.with_suffix('.yaml.tmp')
            with open(temp_file, 'w') as f:
                yaml.dump(data, f, default_flow_style=False, sort_keys=False)
            temp_file.replace(self.config_file)

            logger.info(f"Saved config to {self.config_file}")
            return True

        except OSError as e:
            logger.error(f"Failed to save config: {e}")
            return False

    def set_scope(self, scope: Scope):
        """Replace the configured scope and persist it."""
        self.scope = scope
        self.save_config()

    def get_setting(self, key: str, default: Any = None) -> Any:
        """Get a setting value.

        Args:
            key: Setting key
            default: Default value if key not found

        Returns:
            Setting value or default
        """
        return self.settings.get(key, default)

    def set_setting(self, key: str, value: Any):
        """Set a setting value and persist it."""
        self.settings[key] = value
        self.save_config()

    def _fail(self, reason: str, strict: bool) -> bool:
        if strict:
            raise ConfigError(reason)
        self._load_defaults()
        return False

    def _validate_config(self, data: dict) -> bool:
        """Validate configuration data structure.

        Args:
            data: Configuration dictionary

        Returns:
            True if valid, False otherwise
        """
        if not isinstance(data, dict):
            logger.error("Config must be a dictionary")
            return False

        if "version" not in data:
            logger.warning("Config missing version, assuming valid")

        if data.get("scope") is not None and not isinstance(data["scope"], dict):
            logger.error("Scope must be a dictionary")
            return False

        if data.get("settings") is not None and not isinstance(data["settings"], dict):
            logger.error("Settings must be a dictionary")
            return False

        return True

    def _load_defaults(self):
        """Load default configuration."""
        self.scope = Scope.system()
        self.settings = {}
        self._ensure_default_settings()
        logger.info("Loaded default configuration")

    def _ensure_default_settings(self):
        """Ensure all default settings exist."""
        defaults = {
            "systemctl": SYSTEMCTL_EXEC,
            "journalctl": JOURNALCTL_EXEC,
            "timeout": DEFAULT_TIMEOUT,
            "journal_lines": DEFAULT_JOURNAL_LINES,
        }

        for key, value in defaults.items():
            if key not in self.settings:
                self.settings[key] = value
