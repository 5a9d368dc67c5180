#!/usr/bin/env python3
"""Hierarchical configuration manager for ResourceFS.

This module provides configuration management with:
- 6-level precedence hierarchy
- YAML configuration files
- Environment variable overrides (RESOURCEFS_*)
- Thread-safe operations
- Deep merging of nested configs

Example:
    >>> config = ConfigManager()
    >>> config.load_file("resourcefs.yaml")
    >>> config.get("resourcefs.fallback.root")
    >>> config.provider_config()
"""

import copy
import os
import threading
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from resourcefs.core.constants import DEFAULT_CONFIG, ErrorCode
from resourcefs.core.validators import ValidationError, validate_config

ROOT_KEY = "resourcefs"
ENV_PREFIX = "RESOURCEFS_"
SYSTEM_CONFIG_FILE = "/etc/resourcefs/config.yaml"
USER_CONFIG_FILE = "~/.config/resourcefs/config.yaml"


class ConfigSource(Enum):
    """Configuration source precedence levels."""

    COMPILED_DEFAULTS = 1  # Lowest precedence
    SYSTEM_CONFIG = 2
    USER_CONFIG = 3
    ENVIRONMENT = 4
    CLI_ARGS = 5
    RUNTIME = 6  # Highest precedence


class ConfigError(Exception):
    """Configuration error."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        self.message = message
        self.error_code = error_code
        super().__init__(message)


class ConfigManager:
    """Thread-safe hierarchical configuration manager.

    Manages configuration from multiple sources with precedence:
    1. Compiled defaults (lowest)
    2. System config (/etc/resourcefs/config.yaml, see load_default_files)
    3. User config (~/.config/resourcefs/config.yaml or an explicit file)
    4. Environment variables (RESOURCEFS_*)
    5. CLI arguments
    6. Runtime updates (highest)

    Lists (such as the source list) are replaced, not merged, by a
    higher-precedence level.
    """

    DEFAULT_CONFIG = {ROOT_KEY: DEFAULT_CONFIG}

    def __init__(self, config_file: Optional[str] = None, load_environment: bool = True):
        """Initialize configuration manager.

        Args:
            config_file: Optional config file to load
            load_environment: Whether to read RESOURCEFS_* variables
        """
        self._config: Dict[ConfigSource, Dict[str, Any]] = {}
        self._lock = threading.RLock()

        self._config[ConfigSource.COMPILED_DEFAULTS] = copy.deepcopy(self.DEFAULT_CONFIG)

        if config_file:
            self.load_file(config_file)

        if load_environment:
            self._load_environment()

    def load_file(self, file_path: str, source: ConfigSource = ConfigSource.USER_CONFIG) -> None:
        """Load configuration from YAML file.

        Args:
            file_path: Path to YAML config file
            source: Configuration source level

        Raises:
            ConfigError: If file cannot be loaded or parsed
        """
        path = Path(file_path).expanduser().resolve()

        if not path.exists():
            raise ConfigError(f"Config file not found: {file_path}", ErrorCode.NOT_FOUND)

        try:
            with open(path, "r") as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"YAML parse error in {file_path}: {e}", ErrorCode.INVALID_INPUT)
        except OSError as e:
            raise ConfigError(f"Error loading config {file_path}: {e}", ErrorCode.INTERNAL_ERROR)

        if not isinstance(config_data, dict):
            raise ConfigError(f"Invalid config format in {file_path}", ErrorCode.INVALID_INPUT)

        self.load_dict(config_data, source)

    def load_default_files(self) -> List[str]:
        """Load the system and user config files that exist.

        SYSTEM_CONFIG_FILE is loaded at the system level and
        USER_CONFIG_FILE at the user level. A later load_file() call at
        the user level replaces the default user file.

        Returns:
            Paths that were loaded
        """
        loaded = []
        for file_path, source in (
            (SYSTEM_CONFIG_FILE, ConfigSource.SYSTEM_CONFIG),
            (USER_CONFIG_FILE, ConfigSource.USER_CONFIG),
        ):
            if Path(file_path).expanduser().is_file():
                self.load_file(file_path, source)
                loaded.append(file_path)
        return loaded

    def load_dict(self, config_data: Dict[str, Any], source: ConfigSource = ConfigSource.RUNTIME) -> None:
        """Load configuration from dictionary.

        A dictionary without the top-level "resourcefs" key is wrapped in one.

        Args:
            config_data: Configuration dictionary
            source: Configuration source level
        """
        if ROOT_KEY not in config_data:
            config_data = {ROOT_KEY: config_data}

        with self._lock:
            self._config[source] = copy.deepcopy(config_data)

    def _load_environment(self) -> None:
        """Load configuration from environment variables.

        Environment variables in format: RESOURCEFS_SECTION_KEY=value
        Example: RESOURCEFS_LOGGING_LEVEL=DEBUG
        """
        env_config: Dict[str, Any] = {}

        for key, value in os.environ.items():
            if not key.startswith(ENV_PREFIX):
                continue

            parts = key[len(ENV_PREFIX):].lower().split("_")

            current = env_config
            for part in parts[:-1]:
                if not isinstance(current.get(part), dict):
                    current[part] = {}
                current = current[part]

            current[parts[-1]] = self._parse_env_value(value)

        if env_config:
            with self._lock:
                self._config[ConfigSource.ENVIRONMENT] = {ROOT_KEY: env_config}

    def _parse_env_value(self, value: str) -> Any:
        """Parse environment variable value.

        Args:
            value: String value from environment

        Returns:
            Parsed value (int, float, bool, or str)
        """
        if value.lower() in ("true", "yes"):
            return True
        if value.lower() in ("false", "no"):
            return False

        try:
            return int(value)
        except ValueError:
            pass

        try:
            return float(value)
        except ValueError:
            pass

        return value

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key.

        Args:
            key: Dot-separated key path (e.g., "resourcefs.logging.level")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        with self._lock:
            for source in sorted(self._config.keys(), key=lambda s: s.value, reverse=True):
                value = self._get_nested(self._config[source], key)
                if value is not None:
                    return value

            return default

    def _get_nested(self, config: Dict[str, Any], key: str) -> Optional[Any]:
        """Get value from nested dictionary using dot notation."""
        current: Any = config

        for part in key.split("."):
            if not isinstance(current, dict):
                return None
            if part not in current:
                return None
            current = current[part]

        return current

    def set(self, key: str, value: Any, source: ConfigSource = ConfigSource.RUNTIME) -> None:
        """Set configuration value.

        Args:
            key: Dot-separated key path
            value: Value to set
            source: Configuration source level
        """
        with self._lock:
            if source not in self._config:
                self._config[source] = {}

            parts = key.split(".")
            current = self._config[source]

            for part in parts[:-1]:
                if not isinstance(current.get(part), dict):
                    current[part] = {}
                current = current[part]

            current[parts[-1]] = value

    def get_all(self) -> Dict[str, Any]:
        """Get merged configuration from all sources.

        Returns:
            Merged configuration dictionary
        """
        with self._lock:
            merged: Dict[str, Any] = {}

            for source in sorted(self._config.keys(), key=lambda s: s.value):
                merged = self._deep_merge(merged, self._config[source])

            return merged

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def provider_config(self) -> Dict[str, Any]:
        """Return the merged, validated "resourcefs" block.

        Raises:
            ConfigError: If the merged configuration is invalid
        """
        config = self.get_all().get(ROOT_KEY, {})
        try:
            validate_config(config)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}", e.error_code)
        return config

