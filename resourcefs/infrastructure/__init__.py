"""ResourceFS Infrastructure Layer.

This layer provides services used by the providers and the CLI:
- ConfigManager: Hierarchical configuration loaded from YAML and environment
- Logger: Structured logging system
"""

from .config_manager import ConfigError
from .config_manager import ConfigManager as Config
from .config_manager import ConfigSource
from .logger import Logger, LogLevel, configure_logging, get_logger, set_global_logger

__all__ = [
    # Logger exports
    "Logger",
    "LogLevel",
    "configure_logging",
    "get_logger",
    "set_global_logger",
    # ConfigManager exports
    "ConfigSource",
    "ConfigError",
    "Config",
]
