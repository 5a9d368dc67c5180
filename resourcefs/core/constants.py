"""
ResourceFS Core: Constants

This module provides system-wide constants and error codes
shared by the providers, artifacts and infrastructure layers.
"""
from datetime import datetime, timezone
from enum import Enum, IntEnum

# Version information
RESOURCEFS_VERSION = "1.0.0"


# Error codes (0-9 range)
class ErrorCode(IntEnum):
    """Standardized error codes for ResourceFS operations."""

    SUCCESS = 0  # Operation completed successfully
    INVALID_INPUT = 1  # Bad path, invalid configuration
    NOT_FOUND = 2  # File or resource doesn't exist
    INTERNAL_ERROR = 3  # I/O failure or bug in ResourceFS


# Logical paths use "/", resource keys use "."
PATH_SEPARATOR = "/"
NAMESPACE_SEPARATOR = "."

# Artifacts carry no timestamps. Embedded entries report this value,
# meaning "unknown, assume always current".
UNKNOWN_LAST_MODIFIED = datetime.max.replace(tzinfo=timezone.utc)


class ArtifactType(Enum):
    """Kinds of artifact a configured source can point at."""

    PACKAGE = "package"  # Importable Python package
    ZIP = "zip"  # Zip archive (wheel, zipapp)
    MEMORY = "memory"  # Inline resource table


# Configuration keys
class ConfigKey:
    """Configuration key constants."""

    # Top-level keys
    VERSION = "version"
    SOURCES = "sources"
    FALLBACK = "fallback"
    LOGGING = "logging"

    # Source configuration
    SOURCE_TYPE = "type"
    SOURCE_PACKAGE = "package"
    SOURCE_PATH = "path"
    SOURCE_RESOURCES = "resources"
    SOURCE_BASE_NAMESPACE = "base_namespace"
    SOURCE_NAME = "name"

    # Fallback configuration
    FALLBACK_ROOT = "root"


# Level names accepted in the logging block
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Default configuration values
DEFAULT_CONFIG = {
    ConfigKey.VERSION: "1.0",
    ConfigKey.SOURCES: [],
    ConfigKey.FALLBACK: None,
    ConfigKey.LOGGING: {
        "level": "INFO",
        "file": None,
    },
}
