"""
ResourceFS Core: Input Validators.

Validation for the provider configuration block: artifact sources,
the optional fallback directory, base namespaces and logging.
"""
from typing import Any, Dict, Optional

from resourcefs.core.constants import (
    LOG_LEVELS,
    NAMESPACE_SEPARATOR,
    ArtifactType,
    ConfigKey,
    ErrorCode,
)


class ValidationError(Exception):
    """Base exception for validation errors."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        """Initialize ValidationError.

        Args:
            message: Error message
            error_code: Associated error code
        """
        super().__init__(message)
        self.error_code = error_code


def validate_base_namespace(base_namespace: Optional[str]) -> bool:
    """Validate a base namespace string.

    Args:
        base_namespace: Namespace such as "App.wwwroot", or None/"" for none

    Returns:
        True if valid

    Raises:
        ValidationError: If the namespace is not a string or has stray dots
    """
    if base_namespace is None:
        return True

    if not isinstance(base_namespace, str):
        raise ValidationError(f"Base namespace must be a string: {base_namespace!r}")

    if base_namespace.startswith(NAMESPACE_SEPARATOR) or base_namespace.endswith(
        NAMESPACE_SEPARATOR
    ):
        raise ValidationError(
            f"Base namespace must not start or end with '{NAMESPACE_SEPARATOR}': {base_namespace}"
        )

    return True


def validate_source_config(source: Dict[str, Any]) -> bool:
    """Validate one artifact source configuration.

    Args:
        source: Source configuration dictionary

    Returns:
        True if valid

    Raises:
        ValidationError: If source is invalid
    """
    if not isinstance(source, dict):
        raise ValidationError("Source must be a dictionary")

    if ConfigKey.SOURCE_TYPE not in source:
        raise ValidationError("Source must have 'type' field")

    try:
        source_type = ArtifactType(source[ConfigKey.SOURCE_TYPE])
    except ValueError:
        valid = ", ".join(t.value for t in ArtifactType)
        raise ValidationError(
            f"Unknown source type: {source[ConfigKey.SOURCE_TYPE]} (expected one of: {valid})"
        )

    if source_type == ArtifactType.PACKAGE:
        package = source.get(ConfigKey.SOURCE_PACKAGE)
        if not isinstance(package, str) or not package:
            raise ValidationError("Package source must have a non-empty 'package' field")

    elif source_type == ArtifactType.ZIP:
        path = source.get(ConfigKey.SOURCE_PATH)
        if not isinstance(path, str) or not path:
            raise ValidationError("Zip source must have a non-empty 'path' field")
        if "\0" in path:
            raise ValidationError(f"Invalid zip path: {path!r}")

    elif source_type == ArtifactType.MEMORY:
        resources = source.get(ConfigKey.SOURCE_RESOURCES)
        if not isinstance(resources, dict):
            raise ValidationError("Memory source must have a 'resources' mapping")

    validate_base_namespace(source.get(ConfigKey.SOURCE_BASE_NAMESPACE))

    return True


def validate_logging_config(logging_config: Optional[Dict[str, Any]]) -> bool:
    """Validate the optional logging block.

    Raises:
        ValidationError: If the block or its level is invalid
    """
    if logging_config is None:
        return True
    if not isinstance(logging_config, dict):
        raise ValidationError("Logging configuration must be a dictionary")

    level = logging_config.get("level")
    if level is not None and (not isinstance(level, str) or level.upper() not in LOG_LEVELS):
        raise ValidationError(
            f"Invalid log level: {level!r} (expected one of {', '.join(LOG_LEVELS)})"
        )

    log_file = logging_config.get("file")
    if log_file is not None and not isinstance(log_file, str):
        raise ValidationError("Log file must be a string")

    return True


def validate_config(config: Dict[str, Any]) -> bool:
    """Validate a provider configuration structure.

    At least one source or a fallback directory must be configured.

    Args:
        config: Configuration dictionary (contents of the "resourcefs" block)

    Returns:
        True if valid

    Raises:
        ValidationError: If configuration is invalid
    """
    if not isinstance(config, dict):
        raise ValidationError("Configuration must be a dictionary")

    sources = config.get(ConfigKey.SOURCES) or []
    if not isinstance(sources, list):
        raise ValidationError("Sources must be a list")

    for i, source in enumerate(sources):
        try:
            validate_source_config(source)
        except ValidationError as e:
            raise ValidationError(f"Invalid source configuration at index {i}: {e}")

    fallback = config.get(ConfigKey.FALLBACK)
    if fallback is not None:
        if not isinstance(fallback, dict):
            raise ValidationError("Fallback must be a dictionary")
        root = fallback.get(ConfigKey.FALLBACK_ROOT)
        if not isinstance(root, str) or not root:
            raise ValidationError("Fallback must have a non-empty 'root' field")

    validate_logging_config(config.get(ConfigKey.LOGGING))

    if not sources and fallback is None:
        raise ValidationError("At least one source or a fallback must be configured")

    return True
