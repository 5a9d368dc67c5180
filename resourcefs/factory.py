"""
ResourceFS: Provider Factory.

Builds providers from the "resourcefs" configuration block:

    resourcefs:
      fallback:
        root: ./wwwroot
      sources:
        - type: package
          package: myapp.static
          base_namespace: myapp.static
        - type: zip
          path: dist/app.zip
          base_namespace: app.wwwroot

Sources are listed lowest priority first; the last source wins on
duplicate paths, and the fallback wins over every source.
"""

import os
from typing import Any, Dict, List, Optional

from resourcefs.artifacts import MemoryArtifact, PackageArtifact, ResourceArtifact, ZipArtifact
from resourcefs.core.constants import ArtifactType, ConfigKey
from resourcefs.core.validators import validate_config, validate_source_config
from resourcefs.infrastructure.config_manager import ConfigManager
from resourcefs.infrastructure.logger import get_logger
from resourcefs.providers import (
    ArtifactOptions,
    EmbeddedFileProvider,
    FileProvider,
    PhysicalFileProvider,
)

logger = get_logger()


class ProviderFactory:
    """Factory functions for building providers from configuration."""

    @staticmethod
    def create_artifact(source: Dict[str, Any], base_dir: Optional[str] = None) -> ResourceArtifact:
        """
        Create an artifact from one source configuration.

        Args:
            source: Source dictionary with a "type" field
            base_dir: Directory that relative zip paths are resolved against

        Returns:
            Configured artifact

        Raises:
            ValidationError: If the source configuration is invalid
            ModuleNotFoundError: If a package source can't be imported
            FileNotFoundError: If a zip source doesn't exist

        Example:
            >>> ProviderFactory.create_artifact({"type": "package", "package": "myapp"})
            PackageArtifact(name='myapp')
        """
        validate_source_config(source)
        source_type = ArtifactType(source[ConfigKey.SOURCE_TYPE])

        if source_type == ArtifactType.PACKAGE:
            return PackageArtifact(source[ConfigKey.SOURCE_PACKAGE])

        if source_type == ArtifactType.ZIP:
            path = os.path.expanduser(source[ConfigKey.SOURCE_PATH])
            if base_dir and not os.path.isabs(path):
                path = os.path.join(base_dir, path)
            return ZipArtifact(path)

        return MemoryArtifact(
            source[ConfigKey.SOURCE_RESOURCES],
            name=source.get(ConfigKey.SOURCE_NAME, "memory"),
        )

    @staticmethod
    def create_artifact_options(
        sources: List[Dict[str, Any]], base_dir: Optional[str] = None
    ) -> List[ArtifactOptions]:
        """Create ArtifactOptions for each source, in configuration order."""
        return [
            ArtifactOptions(
                ProviderFactory.create_artifact(source, base_dir),
                source.get(ConfigKey.SOURCE_BASE_NAMESPACE) or "",
            )
            for source in sources
        ]

    @staticmethod
    def create_fallback(
        fallback: Optional[Dict[str, Any]], base_dir: Optional[str] = None
    ) -> Optional[FileProvider]:
        """Create the physical fallback provider, if one is configured."""
        if not fallback:
            return None

        root = os.path.expanduser(fallback[ConfigKey.FALLBACK_ROOT])
        if base_dir and not os.path.isabs(root):
            root = os.path.join(base_dir, root)
        return PhysicalFileProvider(root)

    @staticmethod
    def create_provider(config: Dict[str, Any], base_dir: Optional[str] = None) -> EmbeddedFileProvider:
        """
        Create an EmbeddedFileProvider from a configuration block.

        Args:
            config: Contents of the "resourcefs" block
            base_dir: Directory that relative paths are resolved against

        Returns:
            Configured provider

        Raises:
            ValidationError: If the configuration is invalid
        """
        validate_config(config)

        fallback = ProviderFactory.create_fallback(config.get(ConfigKey.FALLBACK), base_dir)
        options = ProviderFactory.create_artifact_options(
            config.get(ConfigKey.SOURCES) or [], base_dir
        )

        logger.debug("Creating provider from configuration", sources=len(options))
        return EmbeddedFileProvider(*options, fallback=fallback)

    @staticmethod
    def from_config_manager(
        config: ConfigManager, base_dir: Optional[str] = None
    ) -> EmbeddedFileProvider:
        """Create an EmbeddedFileProvider from a loaded ConfigManager."""
        return ProviderFactory.create_provider(config.provider_config(), base_dir)

    @staticmethod
    def from_file(config_file: str) -> EmbeddedFileProvider:
        """
        Create an EmbeddedFileProvider from a YAML configuration file.

        Relative paths in the file are resolved against the file's directory.

        Raises:
            ConfigError: If the file can't be loaded or is invalid
        """
        config = ConfigManager(config_file)
        base_dir = os.path.dirname(os.path.abspath(os.path.expanduser(config_file)))
        return ProviderFactory.from_config_manager(config, base_dir)
