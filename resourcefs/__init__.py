"""
ResourceFS - Read-only file lookup over bundled resources.

Exposes resources bundled inside packages, zip archives or in-memory
tables through one file-lookup interface, optionally layered over a
directory on disk.

    from resourcefs import ArtifactOptions, EmbeddedFileProvider, PackageArtifact

    provider = EmbeddedFileProvider(ArtifactOptions(PackageArtifact("myapp"), "myapp.static"))
    provider.get_directory_contents("").names()
"""

import logging

from resourcefs.artifacts import MemoryArtifact, PackageArtifact, ResourceArtifact, ZipArtifact
from resourcefs.core.constants import RESOURCEFS_VERSION, UNKNOWN_LAST_MODIFIED
from resourcefs.factory import ProviderFactory
from resourcefs.providers import (
    ArtifactOptions,
    DirectoryContents,
    EmbeddedFileProvider,
    FileInfo,
    FileProvider,
    NullChangeToken,
    PhysicalFileProvider,
    ProviderConfigurationError,
    SingleArtifactFileProvider,
)

__version__ = RESOURCEFS_VERSION

# Hosts decide where records go
logging.getLogger("resourcefs").addHandler(logging.NullHandler())

__all__ = [
    "ArtifactOptions",
    "DirectoryContents",
    "EmbeddedFileProvider",
    "FileInfo",
    "FileProvider",
    "MemoryArtifact",
    "NullChangeToken",
    "PackageArtifact",
    "PhysicalFileProvider",
    "ProviderConfigurationError",
    "ProviderFactory",
    "ResourceArtifact",
    "SingleArtifactFileProvider",
    "UNKNOWN_LAST_MODIFIED",
    "ZipArtifact",
]
