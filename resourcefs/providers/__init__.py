"""
ResourceFS Providers - File lookup over artifacts and directories.

Public API:
-----------

Base Classes:
    FileProvider: Interface shared by every provider
    FileInfo: File metadata and content access
    DirectoryContents: Directory listing with an existence flag

Providers:
    EmbeddedFileProvider: Several artifacts plus an optional fallback
    SingleArtifactFileProvider: One artifact's flat namespace
    PhysicalFileProvider: A directory on disk

Change Tokens:
    NullChangeToken: Never fires
    PollingChangeToken: Compares file mtimes on demand

Usage Example:
--------------

    from resourcefs.artifacts import PackageArtifact
    from resourcefs.providers import (
        ArtifactOptions,
        EmbeddedFileProvider,
        PhysicalFileProvider,
    )

    provider = EmbeddedFileProvider(
        ArtifactOptions(PackageArtifact("myapp"), "myapp.wwwroot"),
        fallback=PhysicalFileProvider("./wwwroot"),
    )

    info = provider.get_file_info("css/site.css")
    if info.exists:
        with info.open() as stream:
            data = stream.read()
"""

from resourcefs.providers.base import (
    DirectoryContents,
    EnumerableDirectoryContents,
    FileInfo,
    FileProvider,
    NotFoundDirectoryContents,
    NotFoundFileInfo,
    ProviderConfigurationError,
)
from resourcefs.providers.change_tokens import (
    ChangeToken,
    Disposable,
    NullChangeToken,
    PollingChangeToken,
)
from resourcefs.providers.embedded import (
    ArtifactOptions,
    EmbeddedFileProvider,
    EmbeddedResourceFileInfo,
    SingleArtifactFileProvider,
)
from resourcefs.providers.physical import PhysicalFileInfo, PhysicalFileProvider

__all__ = [
    # Base classes
    "FileProvider",
    "FileInfo",
    "DirectoryContents",
    "NotFoundFileInfo",
    "NotFoundDirectoryContents",
    "EnumerableDirectoryContents",
    "ProviderConfigurationError",
    # Change tokens
    "ChangeToken",
    "Disposable",
    "NullChangeToken",
    "PollingChangeToken",
    # Embedded
    "ArtifactOptions",
    "EmbeddedFileProvider",
    "EmbeddedResourceFileInfo",
    "SingleArtifactFileProvider",
    # Physical
    "PhysicalFileInfo",
    "PhysicalFileProvider",
]
