"""
ResourceFS Providers: Embedded Resources.

This module exposes resources bundled inside artifacts through the
FileProvider interface:
- EmbeddedResourceFileInfo: A file backed by one artifact resource
- SingleArtifactFileProvider: Looks up files in one artifact's flat namespace
- EmbeddedFileProvider: Composes several artifacts with an optional fallback

Lookups are case sensitive. Each artifact is a flat namespace: every
resource under the base namespace is a direct child of the root, and
"/" in a logical path maps to "." in the resource key.
"""

import io
from dataclasses import dataclass
from datetime import datetime
from typing import BinaryIO, Iterable, List, Optional, Sequence, Tuple, Union

from resourcefs.artifacts.base import ResourceArtifact
from resourcefs.core.constants import UNKNOWN_LAST_MODIFIED
from resourcefs.core.path_utils import (
    display_name,
    namespace_prefix,
    strip_leading_separator,
    to_resource_key,
)
from resourcefs.infrastructure.logger import get_logger
from resourcefs.providers.base import (
    DirectoryContents,
    EnumerableDirectoryContents,
    FileInfo,
    FileProvider,
    NotFoundDirectoryContents,
    NotFoundFileInfo,
    ProviderConfigurationError,
)
from resourcefs.providers.change_tokens import ChangeToken, NullChangeToken

logger = get_logger()


@dataclass(frozen=True)
class ArtifactOptions:
    """
    An artifact paired with the base namespace its resources live under.

    Attributes:
        artifact: Artifact holding the resources
        base_namespace: Key prefix without the trailing ".", e.g. "App.wwwroot"
    """

    artifact: ResourceArtifact
    base_namespace: str = ""


ArtifactSpec = Union[ArtifactOptions, ResourceArtifact, Tuple[ResourceArtifact, str]]


class EmbeddedResourceFileInfo(FileInfo):
    """
    A file backed by a resource inside an artifact.

    ``length`` is read from the artifact on first access, or from the first
    seekable stream handed out by open(), and memoized for the lifetime of
    this instance. Two threads racing on the first access both compute the
    same value.
    """

    def __init__(
        self,
        artifact: ResourceArtifact,
        resource_key: str,
        name: str,
        last_modified: datetime = UNKNOWN_LAST_MODIFIED,
    ):
        self._artifact = artifact
        self._resource_key = resource_key
        self._name = name
        self._last_modified = last_modified
        self._length: Optional[int] = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def resource_key(self) -> str:
        return self._resource_key

    @property
    def exists(self) -> bool:
        return True

    @property
    def is_directory(self) -> bool:
        return False

    @property
    def length(self) -> int:
        if self._length is None:
            self._length = self._artifact.resource_length(self._resource_key)
        return self._length

    @property
    def last_modified(self) -> datetime:
        return self._last_modified

    @property
    def physical_path(self) -> Optional[str]:
        # Not directly accessible
        return None

    def open(self) -> BinaryIO:
        stream = self._artifact.open_resource(self._resource_key)
        if self._length is None and stream.seekable():
            self._length = stream.seek(0, io.SEEK_END)
            stream.seek(0)
        return stream

    def __repr__(self) -> str:
        return f"EmbeddedResourceFileInfo(name='{self._name}', resource_key='{self._resource_key}')"


class SingleArtifactFileProvider(FileProvider):
    """
    Looks up files using the resources of one artifact.

    Only the root directory exists. Listing it returns every resource
    whose key starts with the namespace prefix, named by the remainder of
    the key. The resource table is re-enumerated on every listing.
    """

    def __init__(self, artifact: ResourceArtifact, base_namespace: Optional[str] = ""):
        """
        Args:
            artifact: Artifact that contains the resources
            base_namespace: Namespace the resources live under, "" for none

        Raises:
            TypeError: If artifact is None
        """
        if artifact is None:
            raise TypeError("artifact must not be None")

        self._artifact = artifact
        self._base_namespace = base_namespace or ""
        self._prefix = namespace_prefix(base_namespace)
        self._last_modified = UNKNOWN_LAST_MODIFIED

    @property
    def artifact(self) -> ResourceArtifact:
        return self._artifact

    @property
    def base_namespace(self) -> str:
        return self._base_namespace

    def get_file_info(self, subpath: Optional[str]) -> FileInfo:
        if not subpath:
            return NotFoundFileInfo(subpath)

        # Relative paths starting with a leading slash are fine
        subpath = strip_leading_separator(subpath)

        resource_key = to_resource_key(self._prefix, subpath)
        name = display_name(subpath)
        if not self._artifact.has_resource(resource_key):
            return NotFoundFileInfo(name)

        return EmbeddedResourceFileInfo(self._artifact, resource_key, name, self._last_modified)

    def get_directory_contents(self, subpath: Optional[str]) -> DirectoryContents:
        if subpath is None:
            return NotFoundDirectoryContents()

        subpath = strip_leading_separator(subpath)

        # Non-hierarchical
        if subpath:
            return NotFoundDirectoryContents()

        entries = [
            EmbeddedResourceFileInfo(
                self._artifact,
                resource_name,
                resource_name[len(self._prefix):],
                self._last_modified,
            )
            for resource_name in self._artifact.resource_names()
            if resource_name.startswith(self._prefix)
        ]
        return EnumerableDirectoryContents(entries)

    def watch(self, filter: str) -> ChangeToken:
        return NullChangeToken.SINGLETON

    def __repr__(self) -> str:
        return (
            f"SingleArtifactFileProvider(artifact={self._artifact!r}, "
            f"base_namespace='{self._base_namespace}')"
        )


class EmbeddedFileProvider(FileProvider):
    """
    Composes an optional fallback provider with several artifacts.

    Precedence:
    1. The fallback provider, when configured, always wins.
    2. Among artifacts, the one given last wins. Artifacts are stored in
       reverse of the order given and the first match is returned.

    Directory listings from the fallback and every artifact are merged,
    deduplicated by name (earlier listing wins) and sorted by name.

    Example:
        >>> provider = EmbeddedFileProvider(
        ...     ArtifactOptions(PackageArtifact("myapp"), "myapp.static"),
        ...     fallback=PhysicalFileProvider("./static"),
        ... )
        >>> provider.get_file_info("css/site.css").exists
        True
    """

    def __init__(self, *artifacts: ArtifactSpec, fallback: Optional[FileProvider] = None):
        """
        Args:
            *artifacts: ArtifactOptions, bare artifacts (no base namespace) or
                (artifact, base_namespace) tuples, lowest priority first
            fallback: Provider consulted before any artifact

        Raises:
            TypeError: If an artifact entry is None or of an unknown type
            ProviderConfigurationError: If there is no fallback and no artifact
        """
        if fallback is None and not artifacts:
            raise ProviderConfigurationError(
                "There must be at least one fallback provider or artifact specified."
            )

        self._fallback = fallback

        providers = [
            SingleArtifactFileProvider(options.artifact, options.base_namespace)
            for options in (self._to_options(spec) for spec in artifacts)
        ]
        # If a subpath is found in several artifacts, the last one given wins
        providers.reverse()
        self._providers: Tuple[SingleArtifactFileProvider, ...] = tuple(providers)

        logger.info(
            "Embedded file provider ready",
            artifacts=len(self._providers),
            fallback=type(fallback).__name__ if fallback is not None else None,
        )

    @classmethod
    def from_options(
        cls,
        artifacts: Sequence[ArtifactSpec],
        fallback: Optional[FileProvider] = None,
    ) -> "EmbeddedFileProvider":
        """
        Build a provider from a sequence of artifact specs.

        Raises:
            TypeError: If artifacts is None
        """
        if artifacts is None:
            raise TypeError("artifacts must not be None")
        return cls(*artifacts, fallback=fallback)

    @classmethod
    def for_artifact(
        cls,
        artifact: ResourceArtifact,
        base_namespace: str = "",
        fallback: Optional[FileProvider] = None,
    ) -> "EmbeddedFileProvider":
        """Build a provider over a single artifact."""
        return cls(ArtifactOptions(artifact, base_namespace), fallback=fallback)

    @staticmethod
    def _to_options(spec: ArtifactSpec) -> ArtifactOptions:
        if isinstance(spec, ArtifactOptions):
            return spec
        if isinstance(spec, ResourceArtifact):
            return ArtifactOptions(spec)
        if isinstance(spec, tuple) and len(spec) == 2:
            return ArtifactOptions(spec[0], spec[1])
        raise TypeError(f"Expected ArtifactOptions, ResourceArtifact or tuple, got {spec!r}")

    @property
    def fallback(self) -> Optional[FileProvider]:
        return self._fallback

    @property
    def providers(self) -> Tuple[SingleArtifactFileProvider, ...]:
        """Per-artifact providers in lookup order (highest priority first)."""
        return self._providers

    def get_file_info(self, subpath: Optional[str]) -> FileInfo:
        fallback_info = None
        if self._fallback is not None:
            fallback_info = self._fallback.get_file_info(subpath)
            if fallback_info.exists:
                logger.debug("Resolved file from fallback", subpath=subpath)
                return fallback_info

        for provider in self._providers:
            file_info = provider.get_file_info(subpath)
            if file_info.exists:
                logger.debug("Resolved file from artifact", subpath=subpath, artifact=provider.artifact.name)
                return file_info

        return fallback_info if fallback_info is not None else NotFoundFileInfo(subpath)

    def get_directory_contents(self, subpath: Optional[str]) -> DirectoryContents:
        fallback_contents = None
        listings: List[DirectoryContents] = []

        if self._fallback is not None:
            fallback_contents = self._fallback.get_directory_contents(subpath)
            if fallback_contents.exists:
                listings.append(fallback_contents)

        for provider in self._providers:
            contents = provider.get_directory_contents(subpath)
            if contents.exists:
                listings.append(contents)

        if not listings:
            if fallback_contents is not None:
                return fallback_contents
            return NotFoundDirectoryContents()

        return EnumerableDirectoryContents(self._merge_directory_contents(listings))

    @staticmethod
    def _merge_directory_contents(listings: Iterable[DirectoryContents]) -> List[FileInfo]:
        entries: List[FileInfo] = []
        seen = set()

        for index, contents in enumerate(listings):
            for entry in contents:
                # No duplicates within one listing, so the first is taken whole
                if index == 0 or entry.name not in seen:
                    entries.append(entry)
                    seen.add(entry.name)

        entries.sort(key=lambda entry: entry.name)
        return entries

    def watch(self, filter: str) -> ChangeToken:
        if self._fallback is not None:
            return self._fallback.watch(filter)
        return NullChangeToken.SINGLETON

    def __repr__(self) -> str:
        return f"EmbeddedFileProvider(artifacts={len(self._providers)}, fallback={self._fallback!r})"
