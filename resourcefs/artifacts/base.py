"""
ResourceFS Artifacts: Base Class.

An artifact is anything that bundles a flat table of named byte blobs:
an importable package, a zip archive, or an in-memory mapping. Resource
keys are dotted strings such as "app.wwwroot.css.site.css".
"""

import io
from abc import ABC, abstractmethod
from typing import BinaryIO, List


class ResourceArtifact(ABC):
    """
    Abstract base class for resource artifacts.

    Implementations must provide:
    - resource_names(): Enumerate every resource key in the artifact
    - has_resource(): Exact, case-sensitive existence check
    - open_resource(): Open a new, independent read stream for a key

    Artifacts are read-only. Their resource tables do not change once loaded.
    """

    def __init__(self, name: str):
        """
        Args:
            name: Human-readable artifact name used in logs and reprs
        """
        self.name = name

    @abstractmethod
    def resource_names(self) -> List[str]:
        """Return every resource key in the artifact."""
        pass

    @abstractmethod
    def has_resource(self, key: str) -> bool:
        """Check whether a resource with exactly this key exists."""
        pass

    @abstractmethod
    def open_resource(self, key: str) -> BinaryIO:
        """
        Open a read stream over a resource.

        Each call returns a new stream. The caller must close it.

        Raises:
            FileNotFoundError: If no resource has this key
        """
        pass

    def resource_length(self, key: str) -> int:
        """
        Return the byte length of a resource.

        The default implementation opens the stream and seeks to its end.

        Raises:
            FileNotFoundError: If no resource has this key
        """
        with self.open_resource(key) as stream:
            return stream.seek(0, io.SEEK_END)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.name}')"
