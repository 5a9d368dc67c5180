"""In-memory resource artifact."""

import io
from typing import BinaryIO, List, Mapping, Union

from resourcefs.artifacts.base import ResourceArtifact


class MemoryArtifact(ResourceArtifact):
    """
    Artifact backed by a mapping of resource key to content.

    String values are encoded as UTF-8.

    Example:
        >>> artifact = MemoryArtifact({"App.wwwroot.js.app.js": b"main();"})
        >>> artifact.has_resource("App.wwwroot.js.app.js")
        True
    """

    def __init__(self, resources: Mapping[str, Union[bytes, str]], name: str = "memory"):
        super().__init__(name)
        self._resources = {
            key: value.encode("utf-8") if isinstance(value, str) else bytes(value)
            for key, value in resources.items()
        }

    def resource_names(self) -> List[str]:
        return list(self._resources)

    def has_resource(self, key: str) -> bool:
        return key in self._resources

    def open_resource(self, key: str) -> BinaryIO:
        try:
            return io.BytesIO(self._resources[key])
        except KeyError:
            raise FileNotFoundError(f"Resource not found in {self.name}: {key}")

    def resource_length(self, key: str) -> int:
        try:
            return len(self._resources[key])
        except KeyError:
            raise FileNotFoundError(f"Resource not found in {self.name}: {key}")
