"""
ResourceFS Artifacts - Flat resource tables that providers read from.

Public API:
    ResourceArtifact: Abstract base class
    MemoryArtifact: Resources held in a mapping
    PackageArtifact: Data files of an importable package
    ZipArtifact: Members of a zip archive
"""

from resourcefs.artifacts.archive import ZipArtifact
from resourcefs.artifacts.base import ResourceArtifact
from resourcefs.artifacts.memory import MemoryArtifact
from resourcefs.artifacts.package import PackageArtifact

__all__ = [
    "ResourceArtifact",
    "MemoryArtifact",
    "PackageArtifact",
    "ZipArtifact",
]
