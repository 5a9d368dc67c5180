"""
Resource artifact over an importable Python package.

The package's data files are flattened into dotted keys that start with
the package's dotted name, so a file ``static/css/site.css`` inside
package ``myapp`` is addressed as ``myapp.static.css.site.css``.
"""

from importlib import resources
from importlib.resources.abc import Traversable
from types import ModuleType
from typing import BinaryIO, Dict, FrozenSet, List, Union

from resourcefs.artifacts.base import ResourceArtifact
from resourcefs.core.constants import NAMESPACE_SEPARATOR
from resourcefs.infrastructure.logger import get_logger

logger = get_logger()

# Compiled code and caches are not resources
SKIPPED_DIRECTORIES: FrozenSet[str] = frozenset({"__pycache__"})
SKIPPED_SUFFIXES: FrozenSet[str] = frozenset({".py", ".pyc", ".pyo"})


class PackageArtifact(ResourceArtifact):
    """
    Artifact backed by the data files of an importable package.

    Works for regular installs, zipped packages and wheels on sys.path,
    since access goes through importlib.resources.

    Example:
        >>> artifact = PackageArtifact("myapp.static")
        >>> artifact.resource_names()
        ['myapp.static.css.site.css', 'myapp.static.js.app.js']
    """

    def __init__(self, package: Union[str, ModuleType]):
        """
        Args:
            package: Dotted package name or an imported package module

        Raises:
            ModuleNotFoundError: If the package cannot be imported
        """
        package_name = package if isinstance(package, str) else package.__name__
        super().__init__(package_name)
        self._index = self._build_index(resources.files(package), package_name)
        logger.debug("Indexed package artifact", package=package_name, resources=len(self._index))

    def _build_index(self, root: Traversable, package_name: str) -> Dict[str, Traversable]:
        index: Dict[str, Traversable] = {}
        pending = [(root, package_name)]

        while pending:
            directory, key_prefix = pending.pop()
            for entry in sorted(directory.iterdir(), key=lambda e: e.name):
                key = key_prefix + NAMESPACE_SEPARATOR + entry.name
                if entry.is_dir():
                    if entry.name not in SKIPPED_DIRECTORIES:
                        pending.append((entry, key))
                    continue
                if any(entry.name.endswith(suffix) for suffix in SKIPPED_SUFFIXES):
                    continue
                if key in index:
                    logger.warning("Duplicate resource key, keeping first", key=key)
                    continue
                index[key] = entry

        return index

    def resource_names(self) -> List[str]:
        return list(self._index)

    def has_resource(self, key: str) -> bool:
        return key in self._index

    def open_resource(self, key: str) -> BinaryIO:
        try:
            entry = self._index[key]
        except KeyError:
            raise FileNotFoundError(f"Resource not found in {self.name}: {key}")
        return entry.open("rb")
