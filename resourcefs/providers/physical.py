"""
ResourceFS Providers: Physical Files.

A disk-backed FileProvider rooted at a directory, used as the fallback
in front of embedded artifacts. Paths that escape the root resolve to
not-found results rather than errors.
"""

import os
from datetime import datetime, timezone
from pathlib import Path
from typing import BinaryIO, Optional, Union

from resourcefs.core.constants import ErrorCode
from resourcefs.core.path_utils import strip_leading_separator
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
from resourcefs.providers.change_tokens import ChangeToken, PollingChangeToken

logger = get_logger()


class PhysicalFileInfo(FileInfo):
    """
    A file or directory on disk.

    Metadata is read from os.stat() once, at construction.
    """

    def __init__(self, path: Union[str, os.PathLike]):
        """
        Args:
            path: Absolute path to an existing file or directory

        Raises:
            FileNotFoundError: If the path doesn't exist
        """
        self._path = os.fspath(path)
        self._stat = os.stat(self._path)
        self._is_directory = os.path.isdir(self._path)

    @property
    def name(self) -> str:
        return os.path.basename(self._path)

    @property
    def exists(self) -> bool:
        return True

    @property
    def is_directory(self) -> bool:
        return self._is_directory

    @property
    def length(self) -> int:
        return -1 if self._is_directory else self._stat.st_size

    @property
    def last_modified(self) -> datetime:
        return datetime.fromtimestamp(self._stat.st_mtime, tz=timezone.utc)

    @property
    def physical_path(self) -> Optional[str]:
        return self._path

    def open(self) -> BinaryIO:
        if self._is_directory:
            raise IsADirectoryError(f"Cannot open a directory for reading: {self._path}")
        return open(self._path, "rb")


class PhysicalFileProvider(FileProvider):
    """
    Looks up files in a directory on disk.

    Attributes:
        root: Absolute, resolved root directory
    """

    def __init__(self, root: Union[str, os.PathLike]):
        """
        Args:
            root: Root directory to serve files from

        Raises:
            ProviderConfigurationError: If root doesn't exist or isn't a directory
        """
        path = Path(root).expanduser().resolve()
        if not path.exists():
            raise ProviderConfigurationError(
                f"Fallback root does not exist: {root}", ErrorCode.NOT_FOUND
            )
        if not path.is_dir():
            raise ProviderConfigurationError(f"Fallback root is not a directory: {root}")

        self.root = str(path)
        logger.info("Physical file provider ready", root=self.root)

    def _resolve(self, subpath: Optional[str]) -> Optional[str]:
        """Map a subpath to an absolute path inside root, or None if it escapes."""
        if subpath is None:
            return None

        subpath = strip_leading_separator(subpath)
        full_path = os.path.realpath(os.path.join(self.root, subpath))

        if os.path.commonpath([self.root, full_path]) != self.root:
            logger.warning("Rejected path outside fallback root", subpath=subpath)
            return None
        return full_path

    def get_file_info(self, subpath: Optional[str]) -> FileInfo:
        if not subpath:
            return NotFoundFileInfo(subpath)

        full_path = self._resolve(subpath)
        if full_path is None or not os.path.isfile(full_path):
            return NotFoundFileInfo(subpath)

        try:
            return PhysicalFileInfo(full_path)
        except FileNotFoundError:
            # Removed since the isfile() check
            return NotFoundFileInfo(subpath)

    def get_directory_contents(self, subpath: Optional[str]) -> DirectoryContents:
        full_path = self._resolve(subpath)
        if full_path is None or not os.path.isdir(full_path):
            return NotFoundDirectoryContents()

        entries = []
        with os.scandir(full_path) as it:
            for entry in it:
                try:
                    entries.append(PhysicalFileInfo(entry.path))
                except OSError:
                    # Skip entries we can't stat
                    continue
        return EnumerableDirectoryContents(entries)

    def watch(self, filter: str) -> ChangeToken:
        return PollingChangeToken(self.root, filter)

    def __repr__(self) -> str:
        return f"PhysicalFileProvider(root='{self.root}')"
