"""
ResourceFS Providers: Base Classes and Value Types.

This module provides the small capability interface every provider
implements, plus the shared file-metadata value types:
- FileInfo: Metadata and content access for a single file
- DirectoryContents: A listing of FileInfo entries with an existence flag
- FileProvider: Abstract base class for file lookup, listing and watching

"Not found" is never an exception here. It is a normal result with
``exists`` set to False, so callers branch on the flag.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import BinaryIO, Iterable, Iterator, List, Optional

from resourcefs.core.constants import UNKNOWN_LAST_MODIFIED, ErrorCode
from resourcefs.providers.change_tokens import ChangeToken


class ProviderConfigurationError(ValueError):
    """Raised at construction when a provider is missing required configuration."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        super().__init__(message)
        self.error_code = error_code


class FileInfo(ABC):
    """
    Metadata for a single file returned by a provider.

    Attributes:
        name: File name only (e.g., "site.css")
        exists: Whether the file was found
        is_directory: Whether the entry is a directory
        length: Content length in bytes, -1 when the file does not exist
        last_modified: Timezone-aware modification time
        physical_path: Path on disk, or None when not directly accessible
    """

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @property
    @abstractmethod
    def exists(self) -> bool:
        pass

    @property
    @abstractmethod
    def is_directory(self) -> bool:
        pass

    @property
    @abstractmethod
    def length(self) -> int:
        pass

    @property
    @abstractmethod
    def last_modified(self) -> datetime:
        pass

    @property
    @abstractmethod
    def physical_path(self) -> Optional[str]:
        pass

    @abstractmethod
    def open(self) -> BinaryIO:
        """
        Open a new read stream over the file content.

        The caller owns the stream and must close it, typically with ``with``.

        Returns:
            Binary stream positioned at the start of the content
        """
        pass

    def read_bytes(self) -> bytes:
        """Read the whole file content."""
        with self.open() as stream:
            return stream.read()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.name}', exists={self.exists})"


class NotFoundFileInfo(FileInfo):
    """A file that could not be located."""

    def __init__(self, name: Optional[str]):
        self._name = name

    @property
    def name(self) -> Optional[str]:
        return self._name

    @property
    def exists(self) -> bool:
        return False

    @property
    def is_directory(self) -> bool:
        return False

    @property
    def length(self) -> int:
        return -1

    @property
    def last_modified(self) -> datetime:
        return UNKNOWN_LAST_MODIFIED

    @property
    def physical_path(self) -> Optional[str]:
        return None

    def open(self) -> BinaryIO:
        raise FileNotFoundError(f"The file {self._name} does not exist.")


class DirectoryContents(ABC):
    """
    Contents of a directory as returned by a provider.

    Iterating yields FileInfo entries. A listing that was not found is
    empty and has ``exists`` set to False.
    """

    @property
    @abstractmethod
    def exists(self) -> bool:
        pass

    @abstractmethod
    def __iter__(self) -> Iterator[FileInfo]:
        pass

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def names(self) -> List[str]:
        """Return the entry names in listing order."""
        return [entry.name for entry in self]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(exists={self.exists}, entries={len(self)})"


class NotFoundDirectoryContents(DirectoryContents):
    """An empty listing for a directory that could not be located."""

    @property
    def exists(self) -> bool:
        return False

    def __iter__(self) -> Iterator[FileInfo]:
        return iter(())

    def __len__(self) -> int:
        return 0


class EnumerableDirectoryContents(DirectoryContents):
    """An existing directory listing backed by a sequence of entries."""

    def __init__(self, entries: Iterable[FileInfo]):
        if entries is None:
            raise TypeError("entries must not be None")
        self._entries = tuple(entries)

    @property
    def exists(self) -> bool:
        return True

    def __iter__(self) -> Iterator[FileInfo]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


class FileProvider(ABC):
    """
    Abstract base class for read-only file providers.

    Leaf providers, the aggregate provider and any fallback provider all
    implement these three operations, so providers compose by holding
    references to one another rather than by subclassing.
    """

    @abstractmethod
    def get_file_info(self, subpath: Optional[str]) -> FileInfo:
        """
        Locate a file at the given path.

        Args:
            subpath: Path relative to the provider root (e.g., "css/site.css")

        Returns:
            File information. Callers must check ``exists``.
        """
        pass

    @abstractmethod
    def get_directory_contents(self, subpath: Optional[str]) -> DirectoryContents:
        """
        Enumerate a directory at the given path.

        Args:
            subpath: Path relative to the provider root, "" for the root

        Returns:
            Directory contents. Callers must check ``exists``.
        """
        pass

    @abstractmethod
    def watch(self, filter: str) -> ChangeToken:
        """
        Create a change token for files matching a glob filter.

        Args:
            filter: Glob pattern relative to the provider root (e.g., "**/*.css")

        Returns:
            Change token describing whether matching files have changed
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
