"""
Resource artifact over a zip archive (wheel, zipapp, plain .zip).

Member paths are flattened into dotted keys: ``app/wwwroot/css/site.css``
becomes ``app.wwwroot.css.site.css``. Directory members are skipped.
"""

import os
import zipfile
from typing import BinaryIO, Dict, List, Union

from resourcefs.artifacts.base import ResourceArtifact
from resourcefs.core.path_utils import to_key_parts
from resourcefs.infrastructure.logger import get_logger

logger = get_logger()


class ZipArtifact(ResourceArtifact):
    """
    Artifact backed by a zip archive.

    The archive stays open for the artifact's lifetime so that several
    streams can be read from it independently. Call close() (or use the
    artifact as a context manager) to release the file handle.
    """

    def __init__(self, path: Union[str, os.PathLike]):
        """
        Args:
            path: Path to the zip archive

        Raises:
            FileNotFoundError: If the archive does not exist
            zipfile.BadZipFile: If the file is not a zip archive
        """
        super().__init__(os.fspath(path))
        self.path = os.fspath(path)
        self._zip = zipfile.ZipFile(self.path)
        self._index: Dict[str, zipfile.ZipInfo] = {}

        for info in self._zip.infolist():
            if info.is_dir():
                continue
            key = to_key_parts(info.filename)
            if key in self._index:
                logger.warning("Duplicate resource key, keeping first", key=key, archive=self.path)
                continue
            self._index[key] = info

        logger.debug("Indexed zip artifact", archive=self.path, resources=len(self._index))

    def resource_names(self) -> List[str]:
        return list(self._index)

    def has_resource(self, key: str) -> bool:
        return key in self._index

    def _member(self, key: str) -> zipfile.ZipInfo:
        try:
            return self._index[key]
        except KeyError:
            raise FileNotFoundError(f"Resource not found in {self.name}: {key}")

    def open_resource(self, key: str) -> BinaryIO:
        return self._zip.open(self._member(key), "r")

    def resource_length(self, key: str) -> int:
        return self._member(key).file_size

    def close(self) -> None:
        self._zip.close()

    def __enter__(self) -> "ZipArtifact":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
