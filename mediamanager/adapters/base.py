import logging
import posixpath
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Union

from ..exceptions import NotFoundError, UnsupportedOperationError
from ..formatting import format_bytes, format_timestamp
from ..storage.base import FileItem, StorageProvider

logger = logging.getLogger(__name__)

DEFAULT_LABELS = {
    "name": "Name",
    "path": "Path",
    "url": "URL",
    "mimeType": "mime type",
    "fileSize": "Size",
    "lastModifiedAt": "Updated at",
}

@dataclass(frozen=True)
class FileMetadata:
    name: str
    path: str
    url: str
    mime_type: str
    file_size: str
    last_modified_at: str

    def to_display(self, labels: Dict[str, str]) -> Dict[str, Dict[str, str]]:
        """Pair every field with its display label, keyed the way the UI expects."""
        values = {
            "name": self.name,
            "path": self.path,
            "url": self.url,
            "mimeType": self.mime_type,
            "fileSize": self.file_size,
            "lastModifiedAt": self.last_modified_at,
        }
        return {key: {"label": labels[key], "value": value} for key, value in values.items()}

class Adapter:
    """
    Forwards file and directory operations to a storage provider.

    Directory-affecting calls are checked against the capability flags
    before they reach the provider. Subclasses for providers without real
    directories turn the flags off.
    """

    MAKE_DIRECTORY = True
    MOVE_DIRECTORY = True

    def __init__(
        self,
        disk: StorageProvider,
        labels: Optional[Dict[str, str]] = None,
        make_directory: Optional[bool] = None,
        move_directory: Optional[bool] = None,
    ):
        self._disk = disk
        self._make_directory = self.MAKE_DIRECTORY if make_directory is None else make_directory
        self._move_directory = self.MOVE_DIRECTORY if move_directory is None else move_directory
        self.labels = {**DEFAULT_LABELS, **(labels or {})}

    @classmethod
    def make(cls, *args, **kwargs) -> "Adapter":
        return cls(*args, **kwargs)

    def _disk_type(self) -> str:
        return type(self._disk).__name__

    def list(self, path: str, deep: bool = False) -> Iterable[FileItem]:
        """
        List entries under a directory.

        Raises NotFoundError if the directory does not exist.
        """
        if not self.directory_exists(path):
            raise NotFoundError(f"Path [{path}] does not exist")

        return self._disk.list_contents(path, deep)

    def move(self, source: str, destination: str) -> bool:
        if not self.supports_move_directory() and self.directory_exists(source):
            logger.warning(f"Refusing to move directory {source} on {self._disk_type()}")
            raise UnsupportedOperationError(self._disk_type(), "moving directories")

        logger.info(f"Moving {source} -> {destination}")
        return self._disk.move(source, destination)

    def rename(self, source: str, destination: str) -> bool:
        return self.move(source, destination)

    def delete(self, paths: Union[str, List[str]]) -> bool:
        logger.info(f"Deleting {paths}")
        return self._disk.delete(paths)

    def delete_directory(self, path: str) -> bool:
        logger.info(f"Deleting directory {path}")
        return self._disk.delete_directory(path)

    def make_directory(self, name: str) -> bool:
        if not self.supports_make_directory():
            logger.warning(f"Refusing to create directory {name} on {self._disk_type()}")
            raise UnsupportedOperationError(self._disk_type(), "making directories")

        logger.info(f"Creating directory {name}")
        return self._disk.make_directory(name)

    def url(self, path: str) -> str:
        return self._disk.url(path)

    def file_info(self, path: str) -> FileMetadata:
        """
        Collect the metadata of a single file.

        The path is not checked beforehand; provider errors propagate.
        """
        return FileMetadata(
            name=posixpath.basename(path.rstrip("/")),
            path=path,
            url=self.url(path),
            mime_type=self._disk.mime_type(path),
            file_size=format_bytes(self._disk.file_size(path), 2),
            last_modified_at=format_timestamp(self._disk.last_modified(path)),
        )

    def metadata(self, path: str) -> Dict[str, Dict[str, str]]:
        return self.file_info(path).to_display(self.labels)

    def exists(self, path: str) -> bool:
        return self._disk.has(path)

    def directory_exists(self, path: str) -> bool:
        # The disk root always exists
        if path in ("", "/"):
            return True
        return self._disk.directory_exists(path)

    def image_thumbnail(self, path: str) -> str:
        """No thumbnails are generated, the file URL is used as is."""
        return self.url(path)

    def disk(self) -> StorageProvider:
        return self._disk

    def supports_make_directory(self) -> bool:
        return bool(self._make_directory)

    def supports_move_directory(self) -> bool:
        return bool(self._move_directory)
