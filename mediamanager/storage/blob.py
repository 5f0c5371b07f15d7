import logging
import time
from typing import Iterator, List, Optional, Union
from azure.core.exceptions import ResourceNotFoundError
from azure.storage.blob import BlobServiceClient
from .base import StorageProvider, FileItem, as_path_list

logger = logging.getLogger(__name__)

class BlobStorageProvider(StorageProvider):
    """
    Azure Blob Storage container.
    Directories are virtual: a directory exists while at least one blob
    name starts with its prefix.
    """

    COPY_POLL_INTERVAL = 0.5

    def __init__(self, connection_string: str, container_name: str):
        self.client = BlobServiceClient.from_connection_string(connection_string)
        self.container = self.client.get_container_client(container_name)
        if not self.container.exists():
            self.container.create_container()

    @staticmethod
    def _key(path: str) -> str:
        return path.strip("/")

    def _prefix(self, path: str) -> str:
        key = self._key(path)
        return f"{key}/" if key else ""

    def _properties(self, path: str):
        return self.container.get_blob_client(self._key(path)).get_blob_properties()

    def list_contents(self, path: str, deep: bool = False) -> Iterator[FileItem]:
        prefix = self._prefix(path)
        if deep:
            blobs = self.container.list_blobs(name_starts_with=prefix or None)
        else:
            blobs = self.container.walk_blobs(name_starts_with=prefix or None, delimiter="/")

        for blob in blobs:
            # walk_blobs yields prefixes for sub-directories, named with a trailing slash
            if blob.name.endswith("/"):
                name = blob.name.rstrip("/")
                yield FileItem(name=name.rsplit("/", 1)[-1], is_dir=True, path=name)
                continue
            yield FileItem(
                name=blob.name.rsplit("/", 1)[-1],
                is_dir=False,
                size=blob.size,
                path=blob.name,
                last_modified=int(blob.last_modified.timestamp()) if blob.last_modified else None
            )

    def read_file(self, path: str) -> bytes:
        return self.container.get_blob_client(self._key(path)).download_blob().readall()

    def write_file(self, path: str, data: bytes) -> None:
        self.container.get_blob_client(self._key(path)).upload_blob(data, overwrite=True)

    def move(self, source: str, destination: str) -> bool:
        # No native rename: server-side copy, then delete the source.
        # Not atomic, a failed delete leaves both blobs in place.
        src = self.container.get_blob_client(self._key(source))
        dst = self.container.get_blob_client(self._key(destination))
        dst.start_copy_from_url(src.url)

        copy = dst.get_blob_properties().copy
        while copy.status == "pending":
            time.sleep(self.COPY_POLL_INTERVAL)
            copy = dst.get_blob_properties().copy
        if copy.status != "success":
            raise OSError(f"Copy of {source} to {destination} ended with status {copy.status}")

        src.delete_blob()
        logger.debug(f"Moved blob {source} -> {destination}")
        return True

    def delete(self, paths: Union[str, List[str]]) -> bool:
        for path in as_path_list(paths):
            try:
                self.container.delete_blob(self._key(path))
            except ResourceNotFoundError:
                continue
        return True

    def delete_directory(self, path: str) -> bool:
        prefix = self._prefix(path)
        if not prefix:
            raise PermissionError("Refusing to delete the container root")
        names = [blob.name for blob in self.container.list_blobs(name_starts_with=prefix)]
        for name in names:
            self.container.delete_blob(name)
        return bool(names)

    def make_directory(self, path: str) -> bool:
        raise NotImplementedError("Blob containers have no real directories")

    def url(self, path: str) -> str:
        return self.container.get_blob_client(self._key(path)).url

    def mime_type(self, path: str) -> str:
        content_type = self._properties(path).content_settings.content_type
        return content_type or "application/octet-stream"

    def file_size(self, path: str) -> int:
        return self._properties(path).size

    def last_modified(self, path: str) -> Optional[int]:
        modified = self._properties(path).last_modified
        return int(modified.timestamp()) if modified else None

    def has(self, path: str) -> bool:
        key = self._key(path)
        if not key:
            return True
        return self.container.get_blob_client(key).exists() or self.directory_exists(path)

    def directory_exists(self, path: str) -> bool:
        prefix = self._prefix(path)
        if not prefix:
            return True
        return next(iter(self.container.list_blobs(name_starts_with=prefix)), None) is not None
