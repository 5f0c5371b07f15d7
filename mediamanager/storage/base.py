from abc import ABC, abstractmethod
from typing import Iterable, List, NamedTuple, Optional, Union

class FileItem(NamedTuple):
    name: str
    is_dir: bool
    size: Optional[int] = None
    path: str = "" # Relative to provider root
    last_modified: Optional[int] = None

class StorageProvider(ABC):
    @abstractmethod
    def list_contents(self, path: str, deep: bool = False) -> Iterable[FileItem]:
        """List entries in the given directory, recursively when deep."""
        pass

    @abstractmethod
    def read_file(self, path: str) -> bytes:
        """Read content of a file."""
        pass

    @abstractmethod
    def write_file(self, path: str, data: bytes) -> None:
        """Write content to a file."""
        pass

    @abstractmethod
    def move(self, source: str, destination: str) -> bool:
        """Move a file or directory."""
        pass

    @abstractmethod
    def delete(self, paths: Union[str, List[str]]) -> bool:
        """Delete one or more files."""
        pass

    @abstractmethod
    def delete_directory(self, path: str) -> bool:
        """Delete a directory and everything under it."""
        pass

    @abstractmethod
    def make_directory(self, path: str) -> bool:
        """Create directory if not exists."""
        pass

    @abstractmethod
    def url(self, path: str) -> str:
        pass

    @abstractmethod
    def mime_type(self, path: str) -> str:
        pass

    @abstractmethod
    def file_size(self, path: str) -> int:
        pass

    @abstractmethod
    def last_modified(self, path: str) -> Optional[int]:
        """Last modification time as epoch seconds."""
        pass

    @abstractmethod
    def has(self, path: str) -> bool:
        """Check if file or directory exists."""
        pass

    @abstractmethod
    def directory_exists(self, path: str) -> bool:
        pass

def as_path_list(paths: Union[str, Iterable[str]]) -> List[str]:
    if isinstance(paths, str):
        return [paths]
    return list(paths)
