from pathlib import Path
from typing import Iterator, List, Optional, Union
from urllib.parse import quote
from .base import StorageProvider, FileItem, as_path_list
import mimetypes
import shutil

DEFAULT_MIME_TYPE = "application/octet-stream"

class LocalStorageProvider(StorageProvider):
    def __init__(self, root_path: str = ".", base_url: Optional[str] = None):
        self.root = Path(root_path).resolve()
        self.base_url = base_url

    def _resolve(self, path: str) -> Path:
        # Leading slashes address the disk root, not the filesystem root
        target = (self.root / path.lstrip("/")).resolve()
        if target != self.root and self.root not in target.parents:
            raise PermissionError(f"Path {path} is outside of {self.root}")
        return target

    def _relative(self, target: Path) -> str:
        return target.relative_to(self.root).as_posix()

    def _item(self, target: Path) -> FileItem:
        stat = target.stat()
        return FileItem(
            name=target.name,
            is_dir=target.is_dir(),
            size=stat.st_size if target.is_file() else None,
            path=self._relative(target),
            last_modified=int(stat.st_mtime)
        )

    def list_contents(self, path: str, deep: bool = False) -> Iterator[FileItem]:
        target = self._resolve(path)
        if not target.is_dir():
            return

        children = target.rglob("*") if deep else target.iterdir()
        for item in sorted(children):
            yield self._item(item)

    def read_file(self, path: str) -> bytes:
        target = self._resolve(path)
        with open(target, "rb") as f:
            return f.read()

    def write_file(self, path: str, data: bytes) -> None:
        target = self._resolve(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "wb") as f:
            f.write(data)

    def move(self, source: str, destination: str) -> bool:
        src = self._resolve(source)
        dst = self._resolve(destination)
        if not src.exists():
            raise FileNotFoundError(f"No such file or directory: {source}")
        dst.parent.mkdir(parents=True, exist_ok=True)
        shutil.move(str(src), str(dst))
        return True

    def delete(self, paths: Union[str, List[str]]) -> bool:
        for path in as_path_list(paths):
            target = self._resolve(path)
            if not target.exists():
                continue
            if target.is_dir():
                raise IsADirectoryError(f"{path} is a directory, use delete_directory")
            target.unlink()
        return True

    def delete_directory(self, path: str) -> bool:
        target = self._resolve(path)
        if not target.is_dir():
            return False
        if target == self.root:
            raise PermissionError("Refusing to delete the disk root")
        shutil.rmtree(target)
        return True

    def make_directory(self, path: str) -> bool:
        self._resolve(path).mkdir(parents=True, exist_ok=True)
        return True

    def url(self, path: str) -> str:
        target = self._resolve(path)
        if not self.base_url:
            return target.as_uri()
        return f"{self.base_url.rstrip('/')}/{quote(self._relative(target))}"

    def mime_type(self, path: str) -> str:
        mime_type, _ = mimetypes.guess_type(self._resolve(path).name)
        return mime_type or DEFAULT_MIME_TYPE

    def file_size(self, path: str) -> int:
        return self._resolve(path).stat().st_size

    def last_modified(self, path: str) -> int:
        return int(self._resolve(path).stat().st_mtime)

    def has(self, path: str) -> bool:
        return self._resolve(path).exists()

    def directory_exists(self, path: str) -> bool:
        return self._resolve(path).is_dir()
