import logging
import mimetypes
import re
import requests
from datetime import datetime
from typing import Iterator, List, Optional, Union
from urllib.parse import quote
from .base import StorageProvider, FileItem, as_path_list

logger = logging.getLogger(__name__)

class OneDriveStorageProvider(StorageProvider):
    GRAPH_API = "https://graph.microsoft.com/v1.0"

    def __init__(self, access_token: str):
        self.headers = {
            "Authorization": f"Bearer {access_token}",
            "Content-Type": "application/json"
        }

    def _clean_path(self, path: str) -> str:
        """
        Standardizes path by removing API prefixes.
        Graph API often returns paths like /drive/root:/Path/To/File.
        We want just Path/To/File.
        """
        if path.startswith("/drive/root:"):
            path = path[len("/drive/root:"):]
        return path.strip("/")

    def _build_api_url(self, path: str, is_content: bool = False, is_children: bool = False) -> str:
        """
        Constructs graph API URLs from paths.
        Handles root checks and consistent formatting.
        """
        clean = self._clean_path(path)

        if not clean:
            base_url = f"{self.GRAPH_API}/me/drive/root"
        else:
            # Names may hold '#', '?' or '%', which would otherwise end the path
            base_url = f"{self.GRAPH_API}/me/drive/root:/{quote(clean)}"

        if is_children:
            # For root, it's /children. For others, it's :/children
            if not clean:
                return f"{base_url}/children"
            return f"{base_url}:/children"

        if is_content:
            if not clean:
                 raise ValueError("Cannot read content of root.")
            return f"{base_url}:/content"

        return base_url

    def _get_drive_item(self, path: str) -> Optional[dict]:
        url = self._build_api_url(path)
        response = requests.get(url, headers=self.headers)
        if response.status_code == 404:
            return None
        response.raise_for_status()
        return response.json()

    def _require_item(self, path: str) -> dict:
        item = self._get_drive_item(path)
        if item is None:
            raise FileNotFoundError(f"No such OneDrive item: {path}")
        return item

    @staticmethod
    def _parse_timestamp(value: Optional[str]) -> Optional[int]:
        if not value:
            return None
        # Graph returns ISO 8601 in UTC with a trailing Z and a fraction of any length
        value = re.sub(r"\.\d+", "", value).replace("Z", "+00:00")
        return int(datetime.fromisoformat(value).timestamp())

    def _to_file_item(self, item: dict) -> FileItem:
        is_dir = "folder" in item
        # API returns parentReference.path like /drive/root:/Folder
        parent_path = self._clean_path(item.get("parentReference", {}).get("path", ""))
        full_path = f"{parent_path}/{item['name']}" if parent_path else item["name"]
        return FileItem(
            name=item["name"],
            is_dir=is_dir,
            size=item.get("size") if not is_dir else None,
            path=full_path,
            last_modified=self._parse_timestamp(item.get("lastModifiedDateTime"))
        )

    def list_contents(self, path: str, deep: bool = False) -> Iterator[FileItem]:
        url = self._build_api_url(path, is_children=True)
        folders = []

        while url:
            response = requests.get(url, headers=self.headers)
            if response.status_code == 404:
                return
            response.raise_for_status()
            data = response.json()

            for item in data.get("value", []):
                entry = self._to_file_item(item)
                if entry.is_dir:
                    folders.append(entry.path)
                yield entry

            url = data.get("@odata.nextLink")

        if deep:
            for folder in folders:
                yield from self.list_contents(folder, deep=True)

    def read_file(self, path: str) -> bytes:
        url = self._build_api_url(path, is_content=True)
        response = requests.get(url, headers=self.headers)
        response.raise_for_status()
        return response.content

    def write_file(self, path: str, data: bytes) -> None:
        url = self._build_api_url(path, is_content=True)
        response = requests.put(url, headers=self.headers, data=data)
        response.raise_for_status()

    def move(self, source: str, destination: str) -> bool:
        parts = self._clean_path(destination).split("/")
        parent_path = "/".join(parts[:-1])
        payload = {
            "parentReference": {"path": f"/drive/root:/{parent_path}" if parent_path else "/drive/root"},
            "name": parts[-1]
        }
        response = requests.patch(self._build_api_url(source), headers=self.headers, json=payload)
        response.raise_for_status()
        return True

    def delete(self, paths: Union[str, List[str]]) -> bool:
        for path in as_path_list(paths):
            url = self._build_api_url(path)
            response = requests.delete(url, headers=self.headers)
            if response.status_code == 404:
                continue
            response.raise_for_status()
        return True

    def delete_directory(self, path: str) -> bool:
        if not self._clean_path(path):
            raise PermissionError("Refusing to delete the drive root")
        response = requests.delete(self._build_api_url(path), headers=self.headers)
        if response.status_code == 404:
            return False
        response.raise_for_status()
        return True

    def make_directory(self, path: str) -> bool:
        parts = self._clean_path(path).split("/")
        if not parts or parts == [""]:
            return True

        # Graph only creates one level per request
        for depth in range(1, len(parts) + 1):
            current = "/".join(parts[:depth])
            if self.directory_exists(current):
                continue

            parent_path = "/".join(parts[:depth - 1])
            url = self._build_api_url(parent_path, is_children=True)
            payload = {
                "name": parts[depth - 1],
                "folder": {},
                "@microsoft.graph.conflictBehavior": "fail"
            }
            response = requests.post(url, headers=self.headers, json=payload)
            response.raise_for_status()
            logger.debug(f"Created OneDrive folder {current}")
        return True

    def url(self, path: str) -> str:
        return self._require_item(path)["webUrl"]

    def mime_type(self, path: str) -> str:
        item = self._require_item(path)
        mime_type = item.get("file", {}).get("mimeType")
        if not mime_type:
            mime_type, _ = mimetypes.guess_type(item["name"])
        return mime_type or "application/octet-stream"

    def file_size(self, path: str) -> int:
        return self._require_item(path).get("size", 0)

    def last_modified(self, path: str) -> Optional[int]:
        return self._parse_timestamp(self._require_item(path).get("lastModifiedDateTime"))

    def has(self, path: str) -> bool:
        return self._get_drive_item(path) is not None

    def directory_exists(self, path: str) -> bool:
        item = self._get_drive_item(path)
        return item is not None and "folder" in item
