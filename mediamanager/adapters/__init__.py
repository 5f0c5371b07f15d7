import os
from typing import Dict, Optional

from .base import Adapter, FileMetadata, DEFAULT_LABELS
from .blob import BlobAdapter
from ..storage import LocalStorageProvider, OneDriveStorageProvider, BlobStorageProvider
from ..storage.auth import resolve_onedrive_token

__all__ = ["Adapter", "BlobAdapter", "FileMetadata", "DEFAULT_LABELS", "get_adapter", "adapter_for"]

def get_adapter(disk_config: dict, labels: Optional[Dict[str, str]] = None) -> Adapter:
    """
    Factory to build the adapter for a single disk entry.
    """
    driver = (disk_config.get("driver") or "local").lower()

    if driver == "local":
        provider = LocalStorageProvider(disk_config.get("root", "."), disk_config.get("url"))
        return Adapter.make(provider, labels=labels)
    elif driver == "onedrive":
        token = resolve_onedrive_token(disk_config)
        if not token:
            raise ValueError("OneDrive disk requires an access token")
        return Adapter.make(OneDriveStorageProvider(token), labels=labels)
    elif driver == "blob":
        conn_str = disk_config.get("connection_string") or os.environ.get("AZURE_STORAGE_CONNECTION_STRING")
        if not conn_str:
            raise ValueError("AZURE_STORAGE_CONNECTION_STRING not configured")
        container = disk_config.get("container", os.environ.get("CONTAINER_NAME", "media"))
        return BlobAdapter.make(BlobStorageProvider(conn_str, container), labels=labels)
    else:
        raise ValueError(f"Unknown driver: {driver}")

def adapter_for(config: dict, name: Optional[str] = None) -> Adapter:
    """
    Build the adapter for a named disk, or the configured default one.
    """
    disks = config.get("disks", {})
    disk_name = name or config.get("default")
    if not disk_name and len(disks) == 1:
        disk_name = next(iter(disks))

    if disk_name not in disks:
        raise ValueError(f"Unknown disk: {disk_name}")

    return get_adapter(disks[disk_name], labels=config.get("labels"))
