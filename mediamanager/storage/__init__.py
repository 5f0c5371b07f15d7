from .base import StorageProvider, FileItem
from .local import LocalStorageProvider
from .onedrive import OneDriveStorageProvider
from .blob import BlobStorageProvider

__all__ = ["StorageProvider", "FileItem", "LocalStorageProvider", "OneDriveStorageProvider", "BlobStorageProvider"]
