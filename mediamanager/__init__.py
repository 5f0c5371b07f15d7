from .adapters import Adapter, BlobAdapter, FileMetadata, get_adapter, adapter_for
from .exceptions import MediaManagerError, NotFoundError, UnsupportedOperationError

__all__ = [
    "Adapter",
    "BlobAdapter",
    "FileMetadata",
    "get_adapter",
    "adapter_for",
    "MediaManagerError",
    "NotFoundError",
    "UnsupportedOperationError",
]
