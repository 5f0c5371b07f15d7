class MediaManagerError(Exception):
    """Base class for errors raised by the adapter layer."""
    pass

class NotFoundError(MediaManagerError):
    """Raised when a referenced directory does not exist."""
    pass

class UnsupportedOperationError(MediaManagerError):
    """Raised when the underlying disk lacks a required capability."""

    def __init__(self, disk_type: str, operation: str):
        self.disk_type = disk_type
        self.operation = operation
        super().__init__(f"this disk [{disk_type}] does not support {operation}.")
