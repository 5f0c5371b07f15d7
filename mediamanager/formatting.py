from datetime import datetime
from typing import Optional

SIZE_UNITS = ["B", "KB", "MB", "GB", "TB", "PB"]
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

def format_bytes(size: int, precision: int = 2) -> str:
    """
    Render a byte count with a unit suffix, e.g. 2048 -> "2.00 KB".
    """
    if size < 0:
        raise ValueError(f"Size cannot be negative: {size}")

    value = float(size)
    unit = 0
    while value >= 1024 and unit < len(SIZE_UNITS) - 1:
        value /= 1024
        unit += 1
    return f"{value:.{precision}f} {SIZE_UNITS[unit]}"

def format_timestamp(epoch: Optional[int]) -> str:
    """Local time for an epoch value, empty when the backend reported none."""
    if epoch is None:
        return ""
    return datetime.fromtimestamp(epoch).strftime(TIMESTAMP_FORMAT)
