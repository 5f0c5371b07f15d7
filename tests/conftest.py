from unittest.mock import MagicMock

import pytest

from mediamanager.adapters import Adapter
from mediamanager.storage import LocalStorageProvider, StorageProvider


@pytest.fixture
def disk():
    """Provider double that records every call."""
    return MagicMock(spec=StorageProvider)


@pytest.fixture
def adapter(disk):
    return Adapter(disk)


@pytest.fixture
def local_root(tmp_path):
    root = tmp_path / "disk"
    (root / "videos").mkdir(parents=True)
    (root / "videos" / "clip.mp4").write_bytes(b"\x00" * 2048)
    (root / "videos" / "raw").mkdir()
    (root / "videos" / "raw" / "take1.mov").write_bytes(b"take")
    (root / "notes.txt").write_text("hello")
    return root


@pytest.fixture
def local_disk(local_root):
    return LocalStorageProvider(str(local_root), base_url="http://cdn.test/media")
