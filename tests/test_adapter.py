"""Tests for the Adapter facade against a recorded provider."""

from datetime import datetime

import pytest

from mediamanager.adapters import Adapter, BlobAdapter, FileMetadata
from mediamanager.exceptions import NotFoundError, UnsupportedOperationError
from mediamanager.storage import FileItem


@pytest.mark.parametrize("root", ["", "/"])
def test_root_directory_always_exists(adapter, disk, root):
    disk.directory_exists.return_value = False

    assert adapter.directory_exists(root) is True
    disk.directory_exists.assert_not_called()


def test_directory_exists_delegates(adapter, disk):
    disk.directory_exists.return_value = False

    assert adapter.directory_exists("/videos") is False
    disk.directory_exists.assert_called_once_with("/videos")


def test_list_missing_directory_raises(adapter, disk):
    disk.directory_exists.return_value = False

    with pytest.raises(NotFoundError, match="/videos"):
        adapter.list("/videos")

    disk.list_contents.assert_not_called()


def test_list_returns_provider_result_unchanged(adapter, disk):
    entries = [FileItem(name="clip.mp4", is_dir=False, size=10, path="videos/clip.mp4")]
    disk.directory_exists.return_value = True
    disk.list_contents.return_value = entries

    assert adapter.list("/videos", deep=True) is entries
    disk.list_contents.assert_called_once_with("/videos", True)


def test_list_root_skips_existence_check(adapter, disk):
    adapter.list("/")

    disk.directory_exists.assert_not_called()
    disk.list_contents.assert_called_once_with("/", False)


def test_move_delegates(adapter, disk):
    disk.move.return_value = True

    assert adapter.move("/a.txt", "/b.txt") is True
    disk.move.assert_called_once_with("/a.txt", "/b.txt")


def test_move_checks_nothing_when_directories_supported(adapter, disk):
    adapter.move("/videos", "/archive")

    disk.directory_exists.assert_not_called()
    disk.move.assert_called_once_with("/videos", "/archive")


def test_move_directory_unsupported(disk):
    adapter = Adapter(disk, move_directory=False)
    disk.directory_exists.return_value = True

    with pytest.raises(UnsupportedOperationError) as exc_info:
        adapter.move("/videos", "/archive")

    assert exc_info.value.disk_type == type(disk).__name__
    assert exc_info.value.disk_type in str(exc_info.value)
    disk.move.assert_not_called()


def test_move_file_allowed_without_directory_support(disk):
    adapter = Adapter(disk, move_directory=False)
    disk.directory_exists.return_value = False
    disk.move.return_value = True

    assert adapter.move("/clip.mp4", "/archive/clip.mp4") is True
    disk.move.assert_called_once_with("/clip.mp4", "/archive/clip.mp4")


def test_rename_is_move(disk):
    adapter = Adapter(disk)
    disk.move.return_value = False

    assert adapter.rename("/a", "/b") == adapter.move("/a", "/b")
    assert disk.move.call_count == 2
    assert disk.move.call_args_list[0] == disk.move.call_args_list[1]


def test_rename_directory_unsupported(disk):
    adapter = Adapter(disk, move_directory=False)
    disk.directory_exists.return_value = True

    with pytest.raises(UnsupportedOperationError):
        adapter.rename("/videos", "/clips")
    disk.move.assert_not_called()


def test_delete_passes_paths_through(adapter, disk):
    disk.delete.return_value = True

    assert adapter.delete(["/a.txt", "/b.txt"]) is True
    disk.delete.assert_called_once_with(["/a.txt", "/b.txt"])


def test_delete_directory_has_no_capability_check(disk):
    adapter = BlobAdapter(disk)
    disk.delete_directory.return_value = True

    assert adapter.delete_directory("/videos") is True
    disk.delete_directory.assert_called_once_with("/videos")


def test_make_directory_delegates(adapter, disk):
    disk.make_directory.return_value = True

    assert adapter.make_directory("/new") is True
    disk.make_directory.assert_called_once_with("/new")


def test_make_directory_unsupported(disk):
    adapter = Adapter(disk, make_directory=False)

    with pytest.raises(UnsupportedOperationError, match="making directories"):
        adapter.make_directory("/new")
    disk.make_directory.assert_not_called()


def test_url_and_thumbnail(adapter, disk):
    disk.url.return_value = "http://cdn.test/a.png"

    assert adapter.url("/a.png") == "http://cdn.test/a.png"
    assert adapter.image_thumbnail("/a.png") == "http://cdn.test/a.png"


def test_exists_delegates_to_has(adapter, disk):
    disk.has.return_value = True

    assert adapter.exists("/a.png") is True
    disk.has.assert_called_once_with("/a.png")


def test_metadata_structure(adapter, disk):
    disk.url.return_value = "http://cdn.test/videos/clip.mp4"
    disk.mime_type.return_value = "video/mp4"
    disk.file_size.return_value = 2048
    disk.last_modified.return_value = 1700000000

    result = adapter.metadata("videos/clip.mp4")

    assert list(result) == ["name", "path", "url", "mimeType", "fileSize", "lastModifiedAt"]
    assert result["name"] == {"label": "Name", "value": "clip.mp4"}
    assert result["path"]["value"] == "videos/clip.mp4"
    assert result["url"]["value"] == "http://cdn.test/videos/clip.mp4"
    assert result["mimeType"]["value"] == "video/mp4"
    assert result["fileSize"]["value"] == "2.00 KB"
    expected = datetime.fromtimestamp(1700000000).strftime("%Y-%m-%d %H:%M:%S")
    assert result["lastModifiedAt"]["value"] == expected


def test_metadata_without_timestamp(adapter, disk):
    disk.url.return_value = ""
    disk.mime_type.return_value = "text/plain"
    disk.file_size.return_value = 5
    disk.last_modified.return_value = None

    info = adapter.file_info("notes.txt")

    assert info == FileMetadata("notes.txt", "notes.txt", "", "text/plain", "5.00 B", "")


def test_metadata_propagates_provider_errors(adapter, disk):
    disk.url.side_effect = FileNotFoundError("missing.txt")

    with pytest.raises(FileNotFoundError):
        adapter.metadata("missing.txt")


def test_custom_labels(disk):
    adapter = Adapter(disk, labels={"fileSize": "Größe"})
    disk.file_size.return_value = 0
    disk.last_modified.return_value = None

    result = adapter.metadata("a.bin")

    assert result["fileSize"]["label"] == "Größe"
    assert result["name"]["label"] == "Name"


def test_capability_flags(disk):
    assert Adapter(disk).supports_make_directory() is True
    assert Adapter(disk).supports_move_directory() is True
    assert BlobAdapter(disk).supports_make_directory() is False
    assert BlobAdapter(disk).supports_move_directory() is False
    assert BlobAdapter(disk, move_directory=True).supports_move_directory() is True


def test_make_returns_subclass(disk):
    adapter = BlobAdapter.make(disk)

    assert isinstance(adapter, BlobAdapter)
    assert adapter.disk() is disk
