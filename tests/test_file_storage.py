"""
Tests for attachment file storage.
"""

from pathlib import Path
from unittest.mock import patch

import pytest

from vet_records.exceptions import StorageFailureException
from vet_records.storage import FileStorage, LocalFileStorage, sanitize_filename


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("scan.png", "scan.png"),
        ("../../etc/passwd", "passwd"),
        ("C:\\Users\\vet\\x-ray.jpg", "x-ray.jpg"),
        ("my scan (1).png", "my_scan_1_.png"),
        ("...", "file"),
    ],
)
def test_sanitize_filename(raw, expected):
    assert sanitize_filename(raw) == expected


def test_local_storage_satisfies_protocol(tmp_path: Path):
    assert isinstance(LocalFileStorage(tmp_path), FileStorage)


class TestLocalFileStorage:
    """Test cases for LocalFileStorage."""

    @pytest.mark.asyncio
    async def test_save_writes_content(self, file_storage):
        location = await file_storage.save(b"report", "blood panel.pdf")

        path = Path(location)
        assert path.parent == file_storage.base_dir
        assert path.name.endswith("_blood_panel.pdf")
        assert path.read_bytes() == b"report"

    @pytest.mark.asyncio
    async def test_same_name_never_overwrites(self, file_storage):
        first = await file_storage.save(b"one", "scan.png")
        second = await file_storage.save(b"two", "scan.png")

        assert first != second
        assert Path(first).read_bytes() == b"one"
        assert Path(second).read_bytes() == b"two"

    @pytest.mark.asyncio
    async def test_write_failure_becomes_storage_failure(self, file_storage):
        with patch.object(Path, "write_bytes", side_effect=OSError("disk full")):
            with pytest.raises(StorageFailureException) as exc_info:
                await file_storage.save(b"data", "scan.png")

        assert exc_info.value.details["operation"] == "store_file"
        assert exc_info.value.details["original_error"] == "disk full"
