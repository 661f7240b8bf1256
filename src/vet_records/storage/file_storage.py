"""
File storage for documents attached to complementary studies.

Services only depend on the ``FileStorage`` protocol: something that takes
bytes and a file name and returns a location string to keep on the record.
"""

import asyncio
import logging
import re
import uuid
from pathlib import Path
from typing import Protocol, Union, runtime_checkable

from ..exceptions import StorageFailureException

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def sanitize_filename(filename: str) -> str:
    """
    Reduce a client-supplied file name to a safe single path component.

    Directory parts are dropped and unusual characters become underscores.
    """
    name = Path(filename.replace("\\", "/")).name
    name = _UNSAFE_CHARS.sub("_", name).strip("._")
    return name or "file"


@runtime_checkable
class FileStorage(Protocol):
    """Stores attachment bytes and returns where they were put."""

    async def save(self, content: bytes, filename: str) -> str:
        ...


class LocalFileStorage:
    """FileStorage backed by a directory on the local file system."""

    def __init__(self, base_dir: Union[str, Path]) -> None:
        self.base_dir = Path(base_dir)

    def _write(self, content: bytes, filename: str) -> Path:
        self.base_dir.mkdir(parents=True, exist_ok=True)
        target = self.base_dir / f"{uuid.uuid4()}_{sanitize_filename(filename)}"
        target.write_bytes(content)
        return target

    async def save(self, content: bytes, filename: str) -> str:
        """
        Write ``content`` to a new uniquely named file.

        Returns:
            Path of the written file as a string

        Raises:
            StorageFailureException: If the file cannot be written
        """
        try:
            target = await asyncio.to_thread(self._write, content, filename)
        except OSError as e:
            logger.error(f"Failed to store file '{filename}' in {self.base_dir}: {e}")
            raise StorageFailureException(
                f"Could not store file '{filename}'",
                operation="store_file",
                original_error=e,
            ) from e

        logger.info(f"Stored file '{filename}' at {target} ({len(content)} bytes)")
        return str(target)
