"""Local filesystem blob directory.

Each blob is a regular file directly under ``root``. Writes go to a
temporary sibling file first and are moved into place with ``os.replace``,
so readers never observe a half-written blob. All blocking file I/O runs
through ``asyncio.to_thread`` to keep the event loop free.
"""

import asyncio
import os
from pathlib import Path

import structlog

from analytics_store.domain.analytics import BlobDirectoryError

from .base import BlobDirectory, BlobHandle

logger = structlog.get_logger(__name__)

TMP_SUFFIX = ".tmp"


class LocalBlobHandle(BlobHandle):
    """Handle onto a file inside a LocalBlobDirectory."""

    def __init__(self, name: str, path: Path):
        super().__init__(name)
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    async def write_all(self, data: bytes) -> None:
        try:
            await asyncio.to_thread(self._write_atomic, data)
        except OSError as e:
            raise BlobDirectoryError(f"Failed to write {self.name}: {e}", self.name) from e

    async def read_all(self) -> bytes:
        try:
            return await asyncio.to_thread(self._path.read_bytes)
        except OSError as e:
            raise BlobDirectoryError(f"Failed to read {self.name}: {e}", self.name) from e

    async def delete(self) -> None:
        try:
            await asyncio.to_thread(self._path.unlink)
        except OSError as e:
            raise BlobDirectoryError(f"Failed to delete {self.name}: {e}", self.name) from e

    def _write_atomic(self, data: bytes) -> None:
        tmp_path = self._path.with_name(self._path.name + TMP_SUFFIX)
        try:
            with open(tmp_path, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self._path)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise


class LocalBlobDirectory(BlobDirectory):
    """Blob directory backed by a folder on the local filesystem.

    Args:
        root: Folder holding the blobs. Created if it does not exist.
    """

    def __init__(self, root: str | Path):
        self._root = Path(root)
        self._root.mkdir(parents=True, exist_ok=True)

    @property
    def root(self) -> Path:
        return self._root

    def _handle(self, name: str) -> LocalBlobHandle:
        if name in ("", ".", "..") or "/" in name or os.sep in name:
            raise BlobDirectoryError(f"Invalid blob name: {name!r}", name)
        return LocalBlobHandle(name, self._root / name)

    async def create_or_open(self, name: str) -> BlobHandle:
        return self._handle(name)

    async def get(self, name: str) -> BlobHandle | None:
        handle = self._handle(name)
        exists = await asyncio.to_thread(handle.path.is_file)
        if not exists:
            return None
        return handle

    async def list_blobs(self) -> list[BlobHandle]:
        try:
            names = await asyncio.to_thread(self._scan)
        except OSError as e:
            raise BlobDirectoryError(f"Failed to list {self._root}: {e}") from e

        logger.debug("blob_directory_scanned", root=str(self._root), blob_count=len(names))
        return [LocalBlobHandle(name, self._root / name) for name in names]

    def _scan(self) -> list[str]:
        return sorted(
            entry.name
            for entry in os.scandir(self._root)
            if entry.is_file() and not entry.name.endswith(TMP_SUFFIX)
        )
