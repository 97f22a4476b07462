"""In-memory blob directory."""

from analytics_store.domain.analytics import BlobDirectoryError

from .base import BlobDirectory, BlobHandle


class InMemoryBlobHandle(BlobHandle):
    """Handle onto a blob held in an InMemoryBlobDirectory."""

    def __init__(self, name: str, directory: "InMemoryBlobDirectory"):
        super().__init__(name)
        self._directory = directory

    async def write_all(self, data: bytes) -> None:
        self._directory._blobs[self.name] = bytes(data)

    async def read_all(self) -> bytes:
        try:
            return self._directory._blobs[self.name]
        except KeyError:
            raise BlobDirectoryError(f"Blob {self.name} does not exist", self.name) from None

    async def delete(self) -> None:
        try:
            del self._directory._blobs[self.name]
        except KeyError:
            raise BlobDirectoryError(f"Blob {self.name} does not exist", self.name) from None


class InMemoryBlobDirectory(BlobDirectory):
    """Dict-backed blob directory for tests and throwaway stores."""

    def __init__(self, blobs: dict[str, bytes] | None = None):
        self._blobs: dict[str, bytes] = dict(blobs or {})

    @property
    def names(self) -> list[str]:
        """Names of the stored blobs, sorted."""
        return sorted(self._blobs)

    async def create_or_open(self, name: str) -> BlobHandle:
        return InMemoryBlobHandle(name, self)

    async def get(self, name: str) -> BlobHandle | None:
        if name not in self._blobs:
            return None
        return InMemoryBlobHandle(name, self)

    async def list_blobs(self) -> list[BlobHandle]:
        return [InMemoryBlobHandle(name, self) for name in sorted(self._blobs)]
