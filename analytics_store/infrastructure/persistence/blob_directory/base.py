"""Blob directory contract.

A blob directory is a flat namespace of named byte blobs. The event store
only ever talks to it through this interface, so the same store can sit on
a local folder, an in-process dict or an S3 prefix.
"""

from abc import ABC, abstractmethod


class BlobHandle(ABC):
    """Reference to a single named blob inside a directory."""

    def __init__(self, name: str):
        self._name = name

    @property
    def name(self) -> str:
        """Blob name, unique within its directory."""
        return self._name

    @abstractmethod
    async def write_all(self, data: bytes) -> None:
        """Replace the blob contents."""
        pass

    @abstractmethod
    async def read_all(self) -> bytes:
        """Read the whole blob."""
        pass

    @abstractmethod
    async def delete(self) -> None:
        """Remove the blob. May raise if the blob is gone or cannot be removed."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self._name!r})"


class BlobDirectory(ABC):
    """Logical folder of blobs shared by one or more event stores."""

    @abstractmethod
    async def create_or_open(self, name: str) -> BlobHandle:
        """Get a writable handle for a blob, existing or not.

        The blob itself appears on the first ``write_all``; opening alone
        never leaves an empty blob behind.
        """
        pass

    @abstractmethod
    async def get(self, name: str) -> BlobHandle | None:
        """Get an existing blob, or None if there is no blob with that name."""
        pass

    @abstractmethod
    async def list_blobs(self) -> list[BlobHandle]:
        """Enumerate every blob in the directory."""
        pass
