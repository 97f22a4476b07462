"""Analytics domain exceptions."""


class EventStoreError(Exception):
    """Base class for event store failures."""

    pass


class EventCodecError(EventStoreError):
    """Raised when an event cannot be converted to or from stored text."""

    pass


class EventEncodeError(EventCodecError):
    """Raised when an event cannot be serialized."""

    pass


class EventDecodeError(EventCodecError):
    """Raised when stored text cannot be turned back into an event."""

    pass


class CipherError(EventStoreError):
    """Raised when a blob cannot be encrypted or decrypted."""

    pass


class BlobDirectoryError(EventStoreError):
    """Raised when the underlying blob directory fails an I/O operation."""

    def __init__(self, message: str, blob_name: str | None = None):
        super().__init__(message)
        self.blob_name = blob_name
