"""Persistence layer - Event store, codec and blob directories."""

from .blob_directory import (
    BlobDirectory,
    BlobHandle,
    InMemoryBlobDirectory,
    LocalBlobDirectory,
    S3BlobDirectory,
)
from .codec import EventCodec, JsonEventCodec
from .event_store import BlobEventStore

__all__ = [
    "BlobEventStore",
    "BlobDirectory",
    "BlobHandle",
    "LocalBlobDirectory",
    "InMemoryBlobDirectory",
    "S3BlobDirectory",
    "EventCodec",
    "JsonEventCodec",
]
