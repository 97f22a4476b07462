"""Blob directory backends."""

from .base import BlobDirectory, BlobHandle
from .local import LocalBlobDirectory
from .memory import InMemoryBlobDirectory
from .s3 import S3BlobDirectory

__all__ = [
    "BlobDirectory",
    "BlobHandle",
    "LocalBlobDirectory",
    "InMemoryBlobDirectory",
    "S3BlobDirectory",
]
