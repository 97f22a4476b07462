"""S3 blob directory."""

from typing import Any

import boto3
import structlog
from botocore.exceptions import BotoCoreError, ClientError

from analytics_store.domain.analytics import BlobDirectoryError

from .base import BlobDirectory, BlobHandle

logger = structlog.get_logger(__name__)

_NOT_FOUND_CODES = frozenset({"404", "NoSuchKey", "NotFound"})


def _is_not_found(error: ClientError) -> bool:
    return error.response.get("Error", {}).get("Code", "") in _NOT_FOUND_CODES


class S3BlobHandle(BlobHandle):
    """Handle onto an object stored under the directory prefix."""

    def __init__(self, name: str, directory: "S3BlobDirectory"):
        super().__init__(name)
        self._directory = directory

    @property
    def key(self) -> str:
        return self._directory.key_for(self.name)

    async def write_all(self, data: bytes) -> None:
        try:
            self._directory.client.put_object(
                Bucket=self._directory.bucket,
                Key=self.key,
                Body=data,
                ContentType="application/octet-stream",
            )
        except (ClientError, BotoCoreError) as e:
            logger.error("s3_blob_write_failed", key=self.key, error=str(e))
            raise BlobDirectoryError(f"Failed to write {self.name}: {e}", self.name) from e

    async def read_all(self) -> bytes:
        try:
            response = self._directory.client.get_object(
                Bucket=self._directory.bucket,
                Key=self.key,
            )
            return response["Body"].read()
        except (ClientError, BotoCoreError) as e:
            logger.error("s3_blob_read_failed", key=self.key, error=str(e))
            raise BlobDirectoryError(f"Failed to read {self.name}: {e}", self.name) from e

    async def delete(self) -> None:
        try:
            self._directory.client.delete_object(
                Bucket=self._directory.bucket,
                Key=self.key,
            )
        except (ClientError, BotoCoreError) as e:
            logger.error("s3_blob_delete_failed", key=self.key, error=str(e))
            raise BlobDirectoryError(f"Failed to delete {self.name}: {e}", self.name) from e


class S3BlobDirectory(BlobDirectory):
    """Blob directory backed by objects under an S3 key prefix.

    Blob names map to ``{prefix}{name}`` keys. ``create_or_open`` only
    returns a handle; the object appears on the first ``write_all``.

    Args:
        bucket: S3 bucket name
        prefix: Key prefix acting as the directory, e.g. ``"events/"``
        region_name: AWS region of the bucket
        client: Pre-built S3 client (a new one is created if omitted)
    """

    def __init__(
        self,
        bucket: str,
        prefix: str = "",
        region_name: str = "ap-northeast-1",
        client: Any | None = None,
    ):
        self._client = client or boto3.client("s3", region_name=region_name)
        self._bucket = bucket
        self._prefix = prefix

    @property
    def client(self) -> Any:
        return self._client

    @property
    def bucket(self) -> str:
        return self._bucket

    @property
    def prefix(self) -> str:
        return self._prefix

    def key_for(self, name: str) -> str:
        """Get the object key for a blob name."""
        return f"{self._prefix}{name}"

    async def create_or_open(self, name: str) -> BlobHandle:
        return S3BlobHandle(name, self)

    async def get(self, name: str) -> BlobHandle | None:
        try:
            self._client.head_object(Bucket=self._bucket, Key=self.key_for(name))
        except (ClientError, BotoCoreError) as e:
            if isinstance(e, ClientError) and _is_not_found(e):
                return None
            logger.error("s3_blob_lookup_failed", key=self.key_for(name), error=str(e))
            raise BlobDirectoryError(f"Failed to look up {name}: {e}", name) from e
        return S3BlobHandle(name, self)

    async def list_blobs(self) -> list[BlobHandle]:
        handles: list[BlobHandle] = []
        paginator = self._client.get_paginator("list_objects_v2")

        try:
            for page in paginator.paginate(Bucket=self._bucket, Prefix=self._prefix):
                for item in page.get("Contents", []):
                    name = item["Key"][len(self._prefix):]
                    # Keys in nested "subfolders" belong to other directories
                    if not name or "/" in name:
                        continue
                    handles.append(S3BlobHandle(name, self))
        except (ClientError, BotoCoreError) as e:
            logger.error("s3_blob_listing_failed", bucket=self._bucket, prefix=self._prefix, error=str(e))
            raise BlobDirectoryError(f"Failed to list s3://{self._bucket}/{self._prefix}: {e}") from e

        return handles
