"""Pytest configuration and fixtures."""

import pytest
import structlog

from analytics_store.domain.analytics import CipherError, InstrumentationEvent
from analytics_store.infrastructure.persistence.blob_directory import InMemoryBlobDirectory
from analytics_store.infrastructure.persistence.event_store import BlobEventStore


class KeyTaggingCipher:
    """Reversible test cipher that refuses to decrypt under the wrong key.

    Ciphertext is ``<key>:`` followed by the plaintext reversed, which is
    enough to tell which key a blob was written with.
    """

    def encrypt(self, data: bytes, key: str) -> bytes:
        return key.encode("utf-8") + b":" + data[::-1]

    def decrypt(self, data: bytes, key: str) -> bytes:
        prefix = key.encode("utf-8") + b":"
        if not data.startswith(prefix):
            raise CipherError("blob was not encrypted with this key")
        return data[len(prefix):][::-1]


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo any structlog configuration a test applied."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def directory() -> InMemoryBlobDirectory:
    """Create an empty in-memory blob directory."""
    return InMemoryBlobDirectory()


@pytest.fixture
def cipher() -> KeyTaggingCipher:
    return KeyTaggingCipher()


@pytest.fixture
def store(directory: InMemoryBlobDirectory) -> BlobEventStore:
    """Create an event store with the identity cipher."""
    return BlobEventStore(directory, filename_suffix=".evt", encryption_key="key-1")


@pytest.fixture
def encrypted_store(directory: InMemoryBlobDirectory, cipher: KeyTaggingCipher) -> BlobEventStore:
    """Create an event store whose blobs are tagged with the key."""
    return BlobEventStore(
        directory,
        filename_suffix=".evt",
        encryption_key="key-1",
        cipher=cipher,
    )


@pytest.fixture
def sample_events() -> list[InstrumentationEvent]:
    """Create three events with distinct payloads."""
    return [
        InstrumentationEvent(event_id="A", payload={"name": "page_view", "page": "home"}),
        InstrumentationEvent(event_id="B", payload={"name": "click", "target": {"id": 7}}),
        InstrumentationEvent(event_id="C", payload={"name": "error", "codes": [1, 2, 3]}),
    ]
