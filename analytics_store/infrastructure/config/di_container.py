"""Dependency Injection Container.

Provides centralized dependency management for the event store.
Implements a simple service locator pattern with lazy initialization.
"""

from functools import cached_property

import structlog

from analytics_store.infrastructure.config.settings import EventStoreSettings
from analytics_store.infrastructure.observability import configure_logging
from analytics_store.infrastructure.persistence.blob_directory import (
    BlobDirectory,
    InMemoryBlobDirectory,
    LocalBlobDirectory,
    S3BlobDirectory,
)
from analytics_store.infrastructure.persistence.codec import EventCodec, JsonEventCodec
from analytics_store.infrastructure.persistence.event_store import BlobEventStore
from analytics_store.infrastructure.security import Cipher, IdentityCipher

logger = structlog.get_logger()

BACKENDS = ("local", "memory", "s3")


class DIContainer:
    """Dependency Injection Container.

    Provides lazy-loaded access to the event store and its collaborators.
    Services are created once and reused for the lifetime of the container.

    Example usage:
        ```python
        container = DIContainer()

        store = container.event_store
        await store.store_event(InstrumentationEvent(event_id="e1", payload={"x": 1}))
        ```
    """

    def __init__(
        self,
        settings: EventStoreSettings | None = None,
        cipher: Cipher | None = None,
        *,
        configure_logs: bool = True,
    ):
        """Initialize the container.

        Args:
            settings: Event store settings (loads from env if not provided)
            cipher: Cipher for blob contents (identity if not provided)
            configure_logs: Apply structlog configuration from settings
        """
        self._settings = settings or EventStoreSettings()
        self._cipher = cipher or IdentityCipher()

        if self._settings.backend not in BACKENDS:
            raise ValueError(
                f"Unknown blob directory backend {self._settings.backend!r}, "
                f"expected one of {', '.join(BACKENDS)}"
            )

        if configure_logs:
            configure_logging(self._settings.log_level, json_output=self._settings.log_json)

    @property
    def settings(self) -> EventStoreSettings:
        """Get event store settings."""
        return self._settings

    @property
    def cipher(self) -> Cipher:
        return self._cipher

    @cached_property
    def codec(self) -> EventCodec:
        return JsonEventCodec()

    @cached_property
    def blob_directory(self) -> BlobDirectory:
        """Get the blob directory selected by ``settings.backend``."""
        backend = self._settings.backend
        logger.info("initializing_blob_directory", backend=backend)

        if backend == "memory":
            return InMemoryBlobDirectory()

        if backend == "s3":
            if not self._settings.s3_bucket:
                raise ValueError("s3_bucket must be set when backend is 's3'")
            return S3BlobDirectory(
                bucket=self._settings.s3_bucket,
                prefix=self._settings.s3_prefix,
                region_name=self._settings.aws_region,
            )

        return LocalBlobDirectory(self._settings.root_dir)

    @cached_property
    def event_store(self) -> BlobEventStore:
        """Get the event store.

        Returns:
            Configured event store instance
        """
        logger.info(
            "initializing_event_store",
            filename_suffix=self._settings.filename_suffix,
            max_events=self._settings.max_events,
            logging_enabled=self._settings.logging_enabled,
        )
        return BlobEventStore(
            directory=self.blob_directory,
            filename_suffix=self._settings.filename_suffix,
            encryption_key=self._settings.encryption_key,
            codec=self.codec,
            cipher=self._cipher,
            logging_enabled=self._settings.logging_enabled,
            max_events=self._settings.max_events,
            filter_by_suffix=self._settings.filter_by_suffix,
        )

    def reset(self) -> None:
        """Reset all cached instances.

        Useful for testing or when configuration changes.
        """
        for attr in ["codec", "blob_directory", "event_store"]:
            if attr in self.__dict__:
                del self.__dict__[attr]

        logger.info("di_container_reset")


# Global container instance
_container: DIContainer | None = None


def get_container() -> DIContainer:
    """Get the global DI container instance.

    Creates the container on first call (singleton pattern).

    Returns:
        The global DIContainer instance
    """
    global _container
    if _container is None:
        _container = DIContainer()
    return _container


def reset_container() -> None:
    """Reset the global container.

    Useful for testing or reconfiguration.
    """
    global _container
    if _container is not None:
        _container.reset()
    _container = None
