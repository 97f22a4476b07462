"""Tests for EventStoreSettings and DIContainer."""

from unittest.mock import patch

import pytest

from analytics_store.domain.analytics import InstrumentationEvent
from analytics_store.infrastructure.config import (
    DIContainer,
    EventStoreSettings,
    get_container,
    reset_container,
)
from analytics_store.infrastructure.persistence.blob_directory import (
    InMemoryBlobDirectory,
    LocalBlobDirectory,
)
from analytics_store.infrastructure.persistence.event_store import BlobEventStore
from analytics_store.infrastructure.security import IdentityCipher


@pytest.fixture(autouse=True)
def clean_container():
    reset_container()
    yield
    reset_container()


class TestEventStoreSettings:
    """EventStoreSettings tests."""

    def test_defaults(self) -> None:
        settings = EventStoreSettings()

        assert settings.filename_suffix == ".evt"
        assert settings.logging_enabled is True
        assert settings.max_events == 1000
        assert settings.filter_by_suffix is False
        assert settings.backend == "local"

    def test_environment_overrides(self, monkeypatch) -> None:
        monkeypatch.setenv("ANALYTICS_STORE_MAX_EVENTS", "25")
        monkeypatch.setenv("ANALYTICS_STORE_LOGGING_ENABLED", "false")
        monkeypatch.setenv("ANALYTICS_STORE_FILENAME_SUFFIX", ".json")

        settings = EventStoreSettings()

        assert settings.max_events == 25
        assert settings.logging_enabled is False
        assert settings.filename_suffix == ".json"


class TestDIContainer:
    """DIContainer tests."""

    def test_memory_backend(self) -> None:
        container = DIContainer(EventStoreSettings(backend="memory"), configure_logs=False)

        assert isinstance(container.blob_directory, InMemoryBlobDirectory)
        assert isinstance(container.cipher, IdentityCipher)

    def test_local_backend(self, tmp_path) -> None:
        settings = EventStoreSettings(backend="local", root_dir=str(tmp_path / "events"))
        container = DIContainer(settings, configure_logs=False)

        directory = container.blob_directory

        assert isinstance(directory, LocalBlobDirectory)
        assert directory.root == tmp_path / "events"

    @patch("analytics_store.infrastructure.persistence.blob_directory.s3.boto3.client")
    def test_s3_backend(self, mock_boto_client) -> None:
        settings = EventStoreSettings(
            backend="s3",
            s3_bucket="analytics-bucket",
            s3_prefix="prod/",
            aws_region="eu-west-1",
        )
        container = DIContainer(settings, configure_logs=False)

        directory = container.blob_directory

        mock_boto_client.assert_called_once_with("s3", region_name="eu-west-1")
        assert directory.bucket == "analytics-bucket"
        assert directory.prefix == "prod/"

    def test_s3_backend_requires_bucket(self) -> None:
        container = DIContainer(EventStoreSettings(backend="s3"), configure_logs=False)

        with pytest.raises(ValueError, match="s3_bucket"):
            container.blob_directory

    def test_unknown_backend(self) -> None:
        with pytest.raises(ValueError, match="Unknown blob directory backend"):
            DIContainer(EventStoreSettings(backend="ftp"), configure_logs=False)

    def test_event_store_uses_settings(self) -> None:
        settings = EventStoreSettings(
            backend="memory",
            filename_suffix=".v2",
            encryption_key="secret",
            logging_enabled=False,
            max_events=10,
        )
        container = DIContainer(settings, configure_logs=False)

        store = container.event_store

        assert isinstance(store, BlobEventStore)
        assert store is container.event_store
        assert store.directory is container.blob_directory
        assert store.filename_suffix == ".v2"
        assert store.encryption_key == "secret"
        assert store.is_logging_enabled() is False
        assert store.max_events == 10

    @pytest.mark.asyncio
    async def test_event_store_is_usable(self) -> None:
        container = DIContainer(EventStoreSettings(backend="memory", log_level="DEBUG"))
        store = container.event_store

        await store.store_event(InstrumentationEvent(event_id="e1", payload={"x": 1}))

        assert container.blob_directory.names == ["e1.evt"]

    def test_reset_recreates_services(self) -> None:
        container = DIContainer(EventStoreSettings(backend="memory"), configure_logs=False)
        first = container.event_store

        container.reset()

        assert container.event_store is not first

    def test_invalid_log_level(self) -> None:
        with pytest.raises(ValueError, match="Unknown log level"):
            DIContainer(EventStoreSettings(backend="memory", log_level="LOUD"))


class TestGlobalContainer:
    """get_container / reset_container tests."""

    def test_get_container_is_singleton(self, monkeypatch) -> None:
        monkeypatch.setenv("ANALYTICS_STORE_BACKEND", "memory")

        assert get_container() is get_container()

    def test_reset_container(self, monkeypatch) -> None:
        monkeypatch.setenv("ANALYTICS_STORE_BACKEND", "memory")
        first = get_container()

        reset_container()

        assert get_container() is not first
