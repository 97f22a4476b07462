"""Tests for the analytics domain."""

import pytest
from pydantic import ValidationError

from analytics_store.domain.analytics import (
    BatchStoreResult,
    FetchResult,
    InstrumentationEvent,
    RotationResult,
    StoreResult,
    StoreStatus,
)


class TestInstrumentationEvent:
    """Tests for InstrumentationEvent entity."""

    def test_create_event(self):
        """Test creating an event with an explicit id."""
        event = InstrumentationEvent(event_id="e1", payload={"x": 1})
        assert event.event_id == "e1"
        assert event.payload == {"x": 1}
        assert not event.is_empty

    def test_generated_event_ids_are_unique(self):
        """Test that omitted ids are generated."""
        first = InstrumentationEvent(payload={"x": 1})
        second = InstrumentationEvent(payload={"x": 1})
        assert first.event_id
        assert first.event_id != second.event_id

    def test_empty_payload(self):
        """Test that an event without payload is empty."""
        assert InstrumentationEvent(event_id="e1").is_empty

    def test_event_is_immutable(self):
        """Test that events cannot be modified after creation."""
        event = InstrumentationEvent(event_id="e1", payload={"x": 1})
        with pytest.raises(ValidationError):
            event.event_id = "e2"

    def test_dict_round_trip(self):
        """Test to_dict / from_dict."""
        event = InstrumentationEvent(event_id="e1", payload={"nested": {"a": [1, None]}})
        assert InstrumentationEvent.from_dict(event.to_dict()) == event


class TestStoreResults:
    """Tests for result value objects."""

    def test_store_result_ok(self):
        assert StoreResult(status=StoreStatus.STORED, event_id="e1").ok
        assert not StoreResult(status=StoreStatus.INVALID_INPUT).ok
        assert not StoreResult(status=StoreStatus.IO_FAILURE, event_id="e1").ok

    def test_results_compare_by_value(self):
        first = StoreResult(status=StoreStatus.STORED, event_id="e1", blob_name="e1.evt")
        second = StoreResult(status=StoreStatus.STORED, event_id="e1", blob_name="e1.evt")
        assert first == second
        assert hash(first) == hash(second)

    def test_batch_result_failed(self):
        batch = BatchStoreResult(
            status=StoreStatus.ADMITTED,
            results=[
                StoreResult(status=StoreStatus.STORED, event_id="e1"),
                StoreResult(status=StoreStatus.INVALID_INPUT, event_id="e2"),
            ],
        )
        assert not batch.ok
        assert [r.event_id for r in batch.failed] == ["e2"]

    def test_denied_batch_is_not_ok(self):
        assert not BatchStoreResult(status=StoreStatus.ADMISSION_DENIED).ok

    def test_fetch_result_requires_event(self):
        event = InstrumentationEvent(event_id="e1", payload={"x": 1})
        assert FetchResult(status=StoreStatus.FOUND, event_id="e1", event=event).ok
        assert not FetchResult(status=StoreStatus.FOUND, event_id="e1").ok
        assert not FetchResult(status=StoreStatus.NOT_FOUND, event_id="e1").ok

    def test_rotation_result(self):
        result = RotationResult(status=StoreStatus.ROTATED, rewritten_count=2)
        assert result.ok
        assert result.dropped_blobs == []
        assert not RotationResult(status=StoreStatus.IO_FAILURE).ok

    def test_status_values(self):
        assert StoreStatus.ADMISSION_DENIED.value == "admission_denied"
        assert StoreStatus.CODEC_FAILURE.value == "codec_failure"

    def test_every_status_is_reported_by_some_result(self):
        """Only outcomes the store actually produces are modelled."""
        assert {s.value for s in StoreStatus} == {
            "stored",
            "found",
            "admitted",
            "rotated",
            "invalid_input",
            "not_found",
            "admission_denied",
            "io_failure",
            "codec_failure",
        }
