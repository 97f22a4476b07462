"""Store result value objects."""

from enum import Enum

from pydantic import Field

from ...shared import ValueObject
from ..entities import InstrumentationEvent


class StoreStatus(str, Enum):
    """Outcome kinds reported by the event store."""

    STORED = "stored"
    FOUND = "found"
    ADMITTED = "admitted"
    ROTATED = "rotated"
    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"
    ADMISSION_DENIED = "admission_denied"
    IO_FAILURE = "io_failure"
    CODEC_FAILURE = "codec_failure"


_SUCCESS_STATUSES = frozenset(
    {
        StoreStatus.STORED,
        StoreStatus.FOUND,
        StoreStatus.ADMITTED,
        StoreStatus.ROTATED,
    }
)


class StoreResult(ValueObject):
    """Outcome of storing a single event."""

    status: StoreStatus
    event_id: str | None = None
    blob_name: str | None = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        """Check if the event was written."""
        return self.status in _SUCCESS_STATUSES


class BatchStoreResult(ValueObject):
    """Outcome of storing a batch of events."""

    status: StoreStatus
    stored_count: int = 0
    max_events: int = 0
    results: list[StoreResult] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        """Check if the batch was admitted and every event was written."""
        return self.status == StoreStatus.ADMITTED and all(r.ok for r in self.results)

    @property
    def failed(self) -> list[StoreResult]:
        """Per-event results that did not end in a write."""
        return [r for r in self.results if not r.ok]


class FetchResult(ValueObject):
    """Outcome of looking up a single event."""

    status: StoreStatus
    event_id: str | None = None
    event: InstrumentationEvent | None = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.status == StoreStatus.FOUND and self.event is not None


class RotationResult(ValueObject):
    """Outcome of re-persisting the stored corpus under a new key."""

    status: StoreStatus
    rewritten_count: int = 0
    dropped_blobs: list[str] = Field(default_factory=list)
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.status == StoreStatus.ROTATED
