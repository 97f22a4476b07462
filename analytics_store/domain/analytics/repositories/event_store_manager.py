"""Event store manager interface."""

from abc import ABC, abstractmethod

from ..entities import InstrumentationEvent
from ..value_objects import BatchStoreResult, FetchResult, RotationResult, StoreResult


class EventStoreManager(ABC):
    """Repository interface for persisted instrumentation events.

    This interface defines the contract for storing, fetching and deleting
    events and for rotating the key the stored corpus is encrypted with.
    The implementation is in the infrastructure layer.
    """

    @abstractmethod
    async def store_event(self, event: InstrumentationEvent | None) -> StoreResult:
        """Store a single event, overwriting any event with the same id."""
        pass

    @abstractmethod
    async def store_events(
        self, events: list[InstrumentationEvent] | None
    ) -> BatchStoreResult:
        """Store a batch of events if the store admits new events."""
        pass

    @abstractmethod
    async def read_event(self, event_id: str) -> FetchResult:
        """Look up an event and report how the lookup went."""
        pass

    @abstractmethod
    async def fetch_event(self, event_id: str) -> InstrumentationEvent | None:
        """Get an event by its ID."""
        pass

    @abstractmethod
    async def fetch_all_events(self) -> list[InstrumentationEvent]:
        """Get every stored event that can be read."""
        pass

    @abstractmethod
    async def delete_event(self, event_id: str) -> bool:
        """Delete an event. Returns False if nothing was deleted."""
        pass

    @abstractmethod
    async def delete_events(self, event_ids: list[str] | None) -> list[str]:
        """Delete several events and return the ids that failed."""
        pass

    @abstractmethod
    async def delete_all_events(self) -> int:
        """Delete every stored event and return how many were removed."""
        pass

    @abstractmethod
    async def change_encryption_key(self, old_key: str, new_key: str) -> RotationResult:
        """Re-persist every stored event under a new encryption key."""
        pass

    @abstractmethod
    def set_logging_enabled(self, enabled: bool) -> None:
        """Allow or refuse new events."""
        pass

    @abstractmethod
    def is_logging_enabled(self) -> bool:
        """Check whether new events are accepted."""
        pass

    @abstractmethod
    def set_max_events(self, max_events: int) -> None:
        """Set the number of stored blobs above which batches are refused."""
        pass
