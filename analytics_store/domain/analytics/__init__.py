"""Analytics domain module."""

from .entities.instrumentation_event import InstrumentationEvent
from .exceptions import (
    BlobDirectoryError,
    CipherError,
    EventCodecError,
    EventDecodeError,
    EventEncodeError,
    EventStoreError,
)
from .repositories.event_store_manager import EventStoreManager
from .value_objects.store_results import (
    BatchStoreResult,
    FetchResult,
    RotationResult,
    StoreResult,
    StoreStatus,
)

__all__ = [
    "InstrumentationEvent",
    "EventStoreManager",
    "StoreStatus",
    "StoreResult",
    "BatchStoreResult",
    "FetchResult",
    "RotationResult",
    "EventStoreError",
    "EventCodecError",
    "EventEncodeError",
    "EventDecodeError",
    "CipherError",
    "BlobDirectoryError",
]
