"""Analytics event store.

Persists instrumentation events as one blob per event, gates new events on
a capacity cap and supports rotating the key of the whole stored corpus.
"""

from analytics_store.domain.analytics import InstrumentationEvent, StoreStatus
from analytics_store.infrastructure.config import DIContainer, EventStoreSettings
from analytics_store.infrastructure.persistence import BlobEventStore

__all__ = [
    "InstrumentationEvent",
    "StoreStatus",
    "BlobEventStore",
    "EventStoreSettings",
    "DIContainer",
]

__version__ = "0.1.0"
