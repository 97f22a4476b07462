"""Event store implementations."""

from .blob_event_store import DEFAULT_MAX_EVENTS, BlobEventStore

__all__ = ["BlobEventStore", "DEFAULT_MAX_EVENTS"]
