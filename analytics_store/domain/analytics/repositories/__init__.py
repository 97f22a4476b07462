"""Analytics repository interfaces."""

from .event_store_manager import EventStoreManager

__all__ = ["EventStoreManager"]
