"""Analytics domain entities."""

from .instrumentation_event import InstrumentationEvent

__all__ = ["InstrumentationEvent"]
