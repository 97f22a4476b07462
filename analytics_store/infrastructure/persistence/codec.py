"""Event codec: InstrumentationEvent <-> JSON text."""

import json
from typing import Protocol

from pydantic import ValidationError

from analytics_store.domain.analytics import EventDecodeError, InstrumentationEvent


class EventCodec(Protocol):
    """Turns events into text and back."""

    def serialize(self, event: InstrumentationEvent) -> str:
        ...

    def deserialize(self, text: str) -> InstrumentationEvent:
        ...


class JsonEventCodec:
    """JSON codec for instrumentation events.

    An event without payload serializes to an empty string so that the
    store refuses it instead of persisting an id-only record.
    """

    def __init__(self, *, sort_keys: bool = True):
        self._sort_keys = sort_keys

    def serialize(self, event: InstrumentationEvent) -> str:
        if event.is_empty:
            return ""
        return json.dumps(event.to_dict(), ensure_ascii=False, sort_keys=self._sort_keys)

    def deserialize(self, text: str) -> InstrumentationEvent:
        if not text or not text.strip():
            raise EventDecodeError("Stored event is empty")

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise EventDecodeError(f"Stored event is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise EventDecodeError(
                f"Stored event must be a JSON object, got {type(data).__name__}"
            )

        try:
            return InstrumentationEvent.from_dict(data)
        except (TypeError, ValidationError) as e:
            raise EventDecodeError(f"Stored event has an invalid shape: {e}") from e
