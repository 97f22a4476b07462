"""Instrumentation event entity."""

from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class InstrumentationEvent(BaseModel):
    """A single telemetry record.

    The event is identified by ``event_id`` (assigned by the caller before
    storage) and carries an arbitrary JSON-like ``payload``. Events are
    immutable; updating one means storing a new event with the same id,
    which overwrites the stored blob.
    """

    model_config = ConfigDict(frozen=True)

    event_id: str = Field(default_factory=lambda: str(uuid4()))
    payload: dict[str, Any] = Field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        """Whether the event carries no payload at all."""
        return not self.payload

    def to_dict(self) -> dict[str, Any]:
        """Convert event to dictionary for serialization."""
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "InstrumentationEvent":
        """Create event from dictionary."""
        return cls(**data)
