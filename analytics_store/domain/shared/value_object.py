"""Base Value Object class for all domain value objects."""

from abc import ABC

from pydantic import BaseModel, ConfigDict


class ValueObject(BaseModel, ABC):
    """Base class for all domain value objects.

    Value objects are immutable and compared by their attributes rather
    than identity. Store outcomes are modelled as value objects so callers
    can inspect them without worrying about later mutation.
    """

    model_config = ConfigDict(frozen=True)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValueObject):
            return False
        return type(self) is type(other) and self.model_dump() == other.model_dump()

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.model_dump_json()))
