"""Analytics value objects."""

from .store_results import (
    BatchStoreResult,
    FetchResult,
    RotationResult,
    StoreResult,
    StoreStatus,
)

__all__ = [
    "StoreStatus",
    "StoreResult",
    "BatchStoreResult",
    "FetchResult",
    "RotationResult",
]
