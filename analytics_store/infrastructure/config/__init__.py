"""Infrastructure configuration module.

Contains event store settings and the DI container.
"""

from analytics_store.infrastructure.config.settings import EventStoreSettings
from analytics_store.infrastructure.config.di_container import (
    DIContainer,
    get_container,
    reset_container,
)

__all__ = [
    "EventStoreSettings",
    "DIContainer",
    "get_container",
    "reset_container",
]
