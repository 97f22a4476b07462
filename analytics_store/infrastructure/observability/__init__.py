"""Observability infrastructure.

structlog setup shared by every component of the event store.
"""

from .logging_config import configure_logging

__all__ = ["configure_logging"]
