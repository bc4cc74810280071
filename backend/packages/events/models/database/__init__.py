"""Database models for events."""

from packages.events.models.database.event import (
    EventEntity,
    EventCompanyEntity,
    EventHostEntity,
)

__all__ = [
    "EventEntity",
    "EventCompanyEntity",
    "EventHostEntity",
]
