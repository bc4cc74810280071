"""Database models for RSVPs."""

from packages.rsvp.models.database.user_event_response import UserEventResponseEntity

__all__ = ["UserEventResponseEntity"]
