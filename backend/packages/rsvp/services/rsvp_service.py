"""
RSVP state machine.

A user's answer to an event is one of: no response (no row), pending,
accepted, declined. Any state may move to any other; every write stamps
``response_date``.
"""

from typing import Optional

from common.core.exceptions import (
    NotFoundError,
    ValidationError,
    store_error_code,
)
from common.core.telemetry import trace_span, get_logger
from packages.events.repositories.event_repository import EventRepository
from packages.rsvp.models.domain.enums import ResponseStatus
from packages.rsvp.models.domain.response import UserEventResponse
from packages.rsvp.repositories.user_event_response_repository import (
    UserEventResponseRepository,
)

logger = get_logger(__name__)


def parse_status(status) -> ResponseStatus:
    try:
        return ResponseStatus(status)
    except ValueError:
        allowed = ", ".join(s.value for s in ResponseStatus)
        raise ValidationError(
            f"Invalid response status '{status}'. Expected one of: {allowed}"
        )


class RsvpService:
    def __init__(self):
        self.response_repo = UserEventResponseRepository()
        self.event_repo = EventRepository()

    async def _require_active_event(self, event_id: int) -> None:
        if not await self.event_repo.get_active(event_id):
            raise NotFoundError(f"Event {event_id} not found", code="EVENT_NOT_FOUND")

    @trace_span
    async def respond(
        self,
        user_id: int,
        event_id: int,
        status,
        notes: Optional[str] = None,
    ) -> UserEventResponse:
        """Record the user's answer, creating the row on first response."""
        response_status = parse_status(status)

        with store_error_code("RSVP_UPDATE_ERROR"):
            await self._require_active_event(event_id)
            response = await self.response_repo.upsert(
                user_id, event_id, response_status, notes
            )

        logger.info(
            f"User {user_id} responded {response_status.value} to event {event_id}",
            extra={
                "user_id": user_id,
                "event_id": event_id,
                "response_status": response_status.value,
            },
        )
        return response

    @trace_span
    async def get_response(
        self, user_id: int, event_id: int
    ) -> Optional[UserEventResponse]:
        with store_error_code("RSVP_FETCH_ERROR"):
            return await self.response_repo.get_for_user_event(user_id, event_id)

    @trace_span
    async def remove_response(self, user_id: int, event_id: int) -> None:
        """Back to "no response". Raises NotFoundError when there was none."""
        with store_error_code("RSVP_UPDATE_ERROR"):
            removed = await self.response_repo.delete_for_user_event(user_id, event_id)
        if not removed:
            raise NotFoundError(
                f"No response from user {user_id} for event {event_id}",
                code="RESPONSE_NOT_FOUND",
            )
        logger.info(f"Removed response of user {user_id} for event {event_id}")
