from datetime import datetime
from fastapi import APIRouter, Depends, Path, Query

from common.core.responses import ApiResponse
from common.core.telemetry import trace_span, get_logger
from packages.auth.dependencies import get_current_user, get_service_account
from packages.auth.models.domain.authenticated_user import AuthenticatedUser
from packages.auth.models.domain.service_account import ServiceAccount
from packages.events.models.domain.calendar import (
    AttendanceSummary,
    CalendarEvent,
    CalendarResponse,
)
from packages.events.models.schemas.event import (
    EventCreateRequest,
    EventUpdateRequest,
    ManagedEvent,
)
from packages.events.services.calendar_service import CalendarService
from packages.events.services.event_service import EventService

router = APIRouter()
logger = get_logger(__name__)


def get_calendar_service() -> CalendarService:
    return CalendarService()


def get_event_service() -> EventService:
    return EventService()


@router.get("", response_model=ApiResponse[CalendarResponse])
@trace_span
async def get_calendar(
    start: datetime = Query(..., description="Range start (inclusive)"),
    end: datetime = Query(..., description="Range end (inclusive)"),
    current_user: AuthenticatedUser = Depends(get_current_user),
    calendar_service: CalendarService = Depends(get_calendar_service),
):
    """Events visible to the caller that overlap [start, end]."""
    calendar = await calendar_service.get_calendar(current_user.user_id, start, end)
    return ApiResponse.ok(calendar)


@router.get("/{event_id}", response_model=ApiResponse[CalendarEvent])
@trace_span
async def get_event(
    event_id: int = Path(gt=0),
    current_user: AuthenticatedUser = Depends(get_current_user),
    calendar_service: CalendarService = Depends(get_calendar_service),
):
    event = await calendar_service.get_event(current_user.user_id, event_id)
    return ApiResponse.ok(event)


@router.get("/{event_id}/attendance", response_model=ApiResponse[AttendanceSummary])
@trace_span
async def get_attendance(
    event_id: int = Path(gt=0),
    current_user: AuthenticatedUser = Depends(get_current_user),
    calendar_service: CalendarService = Depends(get_calendar_service),
):
    summary = await calendar_service.get_attendance(current_user.user_id, event_id)
    return ApiResponse.ok(summary)


@router.post("", response_model=ApiResponse[ManagedEvent], status_code=201)
@trace_span
async def create_event(
    request: EventCreateRequest,
    service_account: ServiceAccount = Depends(get_service_account),
    event_service: EventService = Depends(get_event_service),
):
    managed = await event_service.create_event(request)
    return ApiResponse.ok(managed)


@router.patch("/{event_id}", response_model=ApiResponse[ManagedEvent])
@trace_span
async def update_event(
    request: EventUpdateRequest,
    event_id: int = Path(gt=0),
    service_account: ServiceAccount = Depends(get_service_account),
    event_service: EventService = Depends(get_event_service),
):
    managed = await event_service.update_event(event_id, request)
    return ApiResponse.ok(managed)


@router.delete("/{event_id}", response_model=ApiResponse[dict])
@trace_span
async def delete_event(
    event_id: int = Path(gt=0),
    service_account: ServiceAccount = Depends(get_service_account),
    event_service: EventService = Depends(get_event_service),
):
    """Retire an event. It disappears from every calendar; its RSVPs are kept."""
    await event_service.delete_event(event_id)
    return ApiResponse.ok({"message": "Event deleted"})
