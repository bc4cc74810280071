from typing import Optional
from fastapi import APIRouter, Depends, Path

from common.core.responses import ApiResponse
from common.core.telemetry import trace_span, get_logger
from packages.auth.dependencies import get_current_user
from packages.auth.models.domain.authenticated_user import AuthenticatedUser
from packages.rsvp.models.schemas.rsvp import RespondRequest, ResponseView
from packages.rsvp.services.rsvp_service import RsvpService

router = APIRouter()
logger = get_logger(__name__)


def get_rsvp_service() -> RsvpService:
    return RsvpService()


@router.get(
    "/{event_id}/response", response_model=ApiResponse[Optional[ResponseView]]
)
@trace_span
async def get_response(
    event_id: int = Path(gt=0),
    current_user: AuthenticatedUser = Depends(get_current_user),
    rsvp_service: RsvpService = Depends(get_rsvp_service),
):
    """The caller's own response, or null when they have not answered."""
    response = await rsvp_service.get_response(current_user.user_id, event_id)
    return ApiResponse.ok(ResponseView.from_domain(response) if response else None)


@router.put("/{event_id}/response", response_model=ApiResponse[ResponseView])
@trace_span
async def respond(
    request: RespondRequest,
    event_id: int = Path(gt=0),
    current_user: AuthenticatedUser = Depends(get_current_user),
    rsvp_service: RsvpService = Depends(get_rsvp_service),
):
    """Accept, decline or mark an event pending."""
    response = await rsvp_service.respond(
        current_user.user_id, event_id, request.status, request.notes
    )
    return ApiResponse.ok(ResponseView.from_domain(response))


@router.delete("/{event_id}/response", response_model=ApiResponse[dict])
@trace_span
async def remove_response(
    event_id: int = Path(gt=0),
    current_user: AuthenticatedUser = Depends(get_current_user),
    rsvp_service: RsvpService = Depends(get_rsvp_service),
):
    await rsvp_service.remove_response(current_user.user_id, event_id)
    return ApiResponse.ok({"message": "Response removed"})
