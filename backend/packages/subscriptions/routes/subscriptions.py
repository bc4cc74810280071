from typing import List
from fastapi import APIRouter, Depends, Path

from common.core.responses import ApiResponse
from common.core.telemetry import trace_span, get_logger
from packages.auth.dependencies import get_current_user, get_service_account
from packages.auth.models.domain.authenticated_user import AuthenticatedUser
from packages.auth.models.domain.service_account import ServiceAccount
from packages.companies.models.domain.company import Company
from packages.subscriptions.models.domain.subscription import SubscriptionSummary
from packages.subscriptions.models.schemas.subscription import (
    ActivateRequest,
    SubscribeRequest,
    SubscriptionResponse,
    SubscriptionUpdate,
)
from packages.subscriptions.services.subscription_service import SubscriptionService

router = APIRouter()
logger = get_logger(__name__)


def get_subscription_service() -> SubscriptionService:
    return SubscriptionService()


@router.get("", response_model=ApiResponse[List[SubscriptionResponse]])
@trace_span
async def list_active_subscriptions(
    current_user: AuthenticatedUser = Depends(get_current_user),
    subscription_service: SubscriptionService = Depends(get_subscription_service),
):
    """Subscriptions currently granting access."""
    await subscription_service.prune_expired(current_user.user_id)
    subscriptions = await subscription_service.list_active(current_user.user_id)
    return ApiResponse.ok(
        [SubscriptionResponse.model_validate(s) for s in subscriptions]
    )


@router.get("/summary", response_model=ApiResponse[SubscriptionSummary])
@trace_span
async def get_summary(
    current_user: AuthenticatedUser = Depends(get_current_user),
    subscription_service: SubscriptionService = Depends(get_subscription_service),
):
    summary = await subscription_service.get_summary(current_user.user_id)
    return ApiResponse.ok(summary)


@router.get("/subsectors", response_model=ApiResponse[List[str]])
@trace_span
async def list_subsectors(
    current_user: AuthenticatedUser = Depends(get_current_user),
    subscription_service: SubscriptionService = Depends(get_subscription_service),
):
    """Subsectors available to subscribe to."""
    return ApiResponse.ok(await subscription_service.list_subsectors())


@router.get("/companies", response_model=ApiResponse[List[Company]])
@trace_span
async def list_subscribed_companies(
    current_user: AuthenticatedUser = Depends(get_current_user),
    subscription_service: SubscriptionService = Depends(get_subscription_service),
):
    companies = await subscription_service.get_subscribed_companies(
        current_user.user_id
    )
    return ApiResponse.ok(companies)


@router.post("", response_model=ApiResponse[SubscriptionResponse], status_code=201)
@trace_span
async def subscribe(
    request: SubscribeRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    subscription_service: SubscriptionService = Depends(get_subscription_service),
):
    subscription = await subscription_service.subscribe(
        current_user.user_id, request.subsector
    )
    return ApiResponse.ok(SubscriptionResponse.model_validate(subscription))


@router.post("/activate", response_model=ApiResponse[SubscriptionResponse])
@trace_span
async def activate(
    request: ActivateRequest,
    service_account: ServiceAccount = Depends(get_service_account),
    subscription_service: SubscriptionService = Depends(get_subscription_service),
):
    """Billing callback: confirm a subscription once payment clears."""
    logger.info(
        f"Activation requested by {service_account.name}",
        extra={"billing_reference": request.billing_reference},
    )
    subscription = await subscription_service.activate(request.billing_reference)
    return ApiResponse.ok(SubscriptionResponse.model_validate(subscription))


@router.patch(
    "/{subscription_id}", response_model=ApiResponse[SubscriptionResponse]
)
@trace_span
async def update_subscription(
    request: SubscriptionUpdate,
    subscription_id: int = Path(gt=0),
    current_user: AuthenticatedUser = Depends(get_current_user),
    subscription_service: SubscriptionService = Depends(get_subscription_service),
):
    subscription = await subscription_service.update_subscription(
        current_user.user_id, subscription_id, request.subsector
    )
    return ApiResponse.ok(SubscriptionResponse.model_validate(subscription))


@router.delete("/{subscription_id}", response_model=ApiResponse[dict])
@trace_span
async def unsubscribe(
    subscription_id: int = Path(gt=0),
    current_user: AuthenticatedUser = Depends(get_current_user),
    subscription_service: SubscriptionService = Depends(get_subscription_service),
):
    await subscription_service.unsubscribe(current_user.user_id, subscription_id)
    return ApiResponse.ok({"message": "Subscription removed"})
