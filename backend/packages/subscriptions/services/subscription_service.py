"""
Subscription lifecycle.

Expired subscriptions are pruned lazily: every read that depends on the
user's entitlements deletes their expired rows first. There is no
background job.
"""

from datetime import timedelta
from typing import List, Optional, Set

from sqlalchemy.exc import IntegrityError

from common.core.config import settings
from common.core.exceptions import (
    DuplicateSubscriptionError,
    NotFoundError,
    NotImplementedFeatureError,
    StoreError,
    ValidationError,
    store_error_code,
)
from common.core.telemetry import trace_span, get_logger, log_span_event
from common.db.base import utcnow
from common.db.context import transactional
from packages.companies.models.domain.company import Company
from packages.companies.repositories.company_repository import CompanyRepository
from packages.subscriptions.models.domain.enums import PaymentStatus
from packages.subscriptions.models.domain.subscription import (
    SubsectorStatus,
    SubscriptionSummary,
    UserSubscription,
    UserSubscriptionCreateModel,
)
from packages.subscriptions.repositories.user_subscription_repository import (
    UserSubscriptionRepository,
)

logger = get_logger(__name__)


class SubscriptionService:
    """Service for subsector subscriptions."""

    def __init__(self):
        self.subscription_repo = UserSubscriptionRepository()
        self.company_repo = CompanyRepository()

    @trace_span
    async def prune_expired(self, user_id: int) -> int:
        """Delete the user's expired subscriptions. Returns how many were removed."""
        removed = await self.subscription_repo.delete_expired(user_id, utcnow())
        if removed:
            log_span_event(
                f"Pruned {removed} expired subscription(s) for user {user_id}",
                {"user_id": user_id, "removed": removed},
            )
        return removed

    @trace_span
    async def list_active(self, user_id: int) -> List[UserSubscription]:
        """Active, paid, unexpired subscriptions. Callers prune first."""
        with store_error_code("SUBSCRIPTIONS_FETCH_ERROR"):
            return await self.subscription_repo.get_active_paid(user_id, utcnow())

    @trace_span
    async def get_entitlements(self, user_id: int) -> Set[str]:
        """Subsectors the user may currently see."""
        with store_error_code("SUBSCRIPTIONS_FETCH_ERROR"):
            await self.prune_expired(user_id)
        active = await self.list_active(user_id)
        return {subscription.subsector for subscription in active}

    @trace_span
    async def list_subscriptions(self, user_id: int) -> List[UserSubscription]:
        """Every subscription row the user owns, whatever its state."""
        with store_error_code("SUBSCRIPTIONS_FETCH_ERROR"):
            await self.prune_expired(user_id)
            return await self.subscription_repo.get_all_for_user(user_id)

    @trace_span
    async def get_summary(self, user_id: int) -> SubscriptionSummary:
        subscriptions = await self.list_subscriptions(user_id)
        now = utcnow()
        return SubscriptionSummary(
            total=len(subscriptions),
            active=sum(1 for s in subscriptions if s.grants_access(now)),
            paid=sum(
                1 for s in subscriptions if s.payment_status == PaymentStatus.PAID
            ),
            pending=sum(
                1 for s in subscriptions if s.payment_status == PaymentStatus.PENDING
            ),
            subsectors=sorted({s.subsector for s in subscriptions}),
            statuses=[
                SubsectorStatus(
                    subsector=s.subsector,
                    payment_status=s.payment_status,
                    is_active=s.is_active,
                    expires_at=s.expires_at,
                )
                for s in subscriptions
            ],
        )

    @trace_span
    async def list_subsectors(self) -> List[str]:
        """Subsectors that have at least one active company."""
        with store_error_code("SUBSECTORS_FETCH_ERROR"):
            return await self.company_repo.get_active_subsectors()

    @trace_span
    async def get_subscribed_companies(self, user_id: int) -> List[Company]:
        entitlements = await self.get_entitlements(user_id)
        if not entitlements:
            return []
        with store_error_code("COMPANIES_FETCH_ERROR"):
            return await self.company_repo.get_active_by_subsectors(entitlements)

    @trace_span
    async def subscribe(self, user_id: int, subsector: str) -> UserSubscription:
        """
        Subscribe the user to a subsector.

        Until billing is wired in, a new subscription is paid and active for
        ``settings.subscription_default_days``.
        """
        subsector = (subsector or "").strip()
        if not subsector:
            raise ValidationError("Subsector must not be blank")

        try:
            with store_error_code("SUBSCRIPTION_CREATE_ERROR"):
                subscription = await self._create_subscription(user_id, subsector)
        except StoreError as e:
            # Lost a race against a concurrent subscribe; the partial unique index caught it
            if isinstance(e.cause, IntegrityError):
                raise DuplicateSubscriptionError(
                    f"Already subscribed to {subsector}"
                ) from e
            raise

        logger.info(
            f"User {user_id} subscribed to {subsector}",
            extra={
                "user_id": user_id,
                "subsector": subsector,
                "subscription_id": subscription.id,
            },
        )
        return subscription

    @transactional
    async def _create_subscription(
        self, user_id: int, subsector: str
    ) -> UserSubscription:
        now = utcnow()
        await self.subscription_repo.delete_expired(user_id, now)

        existing = await self.subscription_repo.get_active_for_subsector(
            user_id, subsector
        )
        if existing:
            raise DuplicateSubscriptionError(f"Already subscribed to {subsector}")

        return await self.subscription_repo.create(
            UserSubscriptionCreateModel(
                user_id=user_id,
                subsector=subsector,
                payment_status=PaymentStatus.PAID,
                is_active=True,
                expires_at=now + timedelta(days=settings.subscription_default_days),
            )
        )

    @trace_span
    async def unsubscribe(self, user_id: int, subscription_id: int) -> None:
        """Delete one of the user's subscriptions."""
        with store_error_code("SUBSCRIPTION_DELETE_ERROR"):
            removed = await self.subscription_repo.delete_for_user(
                user_id, subscription_id
            )
        if not removed:
            raise NotFoundError(
                f"Subscription {subscription_id} not found",
                code="SUBSCRIPTION_NOT_FOUND",
            )
        logger.info(f"User {user_id} removed subscription {subscription_id}")

    @trace_span
    async def activate(self, billing_reference: str) -> UserSubscription:
        """
        Mark the subscription behind a billing reference active and paid.

        Called by the billing integration, never by end users. A lapsed row
        gets a fresh expiry so the next prune does not remove it.
        """
        try:
            with store_error_code("SUBSCRIPTION_ACTIVATE_ERROR"):
                activated = await self._activate_subscription(billing_reference)
        except StoreError as e:
            if isinstance(e.cause, IntegrityError):
                raise DuplicateSubscriptionError(
                    f"Subscription for {billing_reference} conflicts with an active one"
                ) from e
            raise

        logger.info(
            f"Activated subscription {activated.id} ({billing_reference})",
            extra={"subscription_id": activated.id, "user_id": activated.user_id},
        )
        return activated

    @transactional
    async def _activate_subscription(self, billing_reference: str) -> UserSubscription:
        subscription = await self.subscription_repo.get_by_billing_reference(
            billing_reference
        )
        if not subscription:
            raise NotFoundError(
                f"No subscription for billing reference {billing_reference}",
                code="SUBSCRIPTION_NOT_FOUND",
            )

        now = utcnow()
        await self.subscription_repo.delete_expired(
            subscription.user_id, now, keep_id=subscription.id
        )

        other = await self.subscription_repo.get_active_for_subsector(
            subscription.user_id, subscription.subsector
        )
        if other and other.id != subscription.id:
            raise DuplicateSubscriptionError(
                f"User {subscription.user_id} already has an active "
                f"{subscription.subsector} subscription"
            )

        expires_at = subscription.expires_at
        if expires_at is None or expires_at < now:
            expires_at = now + timedelta(days=settings.subscription_default_days)

        return await self.subscription_repo.activate(subscription.id, expires_at)

    @trace_span
    async def update_subscription(
        self,
        user_id: int,
        subscription_id: int,
        subsector: Optional[str] = None,
    ) -> UserSubscription:
        """Changing a subscription in place is not offered; unsubscribe and subscribe."""
        raise NotImplementedFeatureError(
            "Updating a subscription is not supported yet"
        )
