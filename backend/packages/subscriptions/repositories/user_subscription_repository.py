from datetime import datetime
from typing import List, Optional

from sqlalchemy import select, delete, update, or_

from common.core.telemetry import trace_span
from common.repositories.base import BaseRepository
from packages.subscriptions.models.database.user_subscription import (
    UserSubscriptionEntity,
)
from packages.subscriptions.models.domain.enums import PaymentStatus
from packages.subscriptions.models.domain.subscription import UserSubscription


class UserSubscriptionRepository(
    BaseRepository[UserSubscriptionEntity, UserSubscription]
):
    def __init__(self):
        super().__init__(UserSubscriptionEntity, UserSubscription)

    @trace_span
    async def delete_expired(
        self, user_id: int, now: datetime, keep_id: Optional[int] = None
    ) -> int:
        """Delete the user's active rows whose expiry has passed. Idempotent."""
        stmt = delete(UserSubscriptionEntity).where(
            UserSubscriptionEntity.user_id == user_id,
            UserSubscriptionEntity.is_active == True,  # noqa
            UserSubscriptionEntity.expires_at.is_not(None),
            UserSubscriptionEntity.expires_at < now,
        )
        if keep_id is not None:
            stmt = stmt.where(UserSubscriptionEntity.id != keep_id)
        async with self._get_session() as session:
            result = await session.execute(stmt)
            await session.flush()
            return result.rowcount

    @trace_span
    async def get_active_paid(
        self, user_id: int, now: datetime
    ) -> List[UserSubscription]:
        """Active, paid rows that have not expired at ``now``."""
        async with self._get_session() as session:
            result = await session.execute(
                select(UserSubscriptionEntity)
                .where(
                    UserSubscriptionEntity.user_id == user_id,
                    UserSubscriptionEntity.is_active == True,  # noqa
                    UserSubscriptionEntity.payment_status == PaymentStatus.PAID.value,
                    or_(
                        UserSubscriptionEntity.expires_at.is_(None),
                        UserSubscriptionEntity.expires_at >= now,
                    ),
                )
                .order_by(UserSubscriptionEntity.subsector)
            )
            return self._entities_to_domain(result.scalars().all())

    @trace_span
    async def get_active_for_subsector(
        self, user_id: int, subsector: str
    ) -> Optional[UserSubscription]:
        async with self._get_session() as session:
            result = await session.execute(
                select(UserSubscriptionEntity).where(
                    UserSubscriptionEntity.user_id == user_id,
                    UserSubscriptionEntity.subsector == subsector,
                    UserSubscriptionEntity.is_active == True,  # noqa
                )
            )
            db_subscription = result.scalar_one_or_none()
            return (
                self._entity_to_domain(db_subscription) if db_subscription else None
            )

    @trace_span
    async def get_by_billing_reference(
        self, billing_reference: str
    ) -> Optional[UserSubscription]:
        async with self._get_session() as session:
            result = await session.execute(
                select(UserSubscriptionEntity).where(
                    UserSubscriptionEntity.billing_reference == billing_reference
                )
            )
            db_subscription = result.scalar_one_or_none()
            return (
                self._entity_to_domain(db_subscription) if db_subscription else None
            )

    @trace_span
    async def get_all_for_user(self, user_id: int) -> List[UserSubscription]:
        async with self._get_session() as session:
            result = await session.execute(
                select(UserSubscriptionEntity)
                .where(UserSubscriptionEntity.user_id == user_id)
                .order_by(UserSubscriptionEntity.created_at, UserSubscriptionEntity.id)
            )
            return self._entities_to_domain(result.scalars().all())

    @trace_span
    async def activate(
        self, subscription_id: int, expires_at: Optional[datetime]
    ) -> Optional[UserSubscription]:
        async with self._get_session() as session:
            await session.execute(
                update(UserSubscriptionEntity)
                .where(UserSubscriptionEntity.id == subscription_id)
                .values(
                    is_active=True,
                    payment_status=PaymentStatus.PAID.value,
                    expires_at=expires_at,
                )
            )
            await session.flush()
        return await self.get(subscription_id)

    @trace_span
    async def delete_for_user(self, user_id: int, subscription_id: int) -> bool:
        async with self._get_session() as session:
            result = await session.execute(
                delete(UserSubscriptionEntity).where(
                    UserSubscriptionEntity.id == subscription_id,
                    UserSubscriptionEntity.user_id == user_id,
                )
            )
            await session.flush()
            return result.rowcount > 0
