"""Database models for subscriptions."""

from packages.subscriptions.models.database.user_subscription import (
    UserSubscriptionEntity,
)

__all__ = ["UserSubscriptionEntity"]
