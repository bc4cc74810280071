from sqlalchemy import (
    Column,
    String,
    DateTime,
    Boolean,
    Index,
    text,
)
from sqlalchemy.sql import func, false

from common.db.base import Base, BigIntegerType


class UserSubscriptionEntity(Base):
    """A user's entitlement to one subsector."""

    __tablename__ = "user_subscriptions"

    id = Column(BigIntegerType, primary_key=True, index=True, autoincrement=True)
    user_id = Column(BigIntegerType, nullable=False, index=True)
    subsector = Column(String(255), nullable=False)
    payment_status = Column(
        String(50), nullable=False, default="pending", server_default="pending"
    )  # pending, paid, failed, cancelled
    is_active = Column(
        Boolean, nullable=False, default=False, server_default=false()
    )
    expires_at = Column(DateTime, nullable=True)
    # External billing id (e.g. the Stripe subscription id) used for activation
    billing_reference = Column(String(255), nullable=True, unique=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        # At most one active row per (user, subsector)
        Index(
            "uq_user_subscriptions_active_subsector",
            "user_id",
            "subsector",
            unique=True,
            postgresql_where=text("is_active"),
            sqlite_where=text("is_active = 1"),
        ),
    )
