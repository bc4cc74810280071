from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from packages.subscriptions.models.domain.enums import PaymentStatus


class UserSubscription(BaseModel):
    id: int
    user_id: int
    subsector: str
    payment_status: PaymentStatus
    is_active: bool
    expires_at: Optional[datetime] = None
    billing_reference: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at is not None and self.expires_at < now

    def grants_access(self, now: datetime) -> bool:
        """Active, paid and not past its expiry."""
        return (
            self.is_active
            and self.payment_status.grants_access()
            and not self.is_expired(now)
        )


class UserSubscriptionCreateModel(BaseModel):
    user_id: int
    subsector: str
    payment_status: PaymentStatus = PaymentStatus.PENDING
    is_active: bool = False
    expires_at: Optional[datetime] = None
    billing_reference: Optional[str] = None

    model_config = ConfigDict(use_enum_values=True)


class SubsectorStatus(BaseModel):
    subsector: str
    payment_status: PaymentStatus
    is_active: bool
    expires_at: Optional[datetime] = None


class SubscriptionSummary(BaseModel):
    total: int = 0
    active: int = 0
    paid: int = 0
    pending: int = 0
    subsectors: List[str] = Field(default_factory=list)
    statuses: List[SubsectorStatus] = Field(default_factory=list)
