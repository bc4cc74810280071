from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from packages.subscriptions.models.domain.enums import PaymentStatus


class SubscribeRequest(BaseModel):
    subsector: str = Field(..., max_length=255)


class ActivateRequest(BaseModel):
    billing_reference: str = Field(..., min_length=1, max_length=255)


class SubscriptionUpdate(BaseModel):
    subsector: Optional[str] = None


class SubscriptionResponse(BaseModel):
    id: int
    subsector: str
    payment_status: PaymentStatus
    is_active: bool
    expires_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
