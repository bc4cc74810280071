from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict

from packages.rsvp.models.domain.enums import ResponseStatus


class UserEventResponse(BaseModel):
    id: int
    user_id: int
    event_id: int
    response_status: ResponseStatus
    response_date: datetime
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
