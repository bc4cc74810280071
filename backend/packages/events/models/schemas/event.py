from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, model_validator

from packages.events.models.domain.enums import EventType, HostType
from packages.events.models.domain.event import Event
from packages.events.models.domain.host import EventHost, HostCompanySnapshot
from packages.events.models.domain.location import EventLocation


class HostRequest(BaseModel):
    host_type: HostType
    host_id: Optional[int] = Field(None, gt=0)
    primary_company_id: Optional[int] = Field(None, gt=0)
    companies: List[HostCompanySnapshot] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_host_reference(self) -> "HostRequest":
        if self.host_type == HostType.MULTI_CORP:
            if not self.companies:
                raise ValueError("multi_corp host requires companies")
        elif self.host_id is None:
            raise ValueError(f"{self.host_type.value} host requires host_id")
        return self


class EventCreateRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    start_date: datetime
    end_date: datetime
    event_type: EventType = EventType.STANDARD
    location: EventLocation
    weather_location: Optional[str] = Field(None, max_length=255)
    company_ids: List[int] = Field(..., min_length=1)
    hosts: List[HostRequest] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_dates(self) -> "EventCreateRequest":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class EventUpdateRequest(BaseModel):
    """Partial update. ``company_ids`` and ``hosts`` replace the stored sets when given."""

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    event_type: Optional[EventType] = None
    location: Optional[EventLocation] = None
    weather_location: Optional[str] = Field(None, max_length=255)
    is_active: Optional[bool] = None
    company_ids: Optional[List[int]] = Field(None, min_length=1)
    hosts: Optional[List[HostRequest]] = None


class ManagedEvent(BaseModel):
    """Event as administrators see it: no visibility filter, raw relations."""

    event: Event
    company_ids: List[int]
    hosts: List[EventHost]
