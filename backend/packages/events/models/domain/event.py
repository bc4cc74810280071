from datetime import datetime
from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, model_validator

from packages.events.models.domain.enums import EventType, LocationType
from packages.events.models.domain.location import EventLocation


class Event(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    start_date: datetime
    end_date: datetime
    event_type: EventType = EventType.STANDARD
    location: EventLocation
    weather_location: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def location_type(self) -> LocationType:
        return LocationType(self.location.location_type)


class EventCreateModel(BaseModel):
    """Model for creating a new event."""

    title: str
    description: Optional[str] = None
    start_date: datetime
    end_date: datetime
    event_type: EventType = EventType.STANDARD
    location: EventLocation
    weather_location: Optional[str] = None
    is_active: bool = True

    model_config = ConfigDict(use_enum_values=True)

    @model_validator(mode="after")
    def check_dates(self) -> "EventCreateModel":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class EventCompany(BaseModel):
    id: int
    event_id: int
    company_id: int
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class EventCompanyCreateModel(BaseModel):
    event_id: int
    company_id: int


class EventUpdateModel(BaseModel):
    """Column-level partial update; only fields that were set are written."""

    title: Optional[str] = None
    description: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    event_type: Optional[EventType] = None
    location_type: Optional[LocationType] = None
    location_details: Optional[Dict[str, Any]] = None
    virtual_details: Optional[Dict[str, Any]] = None
    weather_location: Optional[str] = None
    is_active: Optional[bool] = None

    model_config = ConfigDict(use_enum_values=True)
