"""
Per-request event views. Built by the calendar service, never persisted.
"""

from datetime import datetime
from typing import List, Optional, Union
from pydantic import BaseModel, Field, computed_field

from packages.companies.models.domain.company import Company
from packages.companies.models.domain.organization import Organization
from packages.events.models.domain.event import Event
from packages.events.models.domain.host import EventHost, HostCompanySnapshot
from packages.rsvp.models.domain.enums import ColorCode, ResponseStatus
from packages.rsvp.models.domain.response import UserEventResponse


class VisibleEvent(BaseModel):
    """An event that passed the subscription filter, with every attached company."""

    event: Event
    companies: List[Company] = Field(default_factory=list)


class ResolvedHost(BaseModel):
    """A host row plus the record its ``host_type`` points at.

    ``details`` stays None when the referenced record no longer exists.
    """

    host: EventHost
    details: Optional[Union[Company, Organization, HostCompanySnapshot]] = None

    @property
    def is_primary(self) -> bool:
        return (
            self.host.primary_company_id is not None
            and self.host.primary_company_id == self.host.host_id
        )


class Attendee(BaseModel):
    user_id: int
    full_name: str
    email: Optional[str] = None
    response_date: datetime
    notes: Optional[str] = None


class CalendarEvent(BaseModel):
    event: Event
    companies: List[Company] = Field(default_factory=list)
    hosts: List[ResolvedHost] = Field(default_factory=list)
    primary_host: Optional[ResolvedHost] = None
    user_response: Optional[UserEventResponse] = None
    rsvp_status: ResponseStatus = ResponseStatus.PENDING
    rsvp_label: str = ResponseStatus.PENDING.label
    color_code: ColorCode = ColorCode.GREY
    color_hex: str = ColorCode.GREY.hex
    is_multi_company: bool = False
    attendees: List[Attendee] = Field(default_factory=list)
    location_display: str


class CalendarResponse(BaseModel):
    events: List[CalendarEvent] = Field(default_factory=list)
    total_count: int = 0


class AttendanceSummary(BaseModel):
    event_id: int
    accepted: int = 0
    declined: int = 0
    pending: int = 0
    attendees: List[Attendee] = Field(default_factory=list)

    @computed_field
    @property
    def total_responses(self) -> int:
        return self.accepted + self.declined + self.pending
