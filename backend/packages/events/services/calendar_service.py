"""
Calendar views.

Each visible event is joined with its hosts, the caller's own response and
the roster of accepted attendees. Related records are fetched in batches for
the whole page, with independent lookups issued concurrently.
"""

import asyncio
from datetime import datetime
from typing import Dict, List, Optional

from common.core.exceptions import store_error_code
from common.core.telemetry import trace_span, get_logger
from packages.companies.repositories.company_repository import CompanyRepository
from packages.companies.repositories.organization_repository import (
    OrganizationRepository,
)
from packages.events.models.domain.calendar import (
    Attendee,
    AttendanceSummary,
    CalendarEvent,
    CalendarResponse,
    ResolvedHost,
    VisibleEvent,
)
from packages.events.models.domain.host import (
    EventHost,
    MultiCorpHost,
    NonCompanyHost,
    SingleCorpHost,
)
from packages.events.repositories.event_host_repository import EventHostRepository
from packages.events.services.visibility_service import VisibilityService
from packages.events.utils.location import format_location
from packages.rsvp.models.domain.enums import ResponseStatus, color_code_for
from packages.rsvp.models.domain.response import UserEventResponse
from packages.rsvp.repositories.user_event_response_repository import (
    UserEventResponseRepository,
)
from packages.users.models.domain.user import User
from packages.users.repositories.user_repository import UserRepository

logger = get_logger(__name__)

UNKNOWN_USER = "Unknown User"


def pick_primary_host(hosts: List[ResolvedHost]) -> Optional[ResolvedHost]:
    """The host whose primary_company_id is its own host_id, else the first one."""
    for host in hosts:
        if host.is_primary:
            return host
    return hosts[0] if hosts else None


def to_attendee(response: UserEventResponse, users: Dict[int, User]) -> Attendee:
    user = users.get(response.user_id)
    return Attendee(
        user_id=response.user_id,
        full_name=(user.full_name or user.email) if user else UNKNOWN_USER,
        email=user.email if user else None,
        response_date=response.response_date,
        notes=response.notes,
    )


class CalendarService:
    def __init__(self):
        self.visibility_service = VisibilityService()
        self.host_repo = EventHostRepository()
        self.response_repo = UserEventResponseRepository()
        self.company_repo = CompanyRepository()
        self.organization_repo = OrganizationRepository()
        self.user_repo = UserRepository()

    @trace_span
    async def get_calendar(
        self, user_id: int, start: datetime, end: datetime
    ) -> CalendarResponse:
        visible = await self.visibility_service.resolve_visible(user_id, start, end)
        events = await self._assemble(user_id, visible)
        return CalendarResponse(events=events, total_count=len(events))

    @trace_span
    async def get_event(self, user_id: int, event_id: int) -> CalendarEvent:
        visible = await self.visibility_service.get_visible_event(user_id, event_id)
        (view,) = await self._assemble(user_id, [visible])
        return view

    @trace_span
    async def get_attendance(self, user_id: int, event_id: int) -> AttendanceSummary:
        """Response counts and the accepted roster of an event the user can see."""
        await self.visibility_service.get_visible_event(user_id, event_id)

        with store_error_code("EVENTS_FETCH_ERROR"):
            responses = (await self.response_repo.get_by_event_ids([event_id])).get(
                event_id, []
            )
            accepted = [
                r for r in responses if r.response_status == ResponseStatus.ACCEPTED
            ]
            users = await self.user_repo.get_map_by_ids(r.user_id for r in accepted)

        counts = {status: 0 for status in ResponseStatus}
        for response in responses:
            counts[response.response_status] += 1

        return AttendanceSummary(
            event_id=event_id,
            accepted=counts[ResponseStatus.ACCEPTED],
            declined=counts[ResponseStatus.DECLINED],
            pending=counts[ResponseStatus.PENDING],
            attendees=[to_attendee(r, users) for r in accepted],
        )

    async def _assemble(
        self, user_id: int, visible: List[VisibleEvent]
    ) -> List[CalendarEvent]:
        if not visible:
            return []

        event_ids = [item.event.id for item in visible]
        with store_error_code("EVENTS_FETCH_ERROR"):
            hosts_by_event, own_responses, accepted_by_event = await asyncio.gather(
                self.host_repo.get_by_event_ids(event_ids),
                self.response_repo.get_by_event_ids_for_user(user_id, event_ids),
                self.response_repo.get_by_event_ids(
                    event_ids, status=ResponseStatus.ACCEPTED
                ),
            )

            all_hosts = [host for hosts in hosts_by_event.values() for host in hosts]
            companies, organizations, users = await asyncio.gather(
                self.company_repo.get_by_ids(
                    h.host_id for h in all_hosts if isinstance(h, SingleCorpHost)
                ),
                self.organization_repo.get_by_ids(
                    h.host_id for h in all_hosts if isinstance(h, NonCompanyHost)
                ),
                self.user_repo.get_map_by_ids(
                    r.user_id
                    for responses in accepted_by_event.values()
                    for r in responses
                ),
            )

        companies_by_id = {company.id: company for company in companies}
        organizations_by_id = {org.id: org for org in organizations}

        def resolve(host: EventHost) -> ResolvedHost:
            if isinstance(host, SingleCorpHost):
                details = companies_by_id.get(host.host_id)
            elif isinstance(host, NonCompanyHost):
                details = organizations_by_id.get(host.host_id)
            elif isinstance(host, MultiCorpHost):
                details = host.primary_snapshot()
            else:
                details = None
            return ResolvedHost(host=host, details=details)

        views = []
        for item in visible:
            event = item.event
            hosts = [resolve(host) for host in hosts_by_event.get(event.id, [])]
            active_companies = [c for c in item.companies if c.is_active]
            own = own_responses.get(event.id)
            status = own.response_status if own else None
            color = color_code_for(status)

            views.append(
                CalendarEvent(
                    event=event,
                    companies=active_companies,
                    hosts=hosts,
                    primary_host=pick_primary_host(hosts),
                    user_response=own,
                    rsvp_status=status or ResponseStatus.PENDING,
                    rsvp_label=(status or ResponseStatus.PENDING).label,
                    color_code=color,
                    color_hex=color.hex,
                    is_multi_company=len(active_companies) > 1,
                    attendees=[
                        to_attendee(r, users)
                        for r in accepted_by_event.get(event.id, [])
                    ],
                    location_display=format_location(event.location),
                )
            )
        return views
