"""
Event administration: create, edit and retire events.

Deleting an event only clears ``is_active``. Its RSVPs and relations stay,
and every user-facing read treats it as absent from then on.
"""

from typing import Iterable, List, Optional

from common.core.exceptions import NotFoundError, ValidationError, store_error_code
from common.core.telemetry import trace_span, get_logger
from common.db.base import as_naive_utc
from common.db.context import transactional
from packages.companies.repositories.company_repository import CompanyRepository
from packages.companies.repositories.organization_repository import (
    OrganizationRepository,
)
from packages.events.models.domain.enums import HostType
from packages.events.models.domain.event import EventCreateModel, EventUpdateModel
from packages.events.models.domain.host import EventHost, EventHostCreateModel
from packages.events.models.domain.location import location_to_columns
from packages.events.models.schemas.event import (
    EventCreateRequest,
    EventUpdateRequest,
    HostRequest,
    ManagedEvent,
)
from packages.events.repositories.event_company_repository import (
    EventCompanyRepository,
)
from packages.events.repositories.event_host_repository import EventHostRepository
from packages.events.repositories.event_repository import EventRepository

logger = get_logger(__name__)

# Columns that may be changed but never cleared
REQUIRED_FIELDS = ("title", "start_date", "end_date", "event_type", "is_active")


class EventService:
    """Service for managing events."""

    def __init__(self):
        self.event_repo = EventRepository()
        self.event_company_repo = EventCompanyRepository()
        self.event_host_repo = EventHostRepository()
        self.company_repo = CompanyRepository()
        self.organization_repo = OrganizationRepository()

    @trace_span
    async def create_event(self, request: EventCreateRequest) -> ManagedEvent:
        with store_error_code("EVENT_CREATE_ERROR"):
            managed = await self._create_event(request)

        logger.info(
            f"Created event {managed.event.id}: {managed.event.title}",
            extra={"event_id": managed.event.id, "company_ids": managed.company_ids},
        )
        return managed

    @transactional
    async def _create_event(self, request: EventCreateRequest) -> ManagedEvent:
        await self._check_references(request.company_ids, request.hosts)

        event = await self.event_repo.create(
            EventCreateModel(
                title=request.title,
                description=request.description,
                start_date=as_naive_utc(request.start_date),
                end_date=as_naive_utc(request.end_date),
                event_type=request.event_type,
                location=request.location,
                weather_location=request.weather_location,
            )
        )
        company_ids = await self.event_company_repo.replace_for_event(
            event.id, request.company_ids
        )
        hosts = await self._replace_hosts(event.id, request.hosts)
        return ManagedEvent(event=event, company_ids=company_ids, hosts=hosts)

    @trace_span
    async def update_event(
        self, event_id: int, request: EventUpdateRequest
    ) -> ManagedEvent:
        """Apply the fields that were sent. Inactive events can be edited and restored."""
        with store_error_code("EVENT_UPDATE_ERROR"):
            managed = await self._update_event(event_id, request)

        logger.info(
            f"Updated event {event_id}",
            extra={
                "event_id": event_id,
                "fields": sorted(request.model_fields_set),
            },
        )
        return managed

    @transactional
    async def _update_event(
        self, event_id: int, request: EventUpdateRequest
    ) -> ManagedEvent:
        current = await self.event_repo.get(event_id)
        if not current:
            raise NotFoundError(f"Event {event_id} not found", code="EVENT_NOT_FOUND")

        fields = request.model_dump(
            exclude_unset=True, exclude={"location", "company_ids", "hosts"}
        )
        for name in REQUIRED_FIELDS:
            if name in fields and fields[name] is None:
                raise ValidationError(f"{name} cannot be cleared")
        for name in ("start_date", "end_date"):
            if name in fields:
                fields[name] = as_naive_utc(fields[name])

        if "location" in request.model_fields_set:
            if request.location is None:
                raise ValidationError("location cannot be cleared")
            fields.update(location_to_columns(request.location))

        start = fields.get("start_date", current.start_date)
        end = fields.get("end_date", current.end_date)
        if end < start:
            raise ValidationError("end_date must not be before start_date")

        await self._check_references(request.company_ids or [], request.hosts or [])

        event = current
        if fields:
            event = await self.event_repo.update(event_id, EventUpdateModel(**fields))

        if request.company_ids is not None:
            company_ids = await self.event_company_repo.replace_for_event(
                event_id, request.company_ids
            )
        else:
            company_ids = await self.event_company_repo.get_company_ids(event_id)

        if request.hosts is not None:
            await self.event_host_repo.delete_for_event(event_id)
            hosts = await self._replace_hosts(event_id, request.hosts)
        else:
            hosts = (await self.event_host_repo.get_by_event_ids([event_id])).get(
                event_id, []
            )

        return ManagedEvent(event=event, company_ids=company_ids, hosts=hosts)

    @trace_span
    async def delete_event(self, event_id: int) -> None:
        """Soft delete. Repeating it on an already inactive event is a no-op."""
        with store_error_code("EVENT_DELETE_ERROR"):
            event = await self.event_repo.update(
                event_id, EventUpdateModel(is_active=False)
            )
        if not event:
            raise NotFoundError(f"Event {event_id} not found", code="EVENT_NOT_FOUND")
        logger.info(f"Deactivated event {event_id}", extra={"event_id": event_id})

    async def _check_references(
        self, company_ids: Iterable[int], hosts: Iterable[HostRequest]
    ) -> None:
        """Every referenced company and organization must exist."""
        hosts = list(hosts)
        wanted_companies = set(company_ids) | {
            host.host_id for host in hosts if host.host_type == HostType.SINGLE_CORP
        }
        wanted_organizations = {
            host.host_id for host in hosts if host.host_type == HostType.NON_COMPANY
        }

        missing = _missing_ids(
            wanted_companies, await self.company_repo.get_by_ids(wanted_companies)
        )
        if missing:
            raise ValidationError(f"Unknown company ids: {missing}")

        missing = _missing_ids(
            wanted_organizations,
            await self.organization_repo.get_by_ids(wanted_organizations),
        )
        if missing:
            raise ValidationError(f"Unknown organization ids: {missing}")

    async def _replace_hosts(
        self, event_id: int, hosts: Iterable[HostRequest]
    ) -> List[EventHost]:
        created = []
        for host in hosts:
            created.append(
                await self.event_host_repo.create(
                    EventHostCreateModel(
                        event_id=event_id,
                        host_type=host.host_type,
                        host_id=host.host_id,
                        primary_company_id=host.primary_company_id,
                        companies_snapshot=host.companies or None,
                    )
                )
            )
        return created


def _missing_ids(wanted: Iterable[int], found: Iterable) -> Optional[List[int]]:
    missing = set(wanted) - {row.id for row in found}
    return sorted(missing) if missing else None
