"""
Which events a user may see.

An event is visible when at least one company attached to it is active and
belongs to a subsector the user holds an active, paid subscription for.
Retired companies never match, but do not hide an event that another
attached company still qualifies for. An event with no companies is never
visible.
"""

import asyncio
from datetime import datetime
from typing import Collection, Iterable, List

from common.core.exceptions import NotFoundError, ValidationError, store_error_code
from common.core.telemetry import trace_span, get_logger
from common.db.base import as_naive_utc
from packages.companies.models.domain.company import Company
from packages.events.models.domain.calendar import VisibleEvent
from packages.events.repositories.event_company_repository import (
    EventCompanyRepository,
)
from packages.events.repositories.event_repository import EventRepository
from packages.subscriptions.services.subscription_service import SubscriptionService

logger = get_logger(__name__)


def is_visible(companies: Iterable[Company], entitlements: Collection[str]) -> bool:
    return any(
        company.is_active and company.subsector in entitlements
        for company in companies
    )


class VisibilityService:
    def __init__(self):
        self.subscription_service = SubscriptionService()
        self.event_repo = EventRepository()
        self.event_company_repo = EventCompanyRepository()

    @trace_span
    async def resolve_visible(
        self, user_id: int, start: datetime, end: datetime
    ) -> List[VisibleEvent]:
        """Visible events overlapping [start, end], ordered by start date."""
        start, end = as_naive_utc(start), as_naive_utc(end)
        if start > end:
            raise ValidationError("start must not be after end")

        entitlements = await self.subscription_service.get_entitlements(user_id)
        if not entitlements:
            logger.debug(f"User {user_id} has no entitlements, nothing to resolve")
            return []

        with store_error_code("EVENTS_FETCH_ERROR"):
            candidates = await self.event_repo.get_active_in_range(start, end)
            companies_by_event = (
                await self.event_company_repo.get_companies_by_event_ids(
                    event.id for event in candidates
                )
            )

        visible = [
            VisibleEvent(event=event, companies=companies_by_event.get(event.id, []))
            for event in candidates
            if is_visible(companies_by_event.get(event.id, []), entitlements)
        ]
        logger.info(
            f"Resolved {len(visible)}/{len(candidates)} events for user {user_id}",
            extra={"user_id": user_id, "visible": len(visible)},
        )
        return visible

    @trace_span
    async def get_visible_event(self, user_id: int, event_id: int) -> VisibleEvent:
        """A single event under the same rule. NotFoundError when absent or hidden."""
        with store_error_code("EVENTS_FETCH_ERROR"):
            event, entitlements = await asyncio.gather(
                self.event_repo.get_active(event_id),
                self.subscription_service.get_entitlements(user_id),
            )
        if event and entitlements:
            with store_error_code("EVENTS_FETCH_ERROR"):
                companies = (
                    await self.event_company_repo.get_companies_by_event_ids(
                        [event_id]
                    )
                ).get(event_id, [])
            if is_visible(companies, entitlements):
                return VisibleEvent(event=event, companies=companies)

        raise NotFoundError(f"Event {event_id} not found", code="EVENT_NOT_FOUND")

    @trace_span
    async def is_visible_to(self, user_id: int, event_id: int) -> bool:
        try:
            await self.get_visible_event(user_id, event_id)
        except NotFoundError:
            return False
        return True
