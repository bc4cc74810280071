from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from common.db.base import utcnow
from packages.companies.models.database.company import CompanyEntity
from packages.companies.models.database.organization import OrganizationEntity
from packages.events.models.database.event import (
    EventCompanyEntity,
    EventEntity,
    EventHostEntity,
)
from packages.rsvp.models.database.user_event_response import UserEventResponseEntity
from packages.subscriptions.models.database.user_subscription import (
    UserSubscriptionEntity,
)
from packages.users.models.database.user import UserEntity


async def _persist(db: AsyncSession, entity):
    db.add(entity)
    await db.commit()
    await db.refresh(entity)
    return entity


class CalendarFactory:
    """Factory for persisting calendar test rows."""

    @staticmethod
    async def create_company(
        db: AsyncSession,
        ticker: str = "AAPL",
        name: str = "Apple Inc.",
        sector: str = "Technology",
        subsector: str = "Software & IT Services",
        is_active: bool = True,
    ) -> CompanyEntity:
        return await _persist(
            db,
            CompanyEntity(
                ticker=ticker,
                name=name,
                sector=sector,
                subsector=subsector,
                is_active=is_active,
            ),
        )

    @staticmethod
    async def create_organization(
        db: AsyncSession,
        name: str = "Federal Reserve",
        org_type: str = "government",
    ) -> OrganizationEntity:
        return await _persist(db, OrganizationEntity(name=name, org_type=org_type))

    @staticmethod
    async def create_user(
        db: AsyncSession,
        email: str = "analyst@example.com",
        full_name: Optional[str] = "Ada Analyst",
    ) -> UserEntity:
        return await _persist(db, UserEntity(email=email, full_name=full_name))

    @staticmethod
    async def create_event(
        db: AsyncSession,
        companies: Iterable[CompanyEntity] = (),
        title: str = "Q4 Earnings Call",
        start_date: datetime = datetime(2024, 12, 15, 16, 0),
        duration: timedelta = timedelta(hours=1),
        location_type: str = "virtual",
        location_details: Optional[Dict[str, Any]] = None,
        virtual_details: Optional[Dict[str, Any]] = None,
        is_active: bool = True,
        **kwargs,
    ) -> EventEntity:
        if virtual_details is None and location_type != "physical":
            virtual_details = {"platform": "Zoom", "meeting_url": "https://zoom.us/j/1"}
        event = await _persist(
            db,
            EventEntity(
                title=title,
                start_date=start_date,
                end_date=start_date + duration,
                location_type=location_type,
                location_details=location_details,
                virtual_details=virtual_details,
                is_active=is_active,
                **kwargs,
            ),
        )
        for company in companies:
            db.add(EventCompanyEntity(event_id=event.id, company_id=company.id))
        await db.commit()
        return event

    @staticmethod
    async def create_host(
        db: AsyncSession,
        event: EventEntity,
        host_type: str = "single_corp",
        host_id: Optional[int] = None,
        primary_company_id: Optional[int] = None,
        companies_snapshot: Optional[List[Dict[str, Any]]] = None,
    ) -> EventHostEntity:
        return await _persist(
            db,
            EventHostEntity(
                event_id=event.id,
                host_type=host_type,
                host_id=host_id,
                primary_company_id=primary_company_id,
                companies_snapshot=companies_snapshot,
            ),
        )

    @staticmethod
    async def create_subscription(
        db: AsyncSession,
        user_id: int,
        subsector: str = "Software & IT Services",
        payment_status: str = "paid",
        is_active: bool = True,
        expires_at: Optional[datetime] = None,
        billing_reference: Optional[str] = None,
        expires_in: Optional[timedelta] = timedelta(days=30),
    ) -> UserSubscriptionEntity:
        if expires_at is None and expires_in is not None:
            expires_at = utcnow() + expires_in
        return await _persist(
            db,
            UserSubscriptionEntity(
                user_id=user_id,
                subsector=subsector,
                payment_status=payment_status,
                is_active=is_active,
                expires_at=expires_at,
                billing_reference=billing_reference,
            ),
        )

    @staticmethod
    async def create_response(
        db: AsyncSession,
        user_id: int,
        event_id: int,
        response_status: str = "accepted",
        notes: Optional[str] = None,
    ) -> UserEventResponseEntity:
        return await _persist(
            db,
            UserEventResponseEntity(
                user_id=user_id,
                event_id=event_id,
                response_status=response_status,
                response_date=utcnow(),
                notes=notes,
            ),
        )
