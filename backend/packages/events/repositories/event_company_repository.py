from collections import defaultdict
from typing import Dict, Iterable, List

from sqlalchemy import delete, select

from common.core.telemetry import trace_span
from common.repositories.base import BaseRepository
from packages.companies.models.database.company import CompanyEntity
from packages.companies.models.domain.company import Company
from packages.events.models.database.event import EventCompanyEntity
from packages.events.models.domain.event import EventCompany


class EventCompanyRepository(BaseRepository[EventCompanyEntity, EventCompany]):
    """Event to company junction rows."""

    def __init__(self):
        super().__init__(EventCompanyEntity, EventCompany)

    @trace_span
    async def get_companies_by_event_ids(
        self, event_ids: Iterable[int]
    ) -> Dict[int, List[Company]]:
        """Every attached company (active or not) keyed by event id."""
        event_ids = list(set(event_ids))
        if not event_ids:
            return {}

        async with self._get_session() as session:
            result = await session.execute(
                select(EventCompanyEntity.event_id, CompanyEntity)
                .join(CompanyEntity, CompanyEntity.id == EventCompanyEntity.company_id)
                .where(EventCompanyEntity.event_id.in_(event_ids))
                .order_by(EventCompanyEntity.event_id, CompanyEntity.id)
            )
            companies: Dict[int, List[Company]] = defaultdict(list)
            for event_id, db_company in result.all():
                companies[event_id].append(Company.model_validate(db_company))
            return dict(companies)

    @trace_span
    async def get_company_ids(self, event_id: int) -> List[int]:
        async with self._get_session() as session:
            result = await session.execute(
                select(EventCompanyEntity.company_id)
                .where(EventCompanyEntity.event_id == event_id)
                .order_by(EventCompanyEntity.company_id)
            )
            return list(result.scalars().all())

    @trace_span
    async def replace_for_event(
        self, event_id: int, company_ids: Iterable[int]
    ) -> List[int]:
        """Make ``company_ids`` the event's exact company set."""
        company_ids = sorted(set(company_ids))
        async with self._get_session() as session:
            await session.execute(
                delete(EventCompanyEntity).where(
                    EventCompanyEntity.event_id == event_id
                )
            )
            session.add_all(
                EventCompanyEntity(event_id=event_id, company_id=company_id)
                for company_id in company_ids
            )
            await session.flush()
        return company_ids
