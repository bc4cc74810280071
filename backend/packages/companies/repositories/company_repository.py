from typing import Collection, List, Optional
from sqlalchemy import select

from common.repositories.base import BaseRepository
from packages.companies.models.database.company import CompanyEntity
from packages.companies.models.domain.company import Company
from common.core.telemetry import trace_span


class CompanyRepository(BaseRepository[CompanyEntity, Company]):
    def __init__(self):
        super().__init__(CompanyEntity, Company)

    @trace_span
    async def get_by_ticker(self, ticker: str) -> Optional[Company]:
        async with self._get_session() as session:
            result = await session.execute(
                select(CompanyEntity).where(CompanyEntity.ticker == ticker)
            )
            db_company = result.scalar_one_or_none()
            return self._entity_to_domain(db_company) if db_company else None

    @trace_span
    async def get_active_by_subsectors(
        self, subsectors: Collection[str]
    ) -> List[Company]:
        """Active companies belonging to any of the given subsectors."""
        if not subsectors:
            return []

        async with self._get_session() as session:
            result = await session.execute(
                select(CompanyEntity)
                .where(
                    CompanyEntity.is_active == True,  # noqa
                    CompanyEntity.subsector.in_(list(subsectors)),
                )
                .order_by(CompanyEntity.name)
            )
            return self._entities_to_domain(result.scalars().all())

    @trace_span
    async def get_active_subsectors(self) -> List[str]:
        """Distinct subsectors of active companies, sorted."""
        async with self._get_session() as session:
            result = await session.execute(
                select(CompanyEntity.subsector)
                .where(CompanyEntity.is_active == True)  # noqa
                .distinct()
                .order_by(CompanyEntity.subsector)
            )
            return list(result.scalars().all())

    @trace_span
    async def get_all_active(self) -> List[Company]:
        async with self._get_session() as session:
            result = await session.execute(
                select(CompanyEntity)
                .where(CompanyEntity.is_active == True)  # noqa
                .order_by(CompanyEntity.id)
            )
            return self._entities_to_domain(result.scalars().all())
