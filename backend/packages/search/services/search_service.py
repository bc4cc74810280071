"""
Free-text search over active events, active companies and subsectors.

Matching is a case-insensitive substring test. Each source is searched
concurrently and is best-effort: a source that fails is logged and left out
while the others still return their hits.
"""

import asyncio
from typing import List, Optional

from common.core.config import settings
from common.core.telemetry import trace_span, get_logger
from common.db.context import readonly
from packages.companies.repositories.company_repository import CompanyRepository
from packages.events.repositories.event_company_repository import (
    EventCompanyRepository,
)
from packages.events.repositories.event_repository import EventRepository
from packages.search.models.domain.search import (
    SearchResponse,
    SearchResult,
    SearchResultType,
)

logger = get_logger(__name__)


def _matches(needle: str, *fields: Optional[str]) -> bool:
    return any(needle in field.lower() for field in fields if field)


class SearchService:
    def __init__(self):
        self.event_repo = EventRepository()
        self.event_company_repo = EventCompanyRepository()
        self.company_repo = CompanyRepository()

    @trace_span
    @readonly
    async def search(self, query: str, limit: Optional[int] = None) -> SearchResponse:
        """Events first, then companies, then subsectors, capped at ``limit``."""
        query = (query or "").strip()
        limit = limit or settings.search_result_limit
        if len(query) < settings.search_min_query_length:
            return SearchResponse(query=query)

        needle = query.lower()
        sources = ("events", "companies", "subsectors")
        outcomes = await asyncio.gather(
            self._search_events(needle),
            self._search_companies(needle),
            self._search_subsectors(needle),
            return_exceptions=True,
        )

        results: List[SearchResult] = []
        for source, outcome in zip(sources, outcomes):
            if isinstance(outcome, Exception):
                logger.warning(f"Search over {source} failed, skipping: {outcome}")
                continue
            results.extend(outcome)

        results = results[:limit]
        return SearchResponse(query=query, results=results, total_count=len(results))

    async def _search_events(self, needle: str) -> List[SearchResult]:
        events = await self.event_repo.get_all_active()
        companies_by_event = await self.event_company_repo.get_companies_by_event_ids(
            event.id for event in events
        )

        results = []
        for event in events:
            companies = companies_by_event.get(event.id, [])
            if _matches(needle, event.title, event.description) or any(
                _matches(needle, c.name, c.ticker) for c in companies
            ):
                results.append(
                    SearchResult(
                        id=event.id,
                        type=SearchResultType.EVENT,
                        title=event.title,
                        subtitle=event.start_date.strftime("%b %d, %Y"),
                    )
                )
        return results

    async def _search_companies(self, needle: str) -> List[SearchResult]:
        companies = await self.company_repo.get_all_active()
        return [
            SearchResult(
                id=company.id,
                type=SearchResultType.COMPANY,
                title=f"{company.name} ({company.ticker})",
                subtitle=company.subsector,
            )
            for company in companies
            if _matches(needle, company.name, company.ticker, company.subsector)
        ]

    async def _search_subsectors(self, needle: str) -> List[SearchResult]:
        subsectors = await self.company_repo.get_active_subsectors()
        return [
            SearchResult(type=SearchResultType.SUBSECTOR, title=subsector)
            for subsector in subsectors
            if _matches(needle, subsector)
        ]
