import pytest

from packages.companies.repositories.company_repository import CompanyRepository
from packages.companies.repositories.organization_repository import (
    OrganizationRepository,
)
from packages.companies.models.domain.organization import OrganizationType
from tests.factories.calendar_factory import CalendarFactory
from tests.fixtures import BANKING, SOFTWARE


class TestCompanyRepository:
    """Test CompanyRepository methods."""

    @pytest.fixture
    async def repository(self):
        return CompanyRepository()

    async def test_get_by_ticker_exists(self, repository, aapl):
        result = await repository.get_by_ticker("AAPL")

        assert result is not None
        assert result.id == aapl.id
        assert result.subsector == SOFTWARE

    async def test_get_by_ticker_not_exists(self, repository):
        assert await repository.get_by_ticker("NOPE") is None

    async def test_get_active_by_subsectors(self, repository, aapl, jpm, retired_company):
        result = await repository.get_active_by_subsectors({SOFTWARE})

        assert [c.ticker for c in result] == ["AAPL"]

    async def test_get_active_by_subsectors_multiple(self, repository, aapl, jpm):
        result = await repository.get_active_by_subsectors([SOFTWARE, BANKING])

        assert {c.ticker for c in result} == {"AAPL", "JPM"}

    async def test_get_active_by_subsectors_empty_input(self, repository, aapl):
        assert await repository.get_active_by_subsectors([]) == []

    async def test_get_active_subsectors_distinct_and_sorted(
        self, repository, test_db, aapl, jpm
    ):
        await CalendarFactory.create_company(
            test_db, ticker="ORCL", name="Oracle", subsector=SOFTWARE
        )
        await CalendarFactory.create_company(
            test_db, ticker="DEAD", name="Gone Inc.", subsector="Tobacco", is_active=False
        )

        assert await repository.get_active_subsectors() == [BANKING, SOFTWARE]

    async def test_get_all_active_excludes_retired(self, repository, aapl, retired_company):
        result = await repository.get_all_active()

        assert [c.id for c in result] == [aapl.id]


class TestOrganizationRepository:
    async def test_get_maps_org_type(self, test_db):
        org = await CalendarFactory.create_organization(test_db)

        result = await OrganizationRepository().get(org.id)

        assert result.name == "Federal Reserve"
        assert result.org_type == OrganizationType.GOVERNMENT
